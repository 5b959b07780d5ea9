# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the WeatherChat API:
# - test_models.py: Pydantic model behaviour
# - test_config.py: Settings validation
# - test_passwords.py: bcrypt hashing helpers
# - test_supabase_client.py: Database wrapper against the in-memory fake
# - test_services.py: User, session and city services
# - test_weather.py: Weather client, service and routes
# - test_chat.py: Chat assistant, relay service and route
# - test_api.py: End-to-end route tests (auth, cities, health)
#
# Run tests with: pytest
# =============================================================================
