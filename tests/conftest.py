# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory database, mocked OpenAI client and mocked weather transport
# - A TestClient factory with those collaborators injected
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("OPENAI_API_KEY", "sk-test-openai-key")
os.environ.setdefault("SESSION_SECRET", "test-session-secret-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from agents.chat_assistant import ChatAssistant
from app.config import Settings, get_settings
from lib.supabase_client import SupabaseClient
from lib.weather_client import WeatherClient
from tests.fakes import FakeSupabase


# =============================================================================
# Sample Data
# =============================================================================

LONDON_WEATHER = {
    "coord": {"lon": -0.1257, "lat": 51.5085},
    "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
    "main": {"temp": 14.2, "feels_like": 13.6, "humidity": 77, "pressure": 1012},
    "wind": {"speed": 4.1, "deg": 240},
    "name": "London",
    "cod": 200,
}


def make_completion(content):
    """Build an object shaped like an OpenAI ChatCompletion."""
    completion = MagicMock()
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = content
    return completion


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def db(fake_supabase) -> SupabaseClient:
    return SupabaseClient(fake_supabase)


@pytest.fixture
def openai_client():
    """Mocked OpenAI client; replies "  Hello from the assistant!  " by default."""
    client = MagicMock()
    client.chat.completions.create.return_value = make_completion("  Hello from the assistant!  ")
    return client


@pytest.fixture
def assistant(openai_client) -> ChatAssistant:
    return ChatAssistant(client=openai_client, model="gpt-3.5-turbo")


@pytest.fixture
def weather_requests() -> list[httpx.Request]:
    """Every request the mocked weather API received."""
    return []


@pytest.fixture
def weather_handler():
    """Default weather API behaviour: London is known, everything else is 404."""
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params.get("q") == "London":
            return httpx.Response(200, json=LONDON_WEATHER)
        return httpx.Response(404, json={"cod": "404", "message": "city not found"})
    return handler


@pytest.fixture
def weather_client(weather_handler, weather_requests) -> WeatherClient:
    def recording_handler(request: httpx.Request) -> httpx.Response:
        weather_requests.append(request)
        return weather_handler(request)

    client = WeatherClient(
        api_key="test-weather-key",
        base_url="https://weather.test/data/2.5",
        transport=httpx.MockTransport(recording_handler),
    )
    yield client
    client.close()


@pytest.fixture
def make_client(db, assistant, weather_client):
    """
    Factory for TestClients wired to the fakes.

    Each call returns a client with its own cookie jar, so two clients act
    as two different browsers.
    """
    from app.dependencies import get_chat_assistant, get_database, get_weather_client
    from app.main import app

    app.dependency_overrides[get_database] = lambda: db
    app.dependency_overrides[get_chat_assistant] = lambda: assistant
    app.dependency_overrides[get_weather_client] = lambda: weather_client

    def factory() -> TestClient:
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture
def register_and_login():
    """Register a user through the API and log the given client in."""
    def _register_and_login(client: TestClient, username: str = "alice", password: str = "s3cret-pass"):
        response = client.post("/register", json={"username": username, "password": password})
        assert response.status_code == 201
        response = client.post("/login", json={"username": username, "password": password})
        assert response.status_code == 200
        return response.json()
    return _register_and_login
