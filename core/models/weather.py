# =============================================================================
# core/models/weather.py - Weather Proxy Schemas
# =============================================================================
# The weather payload itself is relayed untouched, so it has no model here.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class ApiKeyResponse(BaseModel):
    """Body of GET /api/getApiKey."""
    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(default="", alias="apiKey")
