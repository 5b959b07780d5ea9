# =============================================================================
# core/models/city.py - Saved City Schemas
# =============================================================================
# - CityCreate: body of POST /cities
# - CityResponse: one saved city
# - CitySavedResponse: body returned after saving
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class CityCreate(BaseModel):
    """
    Schema for saving a city.

    Example:
        {"city": "London"}
    """
    city: str | None = Field(
        default=None,
        max_length=128,
        description="City name as understood by the weather API"
    )


class CityResponse(BaseModel):
    """A city saved by one user."""
    id: str
    name: str
    user_id: str
    created_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "CityResponse":
        return cls(
            id=str(row["id"]),
            name=row["name"],
            user_id=str(row["user_id"]),
            created_at=row.get("created_at"),
        )


class CitySavedResponse(BaseModel):
    message: str = Field(default="City saved")
    city: CityResponse
