# =============================================================================
# app/routers/cities.py - Saved City Endpoints
# =============================================================================
# Both endpoints require a logged-in session and only ever touch the
# caller's own cities.
# =============================================================================

from fastapi import APIRouter, Depends, status

from app.auth import AuthUser, get_current_user
from app.dependencies import CityServiceDep
from core.models.city import CityCreate, CityResponse, CitySavedResponse

router = APIRouter()


@router.post("", response_model=CitySavedResponse, status_code=status.HTTP_201_CREATED)
def save_city(
    request: CityCreate,
    cities: CityServiceDep,
    user: AuthUser = Depends(get_current_user),
) -> CitySavedResponse:
    """
    Save a city for the current user.

    Raises:
        400: City name missing, or already saved by this user
        401: Not logged in
    """
    saved = cities.save_city(user.id, request.city)
    return CitySavedResponse(city=CityResponse.from_db_row(saved))


@router.get("", response_model=list[CityResponse])
def list_cities(
    cities: CityServiceDep,
    user: AuthUser = Depends(get_current_user),
) -> list[CityResponse]:
    """List the current user's saved cities, oldest first."""
    return [CityResponse.from_db_row(row) for row in cities.list_cities(user.id)]
