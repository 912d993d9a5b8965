"""Role-based navigation routes"""

from fastapi import APIRouter
import logging

from domain.schemas.mess_schemas import NavigationResponse
from services import NavigationService

router = APIRouter(prefix="/navigation", tags=["Navigation"])
logger = logging.getLogger("messmate.api.navigation")


@router.get("/{role}", response_model=NavigationResponse)
def get_navigation(role: str):
    """
    Screens available to a role and the one the app should open first.

    Unknown roles get the customer screens.
    """
    return NavigationResponse(
        role=role,
        screens=NavigationService.valid_screens(role),
        default_screen=NavigationService.default_screen(role),
    )
