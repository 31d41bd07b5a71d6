from fastapi import APIRouter

from cadbridge.core.modules.identity.models import DiscordUserView
from cadbridge.web.deps import AppDep, SessionCookieDep
from cadbridge.web.openapi import ErrorResponse

router = APIRouter(tags=["profile"])


@router.get(
    "/profile",
    summary="Get current user profile",
    description="Get the Discord identity of the currently authenticated user.",
    operation_id="getCurrentUserProfile",
    responses={
        200: {"description": "Current user profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_profile(app: AppDep, cookie_value: SessionCookieDep) -> DiscordUserView:
    return app.get_current_user(cookie_value)
