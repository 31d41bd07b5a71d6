from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from cadbridge.core.modules.cookie.models import CookieInfo, ReauthCheck
from cadbridge.web.cookies import clear_session_cookie, set_session_cookie
from cadbridge.web.deps import AppDep, ConfigDep, SessionCookieDep, SessionDep
from cadbridge.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class SessionResponse(BaseModel):
    """Newly issued session."""

    discord_id: str = Field(..., description="Discord user ID the session belongs to")
    expires_at: int = Field(..., description="Expiry in milliseconds since epoch")


class SessionStateResponse(BaseModel):
    """State of the current session."""

    discord_id: str = Field(..., description="Discord user ID the session belongs to")
    expires_at: int = Field(..., description="Expiry in milliseconds since epoch")
    time_remaining: int = Field(..., description="Milliseconds until expiry")
    needs_refresh: bool = Field(..., description="Session is close to expiry and should be refreshed")


@router.get(
    "/auth/session",
    summary="Get current session",
    description="Validate the session cookie and report its remaining lifetime.",
    operation_id="getSession",
    responses={
        200: {"description": "Session is valid"},
        401: {"model": ErrorResponse, "description": "Session invalid or expired, re-authentication required"},
    },
)
async def get_session(session: SessionDep) -> SessionStateResponse:
    return SessionStateResponse(
        discord_id=session.discord_id,
        expires_at=session.expires_at,
        time_remaining=session.time_remaining,
        needs_refresh=session.needs_refresh,
    )


@router.get(
    "/auth/status",
    summary="Check re-authentication",
    description="Report whether the session cookie forces the client through Discord login again.",
    operation_id="getAuthStatus",
    responses={200: {"description": "Re-authentication decision"}},
)
async def get_auth_status(app: AppDep, cookie_value: SessionCookieDep) -> ReauthCheck:
    return app.check_reauth(cookie_value)


@router.get(
    "/auth/cookie-info",
    summary="Inspect session cookie",
    description="Diagnostic view of the session cookie: validity, expiry and remaining lifetime.",
    operation_id="getCookieInfo",
    responses={200: {"description": "Cookie details"}},
)
async def get_cookie_info(app: AppDep, cookie_value: SessionCookieDep) -> CookieInfo:
    return app.get_cookie_info(cookie_value)


@router.post(
    "/auth/refresh",
    summary="Refresh session",
    description="Replace a still-valid session cookie with a new one carrying a full lifetime.",
    operation_id="refreshSession",
    responses={
        200: {"description": "New session cookie set"},
        401: {"model": ErrorResponse, "description": "Session invalid or expired, re-authentication required"},
    },
)
async def refresh_session(
    app: AppDep, config: ConfigDep, cookie_value: SessionCookieDep, response: Response
) -> SessionResponse:
    session = app.refresh_session(cookie_value)
    set_session_cookie(response, session, config)
    return SessionResponse(discord_id=session.discord_id, expires_at=session.expires_at)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Clear the session cookie.",
    operation_id="logout",
    status_code=204,
    responses={204: {"description": "Successfully logged out"}},
)
async def logout(app: AppDep, cookie_value: SessionCookieDep, response: Response) -> None:
    app.logout(cookie_value)
    clear_session_cookie(response)
