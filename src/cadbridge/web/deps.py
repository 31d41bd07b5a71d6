from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from cadbridge.app import App
from cadbridge.config import Config
from cadbridge.core.modules.cookie.models import SESSION_COOKIE_NAME
from cadbridge.core.modules.session.models import SessionPrincipal

# Security scheme
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE_NAME, scheme_name="SessionCookie", auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


async def get_session_cookie(token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None) -> str | None:
    """Raw session cookie value, if the client sent one."""
    return token_cookie


async def get_session(
    app: Annotated[App, Depends(get_app)],
    cookie_value: Annotated[str | None, Depends(get_session_cookie)],
) -> SessionPrincipal:
    """Authenticate the request by its session cookie; raises AuthenticationError."""
    return app.get_session(cookie_value)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
SessionCookieDep = Annotated[str | None, Depends(get_session_cookie)]
SessionDep = Annotated[SessionPrincipal, Depends(get_session)]
