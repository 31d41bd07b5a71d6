from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from cadbridge.core.modules.cookie.models import SESSION_COOKIE_NAME


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="CAD Bridge API",
            version="0.1.0",
            summary="Discord-authenticated sessions for the dispatch/CAD bridge",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_COOKIE_NAME,
                "description": "Signed session cookie issued after Discord login",
            },
        }

        # Apply security globally (will be overridden for public endpoints)
        openapi_schema["security"] = [{"SessionCookie": []}]

        # Endpoints that inspect the cookie without requiring it
        public_endpoints = {
            ("GET", "/api/v1/auth/status"),
            ("GET", "/api/v1/auth/cookie-info"),
            ("POST", "/api/v1/auth/logout"),
            ("GET", "/health"),
        }

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in public_endpoints:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")
    reason: str | None = Field(None, description="Why the session was rejected (authentication errors only)")
    requires_reauth: bool | None = Field(None, description="Client must log in through Discord again")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "message": "Authentication required",
                    "type": "authentication_error",
                    "reason": "expired",
                    "requires_reauth": True,
                },
                {"message": "Invalid Discord ID: 'abc'", "type": "validation_error"},
            ]
        }
    }
