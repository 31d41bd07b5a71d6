"""Uvicorn server runner."""

import copy
from typing import Any

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from cadbridge.app import App
from cadbridge.config import Config
from cadbridge.web.server import create_fastapi_app


def build_log_config(debug: bool) -> dict[str, Any]:
    """Uvicorn logging config matching the structlog console/JSON split.

    Access lines carry the request line but never headers, so session cookies
    stay out of the log.
    """
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"
    if not debug:
        log_config["formatters"]["access"]["use_colors"] = False
        log_config["formatters"]["default"]["use_colors"] = False
    return log_config


def run_server(app: App, config: Config) -> None:
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=build_log_config(config.debug),
        log_level="debug" if config.debug else "info",
        access_log=True,
        # Secure cookies sit behind a TLS-terminating proxy; trust its forwarded scheme
        proxy_headers=config.cookie_secure,
    )
