"""Application entry point for the CAD bridge backend server."""

import structlog

from cadbridge.app import App
from cadbridge.config import Config
from cadbridge.logging import setup_logging
from cadbridge.web.runner import run_server

logger = structlog.get_logger(__name__)


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    logger.info(
        "starting_server",
        host=config.host,
        port=config.port,
        cookie_signed=config.cookie_signed,
        cookie_max_age_ms=config.cookie_max_age_ms,
    )
    run_server(app, config)


if __name__ == "__main__":
    main()
