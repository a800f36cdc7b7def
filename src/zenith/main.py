"""Entry point: `zenith` console script."""

import copy

import structlog
import uvicorn
from uvicorn.config import LOGGING_CONFIG

from zenith.app import App
from zenith.config import Config
from zenith.logging import setup_logging
from zenith.web.server import create_fastapi_app

logger = structlog.get_logger(__name__)

# Shutdown must outlast the progress flush
SHUTDOWN_GRACE_SECONDS = 10


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    fastapi_app = create_fastapi_app(app, config)

    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"

    logger.info("server_starting", host=config.host, port=config.port, llm_model=config.llm_model)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=log_config,
        access_log=True,
        proxy_headers=True,
        timeout_graceful_shutdown=max(SHUTDOWN_GRACE_SECONDS, int(config.progress_sync_delay) + 1),
    )


if __name__ == "__main__":
    main()
