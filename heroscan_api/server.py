"""Server entrypoint for the ``heroscan-api`` console script.

Host, port and worker count come from settings (``API_HOST``, ``API_PORT``,
``API_WORKERS``); a platform-provided ``PORT`` wins over ``API_PORT``.
"""

import os

import structlog
import uvicorn

from heroscan_api.config import get_settings

APP_PATH = "heroscan_api.main:app"

logger = structlog.get_logger(__name__)


def main() -> None:
    """Start the API with uvicorn."""
    settings = get_settings()
    port = int(os.getenv("PORT", settings.api_port))

    logger.info(
        "server_starting",
        host=settings.api_host,
        port=port,
        workers=settings.api_workers,
    )
    uvicorn.run(
        APP_PATH,
        host=settings.api_host,
        port=port,
        workers=settings.api_workers,
        proxy_headers=True,
        forwarded_allow_ips="*",
        # Logging is configured by the app itself
        log_config=None,
    )


if __name__ == "__main__":
    main()
