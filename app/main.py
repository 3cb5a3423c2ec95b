import logging

import uvicorn

from app.core.app_factory import create_app
from app.core.config import settings

logger = logging.getLogger(__name__)

app = create_app()


def run() -> None:
    """Serve the app with Uvicorn on the configured address."""
    logger.info(
        "server.starting",
        extra={"host": settings.server.host, "port": settings.server.port},
    )
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    run()
