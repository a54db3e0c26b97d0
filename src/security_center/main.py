"""ASGI entry point."""

import uvicorn

from .config.settings import get_settings
from .infrastructure.fastapi.app import create_app


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "security_center.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    run()
