"""Run the API with uvicorn: ``python -m src.portfolio``."""

import uvicorn

from src.portfolio.core.config import get_settings
from src.portfolio.main import create_app


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
