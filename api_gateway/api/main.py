"""Process entrypoint: load settings, build the gateway, and serve it with uvicorn."""

from __future__ import annotations

import uvicorn

from api_gateway.api.app import create_app
from api_gateway.common.logging import resolve_log_level
from api_gateway.common.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.listen_host,
        port=settings.listen_port,
        log_level=resolve_log_level(settings.LOG_LEVEL),
    )


if __name__ == "__main__":
    main()
