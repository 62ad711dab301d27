"""Run the proxy with uvicorn: ``python -m tdt_proxy``."""

from __future__ import annotations

import uvicorn

from tdt_proxy.core.config import settings


def main() -> None:
    # log_config=None keeps the structlog handler installed by create_app
    uvicorn.run(
        "tdt_proxy.main:app",
        host=settings.service_host,
        port=settings.service_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
