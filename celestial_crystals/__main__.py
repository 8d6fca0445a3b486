"""Run the storefront server with uvicorn."""

import uvicorn

from celestial_crystals.server.core.config import settings


def main() -> None:
    uvicorn.run(
        "celestial_crystals.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
