"""Run the API with uvicorn: ``python -m fleet_booking``."""

import uvicorn

from fleet_booking.config import settings


def main() -> None:
    log_config = uvicorn.config.LOGGING_CONFIG
    log_config["formatters"]["default"]["fmt"] = (
        "%(asctime)s %(name)-20s %(levelname)-7s %(message)s"
    )

    uvicorn.run(
        "fleet_booking.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=log_config,
    )


if __name__ == "__main__":
    main()
