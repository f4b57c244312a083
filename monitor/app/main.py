import asyncio
import sys
from typing import Any

from loguru import logger

from monitor.app.application.session import run_session
from monitor.app.config.settings import Settings
from monitor.app.core import SERVICE_NAME
from monitor.app.core.logging import configure_logging


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def main() -> None:
    try:
        settings = Settings()
        configure_logging(settings.log_level, serialize=settings.log_json)
        _log("monitor_starting", event_name=settings.event_name, database_name=settings.database_name)
        asyncio.run(run_session(settings))
    except KeyboardInterrupt:
        _log("monitor_interrupted")
        sys.exit(130)
    except Exception as e:
        logger.exception("monitor failed: {}", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
