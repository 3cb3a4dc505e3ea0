"""Initialize the beagle registry database."""

import structlog

from beagle.config import load_settings
from beagle.logging import configure_logging
from beagle.storage import StorageManager


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    storage = StorageManager.from_settings(settings)
    try:
        structlog.get_logger(__name__).info("database_initialized", endpoints=storage.endpoints.count())
    finally:
        storage.dispose()


if __name__ == "__main__":
    main()
