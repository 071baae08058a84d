"""Logging setup for the API process."""
import logging

from core.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """
    Configure root logging from settings.

    Always logs to the console. When LOG_FILE is set, the same records are also
    appended to that file.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
