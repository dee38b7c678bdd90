"""Logging configuration for the company service."""

import logging

from backend.company_service.config import Settings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings (idempotent)."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(log_level)

    # SQL echo is controlled by the engine; keep driver chatter down
    logging.getLogger("asyncio").setLevel(logging.WARNING)
