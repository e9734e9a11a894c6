"""
ConopsPilot Configuration

Settings are read from environment variables with defaults:

    CONOPSPILOT_CATALOG_PATH  Catalog pack to load (default: bundled pack)
    CONOPSPILOT_LOG_LEVEL     Logging level name (default: INFO)
    CONOPSPILOT_LOG_FORMAT    "json" or "text" (default: json)

The default catalogs read CONOPSPILOT_CATALOG_PATH on first use; the
engine functions themselves never read the environment.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import ConopsPilotError


DEFAULT_CATALOG_PATH = Path(__file__).parent / "packs" / "data" / "canada_part_ix.yaml"

LOG_FORMATS = ("json", "text")

TEXT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for hosting applications."""
    catalog_path: Path = DEFAULT_CATALOG_PATH
    log_level: str = "INFO"
    log_format: str = "json"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from (default: os.environ)

    Raises:
        ConopsPilotError: If the log level or format is not recognised
    """
    env = os.environ if environ is None else environ

    catalog_path = env.get("CONOPSPILOT_CATALOG_PATH")
    log_level = env.get("CONOPSPILOT_LOG_LEVEL", "INFO").upper()
    log_format = env.get("CONOPSPILOT_LOG_FORMAT", "json").lower()

    if not isinstance(logging.getLevelName(log_level), int):
        raise ConopsPilotError(
            message=f"Unknown log level: {log_level}",
            code="CN_CONFIG_ERROR",
            details={"CONOPSPILOT_LOG_LEVEL": log_level},
        )
    if log_format not in LOG_FORMATS:
        raise ConopsPilotError(
            message=f"Unknown log format: {log_format}",
            code="CN_CONFIG_ERROR",
            details={"CONOPSPILOT_LOG_FORMAT": log_format, "allowed": list(LOG_FORMATS)},
        )

    return Settings(
        catalog_path=Path(catalog_path) if catalog_path else DEFAULT_CATALOG_PATH,
        log_level=log_level,
        log_format=log_format,
    )


# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    EXTRA_FIELDS = (
        "pathway",
        "sail",
        "fact_set_hash",
        "catalog_hash",
        "catalog_path",
        "missing",
        "percent",
    )

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in self.EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling it twice replaces the handler instead of stacking a second one.
    """
    settings = settings or load_settings()

    logger = logging.getLogger("conopspilot")
    logger.setLevel(getattr(logging, settings.log_level))

    for existing in list(logger.handlers):
        if getattr(existing, "_conopspilot_handler", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler()
    if settings.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_LOG_FORMAT))
    handler._conopspilot_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
