"""Logging setup shared by the launcher and its diagnostics."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
import logging.config
import os
from pathlib import Path
import sys
import uuid

import yaml

_CORRELATION_ID = os.environ.get("BOOTDRIVER_CORR_ID") or uuid.uuid4().hex
_JSON_ENABLED = os.environ.get("BOOTDRIVER_LOG_JSON", "").strip().lower() in {"1", "true", "yes"}
_HANDLER_NAME = "bootdriver-default"
_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def get_correlation_id() -> str:
    return _CORRELATION_ID


class _CorrelationFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = _CORRELATION_ID
        return True


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", _CORRELATION_ID),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _config_path(config_uri: str | os.PathLike[str] | None) -> Path | None:
    if config_uri is None:
        return None
    text = os.fspath(config_uri)
    if text.startswith("file:"):
        text = text[len("file:") :]
    if not text:
        return None
    path = Path(text)
    return path if path.is_file() else None


def _apply_yaml_config(path: Path) -> bool:
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise ValueError(f"Logging configuration must be a mapping: {path}")
    payload.setdefault("version", 1)
    logging.config.dictConfig(payload)
    return True


def apply_config_file(config_uri: str | os.PathLike[str]) -> bool:
    """Apply a YAML logging configuration when ``config_uri`` names an existing file."""

    path = _config_path(config_uri)
    if path is None:
        return False
    return _apply_yaml_config(path)


def configure_logging(
    level: str | int = "INFO",
    *,
    config_uri: str | os.PathLike[str] | None = None,
) -> bool:
    """Configure the root logger.

    When ``config_uri`` names an existing YAML file it is applied through
    :func:`logging.config.dictConfig` and ``True`` is returned. Otherwise a
    single stdout handler is installed (replacing a previous one installed by
    this function) and ``False`` is returned.
    """

    if config_uri is not None and apply_config_file(config_uri):
        return True

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.addFilter(_CorrelationFilter())
    if _JSON_ENABLED:
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    return False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["apply_config_file", "configure_logging", "get_correlation_id", "get_logger"]
