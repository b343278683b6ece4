from __future__ import annotations

from dataclasses import dataclass
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any
import sys

import json
import yaml


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


@dataclass(slots=True)
class CopyDefaults:
    recursive: bool = False
    noise: bool = False
    progress: bool = True
    log_level: str = "WARNING"
    log_file: Path | None = None


def default_state_dir() -> Path:
    return Path.home() / ".antig"


def default_config_path() -> Path:
    return default_state_dir() / "config.yaml"


def _as_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    raise ValueError(f"{field_name} must be a boolean")


def _as_optional_path(value: Any, field_name: str) -> Path | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string path")
    return Path(value).expanduser()


def _as_log_level(value: Any, field_name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
        raise ValueError(f"{field_name} must be one of: {', '.join(LOG_LEVELS)}")
    return value.upper()


def _load_raw_config(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ValueError(f"Config file does not exist: {config_path}")

    suffix = config_path.suffix.lower()
    text = config_path.read_text(encoding="utf-8")
    if suffix in {".yml", ".yaml"}:
        loaded = yaml.safe_load(text)
    elif suffix == ".json":
        loaded = json.loads(text)
    else:
        raise ValueError("Config file must be .yaml/.yml or .json")

    # an empty YAML file means "all defaults"
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError("Config root must be an object")
    return loaded


def load_defaults(config_path: Path | None = None) -> CopyDefaults:
    """Read option defaults from ``config_path`` or the per-user config file.

    The per-user file is optional; an explicitly given file must exist.
    """
    if config_path is None:
        config_path = default_config_path()
        if not config_path.exists():
            return CopyDefaults()

    raw = _load_raw_config(config_path)
    return CopyDefaults(
        recursive=_as_bool(raw.get("recursive"), "recursive", default=False),
        noise=_as_bool(raw.get("noise"), "noise", default=False),
        progress=_as_bool(raw.get("progress"), "progress", default=True),
        log_level=_as_log_level(raw.get("logLevel"), "logLevel", default="WARNING"),
        log_file=_as_optional_path(raw.get("logFile"), "logFile"),
    )


def configure_logging(level: str = "WARNING", log_file: Path | None = None) -> logging.Logger:
    logger = logging.getLogger("antig")
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
