# src/hederafmt/config.py
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from hederafmt.env import load_dotenv_if_present

Json = Dict[str, Any]


def _as_str(v: Any, default: str) -> str:
    if v is None:
        return str(default)
    s = str(v)
    return s if s.strip() else str(default)


def _as_bool(v: Any, default: bool) -> bool:
    if v is None:
        return bool(default)
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in {"1", "true", "yes", "y", "on"}:
        return True
    if s in {"0", "false", "no", "n", "off"}:
        return False
    return bool(default)


@dataclass(frozen=True)
class FormatterConfig:
    log_level: str
    # Emit a format_check_failed event for every rejected record field.
    log_check_failures: bool
    logger_name: str


_ALLOWED_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def validate_formatter_config(cfg: FormatterConfig) -> None:
    level = str(cfg.log_level or "").strip().upper()
    if level not in _ALLOWED_LEVELS:
        raise ValueError(f"log_level must be one of {sorted(_ALLOWED_LEVELS)}; got: {cfg.log_level!r}")

    if not isinstance(cfg.logger_name, str) or not cfg.logger_name.strip():
        raise ValueError("logger_name must be a non-empty string")


def default_formatter_config() -> FormatterConfig:
    return FormatterConfig(
        log_level="INFO",
        log_check_failures=False,
        logger_name="hederafmt.formatter",
    )


def _config_from_mapping(raw: Json, base: FormatterConfig) -> FormatterConfig:
    return FormatterConfig(
        log_level=_as_str(raw.get("log_level"), base.log_level).strip().upper(),
        log_check_failures=_as_bool(raw.get("log_check_failures"), base.log_check_failures),
        logger_name=_as_str(raw.get("logger_name"), base.logger_name),
    )


def read_formatter_config_file(path: str) -> FormatterConfig:
    """Read a JSON or YAML (.yaml / .yml) config file over the defaults."""
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yaml", ".yml"}:
        raw = yaml.safe_load(text)
    else:
        raw = json.loads(text)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("formatter config must be a mapping")

    cfg = _config_from_mapping(raw, default_formatter_config())
    validate_formatter_config(cfg)
    return cfg


def formatter_config_from_env() -> FormatterConfig:
    cfg = _config_from_mapping(
        {
            "log_level": os.environ.get("HEDERAFMT_LOG_LEVEL"),
            "log_check_failures": os.environ.get("HEDERAFMT_LOG_CHECK_FAILURES"),
            "logger_name": os.environ.get("HEDERAFMT_LOGGER_NAME"),
        },
        default_formatter_config(),
    )
    validate_formatter_config(cfg)
    return cfg


def load_formatter_config(*, config_path: Optional[str] = None) -> FormatterConfig:
    load_dotenv_if_present()

    p = config_path or os.environ.get("HEDERAFMT_CONFIG_PATH")
    if p:
        return read_formatter_config_file(p)
    return formatter_config_from_env()


def log_level_value(cfg: FormatterConfig) -> int:
    return getattr(logging, cfg.log_level.strip().upper(), logging.INFO)
