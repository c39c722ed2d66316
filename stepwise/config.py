from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional


_TRUTHY = {'1', 'true', 'yes', 'on'}

# Defaults
_DEFAULT_LOGLEVEL = logging.WARNING
_DEFAULT_STRICT_READER = False


def flag_from_env(var: str, default: bool) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def get_log_level() -> int:
    raw = os.environ.get('STEPWISE_LOGLEVEL', '').upper()
    if raw:
        level = getattr(logging, raw, None)
        if isinstance(level, int):
            return level
    return _DEFAULT_LOGLEVEL


def get_strict_reader() -> bool:
    return flag_from_env('STEPWISE_STRICT_READER', _DEFAULT_STRICT_READER)


def get_definitions_path() -> Optional[Path]:
    raw = os.environ.get('STEPWISE_DEFINITIONS')
    if not raw or not raw.strip():
        return None
    return Path(raw.strip())
