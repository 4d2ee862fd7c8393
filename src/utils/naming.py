"""Centralized filename and path naming utilities."""

from __future__ import annotations

import os
import re
from config import settings

_SANITIZE_PATTERN = re.compile(r"[^\w\s-]")
_WS_PATTERN = re.compile(r"[-\s]+")


def sanitize(value: str) -> str:
    value = _SANITIZE_PATTERN.sub("", value).strip()
    return _WS_PATTERN.sub("_", value)


def history_filename(dataset: str) -> str:
    """File holding one dataset's season history (``standings`` -> ``standings.json``)."""
    known = settings.DATASET_FILES.get(dataset)
    if known:
        return known
    return f"{sanitize(dataset) or settings.DEFAULT_DATASET}.json"


def history_path(dataset: str, base: str | None = None) -> str:
    return os.path.join(base or data_dir(), history_filename(dataset))


def data_dir() -> str:
    return settings.DATA_DIR
