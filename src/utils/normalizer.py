"""Coercion of scraped text into safe integers, club names and season keys.

All helpers are total: odd input yields ``None`` (or an empty string for
names) instead of raising, since partial upstream data is expected.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import datetime, timezone
from typing import Any, Optional

# Unicode minus, en dash, em dash, figure dash
_DASHES = str.maketrans({"−": "-", "–": "-", "—": "-", "‒": "-"})
_NON_NUMERIC_RE = re.compile(r"[^0-9-]")
_LEADING_INT_RE = re.compile(r"-?\d+")
_WS_RE = re.compile(r"\s+")
_NOISE_PREFIX_RE = re.compile(r"^logo\b\s*", re.IGNORECASE)
_RANK_PREFIX_RE = re.compile(r"^\d+\s*\.?\s+")
_SEASON_KEY_RE = re.compile(r"^(\d{4})/(\d{4})$")
_SEASON_YEAR_RE = re.compile(r"^(\d{4})$")
_PLACEHOLDER_RE = re.compile(r"^(selectionner|select\b|choisir|choose\b)")


def parse_int_safe(text: Any) -> Optional[int]:
    """Parse the integer hidden in ``text`` (``"34 pts"`` -> 34, ``"-"`` -> None)."""
    if text is None:
        return None
    cleaned = _NON_NUMERIC_RE.sub("", str(text).translate(_DASHES))
    m = _LEADING_INT_RE.match(cleaned)
    if not m:
        return None
    return int(m.group(0))


def _clean_once(text: str) -> str:
    t = _WS_RE.sub(" ", text).strip()
    t = _NOISE_PREFIX_RE.sub("", t).strip()
    parts = t.split(" ")
    while len(parts) >= 2 and parts[-1] == parts[-2]:
        parts.pop()
    return " ".join(parts)


def clean_name(text: Optional[str]) -> str:
    """Canonical club name: collapse whitespace, drop ``Logo`` marker and doubled tail.

    Applied until stable, so ``clean_name(clean_name(x)) == clean_name(x)``.
    """
    if not text:
        return ""
    current = str(text)
    while True:
        cleaned = _clean_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned


def strip_rank_prefix(text: Optional[str]) -> str:
    """Remove a leading ranking marker such as ``"1. "`` then clean the name."""
    return clean_name(_RANK_PREFIX_RE.sub("", clean_name(text), count=1))


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower().strip()


def is_placeholder_name(name: Optional[str]) -> bool:
    """True for UI prompt labels ("Sélectionner une équipe") scraped as rows."""
    if not name:
        return True
    return bool(_PLACEHOLDER_RE.search(_fold(name)))


def normalize_season(value: Any) -> Optional[str]:
    """Accept ``2025`` or ``"2025/2026"`` and return the canonical season key."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if _SEASON_KEY_RE.match(text):
        return text
    m = _SEASON_YEAR_RE.match(text)
    if m:
        start = int(m.group(1))
        return f"{start}/{start + 1}"
    return text


def season_start_year(season: str) -> str:
    m = _SEASON_KEY_RE.match(season)
    return m.group(1) if m else season


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """ISO timestamp with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
