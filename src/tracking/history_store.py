"""Load/save season histories as pretty-printed JSON documents.

One file per dataset (``standings.json``, ``seasons.json``) holding a mapping
from season key to the ordered list of snapshot objects. The whole file is
read, changed in memory and rewritten; there is no locking.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List

from core import filesystem
from domain.models import CLUB_INT_FIELDS, ClubRow, SeasonHistory, Snapshot, SnapshotType
from utils import naming
from utils.normalizer import parse_int_safe

logger = logging.getLogger(__name__)

SNAPSHOT_KEYS = ("date", "source", "season", "url", "params", "round", "snapshot_type", "clubs")


class MalformedStorageError(ValueError):
    """Stored history is present but not valid structured data."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(message)
        self.path = path


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    return parse_int_safe(value)


def club_to_dict(club: ClubRow) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"position": club.position, "name": club.name}
    for f in CLUB_INT_FIELDS:
        payload[f] = getattr(club, f)
    return payload


def club_from_dict(raw: Any) -> ClubRow:
    if not isinstance(raw, dict):
        raise MalformedStorageError(f"Club entry is not an object: {raw!r}")
    return ClubRow(
        position=_int_or_none(raw.get("position")),
        name=str(raw.get("name") or ""),
        **{f: _int_or_none(raw.get(f)) for f in CLUB_INT_FIELDS},
    )


def snapshot_to_dict(snapshot: Snapshot) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    if snapshot.date is not None:
        payload["date"] = snapshot.date
    payload["source"] = snapshot.source
    if snapshot.season is not None:
        payload["season"] = snapshot.season
    if snapshot.url is not None:
        payload["url"] = snapshot.url
    if snapshot.params is not None:
        payload["params"] = snapshot.params
    if snapshot.round is not None:
        payload["round"] = snapshot.round
    if snapshot.snapshot_type is not None:
        payload["snapshot_type"] = snapshot.snapshot_type.value
    payload["clubs"] = [club_to_dict(c) for c in snapshot.clubs]
    for key, value in snapshot.extra.items():
        payload.setdefault(key, value)
    return payload


def snapshot_from_dict(raw: Any) -> Snapshot:
    if not isinstance(raw, dict):
        raise MalformedStorageError(f"Snapshot entry is not an object: {raw!r}")
    clubs_raw = raw.get("clubs", [])
    if not isinstance(clubs_raw, list):
        raise MalformedStorageError("Snapshot 'clubs' is not a list")
    extra = {k: v for k, v in raw.items() if k not in SNAPSHOT_KEYS}
    snapshot_type = SnapshotType.parse(raw.get("snapshot_type"))
    if snapshot_type is None and raw.get("snapshot_type") is not None:
        # Unknown type labels survive a rewrite untouched.
        extra["snapshot_type"] = raw["snapshot_type"]
    params = raw.get("params")
    return Snapshot(
        date=raw.get("date") or None,
        source=str(raw.get("source") or "unknown"),
        season=raw.get("season"),
        round=_int_or_none(raw.get("round")),
        snapshot_type=snapshot_type,
        url=raw.get("url"),
        params=params if isinstance(params, dict) else None,
        clubs=tuple(club_from_dict(c) for c in clubs_raw),
        extra=extra,
    )


def parse_history(text: str, *, path: str | None = None) -> SeasonHistory:
    """Decode a stored history document; raise MalformedStorageError when unusable."""
    if not text.strip():
        return {}
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedStorageError(f"Invalid JSON: {e}", path=path) from e
    if not isinstance(raw, dict):
        raise MalformedStorageError("History root is not an object", path=path)
    history: SeasonHistory = {}
    for season, entries in raw.items():
        if not isinstance(entries, list):
            logger.warning("Skipping season %s in %s: not a list", season, path)
            continue
        snapshots: List[Snapshot] = []
        for idx, entry in enumerate(entries):
            try:
                snapshots.append(snapshot_from_dict(entry))
            except MalformedStorageError as e:
                logger.warning("Skipping snapshot %s[%d] in %s: %s", season, idx, path, e)
        history[season] = snapshots
    return history


def dump_history(history: SeasonHistory) -> str:
    payload = {season: [snapshot_to_dict(s) for s in seq] for season, seq in history.items()}
    return json.dumps(payload, indent=2, ensure_ascii=False)


def load_history(dataset: str, base: str | None = None) -> SeasonHistory:
    """Load a dataset's history; a missing or corrupt file yields an empty history."""
    p = naming.history_path(dataset, base)
    if not os.path.exists(p):
        return {}
    try:
        return parse_history(filesystem.read_text(p), path=p)
    except (MalformedStorageError, UnicodeDecodeError) as e:
        logger.warning("Stored history %s is malformed (%s); starting from empty history", p, e)
        return {}


def save_history(dataset: str, history: SeasonHistory, base: str | None = None) -> str:
    p = naming.history_path(dataset, base)
    filesystem.write_text(p, dump_history(history))
    return p
