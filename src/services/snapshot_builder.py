"""Assemble Snapshot records from extraction output and request metadata."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from domain.models import ClubRow, Snapshot, SnapshotType
from parsing.extractor import ExtractionResult
from utils.normalizer import normalize_season, utc_now_iso


def infer_round(clubs: Iterable[ClubRow]) -> Optional[int]:
    """Highest ``played`` count across clubs, or None when nobody has one."""
    played = [c.played for c in clubs if c.played is not None]
    return max(played) if played else None


def build_snapshot(
    result: ExtractionResult,
    *,
    source: str,
    now: Optional[datetime] = None,
    snapshot_type: Optional[SnapshotType] = None,
    season: Optional[str] = None,
) -> Snapshot:
    clubs = tuple(result.clubs)
    round_ = result.round if result.round is not None else infer_round(clubs)
    return Snapshot(
        date=utc_now_iso(now),
        source=source,
        season=normalize_season(season) or result.season,
        round=round_,
        snapshot_type=snapshot_type or result.snapshot_type,
        url=result.url,
        params=dict(result.params) if result.params else None,
        clubs=clubs,
    )
