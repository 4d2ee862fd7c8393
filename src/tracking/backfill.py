"""Repair pass filling metadata missing from stored snapshots.

Only absent fields are filled, so running the pass again changes nothing:

* ``round``: highest ``played`` count of the snapshot's clubs;
* ``date``: synthetic snapshots only, spaced one week apart counting back
  from ``now`` by position in the season sequence (earliest index = oldest).
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from domain.models import SeasonHistory, Snapshot
from services.snapshot_builder import infer_round
from utils.normalizer import utc_now_iso

DATE_SPACING = timedelta(weeks=1)


@dataclass
class BackfillReport:
    rounds_filled: int = 0
    dates_filled: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.rounds_filled or self.dates_filled)


def backfill_rounds(history: SeasonHistory) -> Tuple[SeasonHistory, int]:
    filled = 0
    repaired: SeasonHistory = {}
    for season, sequence in history.items():
        out = []
        for snap in sequence:
            if snap.round is None:
                inferred = infer_round(snap.clubs)
                if inferred is not None:
                    snap = dataclasses.replace(snap, round=inferred)
                    filled += 1
            out.append(snap)
        repaired[season] = out
    return repaired, filled


def _synthetic_date(now: datetime, index: int, total: int) -> str:
    return utc_now_iso(now - DATE_SPACING * (total - 1 - index))


def backfill_dates(
    history: SeasonHistory, *, now: Optional[datetime] = None
) -> Tuple[SeasonHistory, int]:
    now = now or datetime.now(timezone.utc)
    filled = 0
    repaired: SeasonHistory = {}
    for season, sequence in history.items():
        total = len(sequence)
        out = []
        for idx, snap in enumerate(sequence):
            if snap.is_synthetic and not snap.date:
                snap = dataclasses.replace(snap, date=_synthetic_date(now, idx, total))
                filled += 1
            out.append(snap)
        repaired[season] = out
    return repaired, filled


def backfill_history(
    history: SeasonHistory, *, now: Optional[datetime] = None
) -> Tuple[SeasonHistory, BackfillReport]:
    """Run both repairs and return the new history with a count of filled fields."""
    with_rounds, rounds = backfill_rounds(history)
    repaired, dates = backfill_dates(with_rounds, now=now)
    return repaired, BackfillReport(rounds_filled=rounds, dates_filled=dates)
