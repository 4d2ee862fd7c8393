"""Synthetic matchday evolution built from a real FootMercato snapshot.

Used to exercise history consumers with several rounds of data before a
season has produced them. Generated snapshots carry no ``date`` and no
``round``; the repair pass fills both afterwards.
"""

from __future__ import annotations

import dataclasses
import random
from typing import List, Optional

from domain.models import ClubRow, SeasonHistory, Snapshot, SnapshotType

FIRST_MATCHDAY = 12
LAST_MATCHDAY = 16
TOP_CLUBS = 10


def _latest_footmercato(sequence: List[Snapshot]) -> Optional[Snapshot]:
    for snap in reversed(sequence):
        if "footmercato" in snap.source:
            return snap
    return None


def _progress(club: ClubRow, matchday: int, rng: random.Random) -> ClubRow:
    goals_for = (club.goals_for or 0) + matchday // 3 + rng.randint(0, 1)
    goals_against = (club.goals_against or 0) + matchday // 4 + rng.randint(0, 1)
    return dataclasses.replace(
        club,
        points=(club.points or 0) + matchday // 2 + rng.randint(0, 2),
        played=matchday,
        goals_for=goals_for,
        goals_against=goals_against,
        goal_difference=goals_for - goals_against,
    )


def evolution_snapshots(
    base: Snapshot,
    season: str,
    *,
    first: int = FIRST_MATCHDAY,
    last: int = LAST_MATCHDAY,
    top: int = TOP_CLUBS,
    rng: Optional[random.Random] = None,
) -> List[Snapshot]:
    rng = rng or random.Random()
    base_clubs = base.clubs[:top]
    out: List[Snapshot] = []
    for matchday in range(first, last + 1):
        progressed = [_progress(c, matchday, rng) for c in base_clubs]
        progressed.sort(key=lambda c: (-(c.points or 0), -(c.goal_difference or 0)))
        ranked = tuple(dataclasses.replace(c, position=i) for i, c in enumerate(progressed, start=1))
        out.append(
            Snapshot(
                date=None,
                source=SnapshotType.SYNTHETIC_EVOLUTION.value,
                season=season,
                snapshot_type=SnapshotType.SYNTHETIC_EVOLUTION,
                clubs=ranked,
                extra={"matchday": matchday},
            )
        )
    return out


def add_synthetic_evolution(
    history: SeasonHistory, season: str, *, seed: Optional[int] = None
) -> SeasonHistory:
    """Append synthetic matchday snapshots to ``season``.

    Raises LookupError when the season holds no FootMercato snapshot to start from.
    """
    sequence = list(history.get(season, []))
    base = _latest_footmercato(sequence)
    if base is None:
        raise LookupError(f"No FootMercato snapshot found for season {season}")
    updated = dict(history)
    updated[season] = sequence + evolution_snapshots(base, season, rng=random.Random(seed))
    return updated
