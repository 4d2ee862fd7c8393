"""Domain models for the standings scraping pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class SnapshotType(str, Enum):
    GENERAL = "general"
    HOME = "home"
    AWAY = "away"
    MATCHDAY = "matchday"
    ROUND_STANDINGS = "round_standings"
    FINAL_STANDINGS = "final_standings"
    SYNTHETIC_EVOLUTION = "synthetic-evolution"

    @classmethod
    def parse(cls, value: Any) -> Optional["SnapshotType"]:
        if value is None or value == "":
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# Views covering the whole table at fetch time; they never replace by round.
WHOLE_TABLE_TYPES = frozenset(
    {
        SnapshotType.GENERAL,
        SnapshotType.HOME,
        SnapshotType.AWAY,
        SnapshotType.FINAL_STANDINGS,
    }
)

CLUB_INT_FIELDS: Tuple[str, ...] = (
    "points",
    "played",
    "goal_difference",
    "wins",
    "draws",
    "losses",
    "goals_for",
    "goals_against",
)


@dataclass(frozen=True, slots=True)
class ClubRow:
    position: Optional[int]
    name: str
    points: Optional[int] = None
    played: Optional[int] = None
    goal_difference: Optional[int] = None
    wins: Optional[int] = None
    draws: Optional[int] = None
    losses: Optional[int] = None
    goals_for: Optional[int] = None
    goals_against: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Snapshot:
    date: Optional[str]
    source: str
    clubs: Tuple[ClubRow, ...] = ()
    season: Optional[str] = None
    round: Optional[int] = None
    snapshot_type: Optional[SnapshotType] = None
    url: Optional[str] = None
    params: Optional[Dict[str, Any]] = None
    # Keys found on stored snapshots that this model does not know about.
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_round_scoped(self) -> bool:
        return self.round is not None and self.snapshot_type not in WHOLE_TABLE_TYPES

    @property
    def is_synthetic(self) -> bool:
        marker = SnapshotType.SYNTHETIC_EVOLUTION
        return self.source == marker.value or self.snapshot_type is marker


SeasonHistory = Dict[str, List[Snapshot]]
