"""Rules for combining a new Snapshot with a season's stored history.

* Round-scoped snapshots replace any earlier round-scoped entry of the same
  round (last write wins) and are appended at the end.
* Whole-table views (general/home/away/final) and round-less snapshots always
  append, duplicates included.
* ``reset=True`` drops the season's whole sequence first; a sweep starting at
  round 1 passes it for its first snapshot only.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from domain.models import SeasonHistory, Snapshot


def merge_snapshot(
    sequence: Optional[Sequence[Snapshot]], snapshot: Snapshot, *, reset: bool = False
) -> List[Snapshot]:
    """Return the season sequence with ``snapshot`` merged in (input untouched)."""
    if reset or not sequence:
        return [snapshot]
    kept = list(sequence)
    if snapshot.is_round_scoped:
        kept = [s for s in kept if not (s.is_round_scoped and s.round == snapshot.round)]
    kept.append(snapshot)
    return kept


def apply_snapshot(
    history: SeasonHistory, season: str, snapshot: Snapshot, *, reset: bool = False
) -> SeasonHistory:
    """Return a new history mapping with ``snapshot`` merged into ``season``."""
    updated = dict(history)
    updated[season] = merge_snapshot(history.get(season), snapshot, reset=reset)
    return updated


def sweep_resets_history(min_round: int) -> bool:
    return min_round == 1
