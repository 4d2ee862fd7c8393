"""Per-season overview of stored history (valid snapshot count, current leader)."""

from __future__ import annotations

from typing import Dict, List

from domain.models import SeasonHistory, Snapshot
from utils.normalizer import is_placeholder_name


def is_valid_snapshot(snapshot: Snapshot) -> bool:
    return any(c.name and not is_placeholder_name(c.name) and c.position for c in snapshot.clubs)


def summarize(history: SeasonHistory) -> List[Dict[str, object]]:
    rows: List[Dict[str, object]] = []
    for season in sorted(history):
        valid = [s for s in history[season] if is_valid_snapshot(s)]
        if not valid:
            continue
        latest = valid[-1]
        leader = latest.clubs[0] if latest.clubs else None
        rows.append(
            {
                "season": season,
                "valid_snapshots": len(valid),
                "latest_clubs": len(latest.clubs),
                "leader": leader.name if leader else None,
                "leader_points": leader.points if leader else None,
            }
        )
    return rows


def format_summary(rows: List[Dict[str, object]]) -> str:
    lines = []
    for r in rows:
        lines.append(
            f"{r['season']}: {r['valid_snapshots']} valid snapshots, "
            f"latest has {r['latest_clubs']} clubs"
        )
        lines.append(f"  Leader: {r['leader']} ({r['leader_points']} pts)")
    return "\n".join(lines)
