"""High-level orchestration: fetch -> extract -> build snapshot -> merge -> persist.

Runs are sequential. Consecutive fetches are separated by a polite delay and
history is written after every fetch, so a failing fetch aborts the rest of
the run while keeping what was already saved.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from config import settings
from core import http_client
from domain.models import Snapshot
from parsing.extractor import ExtractionParams, Extractor, get_extractor
from services.snapshot_builder import build_snapshot
from tracking import history_store
from tracking.merge_policy import apply_snapshot, sweep_resets_history
from utils.normalizer import normalize_season

logger = logging.getLogger(__name__)

FetchFn = Callable[[str], str]


@dataclass
class FetchStep:
    extractor: Extractor
    params: ExtractionParams
    reset: bool = False


@dataclass
class RunResult:
    dataset: str
    path: Optional[str] = None
    snapshots: List[Snapshot] = field(default_factory=list)

    def summary(self) -> dict:
        return {
            "dataset": self.dataset,
            "path": self.path,
            "snapshots": [
                {
                    "season": s.season,
                    "source": s.source,
                    "round": s.round,
                    "snapshot_type": s.snapshot_type.value if s.snapshot_type else None,
                    "clubs": len(s.clubs),
                }
                for s in self.snapshots
            ],
        }


def fetch_snapshot(
    extractor: Extractor,
    params: ExtractionParams,
    *,
    fetch: FetchFn = http_client.fetch,
    now: Optional[datetime] = None,
) -> Snapshot:
    """One fetch + extraction; FetchError from ``fetch`` propagates unchanged."""
    url = extractor.build_url(params)
    logger.info("Fetching %s", url)
    document = fetch(url)
    result = extractor.extract(document, params)
    if not result.clubs:
        logger.warning("No club rows extracted from %s", url)
    return build_snapshot(result, source=extractor.source_label, now=now)


def run_steps(
    steps: Sequence[FetchStep],
    *,
    dataset: str = settings.DEFAULT_DATASET,
    data_dir: Optional[str] = None,
    fetch: FetchFn = http_client.fetch,
    sleep: Callable[[float], None] = time.sleep,
    delay: float = settings.POLITE_DELAY_SECONDS,
    clock: Optional[Callable[[], datetime]] = None,
) -> RunResult:
    history = history_store.load_history(dataset, data_dir)
    result = RunResult(dataset=dataset)
    for idx, step in enumerate(steps):
        if idx:
            sleep(delay)
        snapshot = fetch_snapshot(
            step.extractor, step.params, fetch=fetch, now=clock() if clock else None
        )
        season = snapshot.season or settings.DEFAULT_SEASON
        history = apply_snapshot(history, season, snapshot, reset=step.reset)
        result.path = history_store.save_history(dataset, history, data_dir)
        result.snapshots.append(snapshot)
        logger.info(
            "Saved snapshot for season %s (%s, round=%s, %d clubs) to %s",
            season,
            snapshot.date,
            snapshot.round,
            len(snapshot.clubs),
            result.path,
        )
    return result


def full_table_steps(
    source: str, season: Optional[str] = None, views: Sequence[str] = ("general",)
) -> List[FetchStep]:
    extractor = get_extractor(source)
    season = normalize_season(season)
    return [FetchStep(extractor, ExtractionParams(season=season, view=v)) for v in views]


def round_sweep_steps(
    season: Optional[str],
    min_round: int,
    max_round: Optional[int] = None,
    *,
    reset: Optional[bool] = None,
) -> List[FetchStep]:
    """One Transfermarkt form-table fetch per round in ``min_round..max_round``.

    ``reset`` defaults to True when the sweep starts at round 1; only the
    first step carries it.
    """
    extractor = get_extractor("transfermarkt")
    max_round = max_round if max_round is not None else min_round
    if reset is None:
        reset = sweep_resets_history(min_round)
    season = normalize_season(season)
    return [
        FetchStep(
            extractor,
            ExtractionParams(season=season, min_round=r, max_round=r),
            reset=reset and r == min_round,
        )
        for r in range(min_round, max_round + 1)
    ]
