"""Command line entrypoint for the standings scraping pipeline.

  python -m cli.scrape                      # FootMercato full table, default season
  python -m cli.scrape 7                    # Transfermarkt round 7, current year
  python -m cli.scrape --source transfermarkt --season 2025 --min 1 --max 10
  python -m cli.scrape --source transfermarkt --view home --view away
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from typing import Callable, Optional

from config import settings
from core import http_client
from core.http_client import FetchError
from parsing.extractor import SUPPORTED_SOURCES
from services import pipeline

VIEWS = ("general", "home", "away", "final")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="standings-scrape", description="Fetch league standings snapshots")
    p.add_argument("round", nargs="?", type=int, help="Single Transfermarkt round to fetch")
    p.add_argument("--source", choices=SUPPORTED_SOURCES, help="Upstream source")
    p.add_argument("--season", "-s", help="Season start year (2025) or key (2025/2026)")
    p.add_argument("--min", "-m", dest="min_round", type=int, help="First round of the sweep")
    p.add_argument("--max", "-M", dest="max_round", type=int, help="Last round of the sweep")
    p.add_argument(
        "--view",
        action="append",
        choices=VIEWS,
        help="Whole-table view(s) to fetch instead of a round sweep (repeatable)",
    )
    p.add_argument(
        "--reset",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Discard the season's history before a round sweep (default: when starting at round 1)",
    )
    p.add_argument("--dataset", default=settings.DEFAULT_DATASET, help="History dataset name")
    p.add_argument("--data-dir", help="Override data directory")
    p.add_argument("--json", action="store_true", help="Output JSON summary")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return p


def _plan(args: argparse.Namespace, parser: argparse.ArgumentParser) -> list:
    round_requested = args.round is not None or args.min_round is not None or args.max_round is not None
    source = args.source or ("transfermarkt" if round_requested else settings.DEFAULT_SOURCE)
    season = args.season or (str(datetime.now().year) if args.round is not None else None)
    views = args.view or ["general"]

    if source == "footmercato":
        if round_requested or views != ["general"]:
            parser.error("footmercato only provides the general full table")
        if args.reset is not None:
            parser.error("--reset/--no-reset only apply to round sweeps")
        return pipeline.full_table_steps(source, season)

    if views != ["general"]:
        if round_requested:
            parser.error("--view cannot be combined with a round window")
        if args.reset is not None:
            parser.error("--reset/--no-reset only apply to round sweeps")
        return pipeline.full_table_steps(source, season, views)

    min_round, max_round = args.min_round, args.max_round
    if args.round is not None and min_round is None and max_round is None:
        min_round = max_round = args.round
    min_round = min_round or 1
    max_round = max_round or min_round
    if max_round < min_round:
        parser.error("--max must not be lower than --min")
    return pipeline.round_sweep_steps(season, min_round, max_round, reset=args.reset)


def main(
    argv: list[str] | None = None,
    *,
    fetch: Optional[Callable[[str], str]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    steps = _plan(args, parser)
    try:
        result = pipeline.run_steps(
            steps,
            dataset=args.dataset,
            data_dir=args.data_dir,
            fetch=fetch or http_client.fetch,
            sleep=sleep,
        )
    except FetchError as e:
        print(f"Error while scraping: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Error while saving history: {e}", file=sys.stderr)
        return 2
    if args.json:
        print(json.dumps(result.summary(), indent=2, ensure_ascii=False))
    else:
        print(f"Scrape summary ({len(result.snapshots)} snapshot(s) -> {result.path}):")
        for s in result.summary()["snapshots"]:
            print(f"  {s['season']} {s['snapshot_type']} round={s['round']}: {s['clubs']} clubs")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
