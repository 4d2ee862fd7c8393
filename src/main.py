"""CLI entry point for maintenance commands over stored season histories."""

from __future__ import annotations
import argparse
import json
import logging
import sys

from config import settings
from services import summary, synthetic
from tracking import backfill, history_store


def cmd_repair(args: argparse.Namespace) -> int:
    history = history_store.load_history(args.dataset, args.data_dir)
    repaired, report = backfill.backfill_history(history)
    if report.changed and not args.dry_run:
        history_store.save_history(args.dataset, repaired, args.data_dir)
    print(
        json.dumps(
            {
                "rounds_filled": report.rounds_filled,
                "dates_filled": report.dates_filled,
                "written": report.changed and not args.dry_run,
            },
            indent=2,
        )
    )
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    history = history_store.load_history(args.dataset, args.data_dir)
    rows = summary.summarize(history)
    if args.json:
        print(json.dumps(rows, indent=2, ensure_ascii=False))
    else:
        print(f"Available seasons: {sorted(history)}")
        if rows:
            print(summary.format_summary(rows))
    return 0


def cmd_synthesize(args: argparse.Namespace) -> int:
    history = history_store.load_history(args.dataset, args.data_dir)
    try:
        updated = synthetic.add_synthetic_evolution(history, args.season, seed=args.seed)
    except LookupError as e:
        print(str(e), file=sys.stderr)
        return 1
    path = history_store.save_history(args.dataset, updated, args.data_dir)
    added = len(updated[args.season]) - len(history.get(args.season, []))
    print(f"Added {added} synthetic snapshots to {args.season} in {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="standings")
    p.add_argument("--dataset", default="seasons", help="History dataset name")
    p.add_argument("--data-dir", help="Override data directory")
    sub = p.add_subparsers(dest="command", required=True)

    repair = sub.add_parser("repair", help="Fill missing round/date metadata")
    repair.add_argument("--dry-run", action="store_true", help="Report without writing")
    repair.set_defaults(func=cmd_repair)

    summ = sub.add_parser("summary", help="Summarize stored seasons")
    summ.add_argument("--json", action="store_true", help="Output JSON")
    summ.set_defaults(func=cmd_summary)

    synth = sub.add_parser("synthesize", help="Append synthetic matchday evolution data")
    synth.add_argument("--season", default=settings.DEFAULT_SEASON, help="Season key")
    synth.add_argument("--seed", type=int, help="Random seed")
    synth.set_defaults(func=cmd_synthesize)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except OSError as e:
        print(f"Storage error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
