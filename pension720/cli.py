"""Command line entrypoint: update the draw history and print recommendations.

Usage:
  pension720 --recommend 5 --format md
  pension720 --no-update --all-tiers --cycle 42
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

from pension720.config import BaseConfig, get_config
from pension720.db import create_session_factory
from pension720.errors import AppError
from pension720.logging_config import configure_logging
from pension720.services.pipeline_service import PipelineResult, TextFetcher, UpdatePipeline
from pension720.services.report import FORMATS, render_report

logger = logging.getLogger(__name__)


def build_parser(config: BaseConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pension720",
        description="Update Pension Lottery 720+ draw history and frequency tables",
    )
    parser.add_argument(
        "--no-update",
        dest="no_update",
        action="store_true",
        default=bool(config.SKIP_UPDATE),
        help="Skip fetching; rebuild statistics from the stored history only",
    )
    parser.add_argument(
        "--recommend",
        dest="recommend",
        type=int,
        default=int(config.RECOMMEND or 0),
        help="Number of tickets to generate (0 = none)",
    )
    parser.add_argument(
        "--all-tiers",
        dest="all_tiers",
        action="store_true",
        help="Print the 1 / 5 / 10 ticket batches",
    )
    parser.add_argument(
        "--format",
        dest="format",
        choices=FORMATS,
        default=config.OUTPUT_FORMAT if config.OUTPUT_FORMAT in FORMATS else "md",
    )
    parser.add_argument(
        "--cycle",
        dest="cycle",
        type=int,
        default=config.CYCLE,
        help="Cycle counter (default: latest round)",
    )
    parser.add_argument("--seed", dest="seed", type=str, default=config.SEED)
    parser.add_argument("--data-dir", dest="data_dir", type=str, default=None)
    parser.add_argument("--source-url", dest="source_url", type=str, default=None)
    return parser


def run(config: BaseConfig, args: argparse.Namespace, fetcher: TextFetcher | None = None) -> PipelineResult:
    options = {
        "skip_update": bool(args.no_update),
        "recommend": int(args.recommend),
        "cycle": args.cycle,
        "seed": str(args.seed),
        "all_tiers": bool(args.all_tiers),
    }

    if config.HISTORY_BACKEND != "sql":
        return UpdatePipeline.from_config(config, fetcher=fetcher).run(**options)

    session_factory = create_session_factory(config.DATABASE_URL)
    with session_factory() as session:
        pipeline = UpdatePipeline.from_config(config, session=session, fetcher=fetcher)
        try:
            result = pipeline.run(**options)
        except AppError:
            # Keep the merged history; generation runs after it is saved.
            session.commit()
            raise
        session.commit()
        return result


def main(argv: Sequence[str] | None = None, fetcher: TextFetcher | None = None) -> int:
    load_dotenv()
    config = get_config()()

    args = build_parser(config).parse_args(argv)
    configure_logging(config.LOG_LEVEL)

    overrides = {}
    if args.data_dir:
        overrides["DATA_DIR"] = str(args.data_dir)
    if args.source_url:
        overrides["SOURCE_URL"] = str(args.source_url)
    if overrides:
        config = dataclasses.replace(config, **overrides)

    try:
        result = run(config, args, fetcher=fetcher)
    except AppError as exc:
        logger.error("Run failed: %s (%s)", exc.message, exc.code)
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    print(render_report(result, args.format))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
