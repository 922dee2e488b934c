from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Callable, Sequence

from live_odds.application.services.board import BoardPresenter
from live_odds.application.services.reconciler import MatchListReconciler
from live_odds.config.settings import DataSettings, settings
from live_odds.infrastructure.data_sources import build_data_source
from live_odds.infrastructure.odds_feed_simulator import OddsFeedSimulator
from live_odds.logging_config import get_logger


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Watch the live odds board in the terminal")
    p.add_argument(
        "--duration", type=float, default=10.0, help="Seconds to keep the feed running"
    )
    p.add_argument(
        "--source",
        choices=["mock", "live"],
        default=None,
        help="Historical data source (defaults to LIVE_ODDS_SOURCE)",
    )
    p.add_argument("--data", type=Path, default=None, help="Path to a mock data JSON file")
    p.add_argument("--verbose", action="store_true", help="Log feed ticks to the console")
    return p


async def run(
    duration: float, data_settings: DataSettings, out: Callable[[str], None] = print
) -> bool:
    feed = OddsFeedSimulator(settings.feed, loop=asyncio.get_running_loop())
    reconciler = MatchListReconciler(build_data_source(data_settings), feed)
    board = BoardPresenter(reconciler, out=out)
    try:
        loaded = await reconciler.load_initial()
        reconciler.start()
        await asyncio.sleep(max(0.0, duration))
    finally:
        reconciler.close()
        board.close()
    return loaded


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    get_logger(console_level=logging.DEBUG if args.verbose else logging.WARNING)

    overrides: dict[str, object] = {}
    if args.source is not None:
        overrides["source"] = args.source
    if args.data is not None:
        overrides["mock_data_path"] = args.data
    data_settings = settings.data.model_copy(update=overrides)

    try:
        loaded = asyncio.run(run(args.duration, data_settings))
    except KeyboardInterrupt:  # pragma: no cover
        return 130
    if not loaded:
        print("Initial data could not be loaded; see log for details.")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
