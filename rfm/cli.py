from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Sequence

import numpy as np

from rfm.forecast import ForecastConfig, forecast_rows
from rfm.series import ColumnMapping, DEFAULT_LEVEL_MATCH, DEFAULT_TIME_COLUMN
from rfm.sources import (
    SourceError,
    default_window,
    download_hourly_workbook,
    fetch_station_status,
    read_workbook_rows,
)
from rfm.stations import get_station, station_codes


def _parse_date(text: str) -> date:
    return date.fromisoformat(text)


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def _cmd_fetch(args: argparse.Namespace) -> int:
    get_station(args.station)
    start, end = default_window()
    start = args.start or start
    end = args.end or end
    path = download_hourly_workbook(args.station, start, end, dest=args.out)
    print(f"Workbook for {args.station} saved to {path}")
    return 0


def _cmd_forecast(args: argparse.Namespace) -> int:
    rows = read_workbook_rows(args.input)
    mapping = None
    if args.level_column or args.time_column:
        mapping = ColumnMapping(
            time=args.time_column or DEFAULT_TIME_COLUMN,
            level=args.level_column or DEFAULT_LEVEL_MATCH,
        )
    config = ForecastConfig(horizon=args.horizon)
    rng = np.random.default_rng(args.seed)
    result = forecast_rows(rows, mapping=mapping, config=config, rng=rng)
    logging.getLogger(__name__).info(
        "%d rows -> %d usable levels, trend %.4f m/step", len(rows), len(result.series), result.trend
    )
    if args.json:
        print(json.dumps({
            "trend": result.trend,
            "last_timestamp": result.last_timestamp,
            "predictions": [asdict(p) for p in result.predictions],
        }, ensure_ascii=False, indent=2))
        return 0
    print(f"Trend: {result.trend:+.4f} m/h (last value: {result.last_value})")
    for p in result.predictions:
        print(f"{p.timestamp}\t{p.value:.2f}")
    return 0


def _cmd_status(args: argparse.Namespace) -> int:
    codes = args.station or station_codes()
    for code in codes:
        status = fetch_station_status(code)
        if status.error:
            print(f"- {code}: {status.error}")
            continue
        print(f"- {code}: {status.height_text} m ({status.flood_status.label}) updated {status.updated or 'N/A'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="River water-level download and 24 h forecast.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_fetch = sub.add_parser("fetch", help="Download the hourly export for a station into the cache.")
    p_fetch.add_argument("--station", default="P.1", choices=station_codes())
    p_fetch.add_argument("--start", type=_parse_date, default=None, help="YYYY-MM-DD (defaults to 7 days ago).")
    p_fetch.add_argument("--end", type=_parse_date, default=None, help="YYYY-MM-DD (defaults to today).")
    p_fetch.add_argument("--out", type=Path, default=None, help="Destination file (defaults to cache dir).")
    p_fetch.set_defaults(func=_cmd_fetch)

    p_fc = sub.add_parser("forecast", help="Forecast from a downloaded workbook.")
    p_fc.add_argument("--input", type=Path, required=True)
    p_fc.add_argument("--horizon", type=_positive_int, default=ForecastConfig.horizon, help="Hours to forecast.")
    p_fc.add_argument("--seed", type=int, default=None, help="Seed for the per-step jitter.")
    p_fc.add_argument("--level-column", default=None, help="Explicit water-level column name.")
    p_fc.add_argument("--time-column", default=None, help="Explicit timestamp column name.")
    p_fc.add_argument("--json", action="store_true", help="Emit JSON instead of a table.")
    p_fc.set_defaults(func=_cmd_forecast)

    p_st = sub.add_parser("status", help="Current level and flood status per station.")
    p_st.add_argument("--station", action="append", choices=station_codes())
    p_st.set_defaults(func=_cmd_status)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper()))

    try:
        return args.func(args)
    except SourceError as exc:
        logging.getLogger(__name__).error("%s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
