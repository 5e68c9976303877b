from __future__ import annotations

import argparse
from pathlib import Path
import sys

import pandas as pd

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from rankchart import build_rank_chart, normalize_observations, write_svg


SAMPLE_ROWS: tuple[tuple[str, int], ...] = (
    ("2014-10-28", 9),
    ("2014-11-02", 7),
    ("2014-11-08", 8),
    ("2014-11-15", 3),
    ("2014-11-16", 2),
    ("2014-11-17", 5),
    ("2014-11-24", 4),
    ("2014-12-03", 1),
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a daily rank chart to SVG.")
    parser.add_argument("--csv", default=None, help="CSV with `day` and `rank` columns; sample data when omitted")
    parser.add_argument("--out", default="out/daily_rank_chart.svg")
    parser.add_argument("--width", type=float, default=600.0)
    parser.add_argument("--height", type=float, default=300.0)
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    if args.csv:
        frame = pd.read_csv(args.csv, parse_dates=["day"])
    else:
        frame = pd.DataFrame(SAMPLE_ROWS, columns=["day", "rank"])
    observations = normalize_observations(data=frame)
    layout = build_rank_chart(observations, (args.width, args.height))
    out_path = write_svg(layout, args.out)
    print(out_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
