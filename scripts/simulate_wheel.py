#!/usr/bin/env python3
"""Simulate many spins and compare reward frequencies with the configured pools."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from prizewheel.config import load_config
from prizewheel.simulation import simulate


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Monte Carlo check of the prize wheel reward distribution.")
    parser.add_argument("--config", default=None, help="YAML/JSON wheel config (PRIZEWHEEL_CONFIG or the stock wheel when omitted).")
    parser.add_argument("--spins", type=int, default=100_000, help="Number of main spins to simulate.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON instead of text.")
    parser.add_argument("--verbose", action="store_true", help="Log every draw.")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s",
    )

    config = load_config(args.config)
    report = simulate(config, spins=args.spins, seed=args.seed)

    if args.json:
        print(json.dumps(report.as_dict(), ensure_ascii=False, indent=2))
    else:
        print(report.to_markdown())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
