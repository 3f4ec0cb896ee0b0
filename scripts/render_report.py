#!/usr/bin/env python3
"""
Render the randomization tutorial to output/randomization_report.html.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

logging.basicConfig(level=logging.INFO)


def parse_arguments():
    parser = argparse.ArgumentParser(description="Render the randomization report")
    parser.add_argument(
        "--config", type=str, default=None,
        help="Optional JSON file with report parameters (seed, block_size, dimensions, ...)"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for the example computations (overrides --config)"
    )
    return parser.parse_args()


def main():
    from src.randomization.errors import ReportRenderError
    from src.randomization.pipeline import RANDOMIZATION_REPORT, run_target
    from src.randomization.schema import ReportConfig

    args = parse_arguments()
    params = {}
    if args.config:
        with open(args.config) as f:
            params = json.load(f)
    if args.seed is not None:
        params["seed"] = args.seed
    config = ReportConfig.from_dict(params)

    print(f"Rendering {RANDOMIZATION_REPORT.source} (seed {config.seed})...")
    try:
        out_path = run_target(RANDOMIZATION_REPORT, root=ROOT, config=config)
    except ReportRenderError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"[OK] Report written to {out_path}")


if __name__ == "__main__":
    main()
