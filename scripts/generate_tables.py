#!/usr/bin/env python3
"""
Generate a block randomization table and its upload file.

Examples:
    python scripts/generate_tables.py --n 40 --oversample 1.5 --seed 7
    python scripts/generate_tables.py --n 20 --stratify site=siteA,siteB --stratify age_group="<65,>=65"
"""

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

logging.basicConfig(level=logging.INFO)


def parse_dimension(text: str):
    """'site=siteA,siteB' -> ('site', ['siteA', 'siteB'])"""
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"Expected name=level1,level2, got {text!r}")
    name, levels = text.split("=", 1)
    return name.strip(), [lvl.strip() for lvl in levels.split(",") if lvl.strip()]


def parse_arguments():
    parser = argparse.ArgumentParser(
        description="Generate a (stratified) block randomization table"
    )
    parser.add_argument("--n", type=int, required=True,
                        help="Participants each stratum must be able to serve")
    parser.add_argument("--block-size", type=int, default=4, help="Even block size (default: 4)")
    parser.add_argument("--oversample", type=float, default=1.5,
                        help="Oversample factor (default: 1.5)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--stratify", type=parse_dimension, action="append", default=None,
                        help="Stratification dimension as name=level1,level2 (repeatable)")
    parser.add_argument("--name", type=str, default="assignment_table",
                        help="Output table name (default: assignment_table)")
    parser.add_argument("--out-dir", type=str, default=str(ROOT / "output" / "tables"),
                        help="Output directory")
    return parser.parse_args()


def main():
    from src.randomization.generator import generate, stratified_generate
    from src.randomization.stats import stratum_summary
    from src.randomization.table_store import export_upload, write_table

    args = parse_arguments()
    if args.stratify:
        table = stratified_generate(
            total_target_n=args.n,
            dimensions=dict(args.stratify),
            block_size=args.block_size,
            oversample_factor=args.oversample,
            seed=args.seed,
        )
    else:
        table = generate(
            total_target_n=args.n,
            block_size=args.block_size,
            oversample_factor=args.oversample,
            seed=args.seed,
        )

    table_path = write_table(table, args.name, base_dir=args.out_dir)
    upload_path = export_upload(table, Path(args.out_dir) / f"{args.name}_upload.csv")

    print(stratum_summary(table, args.block_size).to_string(index=False))
    print(f"\n[OK] {len(table)} assignments")
    print(f"   - {table_path}")
    print(f"   - {upload_path}")


if __name__ == "__main__":
    main()
