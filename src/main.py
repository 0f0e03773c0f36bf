"""Concertina Fingering — command-line entry point.

Reads an ABC tune, annotates every note with a suggested button and
prints the result (or writes it with ``-o``). The Streamlit app lives in
``app/streamlit_app.py``.
"""

from __future__ import annotations

import argparse
import sys

from src.concertina_engine.annotate import annotate_file, annotations_to_json_bytes
from src.concertina_engine.button_catalog import default_catalog, load_button_catalog
from src.concertina_engine.cost_model import FingeringCostModel
from src.config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="concertina-finger",
        description="Annotate an ABC tune with Anglo concertina fingerings.",
    )
    parser.add_argument("tune", help="input .abc file")
    parser.add_argument("-o", "--output", help="write the annotated tune here instead of stdout")
    parser.add_argument("--json", action="store_true", help="print the per-note table as JSON")
    parser.add_argument("--costs", help="cost config YAML (default: src/configs/fingering_costs.yaml)")
    parser.add_argument("--layout", help="button layout YAML (default: Jeffries 30-button)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log engine decisions")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    catalog = load_button_catalog(args.layout) if args.layout else default_catalog()
    cost_model = FingeringCostModel(args.costs)

    result = annotate_file(args.tune, args.output, catalog=catalog, cost_model=cost_model)
    if not result.ok:
        print(result.to_output(), file=sys.stderr)
        return 1

    if args.json:
        sys.stdout.write(annotations_to_json_bytes(result).decode("utf-8") + "\n")
    elif args.output is None:
        sys.stdout.write(result.to_output())
    return 0


if __name__ == "__main__":
    sys.exit(main())
