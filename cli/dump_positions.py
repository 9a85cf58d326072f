#!/usr/bin/env python3
"""
CLI for exporting the positions of one role (listener, source, receiver or
emitter) from a SOFA file to CSV. Uses
`sofa_conventions.exporters.export_positions_to_csv`.
"""

import argparse
import logging
from pathlib import Path
from typing import Optional

from sofa_conventions.config import setup_logging
from sofa_conventions.conventions import ROLES
from sofa_conventions.errors import SofaError
from sofa_conventions.exporters import export_positions_to_csv


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Export positions from a SOFA file to CSV")
    parser.add_argument("sofa", help="Path to SOFA file")
    parser.add_argument("--role", choices=ROLES, default="Source", help="Role to export (default: Source)")
    parser.add_argument("--out", default=None, help="Output CSV path (default: <stem>_<role>_positions.csv)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    sofa_path = Path(args.sofa)
    if not sofa_path.exists():
        logging.error("SOFA file not found: %s", sofa_path)
        return 1

    try:
        csv_out = export_positions_to_csv(sofa_path, args.role, args.out)
    except SofaError as exc:
        logging.exception("Failed to export positions: %s", exc)
        return 1

    print(f"Wrote CSV: {csv_out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
