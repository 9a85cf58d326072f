#!/usr/bin/env python3
"""
Command-line interface printing information about a SOFA file.

Prints whether the file is a valid SOFA file and a valid instance of its
declared convention, then its attributes, dimensions, positions and data.
Exits 0 on success or help, 1 if the file cannot be opened or read.
"""

import argparse
import logging
import sys
from typing import Iterable, Optional, TextIO

from sofa_conventions import SofaError, SofaFile, open_file
from sofa_conventions.accessors import position_variable_name
from sofa_conventions.config import setup_logging
from sofa_conventions.conventions import KINDS, ROLES, SOFA_BASE

PAD_WIDTH = 30
SEPARATOR = "_" * 79


def _pad(label: str) -> str:
    return f"{label:<{PAD_WIDTH}}"


def _format_values(values: Iterable[float]) -> str:
    return " ".join(format(v, "g") for v in values)


def print_attributes(sofa: SofaFile, output: TextIO) -> None:
    for name, value in sofa.attributes().items():
        print(f"{_pad(name)} = {value}", file=output)
    for variable in sofa.variables():
        for name, value in sofa.attributes(variable).items():
            print(f"{_pad(f'{variable}:{name}')} = {value}", file=output)


def print_dimensions(sofa: SofaFile, output: TextIO) -> None:
    for letter, size in sofa.dimensions.items():
        print(f"{_pad(letter)} = {size}", file=output)


def print_position(sofa: SofaFile, role: str, kind: str, output: TextIO) -> None:
    name = position_variable_name(role, kind)
    coordinates, units = sofa.get_position(role, kind)
    buffer = sofa.get_position_values(role, kind)
    print(f"{_pad(f'{name}:Type')} = {coordinates.value}", file=output)
    print(f"{_pad(f'{name}:Units')} = {units.value}", file=output)
    shape = "x".join(str(d) for d in buffer.shape)
    print(f"{_pad(f'{name} [{shape}]')} = {_format_values(buffer)}", file=output)


def print_data(sofa: SofaFile, output: TextIO) -> None:
    store = sofa.store
    if store.has_variable("N") and store.has_variable("Data.Real"):
        print(f'Frequency Values ("N") [{sofa.get_frequency_units().value}]:', file=output)
        print(_format_values(sofa.get_frequency_values()), file=output)
        for label, buffer in (("Data.Real", sofa.get_data_real()), ("Data.Imag", sofa.get_data_imag())):
            m, r, n = buffer.shape
            print(f"{label}: [{m}x{r}x{n}]", file=output)
            print(_format_values(buffer), file=output)
    if store.has_variable("Data.IR"):
        if store.has_variable("Data.SamplingRate"):
            rates = sofa.get_sampling_rates()
            units = sofa.get_sampling_rate_units()
            print(f"{_pad('Data.SamplingRate')} = {_format_values(rates)}", file=output)
            print(f"{_pad('Data.SamplingRate:Units')} = {units.value}", file=output)
        buffer = sofa.get_data_ir()
        m, r, n = buffer.shape
        print(f"Data.IR: [{m}x{r}x{n}]", file=output)
        print(_format_values(buffer), file=output)


def print_info(sofa: SofaFile, output: TextIO = sys.stdout) -> None:
    """Print everything known about an open file."""
    generic = sofa.validate(SOFA_BASE)
    if not generic.valid:
        print(f"{sofa.path} is not a valid SOFA file: {generic.message}", file=output)
        return
    print(f"{sofa.path} is a valid SOFA file", file=output)

    print(SEPARATOR, file=output)
    print_attributes(sofa, output)
    print(file=output)
    print(SEPARATOR, file=output)
    print_dimensions(sofa, output)
    print(file=output)

    schema = sofa.schema
    if schema is SOFA_BASE:
        print(f"{sofa.path} does not follow a supported convention ({sofa.convention_name})", file=output)
    else:
        result = sofa.validate(schema)
        if not result.valid:
            print(f"{sofa.path} is not a valid '{schema.name}' file: {result.message}", file=output)
            return
        print(f"{sofa.path} is a valid '{schema.name}' file", file=output)

    for role in ROLES:
        for kind in KINDS:
            if sofa.has_position(role, kind):
                print(file=output)
                print_position(sofa, role, kind, output)
    print(file=output)
    print_data(sofa, output)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the SOFA info CLI."""
    parser = argparse.ArgumentParser(
        prog="sofa-info",
        description="Print information about a SOFA (AES69) file",
    )
    parser.add_argument("filename", nargs="?", help="Path to a SOFA file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    args = parser.parse_args(argv)

    if args.filename is None:
        parser.print_help()
        return 0

    setup_logging(verbose=args.verbose)
    try:
        with open_file(args.filename) as sofa:
            print_info(sofa)
    except SofaError as exc:
        logging.error("exception occurred: %s", exc)
        print(f"exception occurred: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
