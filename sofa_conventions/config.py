"""Logging setup for the command-line tools.

The library never configures logging itself; only the CLIs call
:func:`setup_logging`.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"


def log_level(verbose: bool = False) -> int:
    return logging.DEBUG if verbose else logging.INFO


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging output for a CLI run."""
    logging.basicConfig(level=log_level(verbose), format=LOG_FORMAT)
