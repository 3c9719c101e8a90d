from __future__ import annotations

import logging
import sys

_FORMAT = "apicheck: %(message)s"
_VERBOSE_FORMAT = "apicheck [%(levelname)s] %(name)s: %(message)s"


def configure_logging(*, verbose: bool, quiet: bool) -> None:
    """Send CLI logs to stderr; stdout carries only the report."""

    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    fmt = _VERBOSE_FORMAT if verbose else _FORMAT
    logging.basicConfig(level=level, format=fmt, stream=sys.stderr, force=True)
