"""Coloured console logging in the style of the controller's debug output."""

from __future__ import annotations

import sys

ANSI_FG_RED = "\x1b[1;31m"
ANSI_FG_GREEN = "\x1b[1;32m"
ANSI_FG_YELLOW = "\x1b[1;33m"
ANSI_FG_BLUE = "\x1b[1;34m"
ANSI_FG_CYAN = "\x1b[1;36m"
ANSI_NONE = "\x1b[0m"


def _emit(color: str, message: str, args: tuple) -> None:
    text = message % args if args else message
    sys.stdout.write(f"{color}{text}{ANSI_NONE}")
    sys.stdout.flush()


def log_ok(message: str, *args) -> None:
    """Print a printf-style message in green."""
    _emit(ANSI_FG_GREEN, message, args)


def log_info(message: str, *args) -> None:
    """Print a printf-style message in cyan."""
    _emit(ANSI_FG_CYAN, message, args)


def log_err(message: str, *args) -> None:
    """Print a printf-style message in red."""
    _emit(ANSI_FG_RED, message, args)