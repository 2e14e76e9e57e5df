# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Progress indicators for the analyze and extract commands.

``analyze`` is one long page load, so it runs under a ``rich`` spinner.
``extract`` already logs a line per detail page and only announces the run
with ``print_step``. Both stay quiet when stderr is piped, leaving stderr
to the log stream.
"""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Generator

from rich.console import Console


@contextlib.contextmanager
def status_spinner(msg: str) -> Generator[None, None, None]:
    """Context manager showing a spinner with *msg* while active.

    Silent when stderr is not a TTY (piped output).
    """
    if not sys.stderr.isatty():
        yield
        return

    console = Console(stderr=True)
    with console.status(msg):
        yield


def print_step(msg: str) -> None:
    """Print a step message to stderr (only when interactive)."""
    if sys.stderr.isatty():
        print(msg, file=sys.stderr)
