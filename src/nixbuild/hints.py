"""Change-tracking hints for the calling build process."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

RERUN_HINT_PREFIX = "rerun-if-changed="

HintSink = Callable[[Path], None]


def emit_rerun_hint(path: Path, stream: TextIO | None = None) -> None:
    """Write a ``rerun-if-changed=<path>`` directive line."""
    out = stream if stream is not None else sys.stdout
    out.write(f"{RERUN_HINT_PREFIX}{path}\n")
    out.flush()


__all__ = ["RERUN_HINT_PREFIX", "HintSink", "emit_rerun_hint"]
