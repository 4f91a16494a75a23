"""Discovery of the ``nix`` executable."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

NIX_BIN_NAME = "nix"
NIX_ENV_VAR = "NIX"


def locate_nix() -> Path | None:
    """Return the path to the ``nix`` program, or ``None`` if it is unusable.

    The ``NIX`` environment variable takes precedence over a ``PATH`` search.
    Whichever candidate wins must exist on disk; an override pointing at a
    missing file does not fall back to ``PATH``. The result is absolute so it
    stays valid when nix is spawned from another working directory.
    """
    override = os.environ.get(NIX_ENV_VAR)
    candidate = override if override is not None else shutil.which(NIX_BIN_NAME)
    if not candidate:
        return None
    path = Path(candidate).absolute()
    try:
        exists = path.exists()
    except OSError:
        exists = False
    return path if exists else None


def is_nix_available() -> bool:
    return locate_nix() is not None


__all__ = ["NIX_BIN_NAME", "NIX_ENV_VAR", "is_nix_available", "locate_nix"]
