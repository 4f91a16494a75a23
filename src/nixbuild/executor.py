"""Synchronous execution of the ``nix`` process.

Only stdout is captured. stderr is inherited so ``-L`` build logs reach the
controlling terminal, and stdin is closed.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from nixbuild.errors import BuildFailedError


def run_nix(nix: str | Path, argv: Sequence[str], *, cwd: Path) -> bytes:
    """Run ``nix`` with *argv* in *cwd* and return its raw stdout.

    A spawn failure and a non-zero exit status both raise
    :class:`BuildFailedError`; stdout is ignored in either case.
    """
    command = [str(nix), *argv]
    try:
        completed = subprocess.run(
            command,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            check=False,
        )
    except (OSError, ValueError) as exc:
        raise BuildFailedError(
            "Failed to launch nix.",
            hint="Check that the nix binary is executable.",
            context={
                "operation": "execute",
                "command": " ".join(command),
                "error": str(exc),
            },
        ) from exc

    if completed.returncode != 0:
        raise BuildFailedError(
            "nix build failed.",
            hint="Check the nix build log above for details.",
            context={
                "operation": "execute",
                "command": " ".join(command),
                "returncode": str(completed.returncode),
            },
        )
    return completed.stdout


__all__ = ["run_nix"]
