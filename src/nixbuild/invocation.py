"""Assembly of the ``nix build`` command line from a build configuration.

Token order is fixed::

    build --no-link --json <target tokens>
          [--arg NAME EXPR]... [--argstr NAME VALUE]... [--impure]
          -L --experimental-features "nix-command flakes"

Alongside the tokens, the builder computes change-tracking hints: absolute
paths whose modification should make a caller rerun the build.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import cbor2

from nixbuild.targets import ArgEntry, ExprTarget, FlakeTarget, FunctionTarget, Target

if TYPE_CHECKING:
    from nixbuild.config import BuildConfig

BASE_ARGS = ("build", "--no-link", "--json")
FILE_FLAG = "-f"
EXPR_FLAG = "--expr"
ARG_EXPR_FLAG = "--arg"
ARG_STR_FLAG = "--argstr"
IMPURE_FLAG = "--impure"
PRINT_BUILD_LOGS_FLAG = "-L"
EXPERIMENTAL_FEATURES = ("--experimental-features", "nix-command flakes")
FLAKE_LOCK_NAME = "flake.lock"


@dataclass(frozen=True, slots=True)
class Invocation:
    argv: tuple[str, ...]
    watch_paths: tuple[Path, ...] = ()

    def command(self, nix: str | Path) -> list[str]:
        return [str(nix), *self.argv]

    def digest(self) -> str:
        """Stable identity of the command tokens; watch paths are excluded."""
        encoded = cbor2.dumps({"argv": list(self.argv)}, canonical=True)
        return hashlib.sha256(encoded).hexdigest()


def build_invocation(config: BuildConfig, *, cwd: Path) -> Invocation:
    """Return the argv (without the program) and watch paths for *config*."""
    argv: list[str] = [*BASE_ARGS]
    watch_paths: list[Path] = []

    target_argv, target_watch = _target_args(config.target, cwd=cwd)
    argv.extend(target_argv)
    watch_paths.extend(target_watch)

    argv.extend(_entry_args(ARG_EXPR_FLAG, config.arg_exprs))
    argv.extend(_entry_args(ARG_STR_FLAG, config.arg_strs))

    if config.impure_eval:
        argv.append(IMPURE_FLAG)

    argv.append(PRINT_BUILD_LOGS_FLAG)
    argv.extend(EXPERIMENTAL_FEATURES)
    return Invocation(argv=tuple(argv), watch_paths=tuple(watch_paths))


def _target_args(target: Target, *, cwd: Path) -> tuple[list[str], list[Path]]:
    if isinstance(target, FunctionTarget):
        return [FILE_FLAG, target.path], [cwd / target.path]
    if isinstance(target, FlakeTarget):
        lock = local_flake_lock(target.reference, cwd=cwd)
        return [target.reference], [lock] if lock is not None else []
    if isinstance(target, ExprTarget):
        return [EXPR_FLAG, target.expression], []
    raise TypeError(f"Unsupported build target: {target!r}")


def _entry_args(flag: str, entries: Sequence[ArgEntry]) -> list[str]:
    tokens: list[str] = []
    for entry in entries:
        tokens.extend((flag, entry.name, entry.value))
    return tokens


def local_flake_lock(reference: str, *, cwd: Path) -> Path | None:
    """Return ``<dir>/flake.lock`` when *reference* names a local flake directory.

    Best effort: anything that does not resolve to an existing directory
    yields ``None``.
    """
    local, _, _ = reference.partition("#")
    if not local:
        return None
    try:
        directory = (cwd / local).resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return None
    if not directory.is_dir():
        return None
    return directory / FLAKE_LOCK_NAME


__all__ = [
    "ARG_EXPR_FLAG",
    "ARG_STR_FLAG",
    "BASE_ARGS",
    "EXPERIMENTAL_FEATURES",
    "EXPR_FLAG",
    "FILE_FLAG",
    "FLAKE_LOCK_NAME",
    "IMPURE_FLAG",
    "PRINT_BUILD_LOGS_FLAG",
    "Invocation",
    "build_invocation",
    "local_flake_lock",
]
