"""Mutually exclusive ways of describing what ``nix build`` should build."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

TargetKind = Literal["function", "flake", "expr"]

DEFAULT_TARGET_FILE = "default.nix"


@dataclass(frozen=True, slots=True)
class FunctionTarget:
    """A local ``.nix`` file, passed with ``-f``."""

    path: str = DEFAULT_TARGET_FILE

    @property
    def kind(self) -> TargetKind:
        return "function"


@dataclass(frozen=True, slots=True)
class FlakeTarget:
    """An installable such as ``nixpkgs#hello``, passed verbatim."""

    reference: str

    @property
    def kind(self) -> TargetKind:
        return "flake"


@dataclass(frozen=True, slots=True)
class ExprTarget:
    """An inline Nix expression, passed with ``--expr``."""

    expression: str

    @property
    def kind(self) -> TargetKind:
        return "expr"


Target = FunctionTarget | FlakeTarget | ExprTarget


@dataclass(frozen=True, slots=True)
class ArgEntry:
    """One ``--arg``/``--argstr`` name and value pair."""

    name: str
    value: str


__all__ = [
    "DEFAULT_TARGET_FILE",
    "ArgEntry",
    "ExprTarget",
    "FlakeTarget",
    "FunctionTarget",
    "Target",
    "TargetKind",
]
