"""Invoke ``nix build`` from a build step and expose the resulting store paths."""

from .config import BuildConfig, build
from .derivation import Derivation, decode_derivations
from .errors import (
    BuildFailedError,
    ErrorCode,
    NixBuildError,
    NixNotAvailableError,
    UnknownOutputError,
)
from .hints import emit_rerun_hint
from .invocation import Invocation, build_invocation
from .locate import is_nix_available, locate_nix
from .observability import StructuredLogger
from .targets import ArgEntry, ExprTarget, FlakeTarget, FunctionTarget, Target

__all__ = [
    "ArgEntry",
    "BuildConfig",
    "BuildFailedError",
    "Derivation",
    "ErrorCode",
    "ExprTarget",
    "FlakeTarget",
    "FunctionTarget",
    "Invocation",
    "NixBuildError",
    "NixNotAvailableError",
    "StructuredLogger",
    "Target",
    "UnknownOutputError",
    "build",
    "build_invocation",
    "decode_derivations",
    "emit_rerun_hint",
    "is_nix_available",
    "locate_nix",
]
