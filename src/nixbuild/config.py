"""Build configuration for a pending ``nix build`` invocation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

from .derivation import Derivation, decode_derivations
from .errors import BuildFailedError, NixNotAvailableError, UnknownOutputError
from .executor import run_nix
from .hints import HintSink, emit_rerun_hint
from .invocation import Invocation, build_invocation
from .locate import NIX_ENV_VAR, locate_nix
from .observability import StructuredLogger
from .targets import ArgEntry, ExprTarget, FlakeTarget, FunctionTarget, Target


@dataclass(slots=True)
class BuildConfig:
    """Build style configuration for a pending build.

    The target defaults to ``default.nix`` in the working directory. Setters
    return the configuration so calls can be chained::

        BuildConfig().target_flake("nixpkgs#hello").impure().build()
    """

    target: Target = field(default_factory=FunctionTarget)
    arg_exprs: list[ArgEntry] = field(default_factory=list)
    arg_strs: list[ArgEntry] = field(default_factory=list)
    impure_eval: bool = False
    logger: StructuredLogger = field(default_factory=StructuredLogger, repr=False)

    def target_file(self, path: str | os.PathLike[str]) -> Self:
        """Build the derivation described by the given ``.nix`` file."""
        self.target = FunctionTarget(path=os.fspath(path))
        return self

    def target_flake(self, reference: str) -> Self:
        """Build the given flake output, e.g. ``nixpkgs#hello``."""
        self.target = FlakeTarget(reference=reference)
        return self

    def target_expr(self, expression: str) -> Self:
        """Build the derivation described by an inline expression."""
        self.target = ExprTarget(expression=expression)
        return self

    def arg_expr(self, name: str, value: str) -> Self:
        """Pass ``--arg name value``; *value* is evaluated as Nix code."""
        self.arg_exprs.append(ArgEntry(name=name, value=value))
        return self

    def arg_str(self, name: str, value: str) -> Self:
        """Pass ``--argstr name value``; *value* is a literal string."""
        self.arg_strs.append(ArgEntry(name=name, value=value))
        return self

    def impure(self, impure: bool = True) -> Self:
        """Toggle ``--impure`` evaluation."""
        self.impure_eval = impure
        return self

    def invocation(self, cwd: str | Path | None = None) -> Invocation:
        workdir = Path(cwd) if cwd is not None else Path.cwd()
        return build_invocation(self, cwd=workdir)

    def build(
        self,
        *,
        cwd: str | Path | None = None,
        on_watch: HintSink = emit_rerun_hint,
    ) -> list[Derivation]:
        """Invoke ``nix build`` with this configuration.

        Raises :class:`NixNotAvailableError`, :class:`BuildFailedError` or
        :class:`UnknownOutputError`; on success every derivation printed by
        nix is returned in order.
        """
        label = _target_label(self.target)
        nix = locate_nix()
        if nix is None:
            self.logger.log(
                operation="locate_nix",
                target=label,
                level="error",
                message="nix executable not found.",
            )
            raise NixNotAvailableError(
                "`nix` is not available.",
                hint=f"Install Nix or set {NIX_ENV_VAR} to the path of the nix binary.",
                context={"operation": "locate", "env_var": NIX_ENV_VAR},
            )
        self.logger.log(
            operation="locate_nix",
            target=label,
            message="Located nix executable.",
            extra={"path": str(nix)},
        )

        workdir = Path(cwd) if cwd is not None else Path.cwd()
        invocation = build_invocation(self, cwd=workdir)
        for path in invocation.watch_paths:
            on_watch(path)

        digest = invocation.digest()
        self.logger.log(
            operation="build_start",
            target=label,
            message="Starting nix build.",
            extra={"digest": digest, "argv": list(invocation.argv)},
        )
        try:
            stdout = run_nix(nix, invocation.argv, cwd=workdir)
        except BuildFailedError as exc:
            self.logger.log(
                operation="build_failed",
                target=label,
                level="error",
                message="nix build failed.",
                extra={"digest": digest, "context": dict(exc.context)},
            )
            raise

        try:
            derivations = decode_derivations(stdout)
        except UnknownOutputError as exc:
            self.logger.log(
                operation="decode_failed",
                target=label,
                level="error",
                message="Could not decode nix build output.",
                extra={"digest": digest, "context": dict(exc.context)},
            )
            raise

        self.logger.log(
            operation="build_complete",
            target=label,
            message="Completed nix build.",
            extra={"digest": digest, "derivations": len(derivations)},
        )
        return derivations


def _target_label(target: Target) -> str:
    if isinstance(target, FunctionTarget):
        return f"{target.kind}:{target.path}"
    if isinstance(target, FlakeTarget):
        return f"{target.kind}:{target.reference}"
    return target.kind


def build() -> list[Derivation]:
    """Build ``./default.nix`` with default options."""
    return BuildConfig().build()


__all__ = ["BuildConfig", "build"]
