"""Decoding of ``nix build --json`` output into derivation records."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nixbuild.errors import UnknownOutputError

DEFAULT_OUTPUT = "out"
DRV_PATH_FIELDS = ("drvPath", "drv_path")


@dataclass(frozen=True, slots=True)
class Derivation:
    """A built derivation and its named output paths.

    Example outputs: ``out``, ``dev``, ``lib``.
    """

    drv_path: Path
    outputs: Mapping[str, Path] = field(default_factory=dict)

    def output(self, name: str) -> Path | None:
        return self.outputs.get(name)

    def out(self) -> Path | None:
        """Return the default ``out`` output, if the derivation produced one."""
        return self.output(DEFAULT_OUTPUT)


def decode_derivations(raw: bytes | str) -> list[Derivation]:
    """Parse the JSON array emitted by ``nix build --json``.

    Any deviation from the expected shape raises :class:`UnknownOutputError`;
    no partially decoded list is ever returned.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        payload = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise _unknown_output(f"not valid UTF-8 JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise _unknown_output(f"expected a JSON array, got {type(payload).__name__}")
    return [_parse_derivation(item, index) for index, item in enumerate(payload)]


def _parse_derivation(item: Any, index: int) -> Derivation:
    if not isinstance(item, dict):
        raise _unknown_output(f"entry {index} is not an object")

    present = [name for name in DRV_PATH_FIELDS if name in item]
    if not present:
        raise _unknown_output(f"entry {index} has no drvPath")
    if len(present) > 1:
        raise _unknown_output(f"entry {index} has duplicate drvPath fields")
    drv_path = item[present[0]]
    if not isinstance(drv_path, str):
        raise _unknown_output(f"entry {index} drvPath is not a string")

    outputs = item.get("outputs")
    if not isinstance(outputs, dict):
        raise _unknown_output(f"entry {index} outputs is not an object")
    parsed: dict[str, Path] = {}
    for name, path in outputs.items():
        if not isinstance(path, str):
            raise _unknown_output(f"entry {index} output `{name}` is not a string")
        parsed[name] = Path(path)

    return Derivation(drv_path=Path(drv_path), outputs=parsed)


def _unknown_output(reason: str) -> UnknownOutputError:
    return UnknownOutputError(
        "Unable to decode `nix build --json` output.",
        hint="Check that the installed nix version emits the expected JSON format.",
        context={"operation": "decode", "reason": reason},
    )


__all__ = ["DEFAULT_OUTPUT", "DRV_PATH_FIELDS", "Derivation", "decode_derivations"]
