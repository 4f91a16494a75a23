"""Shared test fixtures."""

from __future__ import annotations

import json
import stat
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest


@dataclass(frozen=True, slots=True)
class FakeNix:
    binary: Path
    argv_file: Path

    def recorded_argv(self) -> list[str]:
        return self.argv_file.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def fake_nix(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[..., FakeNix]:
    """Install a shell script posing as ``nix`` through the ``NIX`` variable."""

    def _install(*, stdout: Any = (), returncode: int = 0) -> FakeNix:
        root = tmp_path / "fake-nix"
        root.mkdir(exist_ok=True)
        stdout_file = root / "stdout"
        argv_file = root / "argv"
        raw = stdout if isinstance(stdout, str) else json.dumps(stdout)
        stdout_file.write_text(raw, encoding="utf-8")
        binary = root / "nix"
        binary.write_text(
            "#!/bin/sh\n"
            f"printf '%s\\n' \"$@\" > '{argv_file}'\n"
            f"cat '{stdout_file}'\n"
            f"exit {returncode}\n",
            encoding="utf-8",
        )
        binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        monkeypatch.setenv("NIX", str(binary))
        return FakeNix(binary=binary, argv_file=argv_file)

    return _install
