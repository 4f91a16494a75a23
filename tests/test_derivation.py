import json
from pathlib import Path

import pytest

from nixbuild.derivation import Derivation, decode_derivations
from nixbuild.errors import UnknownOutputError


def test_decode_preserves_order_and_outputs() -> None:
    raw = json.dumps(
        [
            {
                "drvPath": "/nix/store/aaa-hello-2.12.drv",
                "outputs": {"out": "/nix/store/bbb-hello-2.12"},
            },
            {
                "drvPath": "/nix/store/ccc-openssl-3.0.drv",
                "outputs": {
                    "dev": "/nix/store/ddd-openssl-3.0-dev",
                    "lib": "/nix/store/eee-openssl-3.0-lib",
                },
            },
        ]
    ).encode()

    derivations = decode_derivations(raw)

    assert len(derivations) == 2
    assert derivations[0].drv_path == Path("/nix/store/aaa-hello-2.12.drv")
    assert derivations[0].out() == Path("/nix/store/bbb-hello-2.12")
    assert derivations[1].drv_path == Path("/nix/store/ccc-openssl-3.0.drv")
    assert derivations[1].out() is None
    assert derivations[1].output("dev") == Path("/nix/store/ddd-openssl-3.0-dev")


def test_decode_accepts_snake_case_drv_path() -> None:
    raw = b'[{"drv_path": "/nix/store/x.drv", "outputs": {}}]'

    assert decode_derivations(raw) == [Derivation(drv_path=Path("/nix/store/x.drv"))]


def test_decode_ignores_unknown_fields() -> None:
    raw = b'[{"drvPath": "/nix/store/x.drv", "outputs": {"out": "/nix/store/y"}, "startTime": 0}]'

    (derivation,) = decode_derivations(raw)

    assert derivation.out() == Path("/nix/store/y")


def test_decode_empty_array() -> None:
    assert decode_derivations(b"[]") == []


def test_duplicate_output_keys_keep_last() -> None:
    raw = b'[{"drvPath": "/d.drv", "outputs": {"out": "/first", "out": "/second"}}]'

    assert decode_derivations(raw)[0].out() == Path("/second")


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"not json",
        b"[{\"drvPath\": \"/d.drv\", \"outputs\": {}",
        b"\xff\xfe",
        b"{}",
        b"[1]",
        b"[{\"outputs\": {}}]",
        b"[{\"drvPath\": 1, \"outputs\": {}}]",
        b"[{\"drvPath\": \"/d.drv\"}]",
        b"[{\"drvPath\": \"/d.drv\", \"outputs\": []}]",
        b"[{\"drvPath\": \"/d.drv\", \"outputs\": {\"out\": null}}]",
        b"[{\"drvPath\": \"/d.drv\", \"drv_path\": \"/d.drv\", \"outputs\": {}}]",
        b"[" * 100000,
    ],
)
def test_malformed_output_is_unknown_output(raw: bytes) -> None:
    with pytest.raises(UnknownOutputError) as excinfo:
        decode_derivations(raw)

    assert excinfo.value.code == "E_UNKNOWN_OUTPUT"
    assert excinfo.value.context["operation"] == "decode"


def test_no_partial_result_when_later_entry_is_invalid() -> None:
    raw = json.dumps(
        [
            {"drvPath": "/good.drv", "outputs": {"out": "/good"}},
            {"drvPath": "/bad.drv", "outputs": {"out": 3}},
        ]
    )

    with pytest.raises(UnknownOutputError):
        decode_derivations(raw)
