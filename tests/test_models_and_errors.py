from nixbuild.errors import (
    BuildFailedError,
    ErrorCode,
    NixBuildError,
    NixNotAvailableError,
    UnknownOutputError,
)
from nixbuild.observability import StructuredLogger


def test_error_codes_are_stable_and_machine_readable() -> None:
    errors = [
        NixNotAvailableError("no nix"),
        BuildFailedError("build failed"),
        UnknownOutputError("bad output"),
    ]
    assert [error.code for error in errors] == [
        ErrorCode.NIX_NOT_AVAILABLE.value,
        ErrorCode.BUILD_FAILED.value,
        ErrorCode.UNKNOWN_OUTPUT.value,
    ]
    assert all(isinstance(error, NixBuildError) for error in errors)


def test_error_str_includes_hint_and_non_empty_context() -> None:
    error = BuildFailedError(
        "nix build failed.",
        hint="Check the log.",
        context={"returncode": "1", "command": ""},
    )

    rendered = str(error)

    assert rendered.splitlines() == ["nix build failed.", "Hint: Check the log.", "  returncode: 1"]
    assert error.to_dict() == {
        "code": "E_BUILD_FAILED",
        "message": rendered,
        "context": {"returncode": "1", "command": ""},
        "hint": "Check the log.",
    }


def test_structured_logger_filters_records_by_operation() -> None:
    logger = StructuredLogger()
    logger.log(operation="build_start", target="flake:nixpkgs#hello", message="start")
    logger.log(
        operation="build_complete",
        target="flake:nixpkgs#hello",
        message="done",
        extra={"derivations": 1},
    )

    assert [record["message"] for record in logger.records_for_operation("build_start")] == [
        "start"
    ]

    (complete,) = logger.records_for_operation("build_complete")
    assert complete["extra"] == {"derivations": 1}
    assert complete["level"] == "info"
    assert "extra" not in logger.records[0]
