"""Build GNU hello from nixpkgs and run it."""

import subprocess

from nixbuild import BuildConfig


def build_hello() -> str:
    outputs = BuildConfig().target_flake("nixpkgs#hello").build()
    hello = outputs[0].out()
    if hello is None:
        raise SystemExit("nixpkgs#hello did not produce an `out` output.")

    completed = subprocess.run(
        [str(hello / "bin" / "hello")],
        capture_output=True,
        text=True,
        check=True,
    )
    assert completed.stdout == "Hello, world!\n"
    return completed.stdout


if __name__ == "__main__":
    print(build_hello(), end="")
