"""Build a library from a local ``.nix`` file and print linker search paths."""

from nixbuild import BuildConfig, NixBuildError


def link_search_paths() -> list[str]:
    config = (
        BuildConfig()
        .target_file("libfoo.nix")
        .arg_expr("pkgs", "import <nixpkgs> {}")
        .arg_str("variant", "static")
    )
    try:
        derivations = config.build()
    except NixBuildError as exc:
        raise SystemExit(str(exc)) from exc

    paths: list[str] = []
    for derivation in derivations:
        lib = derivation.output("lib") or derivation.out()
        if lib is not None:
            paths.append(str(lib / "lib"))
    return paths


if __name__ == "__main__":
    for path in link_search_paths():
        print(f"link-search={path}")
