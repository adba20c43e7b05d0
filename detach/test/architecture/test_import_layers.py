from __future__ import annotations

import pytest

from ._gate import require_arch_checks_enabled
from ._utils import iter_source_files, matches_prefix, package_root, parse_imports


@pytest.mark.parametrize(
    ("layer", "forbidden"),
    [
        ("core", ("detach.platform", "detach.output", "detach.services", "detach.cli")),
        ("platform", ("detach.output", "detach.services", "detach.cli")),
        ("output", ("detach.cli",)),
        ("services", ("detach.cli",)),
    ],
)
def test_layers_do_not_import_upwards(layer: str, forbidden: tuple[str, ...]) -> None:
    require_arch_checks_enabled()

    root = package_root()
    offenders: list[str] = []

    for file_path in iter_source_files(root / layer):
        rel = file_path.relative_to(root).as_posix()
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, prefix) for prefix in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, f"{layer} layering violations:\n" + "\n".join(offenders)


def test_services_do_not_import_typer() -> None:
    require_arch_checks_enabled()

    root = package_root()
    offenders = [
        f"{file_path.relative_to(root).as_posix()}:{item.line}"
        for file_path in iter_source_files(root / "services")
        for item in parse_imports(file_path)
        if matches_prefix(item.module, "typer")
    ]

    assert not offenders, "typer imported outside the CLI:\n" + "\n".join(offenders)
