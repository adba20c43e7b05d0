from __future__ import annotations

from pathlib import Path

from detach.core.result import Err, Ok
from detach.output.console import MockConsole
from detach.platform.process import MockRunner
from detach.services.dependencies import (
    NodePackageManager,
    detect_package_manager,
    reinstall_dependencies,
)


def test_detect_yarn_when_lockfile_present(tmp_path: Path) -> None:
    (tmp_path / "yarn.lock").write_text("", encoding="utf-8")
    assert detect_package_manager(tmp_path) is NodePackageManager.YARN


def test_detect_npm_by_default(tmp_path: Path) -> None:
    (tmp_path / "package-lock.json").write_text("{}", encoding="utf-8")
    assert detect_package_manager(tmp_path) is NodePackageManager.NPM


def test_reinstall_runs_manager_in_project_dir(tmp_path: Path) -> None:
    (tmp_path / "yarn.lock").write_text("", encoding="utf-8")
    runner = MockRunner(outputs={"yarn install": "Done in 3.1s."})
    console = MockConsole()

    result = reinstall_dependencies(runner=runner, console=console, project_dir=tmp_path)

    assert result == Ok(NodePackageManager.YARN)
    assert runner.commands[0].argv == ["yarn", "install"]
    assert runner.commands[0].cwd == tmp_path
    assert console.messages == ["$ yarn install", "Done in 3.1s."]


def test_reinstall_failure_keeps_combined_output(tmp_path: Path) -> None:
    runner = MockRunner(
        failures={"npm install": 1},
        outputs={"npm install": "npm ERR! code ETARGET\nnpm ERR! notarget No matching version"},
    )

    result = reinstall_dependencies(runner=runner, console=MockConsole(), project_dir=tmp_path)

    assert isinstance(result, Err)
    assert result.error.command == "npm install"
    assert "No matching version" in result.error.output
