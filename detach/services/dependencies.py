"""Node dependency reinstall after package.json was rewritten."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from detach.core.result import Err, Ok, Result
from detach.output.console import ConsoleProtocol, Style
from detach.platform.process import Command, CommandRunner, ProcessError

__all__ = ["YARN_LOCK", "NodePackageManager", "detect_package_manager", "reinstall_dependencies"]

YARN_LOCK = "yarn.lock"


class NodePackageManager(StrEnum):
    NPM = "npm"
    YARN = "yarn"


def detect_package_manager(project_dir: Path) -> NodePackageManager:
    """yarn when the project carries a yarn.lock, npm otherwise."""
    if (project_dir / YARN_LOCK).is_file():
        return NodePackageManager.YARN
    return NodePackageManager.NPM


def reinstall_dependencies(
    *,
    runner: CommandRunner,
    console: ConsoleProtocol,
    project_dir: Path,
) -> Result[NodePackageManager, ProcessError]:
    """Run ``<manager> install`` in the project directory.

    Output is captured rather than streamed so a failure can report it.
    """
    manager = detect_package_manager(project_dir)
    cmd = Command(str(manager), ("install",), cwd=project_dir)
    console.print(f"$ {cmd.printable()}", Style.DIM)

    result = runner.capture(cmd)
    if isinstance(result, Err):
        return result
    if result.value:
        console.print(result.value, Style.DIM)
    return Ok(manager)
