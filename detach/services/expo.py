"""Wrappers around the npm-installed ``expo`` command line.

Every invocation is non-interactive and streams the tool's own output to the
CI log. Failures come back as ``ProcessError`` values; deciding what a
failure means for the run is left to the workflow.
"""

from __future__ import annotations

from pathlib import Path

from detach.core.config import LATEST, EjectMethod, Secret
from detach.core.result import Result
from detach.output.console import ConsoleProtocol, Style
from detach.platform.process import Command, CommandRunner, ProcessError

__all__ = ["EXPO", "EXPO_CLI_PACKAGE", "NPM", "ExpoAccount", "ExpoCLI", "install_command"]

NPM = "npm"
EXPO = "expo"
EXPO_CLI_PACKAGE = "expo-cli"
NON_INTERACTIVE = "--non-interactive"


def install_command(version: str) -> Command:
    """``npm install -g expo-cli[@version]``; ``latest`` installs unpinned."""
    package = EXPO_CLI_PACKAGE if version == LATEST else f"{EXPO_CLI_PACKAGE}@{version}"
    return Command(NPM, ("install", "-g", package))


class ExpoCLI:
    """Installs expo-cli and runs the project-level commands (eject, publish)."""

    def __init__(
        self,
        *,
        runner: CommandRunner,
        console: ConsoleProtocol,
        workdir: Path | None = None,
    ) -> None:
        self._runner = runner
        self._console = console
        self._workdir = workdir

    def install_cli(self, version: str) -> Result[None, ProcessError]:
        return self._stream(install_command(version))

    def eject(self, method: EjectMethod) -> Result[None, ProcessError]:
        """Create the Xcode and Android Studio projects for the app."""
        cmd = Command(
            EXPO,
            ("eject", NON_INTERACTIVE, "--eject-method", str(method)),
            cwd=self._workdir,
        )
        return self._stream(cmd)

    def publish(self) -> Result[None, ProcessError]:
        cmd = Command(EXPO, ("publish", NON_INTERACTIVE), cwd=self._workdir)
        return self._stream(cmd)

    def _stream(self, cmd: Command) -> Result[None, ProcessError]:
        self._console.print(f"$ {cmd.printable()}", Style.DIM)
        return self._runner.stream(cmd)


class ExpoAccount:
    """Login and logout against the Expo account service.

    Stateless: whether a session exists is tracked by the caller.
    """

    def __init__(self, *, runner: CommandRunner, console: ConsoleProtocol) -> None:
        self._runner = runner
        self._console = console

    def login(self, user_name: str, password: Secret) -> Result[None, ProcessError]:
        raw = password.reveal()
        cmd = Command(
            EXPO,
            ("login", NON_INTERACTIVE, "-u", user_name, "-p", raw),
            secrets=(raw,),
        )
        self._console.print(f"$ {cmd.printable()}", Style.DIM)
        return self._runner.stream(cmd)

    def logout(self) -> Result[None, ProcessError]:
        """Safe without a prior login; expo reports it and the caller warns."""
        cmd = Command(EXPO, ("logout", NON_INTERACTIVE))
        self._console.print(f"$ {cmd.printable()}", Style.DIM)
        return self._runner.stream(cmd)
