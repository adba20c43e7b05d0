"""Subprocess execution with Result-based errors and secret redaction.

A ``Command`` knows which of its values are secrets. Its printable form is
built with those values already replaced by ``REDACTED``, so there is no
point in the program where the raw command line exists as a loggable string.

Usage:
    cmd = Command("expo", ("login", "-u", user, "-p", password), secrets=(password,))
    console.print(f"$ {cmd.printable()}", Style.DIM)
    match runner.stream(cmd):
        case Ok(_):
            ...
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from detach.core.result import Err, Ok, Result

__all__ = [
    "REDACTED",
    "Command",
    "CommandRunner",
    "MockRunner",
    "ProcessError",
    "SubprocessRunner",
]

REDACTED = "[REDACTED]"


@dataclass(frozen=True, slots=True)
class Command:
    """An external program invocation.

    Attributes:
        program: Executable name, resolved through PATH.
        args: Arguments passed to the program.
        cwd: Working directory (None runs in the current directory).
        secrets: Values that must never appear in printable output.
    """

    program: str
    args: tuple[str, ...] = ()
    cwd: Path | None = None
    secrets: tuple[str, ...] = field(default=(), repr=False)

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def redact(self, text: str) -> str:
        """Replace every secret occurrence in text with the placeholder."""
        for secret in self.secrets:
            if secret:
                text = text.replace(secret, REDACTED)
        return text

    def printable(self) -> str:
        """Shell-style command line with secrets replaced by ``REDACTED``."""
        parts: list[str] = []
        for arg in self.argv:
            redacted = self.redact(arg)
            if redacted != arg:
                # quoting would wrap the placeholder; keep it readable
                parts.append(redacted)
            else:
                parts.append(shlex.quote(arg))
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"Command({self.printable()!r}, cwd={self.cwd!r})"


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: Printable (redacted) command line.
        returncode: Exit code of the process, -1 if it could not be started.
        output: Captured combined output, or the OS error when not started.
        spawn_failed: True when the program could not be started at all.
    """

    command: str
    returncode: int
    output: str = ""
    spawn_failed: bool = False

    def __str__(self) -> str:
        if self.spawn_failed:
            return f"{self.command} could not be started: {self.output}"
        return f"{self.command} failed (exit {self.returncode})"


class CommandRunner(Protocol):
    """Runs commands to completion, one at a time."""

    def stream(self, command: Command) -> Result[None, ProcessError]:
        """Run with stdout/stderr inherited from this process."""
        ...

    def capture(self, command: Command) -> Result[str, ProcessError]:
        """Run and return the trimmed combined stdout+stderr."""
        ...


class SubprocessRunner:
    """CommandRunner backed by ``subprocess.run``.

    There is no timeout: a hung tool blocks the run until the CI job limit.
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env = dict(env) if env is not None else None

    def stream(self, command: Command) -> Result[None, ProcessError]:
        try:
            proc = subprocess.run(
                command.argv,
                cwd=_cwd(command),
                env=self._env,
                check=False,
            )
        except OSError as e:
            return Err(_spawn_error(command, e))

        if proc.returncode != 0:
            return Err(ProcessError(command=command.printable(), returncode=proc.returncode))

        return Ok(None)

    def capture(self, command: Command) -> Result[str, ProcessError]:
        try:
            proc = subprocess.run(
                command.argv,
                cwd=_cwd(command),
                env=self._env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as e:
            return Err(_spawn_error(command, e))

        output = command.redact((proc.stdout or "").strip())
        if proc.returncode != 0:
            return Err(
                ProcessError(
                    command=command.printable(),
                    returncode=proc.returncode,
                    output=output,
                )
            )

        return Ok(output)


def _cwd(command: Command) -> str | None:
    return str(command.cwd) if command.cwd is not None else None


def _spawn_error(command: Command, error: OSError) -> ProcessError:
    return ProcessError(
        command=command.printable(),
        returncode=-1,
        output=command.redact(str(error)),
        spawn_failed=True,
    )


def _empty_commands() -> list[Command]:
    return []


def _empty_codes() -> dict[str, int | list[int]]:
    return {}


def _empty_outputs() -> dict[str, str]:
    return {}


@dataclass
class MockRunner:
    """CommandRunner that records commands instead of running them.

    Commands are keyed by program plus first argument ("expo eject",
    "npm install"). A key listed in ``failures`` exits with the given code
    on every call, or with one code per call when given a list (calls past
    the end of the list succeed). ``outputs`` provides what ``capture``
    returns, or reports on failure.
    """

    failures: dict[str, int | list[int]] = field(default_factory=_empty_codes)
    outputs: dict[str, str] = field(default_factory=_empty_outputs)
    commands: list[Command] = field(default_factory=_empty_commands)

    @staticmethod
    def key(command: Command) -> str:
        return " ".join(command.argv[:2])

    def stream(self, command: Command) -> Result[None, ProcessError]:
        self.commands.append(command)
        code = self._exit_code(self.key(command))
        if code:
            return Err(ProcessError(command=command.printable(), returncode=code))
        return Ok(None)

    def capture(self, command: Command) -> Result[str, ProcessError]:
        self.commands.append(command)
        key = self.key(command)
        output = self.outputs.get(key, "")
        code = self._exit_code(key)
        if code:
            return Err(ProcessError(command=command.printable(), returncode=code, output=output))
        return Ok(output)

    def _exit_code(self, key: str) -> int:
        scripted = self.failures.get(key, 0)
        if isinstance(scripted, int):
            return scripted
        # the current call is already recorded
        index = self.count(key) - 1
        return scripted[index] if index < len(scripted) else 0

    # Test helper methods

    @property
    def keys(self) -> list[str]:
        """Keys of all recorded commands, in call order."""
        return [self.key(c) for c in self.commands]

    def count(self, key: str) -> int:
        return sum(1 for c in self.commands if self.key(c) == key)

    def find(self, key: str) -> list[Command]:
        return [c for c in self.commands if self.key(c) == key]
