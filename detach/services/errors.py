from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from detach.platform.process import ProcessError

WorkflowStep = Literal["install", "login", "eject", "publish", "logout", "reinstall"]


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Inputs rejected before any external command runs."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class CommandError:
    """An external tool exited non-zero or could not be started."""

    step: WorkflowStep
    message: str
    process: ProcessError
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ManifestError:
    """package.json could not be read, parsed, edited or written."""

    path: Path
    message: str
    hint: str | None = None


WorkflowError = ValidationError | CommandError | ManifestError
