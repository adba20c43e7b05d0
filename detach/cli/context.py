from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from detach.core.config import ConfigError, EjectMethod, Secret, WorkflowConfig, load_config
from detach.core.errors import ErrorCode
from detach.core.result import Err, Ok, Result
from detach.output.console import ConsoleProtocol, RichConsole
from detach.platform.process import CommandRunner, SubprocessRunner


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: WorkflowConfig
    console: ConsoleProtocol
    runner: CommandRunner


def resolve_config(
    *,
    config_file: Path | None,
    project_path: Path | None = None,
    expo_cli_version: str | None = None,
    user_name: str | None = None,
    password: str | None = None,
    eject_method: EjectMethod | None = None,
    run_publish: bool | None = None,
    override_react_native_version: str | None = None,
    logout: bool | None = None,
) -> Result[WorkflowConfig, ConfigError]:
    """Merge inputs: options and environment win over the file, the file over defaults."""
    base = WorkflowConfig()
    if config_file is not None:
        loaded = load_config(config_file)
        if isinstance(loaded, Err):
            return loaded
        base = loaded.value

    return Ok(
        base.with_overrides(
            workdir=project_path.expanduser() if project_path is not None else None,
            expo_cli_version=expo_cli_version.strip() if expo_cli_version else None,
            user_name=user_name.strip() if user_name else None,
            password=Secret(password) if password else None,
            eject_method=eject_method,
            run_publish=run_publish,
            override_react_native_version=(
                override_react_native_version.strip() if override_react_native_version else None
            ),
            logout=logout,
        )
    )


def build_context(
    *,
    config_file: Path | None,
    project_path: Path | None,
    expo_cli_version: str | None,
    user_name: str | None,
    password: str | None,
    eject_method: EjectMethod | None,
    run_publish: bool | None,
    override_react_native_version: str | None,
    logout: bool | None,
) -> CLIContext:
    console = RichConsole()
    config_result = resolve_config(
        config_file=config_file,
        project_path=project_path,
        expo_cli_version=expo_cli_version,
        user_name=user_name,
        password=password,
        eject_method=eject_method,
        run_publish=run_publish,
        override_react_native_version=override_react_native_version,
        logout=logout,
    )
    if isinstance(config_result, Err):
        console.error(f"Issue with input: {config_result.error.message}")
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(
        config=config_result.value,
        console=console,
        runner=SubprocessRunner(),
    )
