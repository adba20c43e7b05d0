from __future__ import annotations

from pathlib import Path

import typer

from detach.cli.commands._helpers import (
    CONFIG_FILE,
    EJECT_METHOD,
    EXPO_CLI_VERSION,
    LOGOUT,
    OVERRIDE_REACT_NATIVE_VERSION,
    PASSWORD,
    PROJECT_PATH,
    RUN_PUBLISH,
    USER_NAME,
    print_inputs,
)
from detach.cli.context import build_context
from detach.core.config import EjectMethod, resolve_eject_method
from detach.core.result import Err
from detach.output.errors import print_workflow_error, workflow_error_exit_code
from detach.services.workflow import validate_config


def show_config(
    config_file: Path | None = CONFIG_FILE,
    project_path: Path | None = PROJECT_PATH,
    expo_cli_version: str | None = EXPO_CLI_VERSION,
    user_name: str | None = USER_NAME,
    password: str | None = PASSWORD,
    eject_method: EjectMethod | None = EJECT_METHOD,
    run_publish: bool | None = RUN_PUBLISH,
    override_react_native_version: str | None = OVERRIDE_REACT_NATIVE_VERSION,
    logout: bool | None = LOGOUT,
) -> None:
    """Print the resolved inputs and validate them without running anything."""
    ctx = build_context(
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
    print_inputs(ctx.config, ctx.console)

    validated = validate_config(ctx.config)
    if isinstance(validated, Err):
        ctx.console.newline()
        print_workflow_error(validated.error, ctx.console)
        raise typer.Exit(code=workflow_error_exit_code(validated.error))

    ctx.console.newline()
    ctx.console.success(f"inputs are valid (--eject-method {resolve_eject_method(ctx.config)})")
