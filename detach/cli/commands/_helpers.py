"""Shared options and helpers for CLI commands.

Every workflow input can be given as an option or through the CI step
environment variable of the same name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from detach.output.console import Style

if TYPE_CHECKING:
    from detach.core.config import WorkflowConfig
    from detach.output.console import ConsoleProtocol


CONFIG_FILE = typer.Option(
    None,
    "--config",
    envvar="DETACH_CONFIG",
    help="TOML file with default inputs",
    dir_okay=False,
)
PROJECT_PATH = typer.Option(
    None,
    "--project-path",
    envvar="project_path",
    help="Expo project directory (contains package.json)",
)
EXPO_CLI_VERSION = typer.Option(
    None,
    "--expo-cli-version",
    envvar=["expo_cli_version", "expo_cli_verson"],
    help="expo-cli version to install, or latest",
)
USER_NAME = typer.Option(None, "--user-name", envvar="user_name", help="Expo account user name")
PASSWORD = typer.Option(
    None,
    "--password",
    envvar="password",
    help="Expo account password",
    show_default=False,
)
EJECT_METHOD = typer.Option(
    None,
    "--eject-method",
    envvar="eject_method",
    help="plain | expoKit (default: expoKit with credentials, plain without)",
    case_sensitive=False,
)
RUN_PUBLISH = typer.Option(
    None,
    "--publish/--no-publish",
    envvar="run_publish",
    help="Run expo publish after eject",
)
OVERRIDE_REACT_NATIVE_VERSION = typer.Option(
    None,
    "--override-react-native-version",
    envvar="override_react_native_version",
    help="Force this react-native version in package.json and reinstall",
)
LOGOUT = typer.Option(
    None,
    "--logout/--no-logout",
    envvar="logout",
    help="Log out from Expo at the end (default: yes)",
)


def print_inputs(config: WorkflowConfig, console: ConsoleProtocol) -> None:
    """Print the resolved inputs; the password is masked by Secret."""
    console.header("Inputs")
    for key, value in config.describe():
        console.print(f"- {key}: {value}", Style.DIM)
