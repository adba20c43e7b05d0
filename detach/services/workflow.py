"""The detach workflow: install, login, eject, publish, override, logout.

Steps run strictly one after the other. The first fatal error stops the run
and is returned to the caller; once a login has succeeded, the logout in
``run``'s ``finally`` block is attempted on every way out, including
unexpected exceptions.
"""

from __future__ import annotations

from enum import Enum, auto

from detach.core.config import EjectMethod, WorkflowConfig, resolve_eject_method
from detach.core.result import Err, Ok, Result
from detach.output.console import ConsoleProtocol, Style
from detach.platform.process import CommandRunner, ProcessError
from detach.services.dependencies import reinstall_dependencies
from detach.services.errors import (
    CommandError,
    ValidationError,
    WorkflowError,
    WorkflowStep,
)
from detach.services.expo import ExpoAccount, ExpoCLI
from detach.services.manifest import (
    REACT_NATIVE,
    load_manifest,
    save_manifest,
    set_dependency_version,
)

__all__ = ["DetachWorkflow", "SessionState", "validate_config"]


class SessionState(Enum):
    NOT_STARTED = auto()
    LOGGED_IN = auto()
    LOGGED_OUT = auto()


def validate_config(config: WorkflowConfig) -> Result[None, ValidationError]:
    """Reject inputs that cannot lead to a meaningful run."""
    if config.user_name and not config.password:
        return Err(
            ValidationError(
                message="user name is specified but password is not provided",
                hint="set both user_name and password, or neither",
            )
        )

    if not config.user_name and config.password:
        return Err(
            ValidationError(
                message="password is specified but user name is not provided",
                hint="set both user_name and password, or neither",
            )
        )

    if config.eject_method is EjectMethod.EXPO_KIT and not config.has_credentials:
        return Err(
            ValidationError(
                message="--eject-method expoKit requires an Expo account",
                hint="set user_name and password, or use eject_method=plain",
            )
        )

    if not config.expo_cli_version.strip():
        return Err(
            ValidationError(
                message="expo_cli_version is empty",
                hint="use a version like 3.2.1, or latest",
            )
        )

    if not config.workdir.is_dir():
        return Err(ValidationError(message=f"project_path is not a directory: {config.workdir}"))

    return Ok(None)


def _command_error(step: WorkflowStep, message: str, error: ProcessError) -> CommandError:
    return CommandError(step=step, message=f"{message}: {error}", process=error)


class DetachWorkflow:
    """Runs one detach of an Expo project.

    The session state is owned here; ``ExpoAccount`` only runs the commands.
    """

    def __init__(
        self,
        *,
        config: WorkflowConfig,
        runner: CommandRunner,
        console: ConsoleProtocol,
    ) -> None:
        self._config = config
        self._runner = runner
        self._console = console
        self._expo = ExpoCLI(runner=runner, console=console, workdir=config.workdir)
        self._account = ExpoAccount(runner=runner, console=console)
        self._session = SessionState.NOT_STARTED

    @property
    def session(self) -> SessionState:
        return self._session

    def run(self) -> Result[EjectMethod, WorkflowError]:
        """Run every step; returns the eject method used on success."""
        validated = validate_config(self._config)
        if isinstance(validated, Err):
            return validated

        method = self._select_eject_method()

        installed = self._install_cli()
        if isinstance(installed, Err):
            return installed

        logged_in = self._login(method)
        if isinstance(logged_in, Err):
            return logged_in

        try:
            return self._run_project_steps(method)
        finally:
            self._cleanup()

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _select_eject_method(self) -> EjectMethod:
        self._console.header("Define --eject-method")
        method = resolve_eject_method(self._config)
        if self._config.eject_method is not None:
            self._console.info(f"eject_method input was set => Set the --eject-method to {method}")
        elif method is EjectMethod.EXPO_KIT:
            self._console.info(
                f"Expo account credentials have been provided => Set the --eject-method to {method}"
            )
        else:
            self._console.info(
                f"Expo account credentials have not been provided => Set the --eject-method to {method}"
            )
        return method

    def _install_cli(self) -> Result[None, WorkflowError]:
        version = self._config.expo_cli_version
        self._console.header(f"Install Expo CLI version: {version}")

        result = self._expo.install_cli(version)
        if isinstance(result, Err):
            return Err(
                _command_error(
                    "install",
                    f"Failed to install the selected ({version}) version for Expo CLI",
                    result.error,
                )
            )

        self._console.success("Expo CLI installed")
        return Ok(None)

    def _login(self, method: EjectMethod) -> Result[None, WorkflowError]:
        self._console.header("Login to Expo")
        if method is EjectMethod.PLAIN:
            self._console.print("--eject-method has been set to plain => Skip...", Style.DIM)
            return Ok(None)

        result = self._sign_in()
        if isinstance(result, Err):
            return result

        self._session = SessionState.LOGGED_IN
        self._console.success(f"Logged in as {self._config.user_name}")
        return Ok(None)

    def _run_project_steps(self, method: EjectMethod) -> Result[EjectMethod, WorkflowError]:
        ejected = self._eject(method)
        if isinstance(ejected, Err):
            return ejected

        if self._config.run_publish:
            published = self._publish()
            if isinstance(published, Err):
                return published

        version = self._config.override_react_native_version
        if version:
            overridden = self._override_react_native(version)
            if isinstance(overridden, Err):
                return overridden

        return Ok(method)

    def _eject(self, method: EjectMethod) -> Result[None, WorkflowError]:
        self._console.header("Eject project")

        result = self._expo.eject(method)
        if isinstance(result, Err):
            return Err(_command_error("eject", "Failed to eject project", result.error))

        self._console.success("Successfully ejected your project")
        return Ok(None)

    def _publish(self) -> Result[None, WorkflowError]:
        self._console.header("Running expo publish")

        if self._session is SessionState.LOGGED_IN or not self._config.has_credentials:
            return self._run_publish()

        # Plain eject with credentials: publish needs its own session.
        self._console.info("Not logged in for eject => Login for publish")
        signed_in = self._sign_in()
        if isinstance(signed_in, Err):
            return signed_in

        try:
            return self._run_publish()
        finally:
            if self._config.logout is False:
                self._console.print("Logout input was set to false => Skip...", Style.DIM)
            else:
                self._logout()

    def _run_publish(self) -> Result[None, WorkflowError]:
        result = self._expo.publish()
        if isinstance(result, Err):
            return Err(_command_error("publish", "Failed to publish project", result.error))

        self._console.success("Published project")
        return Ok(None)

    def _override_react_native(self, version: str) -> Result[None, WorkflowError]:
        self._console.header(f"Set react-native dependency version: {version}")

        loaded = load_manifest(self._config.package_json)
        if isinstance(loaded, Err):
            return loaded

        updated = set_dependency_version(loaded.value, REACT_NATIVE, version)
        if isinstance(updated, Err):
            return updated

        saved = save_manifest(updated.value)
        if isinstance(saved, Err):
            return saved
        self._console.success(f"{REACT_NATIVE} set to {version} in package.json")

        self._console.info("Install new node dependencies")
        reinstalled = reinstall_dependencies(
            runner=self._runner,
            console=self._console,
            project_dir=self._config.workdir,
        )
        if isinstance(reinstalled, Err):
            error = reinstalled.error
            if error.spawn_failed or not error.output:
                message = str(error)
            else:
                message = f"{error.command} failed: {error.output}"
            return Err(CommandError(step="reinstall", message=message, process=error))

        self._console.success(f"Node dependencies installed with {reinstalled.value}")
        return Ok(None)

    # -------------------------------------------------------------------------
    # Session handling
    # -------------------------------------------------------------------------

    def _sign_in(self) -> Result[None, WorkflowError]:
        user_name = self._config.user_name
        password = self._config.password
        if not user_name or not password:
            return Err(ValidationError(message="Expo account credentials are required to log in"))

        result = self._account.login(user_name, password)
        if isinstance(result, Err):
            return Err(
                _command_error(
                    "login",
                    "Failed to log in to your provided Expo account",
                    result.error,
                )
            )
        return Ok(None)

    def _cleanup(self) -> None:
        self._console.header("Logging out from Expo")
        if self._session is not SessionState.LOGGED_IN:
            self._console.print("You were not logged in => Skip...", Style.DIM)
            return

        if self._config.logout is False:
            self._console.print("Logout input was set to false => Skip...", Style.DIM)
            return

        self._logout()
        self._session = SessionState.LOGGED_OUT

    def _logout(self) -> None:
        result = self._account.logout()
        if isinstance(result, Err):
            self._console.warning(f"Failed to log out from your Expo account, error: {result.error}")
            return
        self._console.success("Logged out")
