from __future__ import annotations

from pathlib import Path

from detach.core.config import EjectMethod, Secret
from detach.core.result import Err, Ok
from detach.output.console import MockConsole, Style
from detach.platform.process import REDACTED, MockRunner
from detach.services.expo import ExpoAccount, ExpoCLI, install_command


def test_install_command_latest_is_unpinned() -> None:
    assert install_command("latest").argv == ["npm", "install", "-g", "expo-cli"]


def test_install_command_pins_version() -> None:
    assert install_command("3.2.1").argv == ["npm", "install", "-g", "expo-cli@3.2.1"]


def test_install_cli_runs_in_process_directory(tmp_path: Path) -> None:
    runner = MockRunner()
    console = MockConsole()
    expo = ExpoCLI(runner=runner, console=console, workdir=tmp_path)

    assert isinstance(expo.install_cli("latest"), Ok)

    assert runner.commands[0].cwd is None
    assert console.outputs[0].message == "$ npm install -g expo-cli"
    assert console.outputs[0].style == Style.DIM


def test_eject_passes_method_and_workdir(tmp_path: Path) -> None:
    runner = MockRunner()
    expo = ExpoCLI(runner=runner, console=MockConsole(), workdir=tmp_path)

    expo.eject(EjectMethod.EXPO_KIT)

    cmd = runner.commands[0]
    assert cmd.argv == ["expo", "eject", "--non-interactive", "--eject-method", "expoKit"]
    assert cmd.cwd == tmp_path


def test_publish_runs_in_workdir(tmp_path: Path) -> None:
    runner = MockRunner()
    expo = ExpoCLI(runner=runner, console=MockConsole(), workdir=tmp_path)

    expo.publish()

    assert runner.commands[0].argv == ["expo", "publish", "--non-interactive"]
    assert runner.commands[0].cwd == tmp_path


def test_eject_failure_is_returned() -> None:
    runner = MockRunner(failures={"expo eject": 1})
    expo = ExpoCLI(runner=runner, console=MockConsole())

    result = expo.eject(EjectMethod.PLAIN)

    assert isinstance(result, Err)
    assert result.error.returncode == 1


def test_login_masks_password_in_output() -> None:
    runner = MockRunner()
    console = MockConsole()
    account = ExpoAccount(runner=runner, console=console)

    account.login("alice", Secret("s3cr3t-pass"))

    assert runner.commands[0].argv == [
        "expo",
        "login",
        "--non-interactive",
        "-u",
        "alice",
        "-p",
        "s3cr3t-pass",
    ]
    assert console.messages == [f"$ expo login --non-interactive -u alice -p {REDACTED}"]
    assert "s3cr3t-pass" not in console.text


def test_login_failure_does_not_leak_password() -> None:
    runner = MockRunner(failures={"expo login": 1})
    account = ExpoAccount(runner=runner, console=MockConsole())

    result = account.login("alice", Secret("s3cr3t-pass"))

    assert isinstance(result, Err)
    assert "s3cr3t-pass" not in str(result.error)
    assert "s3cr3t-pass" not in repr(result.error)


def test_logout_takes_no_credentials() -> None:
    runner = MockRunner()
    account = ExpoAccount(runner=runner, console=MockConsole())

    assert isinstance(account.logout(), Ok)
    assert runner.commands[0].argv == ["expo", "logout", "--non-interactive"]
