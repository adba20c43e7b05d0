from __future__ import annotations

from pathlib import Path

import pytest
import typer

from detach.cli.context import build_context, resolve_config
from detach.core.config import LATEST, EjectMethod, Secret
from detach.core.errors import ErrorCode
from detach.core.result import Err, Ok


def test_defaults_without_inputs() -> None:
    result = resolve_config(config_file=None)

    assert isinstance(result, Ok)
    config = result.value
    assert config.expo_cli_version == LATEST
    assert config.user_name is None
    assert config.password is None
    assert config.run_publish is False
    assert config.logout is None


def test_inputs_are_trimmed_and_password_wrapped(tmp_path: Path) -> None:
    result = resolve_config(
        config_file=None,
        project_path=tmp_path,
        expo_cli_version=" 3.2.1 ",
        user_name=" alice ",
        password="hunter2",
        override_react_native_version=" 0.64.0\n",
    )

    assert isinstance(result, Ok)
    config = result.value
    assert config.workdir == tmp_path
    assert config.expo_cli_version == "3.2.1"
    assert config.user_name == "alice"
    assert config.password == Secret("hunter2")
    assert config.override_react_native_version == "0.64.0"


def test_empty_strings_count_as_unset() -> None:
    result = resolve_config(config_file=None, user_name="", password="", expo_cli_version="")

    assert isinstance(result, Ok)
    assert result.value.user_name is None
    assert result.value.password is None
    assert result.value.expo_cli_version == LATEST


def test_options_override_config_file(tmp_path: Path) -> None:
    (tmp_path / "app").mkdir()
    config_file = tmp_path / "detach.toml"
    config_file.write_text(
        """
[detach]
project_path = "app"
expo_cli_version = "3.0.0"
eject_method = "plain"
run_publish = true
logout = "false"
""",
        encoding="utf-8",
    )

    result = resolve_config(
        config_file=config_file,
        expo_cli_version="3.2.1",
        eject_method=EjectMethod.EXPO_KIT,
        run_publish=False,
    )

    assert isinstance(result, Ok)
    config = result.value
    assert config.workdir == tmp_path / "app"
    assert config.expo_cli_version == "3.2.1"
    assert config.eject_method is EjectMethod.EXPO_KIT
    assert config.run_publish is False
    assert config.logout is False


def test_missing_config_file(tmp_path: Path) -> None:
    result = resolve_config(config_file=tmp_path / "missing.toml")

    assert isinstance(result, Err)
    assert "not found" in result.error.message


def test_build_context_exits_on_config_error(tmp_path: Path) -> None:
    with pytest.raises(typer.Exit) as exc:
        build_context(
            config_file=tmp_path / "missing.toml",
            project_path=None,
            expo_cli_version=None,
            user_name=None,
            password=None,
            eject_method=None,
            run_publish=None,
            override_react_native_version=None,
            logout=None,
        )

    assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)
