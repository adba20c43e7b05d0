"""Typed workflow configuration.

Inputs come from the CI step environment (see ``detach.cli``) and may be
seeded from an optional TOML file. Whatever the source, they end up in one
immutable ``WorkflowConfig``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_table

__all__ = [
    "CONFIG_TABLE",
    "LATEST",
    "ConfigError",
    "EjectMethod",
    "Secret",
    "WorkflowConfig",
    "load_config",
    "resolve_eject_method",
]

LATEST = "latest"

# Optional table name; a file without it is read from its root.
CONFIG_TABLE = "detach"

_MASK = "*****"


class Secret:
    """A sensitive string that never renders its value.

    ``str()`` and ``repr()`` both return a mask; call ``reveal()`` at the one
    place the raw value is handed to a child process.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        self._value = value

    def reveal(self) -> str:
        return self._value

    def __bool__(self) -> bool:
        return bool(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secret):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return _MASK

    def __repr__(self) -> str:
        return f"Secret({_MASK!r})"


class EjectMethod(StrEnum):
    """Value passed to ``expo eject --eject-method``.

    With ``plain`` the project no longer depends on ExpoKit, so Expo SDK
    imports stop working. ``expoKit`` keeps them and needs an Expo account.
    """

    PLAIN = "plain"
    EXPO_KIT = "expoKit"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class WorkflowConfig:
    """Inputs of one detach run."""

    workdir: Path = field(default_factory=Path.cwd)
    expo_cli_version: str = LATEST
    user_name: str | None = None
    password: Secret | None = None
    eject_method: EjectMethod | None = None
    run_publish: bool = False
    override_react_native_version: str | None = None
    logout: bool | None = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.user_name) and bool(self.password)

    @property
    def package_json(self) -> Path:
        return self.workdir / "package.json"

    def with_overrides(self, **overrides: object) -> WorkflowConfig:
        """Return a copy where every non-None override replaces the current value."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]

    def describe(self) -> list[tuple[str, str]]:
        """Rows for the input summary printed before the run."""

        def show(value: object) -> str:
            if value is None:
                return "-"
            if isinstance(value, bool):
                return "yes" if value else "no"
            return str(value)

        return [
            ("project_path", show(self.workdir)),
            ("expo_cli_version", show(self.expo_cli_version)),
            ("user_name", show(self.user_name)),
            ("password", show(self.password)),
            ("eject_method", show(self.eject_method)),
            ("run_publish", show(self.run_publish)),
            ("override_react_native_version", show(self.override_react_native_version)),
            ("logout", show(self.logout)),
        ]

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, base_dir: Path) -> WorkflowConfig:
        """Create a config from a parsed TOML mapping.

        Relative ``project_path`` values resolve against ``base_dir``.

        Raises:
            ValueError: On an unknown eject method or a malformed boolean.
        """
        table: StrDict = get_table(data, CONFIG_TABLE) or dict(data)

        project_path = get_str(table, "project_path")
        workdir = base_dir / project_path if project_path else base_dir

        method_value = get_str(table, "eject_method")
        eject_method = EjectMethod(method_value) if method_value else None

        password = get_str(table, "password")

        return cls(
            workdir=workdir,
            expo_cli_version=get_str(table, "expo_cli_version") or LATEST,
            user_name=get_str(table, "user_name"),
            password=Secret(password) if password else None,
            eject_method=eject_method,
            run_publish=get_bool(table, "run_publish") or False,
            override_react_native_version=get_str(table, "override_react_native_version"),
            logout=get_bool(table, "logout"),
        )


def resolve_eject_method(config: WorkflowConfig) -> EjectMethod:
    """Pick the eject method: explicit input first, else inferred from credentials."""
    if config.eject_method is not None:
        return config.eject_method
    if config.user_name:
        return EjectMethod.EXPO_KIT
    return EjectMethod.PLAIN


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[WorkflowConfig, ConfigError]:
    """Load a workflow configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(WorkflowConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(WorkflowConfig.from_dict(result.value, base_dir=path.parent))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config value: {e}", path=path))
