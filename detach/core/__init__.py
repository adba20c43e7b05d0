"""Core domain types."""

from .config import (
    ConfigError,
    EjectMethod,
    Secret,
    WorkflowConfig,
    load_config,
    resolve_eject_method,
)
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "ConfigError",
    "EjectMethod",
    "Secret",
    "WorkflowConfig",
    "load_config",
    "resolve_eject_method",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
