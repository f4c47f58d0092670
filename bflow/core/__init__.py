"""Core types shared by every layer: results, exit codes, configuration."""

from .config import CONFIG_FILE_NAME, ConfigError, FlowConfig, load_config, load_config_or_default
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "CONFIG_FILE_NAME",
    "ConfigError",
    "FlowConfig",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
