"""Typed configuration for the branching workflow.

Configuration lives in an optional ``.bflow.toml`` at the repository root:

    [flow]
    version_file = "VERSION"
    master = "main"
    development = "develop"
    remote = "origin"
    prerelease = "beta1"
    confirm_token = "y"

Every key is optional. The resulting ``FlowConfig`` is passed explicitly to
the engine; nothing reads it from module state.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "FlowConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = ".bflow.toml"

_STR_KEYS = ("version_file", "master", "development", "remote", "prerelease", "confirm_token")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class FlowConfig:
    """Branch names, remote and version file location.

    Attributes:
        version_file: Version file path, relative to the repository root.
        master: Releasable trunk; release tags are created here.
        development: Integration trunk; features branch off and merge back here.
        remote: Remote that branches, deletions and tags are pushed to.
        prerelease: Label appended to the version when a release/patch starts.
        confirm_token: Exact answer that approves a finish prompt.
    """

    version_file: str = "version"
    master: str = "master"
    development: str = "development"
    remote: str = "origin"
    prerelease: str = "beta1"
    confirm_token: str = "y"

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> FlowConfig:
        """Create a FlowConfig from parsed TOML.

        Raises:
            TypeError: A known key holds something other than a string,
                or ``[flow]`` is not a table.
        """
        table = data.get("flow", {})
        if not isinstance(table, Mapping):
            raise TypeError("[flow] must be a table")

        values: dict[str, str] = {}
        for key in _STR_KEYS:
            value = table.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise TypeError(f"flow.{key} must be a string")
            value = value.strip()
            if value:
                values[key] = value
        return cls(**values)


def _parse_toml(path: Path) -> Result[dict[str, object], ConfigError]:
    import tomllib

    try:
        data: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    if not isinstance(data, dict):
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[FlowConfig, ConfigError]:
    """Load and validate ``.bflow.toml``.

    Args:
        path: Path to the TOML file.

    Returns:
        Ok(FlowConfig) on success, Err(ConfigError) on failure.
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(FlowConfig.from_dict(result.value))
    except (TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[FlowConfig, ConfigError]:
    """Like load_config, but a missing file yields the defaults."""
    if not path.exists():
        return Ok(FlowConfig())
    return load_config(path)
