"""Typed configuration loading.

An optional ``relkit.toml`` at the project root overrides the defaults below.
Every default matches the conventional Cargo + Homebrew layout, so a project
without a config file works out of the box.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_number, get_str, get_str_list, get_table

__all__ = [
    "BuildConfig",
    "Config",
    "ConfigError",
    "FormulaConfig",
    "HttpConfig",
    "ManifestConfig",
    "RemoteConfig",
    "CONFIG_FILENAME",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "relkit.toml"

DEFAULT_MANIFEST = "Cargo.toml"
DEFAULT_STATE_FILE = "build/build-number"
DEFAULT_BUILD_COMMAND = ("cargo", "build")
DEFAULT_REMOTE = "origin"
DEFAULT_FORMULA_DIR = "HomebrewFormula"
DEFAULT_DESCRIPTION = "Fast symlink finder"
DEFAULT_BRANCH = "main"
DEFAULT_BUILD_DEPENDENCY = "rust"
DEFAULT_HTTP_TIMEOUT = 30.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ManifestConfig:
    path: str = DEFAULT_MANIFEST


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Build counter location and the compiler invocation."""

    state_file: str = DEFAULT_STATE_FILE
    command: tuple[str, ...] = DEFAULT_BUILD_COMMAND


@dataclass(frozen=True, slots=True)
class RemoteConfig:
    name: str = DEFAULT_REMOTE


@dataclass(frozen=True, slots=True)
class FormulaConfig:
    """Formula metadata and output location.

    ``binary`` defaults to the repository name when unset. ``template`` is a
    path (relative to the project root) to a ``string.Template`` file that
    replaces the built-in formula template.
    """

    output_dir: str = DEFAULT_FORMULA_DIR
    description: str = DEFAULT_DESCRIPTION
    branch: str = DEFAULT_BRANCH
    build_dependency: str = DEFAULT_BUILD_DEPENDENCY
    binary: str | None = None
    template: str | None = None


@dataclass(frozen=True, slots=True)
class HttpConfig:
    timeout: float = DEFAULT_HTTP_TIMEOUT


def _table(data: Mapping[str, object], name: str) -> StrDict:
    if name not in data:
        return {}
    table = get_table(data, name)
    if table is None:
        raise ValueError(f"[{name}] must be a table")
    return table


def _optional_str(table: StrDict, section: str, key: str) -> str | None:
    if key not in table:
        return None
    value = get_str(table, key)
    if value is None:
        raise ValueError(f"{section}.{key} must be a non-empty string")
    return value


def _str(table: StrDict, section: str, key: str, default: str) -> str:
    return _optional_str(table, section, key) or default


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    manifest: ManifestConfig = field(default_factory=ManifestConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    formula: FormulaConfig = field(default_factory=FormulaConfig)
    http: HttpConfig = field(default_factory=HttpConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML.

        Raises:
            ValueError: If a present value has an unusable shape.
        """
        manifest = _table(data, "manifest")
        build = _table(data, "build")
        remote = _table(data, "remote")
        formula = _table(data, "formula")
        http = _table(data, "http")

        command = DEFAULT_BUILD_COMMAND
        if "command" in build:
            parsed = get_str_list(build, "command")
            if not parsed:
                raise ValueError("build.command must be a non-empty list of strings")
            command = tuple(parsed)

        timeout = DEFAULT_HTTP_TIMEOUT
        if "timeout" in http:
            parsed_timeout = get_number(http, "timeout")
            if parsed_timeout is None or parsed_timeout <= 0:
                raise ValueError("http.timeout must be a positive number")
            timeout = parsed_timeout

        return cls(
            manifest=ManifestConfig(path=_str(manifest, "manifest", "path", DEFAULT_MANIFEST)),
            build=BuildConfig(
                state_file=_str(build, "build", "state_file", DEFAULT_STATE_FILE),
                command=command,
            ),
            remote=RemoteConfig(name=_str(remote, "remote", "name", DEFAULT_REMOTE)),
            formula=FormulaConfig(
                output_dir=_str(formula, "formula", "output_dir", DEFAULT_FORMULA_DIR),
                description=_str(formula, "formula", "description", DEFAULT_DESCRIPTION),
                branch=_str(formula, "formula", "branch", DEFAULT_BRANCH),
                build_dependency=_str(
                    formula, "formula", "build_dependency", DEFAULT_BUILD_DEPENDENCY
                ),
                binary=_optional_str(formula, "formula", "binary"),
                template=_optional_str(formula, "formula", "template"),
            ),
            http=HttpConfig(timeout=timeout),
        )


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
        return Err(ConfigError(f"Invalid TOML syntax in {path.name}: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, else return the defaults.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
