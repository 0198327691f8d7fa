"""Global configuration data structures and loading.

Provides immutable global config data loaded from ~/.ghprs/config.toml.
Every key is optional; a missing file means all defaults.
"""

import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ghprs.core.credentials import DEFAULT_TOKEN_ENV_VAR

DEFAULT_POLL_INTERVAL_SECONDS = 60


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Loaded once at CLI entry point and stored in GhprsContext.
    All fields are read-only after construction.
    """

    poll_interval_seconds: int
    desktop_notifications: bool
    terminal_notifications: bool
    token_env_var: str

    @staticmethod
    def default() -> "GlobalConfig":
        return GlobalConfig(
            poll_interval_seconds=DEFAULT_POLL_INTERVAL_SECONDS,
            desktop_notifications=True,
            terminal_notifications=True,
            token_env_var=DEFAULT_TOKEN_ENV_VAR,
        )


def _typed_value(data: dict[str, Any], key: str, expected: type, default: Any, path: Path) -> Any:
    if key not in data:
        return default
    value = data[key]
    # bool is a subclass of int; reject it where a number is expected
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ValueError(
            f"Invalid '{key}' in {path}: expected {expected.__name__}, got {value!r}"
        )
    return value


def parse_global_config(data: dict[str, Any], path: Path) -> GlobalConfig:
    """Build a GlobalConfig from parsed TOML data.

    Raises:
        ValueError: If a key has the wrong type or an out-of-range value
    """
    defaults = GlobalConfig.default()

    interval = _typed_value(
        data, "poll_interval_seconds", int, defaults.poll_interval_seconds, path
    )
    if interval <= 0:
        raise ValueError(f"Invalid 'poll_interval_seconds' in {path}: must be positive")

    token_env_var = _typed_value(data, "token_env_var", str, defaults.token_env_var, path)
    if not token_env_var:
        raise ValueError(f"Invalid 'token_env_var' in {path}: must not be empty")

    return GlobalConfig(
        poll_interval_seconds=interval,
        desktop_notifications=_typed_value(
            data, "desktop_notifications", bool, defaults.desktop_notifications, path
        ),
        terminal_notifications=_typed_value(
            data, "terminal_notifications", bool, defaults.terminal_notifications, path
        ),
        token_env_var=token_env_var,
    )


class ConfigStore(ABC):
    """Abstract interface for global config access.

    Provides dependency injection for global config access, enabling
    in-memory implementations for tests without touching filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if global config exists."""
        ...

    @abstractmethod
    def load(self) -> GlobalConfig:
        """Load global config.

        Returns:
            GlobalConfig instance with loaded values (defaults if missing)

        Raises:
            ValueError: If config is malformed
        """
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the global config file.

        Returns:
            Path to config file (for error messages and debugging)
        """
        ...


class RealConfigStore(ConfigStore):
    """Production implementation that reads ~/.ghprs/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> GlobalConfig:
        config_path = self.path()
        if not config_path.exists():
            return GlobalConfig.default()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Malformed config file {config_path}: {e}") from e
        return parse_global_config(data, config_path)

    def path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        return Path.home() / ".ghprs" / "config.toml"


class FakeConfigStore(ConfigStore):
    """In-memory config store for tests."""

    def __init__(self, *, config: GlobalConfig | None = None) -> None:
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> GlobalConfig:
        if self._config is None:
            return GlobalConfig.default()
        return self._config

    def path(self) -> Path:
        return Path("/test/.ghprs/config.toml")
