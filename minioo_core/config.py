"""Runtime configuration loaded from TOML with environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import tomllib
from platformdirs import user_config_dir

DEFAULT_APP_NAME = "minioo"
CONFIG_FILE_NAME = "config.toml"

_ENV_KEY_MAP: dict[str, str] = {
    "name_prefix": "MINIOO_NAME_PREFIX",
    "wrap_constructor_errors": "MINIOO_WRAP_CONSTRUCTOR_ERRORS",
    "log_level": "MINIOO_LOG_LEVEL",
}
_TRUTHY = {"1", "true", "yes", "on"}

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    """Return the platform-specific default config path."""

    base_dir = Path(user_config_dir(DEFAULT_APP_NAME, appauthor=False))
    return base_dir / CONFIG_FILE_NAME


def _load_table(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    table = data.get("runtime", {})
    return table if isinstance(table, dict) else {}


def _coerce(name: str, value: Any) -> Any:
    if name == "wrap_constructor_errors":
        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY
        return bool(value)
    return str(value)


@dataclass(frozen=True)
class RuntimeConfig:
    """Settings that shape handle generation and error reporting."""

    name_prefix: str = "obj"
    wrap_constructor_errors: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not self.name_prefix:
            raise ValueError("name_prefix cannot be empty.")

    @classmethod
    def load(
        cls,
        path: Path | str | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> "RuntimeConfig":
        """Read ``[runtime]`` from ``path`` and apply environment overrides."""

        config_path = Path(path) if path is not None else default_config_path()
        environ = os.environ if env is None else env
        known = {field.name for field in fields(cls)}

        values: dict[str, Any] = {}
        for key, value in _load_table(config_path).items():
            if key not in known:
                logger.warning("unknown runtime config key %r in %s", key, config_path)
                continue
            values[key] = _coerce(key, value)
        for key, env_key in _ENV_KEY_MAP.items():
            if env_key in environ:
                values[key] = _coerce(key, environ[env_key])
        return replace(cls(), **values)
