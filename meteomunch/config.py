"""Layered configuration for meteomunch.

Configuration is resolved in three layers: built-in defaults, an optional
YAML file (``munch.yml``) and environment variables. Partially specified files
never break startup: anything the file omits keeps its default, and a missing
or malformed file only produces a warning.

Critical values (an API key for a provider that needs one, for example) are
validated after the layers are merged. Violations are collected into a single
:class:`CriticalErrors` exception instead of aborting the process, so callers
can decide whether to continue.

Note: :func:`get` memoizes the first load in module state and is not safe for
concurrent first use. Call it once during startup, before serving traffic.
"""
from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass, field, fields, is_dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml


logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ("munch.yml", "munch.yaml")
DEFAULT_PROVIDER = "open-meteo"


class LogLevel(str, enum.Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass
class ServerSettings:
    hostname: str = "localhost"
    port: str = "50050"


@dataclass
class MunchSettings:
    """Parameters of the munch app itself, excluding external dependencies."""

    server: ServerSettings = field(default_factory=ServerSettings)
    log_level: str = LogLevel.INFO.value

    @property
    def debug(self) -> bool:
        return self.log_level.lower() == LogLevel.DEBUG.value


@dataclass
class DataStoreSettings:
    name: str = ""
    uri: str = ""
    db_name: str = ""
    db_number: int = 0


@dataclass
class ProviderSettings:
    name: str = ""
    api_key: str = ""
    api_path: str = ""  # relative to base_uri
    base_uri: str = ""  # fully qualified, scheme included


def _default_mongo() -> DataStoreSettings:
    return DataStoreSettings(name="mongo", uri="mongodb://localhost:27017", db_name="meteomunch", db_number=0)


def _default_dlm_redis() -> DataStoreSettings:
    return DataStoreSettings(name="redis", uri="redis://localhost:6379", db_number=1)


def _default_providers() -> List[ProviderSettings]:
    return [
        ProviderSettings(
            name=DEFAULT_PROVIDER,
            api_key="",
            api_path="v1/forecast",
            base_uri="https://api.open-meteo.com/",
        )
    ]


@dataclass
class Configuration:
    munch: MunchSettings = field(default_factory=MunchSettings)
    mongo: DataStoreSettings = field(default_factory=_default_mongo)
    dlm_redis: DataStoreSettings = field(default_factory=_default_dlm_redis)
    providers: List[ProviderSettings] = field(default_factory=_default_providers)

    def provider(self, name: str) -> Optional[ProviderSettings]:
        """Return the first provider entry called ``name``."""
        for entry in self.providers:
            if entry.name == name:
                return entry
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into the layout of the YAML configuration file."""
        return _to_file_layout(self)


# File keys differ from attribute names; everything else is matched case-insensitively.
_FILE_KEYS = {
    "munch": "Munch",
    "server": "Server",
    "hostname": "Hostname",
    "port": "Port",
    "log_level": "LogLevel",
    "mongo": "Mongo",
    "dlm_redis": "DLMRedis",
    "providers": "MeteoProviders",
    "name": "Name",
    "uri": "URI",
    "db_name": "DBName",
    "db_number": "DBNumber",
    "api_key": "APIKey",
    "api_path": "APIPath",
    "base_uri": "BaseURI",
}

# Fields that a provider cannot work without, keyed by provider name.
CRITICAL_FIELDS: Dict[str, tuple] = {
    "meteoblue": ("api_key", "api_path", "base_uri"),
}


class ConfigError(ValueError):
    """Base configuration error."""


class CriticalError(ConfigError):
    """A single critical value is missing."""

    def __init__(self, field_name: str, provider: str) -> None:
        self.field = field_name
        self.provider = provider
        super().__init__(f"Critical config value missing: {field_name} - {provider}")


class CriticalErrors(ConfigError):
    """All critical values found missing during one validation pass."""

    def __init__(self, errors: List[CriticalError], configuration: Optional[Configuration] = None) -> None:
        self.errors = list(errors)
        self.configuration = configuration
        super().__init__("; ".join(str(error) for error in self.errors))

    def __len__(self) -> int:
        return len(self.errors)


def load_default() -> Configuration:
    """Return a new configuration populated with known-good defaults."""
    return Configuration()


def validate(cfg: Configuration) -> None:
    """Raise :class:`CriticalErrors` listing every missing critical value."""
    errors: List[CriticalError] = []
    for provider in cfg.providers:
        for attr in CRITICAL_FIELDS.get(provider.name, ()):
            if not getattr(provider, attr):
                errors.append(CriticalError(_FILE_KEYS[attr], provider.name))
    if errors:
        raise CriticalErrors(errors, configuration=cfg)


def load(
    override: Optional[Configuration] = None,
    source_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Configuration:
    """Resolve the configuration.

    ``override`` is used verbatim when given. Otherwise the defaults are
    overlaid with the file at ``source_path`` (or ``munch.yml`` in the
    working directory) and then with environment variables. The result is
    validated either way; :class:`CriticalErrors` carries the configuration
    on its ``configuration`` attribute.
    """
    if override is not None:
        validate(override)
        return override

    cfg = load_default()
    path = _resolve_path(source_path)
    if path is None:
        logger.warning("Config file not found, using default config")
    else:
        logger.info("Reading config file %s", path)
        data = _read_file(path)
        if data is not None:
            candidate = load_default()
            try:
                _merge(candidate, data)
            except (TypeError, ValueError) as exc:
                logger.warning("Couldn't parse config %s, using default config: %s", path, exc)
            else:
                cfg = candidate

    _apply_environment(cfg, os.environ if environ is None else environ)
    validate(cfg)
    return cfg


_current: Optional[Configuration] = None
_current_error: Optional[ConfigError] = None


def get(source_path: Optional[str] = None) -> Configuration:
    """Return the configuration loaded by the first call.

    ``source_path`` is only consulted by the call that performs the load.

    Later calls return the same object, or raise the same error, without
    looking at the file again. Use :func:`reset` or :func:`load` to pick up
    changes.
    """
    global _current, _current_error
    if _current is None:
        try:
            _current = load(source_path=source_path)
            _current_error = None
        except CriticalErrors as exc:
            _current = exc.configuration
            _current_error = exc
    if _current_error is not None:
        raise _current_error
    return _current


def reset() -> None:
    global _current, _current_error
    _current = None
    _current_error = None


# helpers ------------------------------------------------------------
def _resolve_path(source_path: Optional[str]) -> Optional[Path]:
    if source_path:
        return Path(source_path)
    cwd = Path.cwd()
    for name in CONFIG_FILE_NAMES:
        candidate = cwd / name
        if candidate.is_file():
            return candidate
    return None


def _read_file(path: Path) -> Optional[Mapping[str, Any]]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        logger.warning("Config file %s not readable, using default config: %s", path, exc)
        return None
    except yaml.YAMLError as exc:
        logger.warning("Couldn't parse config %s, using default config: %s", path, exc)
        return None
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        logger.warning("Config %s is not a mapping, using default config", path)
        return None
    return data


def _lookup(data: Mapping[str, Any], attr: str) -> tuple:
    wanted = _FILE_KEYS.get(attr, attr).lower()
    for key, value in data.items():
        if str(key).lower() == wanted:
            return True, value
    return False, None


def _coerce(current: Any, value: Any) -> Any:
    if isinstance(current, int):
        return 0 if value is None else int(value)
    if isinstance(current, str):
        if isinstance(value, (Mapping, list)):
            raise TypeError(f"expected a scalar, got {type(value).__name__}")
        return "" if value is None else str(value)
    return value


def _merge(target: Any, data: Mapping[str, Any]) -> None:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a mapping, got {type(data).__name__}")
    for item in fields(target):
        found, value = _lookup(data, item.name)
        if not found:
            continue
        current = getattr(target, item.name)
        if item.name == "providers":
            setattr(target, item.name, _parse_providers(value))
        elif is_dataclass(current):
            _merge(current, value or {})
        else:
            setattr(target, item.name, _coerce(current, value))


def _parse_providers(value: Any) -> List[ProviderSettings]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError("MeteoProviders must be a list")
    providers = []
    for entry in value:
        provider = ProviderSettings()
        _merge(provider, entry)
        providers.append(provider)
    return providers


def _env_key(*parts: str) -> str:
    return "_".join(part.upper().replace("-", "_") for part in parts)


def _overlay(target: Any, prefix: tuple, environ: Mapping[str, str]) -> None:
    for item in fields(target):
        current = getattr(target, item.name)
        if item.name == "providers":
            continue
        key_parts = prefix + (_FILE_KEYS.get(item.name, item.name),)
        if is_dataclass(current):
            _overlay(current, key_parts, environ)
            continue
        key = _env_key(*key_parts)
        if key not in environ:
            continue
        try:
            setattr(target, item.name, _coerce(current, environ[key]))
        except (TypeError, ValueError):
            logger.warning("Ignoring environment variable %s: invalid value", key)


def _apply_environment(cfg: Configuration, environ: Mapping[str, str]) -> None:
    _overlay(cfg, (), environ)
    for index, provider in enumerate(cfg.providers):
        prefix = (_FILE_KEYS["providers"], provider.name)
        updates = {}
        for attr in ("api_key", "api_path", "base_uri"):
            key = _env_key(*prefix, _FILE_KEYS[attr])
            if key in environ:
                updates[attr] = environ[key]
        if updates:
            cfg.providers[index] = replace(provider, **updates)


def _to_file_layout(value: Any) -> Any:
    if is_dataclass(value):
        return {_FILE_KEYS.get(item.name, item.name): _to_file_layout(getattr(value, item.name)) for item in fields(value)}
    if isinstance(value, list):
        return [_to_file_layout(item) for item in value]
    return value


__all__ = [
    "CRITICAL_FIELDS",
    "ConfigError",
    "Configuration",
    "CriticalError",
    "CriticalErrors",
    "DataStoreSettings",
    "LogLevel",
    "MunchSettings",
    "ProviderSettings",
    "ServerSettings",
    "get",
    "load",
    "load_default",
    "reset",
    "validate",
]
