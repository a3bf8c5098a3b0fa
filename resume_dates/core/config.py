"""
Engine configuration: validated updates, persistence and a short-lived cache.

``ConfigManager`` owns the live ``ValidationConfig``. Updates are validated
eagerly; an out-of-range value raises ``ConfigValidationError`` and leaves the
previous config in place. Persistence goes through ``ConfigPersistence``,
which wraps any key-value store and falls back to defaults on every error.
"""

import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Protocol

from pydantic import ValidationError

from resume_dates.core.observer import NullObserver, ValidationObserver
from resume_dates.core.schemas import ValidationConfig

logger = logging.getLogger(__name__)

STORAGE_KEY = "date-validation-config"
CONFIG_VERSION = "1.0"
CACHE_TTL_SECONDS = 300


class ConfigValidationError(ValueError):
    """Raised when a configuration update carries out-of-range or unknown values."""

    def __init__(self, messages: List[str]):
        self.messages = messages
        super().__init__("Invalid configuration: " + "; ".join(messages))


def _field_name(key: str) -> str:
    """Accept both ``maxFutureWorkMonths`` and ``max_future_work_months``."""
    for name, info in ValidationConfig.model_fields.items():
        if key in (name, info.alias):
            return name
    return key


def build_config(values: Dict[str, Any]) -> ValidationConfig:
    """Validate a full set of option values, raising ConfigValidationError on any problem."""
    try:
        return ValidationConfig(**{_field_name(key): value for key, value in values.items()})
    except ValidationError as exc:
        messages = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "config"
            alias = ValidationConfig.model_fields[field].alias if field in ValidationConfig.model_fields else field
            messages.append(f"{alias}: {error['msg']}")
        raise ConfigValidationError(messages) from exc


# ===== PERSISTENCE =====

class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryKeyValueStore:
    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class ConfigPersistence:
    """
    Load/save the config as a versioned JSON envelope:

        {"version": "1.0", "timestamp": "<ISO-8601>", "config": {...}}

    Loaded configs are cached for CACHE_TTL_SECONDS. Every store failure is
    logged and answered with defaults (load) or False (save/delete).
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        observer: Optional[ValidationObserver] = None,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store if store is not None else InMemoryKeyValueStore()
        self.observer = observer or NullObserver()
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cached: Optional[ValidationConfig] = None
        self._cached_at = 0.0

    def _cache_fresh(self) -> bool:
        return self._cached is not None and self._clock() - self._cached_at < self.ttl_seconds

    def _remember(self, config: ValidationConfig) -> ValidationConfig:
        self._cached = config
        self._cached_at = self._clock()
        return config

    def clear_cache(self) -> None:
        self._cached = None
        self._cached_at = 0.0

    def load_config(self) -> ValidationConfig:
        if self._cache_fresh():
            return self._cached

        try:
            raw = self.store.get(STORAGE_KEY)
        except Exception as exc:
            logger.warning(f"Config store read failed, using defaults: {exc}")
            self.observer.log("error", "config", "load_config_failed", error=str(exc))
            return ValidationConfig()

        if raw is None:
            self.observer.log("debug", "config", "load_config_defaults")
            return self._remember(ValidationConfig())

        config = self._decode(raw)
        if config is None:
            logger.warning("Stored config is invalid; replacing it with defaults")
            self.observer.log("warn", "config", "stored_config_invalid")
            self.delete_config()
            return self._remember(ValidationConfig())

        self.observer.log("debug", "config", "load_config", {"config": config.model_dump(by_alias=True)})
        return self._remember(config)

    @staticmethod
    def _decode(raw: str) -> Optional[ValidationConfig]:
        try:
            envelope = json.loads(raw)
        except (TypeError, ValueError):
            return None
        if not isinstance(envelope, dict) or not isinstance(envelope.get("config"), dict):
            return None
        if not isinstance(envelope.get("version"), str):
            return None
        try:
            return build_config(envelope["config"])
        except ConfigValidationError:
            return None

    def save_config(self, config: ValidationConfig) -> bool:
        envelope = {
            "version": CONFIG_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "config": config.model_dump(by_alias=True),
        }
        try:
            self.store.set(STORAGE_KEY, json.dumps(envelope))
        except Exception as exc:
            logger.warning(f"Config store write failed: {exc}")
            self.observer.log("error", "config", "save_config_failed", error=str(exc))
            return False
        self._remember(config)
        self.observer.log("info", "config", "save_config", {"config": envelope["config"]})
        return True

    def delete_config(self) -> bool:
        try:
            self.store.delete(STORAGE_KEY)
        except Exception as exc:
            logger.warning(f"Config store delete failed: {exc}")
            self.observer.log("error", "config", "delete_config_failed", error=str(exc))
            return False
        self.clear_cache()
        return True

    def has_stored_config(self) -> bool:
        try:
            return self.store.get(STORAGE_KEY) is not None
        except Exception as exc:
            logger.warning(f"Config store read failed: {exc}")
            return False

    def get_config_metadata(self) -> Optional[Dict[str, str]]:
        """Version and save time of the stored config, or None when nothing usable is stored."""
        try:
            raw = self.store.get(STORAGE_KEY)
            envelope = json.loads(raw) if raw else None
        except Exception as exc:
            logger.warning(f"Config metadata unavailable: {exc}")
            return None
        if not isinstance(envelope, dict):
            return None
        return {"version": envelope.get("version", ""), "timestamp": envelope.get("timestamp", "")}


# ===== MANAGER =====

class ConfigManager:
    def __init__(
        self,
        persistence: Optional[ConfigPersistence] = None,
        observer: Optional[ValidationObserver] = None,
    ):
        self.observer = observer or NullObserver()
        self.persistence = persistence or ConfigPersistence(observer=self.observer)
        self._config = ValidationConfig()
        self._initialized = False

    def initialize(self) -> ValidationConfig:
        self._config = self.persistence.load_config()
        self._initialized = True
        return self._config

    def get_config(self) -> ValidationConfig:
        """Immutable snapshot of the live config; loads from persistence on first use."""
        if not self._initialized:
            self.initialize()
        return self._config

    def update_config(self, **changes: Any) -> ValidationConfig:
        """
        Apply a partial update.

        Keys may be snake_case or camelCase; None values are ignored. Raises
        ConfigValidationError without touching the live config when any value
        is out of range or unknown.
        """
        current = self.get_config()
        merged = current.model_dump()
        merged.update({_field_name(key): value for key, value in changes.items() if value is not None})
        updated = build_config(merged)

        self._config = updated
        if not self.persistence.save_config(updated):
            logger.warning("Config updated in memory only; persistence failed")
        self.observer.log("info", "config", "update_config", {"changes": sorted(changes)})
        return updated

    def reset_to_defaults(self) -> ValidationConfig:
        self._config = ValidationConfig()
        self._initialized = True
        self.persistence.delete_config()
        self.observer.log("info", "config", "reset_to_defaults")
        return self._config

    def reload(self) -> ValidationConfig:
        """Drop the cache and re-read persisted config; in-flight validations keep their snapshot."""
        self.persistence.clear_cache()
        return self.initialize()

    def has_stored_config(self) -> bool:
        return self.persistence.has_stored_config()

    def to_json(self) -> str:
        return self.get_config().model_dump_json(by_alias=True)

    def from_json(self, payload: str) -> ValidationConfig:
        try:
            values = json.loads(payload)
        except ValueError as exc:
            raise ConfigValidationError([f"config: invalid JSON ({exc})"]) from exc
        if not isinstance(values, dict):
            raise ConfigValidationError(["config: expected a JSON object"])
        return self.update_config(**values)
