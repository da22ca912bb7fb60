"""
Application configuration manager.
Stores settings in a JSON file under the app config directory.
"""

import json
import logging
from pathlib import Path

from bbcd.core.constants import (
    CONFIG_PATH, DurationUnit, DEFAULT_MAX_DURATION_SEC,
    MIN_MAX_DURATION_SEC, MAX_MAX_DURATION_SEC,
    DEFAULT_PROBE_TIMEOUT_SEC, LOG_LEVELS, DEFAULT_LOG_LEVEL,
)
from bbcd.core.duration import parse_unit
from bbcd.core.error_codes import InvalidDurationUnit
from bbcd.core.sources import SourceCatalog, default_catalog, load_catalog

# Validation bounds
_PROBE_TIMEOUT_MIN = 1
_PROBE_TIMEOUT_MAX = 60

logger = logging.getLogger(__name__)

_DEFAULTS = {
    'catalog_path': "",
    'legacy_leap_rule': False,
    'max_duration_sec': DEFAULT_MAX_DURATION_SEC,
    'default_duration_unit': int(DurationUnit.MINUTES),
    'log_level': DEFAULT_LOG_LEVEL,
    'probe_timeout_sec': DEFAULT_PROBE_TIMEOUT_SEC,
}


class AppConfig:
    """Manages application configuration stored as JSON."""

    def __init__(self, config_path: Path | None = None):
        self.path = config_path or CONFIG_PATH
        self._data: dict = {}
        self.load()

    def load(self):
        """Load config from disk, merging with defaults."""
        self._data = dict(_DEFAULTS)
        if self.path.exists():
            try:
                with open(self.path, 'r') as f:
                    saved = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Failed to load config: %s", e)
                return
            if not isinstance(saved, dict):
                logger.warning("Ignoring config %s: not a JSON object", self.path)
                return
            for key, value in saved.items():
                self._data[key] = self._validate(key, value)

    def save(self):
        """Persist config to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(self._data, f, indent=2)

    def get(self, key: str, default=None):
        return self._data.get(key, default)

    def set(self, key: str, value):
        value = self._validate(key, value)
        self._data[key] = value
        self.save()

    def _validate(self, key: str, value):
        """Validate and coerce config values to safe ranges."""
        if key == 'max_duration_sec':
            try:
                value = float(value)
            except (TypeError, ValueError):
                logger.warning("Invalid max_duration_sec %r, using default", value)
                return DEFAULT_MAX_DURATION_SEC
            return max(MIN_MAX_DURATION_SEC, min(MAX_MAX_DURATION_SEC, value))

        if key == 'probe_timeout_sec':
            try:
                value = float(value)
            except (TypeError, ValueError):
                logger.warning("Invalid probe_timeout_sec %r, using default", value)
                return DEFAULT_PROBE_TIMEOUT_SEC
            return max(_PROBE_TIMEOUT_MIN, min(_PROBE_TIMEOUT_MAX, value))

        if key == 'default_duration_unit':
            try:
                return int(parse_unit(value))
            except InvalidDurationUnit:
                logger.warning("Invalid default_duration_unit %r, using minutes", value)
                return int(DurationUnit.MINUTES)

        if key == 'log_level':
            level = str(value).upper()
            if level not in LOG_LEVELS:
                logger.warning("Invalid log_level %r, using %s", value, DEFAULT_LOG_LEVEL)
                return DEFAULT_LOG_LEVEL
            return level

        if key == 'legacy_leap_rule':
            return bool(value)

        if key == 'catalog_path':
            return str(value or "")

        return value

    def as_dict(self) -> dict:
        return dict(self._data)

    def load_catalog(self) -> SourceCatalog:
        """The configured source catalog, or the built-in one."""
        if self.catalog_path:
            return load_catalog(Path(self.catalog_path).expanduser())
        return default_catalog()

    @property
    def catalog_path(self) -> str:
        return self._data.get('catalog_path', "")

    @property
    def legacy_leap_rule(self) -> bool:
        return self._data.get('legacy_leap_rule', False)

    @legacy_leap_rule.setter
    def legacy_leap_rule(self, value: bool):
        self.set('legacy_leap_rule', value)

    @property
    def max_duration_sec(self) -> float:
        return self._data.get('max_duration_sec', DEFAULT_MAX_DURATION_SEC)

    @property
    def default_duration_unit(self) -> DurationUnit:
        return DurationUnit(self._data.get('default_duration_unit', DurationUnit.MINUTES))

    @property
    def log_level(self) -> str:
        return self._data.get('log_level', DEFAULT_LOG_LEVEL)

    @property
    def probe_timeout_sec(self) -> float:
        return self._data.get('probe_timeout_sec', DEFAULT_PROBE_TIMEOUT_SEC)
