"""
Configuration for reorderlist
Handles list layout, drag and autoscroll tunables
"""

import copy
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .signals import Signal

logger = logging.getLogger(__name__)

# Increment this whenever the configuration format changes
CONFIG_VERSION = 1


@dataclass(frozen=True)
class ListSettings:
    """Layout and drag tunables of the list container"""
    spacing: float = 1.0
    padding: float = 5.0
    layout_duration_ms: float = 160.0
    drag_threshold: float = 8.0
    handle_width: float = 25.0
    row_height: float = 50.0


@dataclass(frozen=True)
class AutoscrollSettings:
    """Edge autoscroll tunables.

    ``trigger_distance`` is the width of the band along each viewport edge,
    ``exp_base`` (> 1) sets how steeply the scroll speed grows with depth
    into the band, and ``max_power`` caps the exponent and therefore the
    speed. ``interval_ms`` is the frame interval of toolkit timers.
    """
    trigger_distance: float = 10.0
    max_power: float = 50.0
    exp_base: float = 1.05
    interval_ms: int = 16


class Config:
    """Configuration manager for reorderlist"""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file
        self.setting_changed = Signal()
        self.config_data = self.load_json_config()

    def get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values"""
        return {
            'config_version': CONFIG_VERSION,
            'debug_enabled': False,
            'list': {
                'spacing': 1.0,
                'padding': 5.0,
                'layout_duration_ms': 160,
                'drag_threshold': 8.0,
                'handle_width': 25.0,
                'row_height': 50.0,
            },
            'autoscroll': {
                'trigger_distance': 10.0,
                'max_power': 50.0,
                'exp_base': 1.05,
                'interval_ms': 16,
            },
            'ui': {
                'prefer_unicode_metadata': False,
                'window_width': 640,
                'window_height': 480,
            },
        }

    def load_json_config(self) -> Dict[str, Any]:
        """Load configuration from the JSON file, if any"""
        if not self.config_file or not os.path.exists(self.config_file):
            return self.get_default_config()

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = json.load(f)
            if not isinstance(config, dict):
                raise ValueError("top-level value is not an object")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load JSON config {self.config_file}: {e}")
            return self.get_default_config()

        stored_version = config.get('config_version', CONFIG_VERSION)
        if not isinstance(stored_version, int) or isinstance(stored_version, bool):
            logger.warning(f"Ignoring invalid config_version {stored_version!r} in {self.config_file}")
            config['config_version'] = stored_version = CONFIG_VERSION
        if stored_version > CONFIG_VERSION:
            logger.warning(
                "Config version %s is newer than supported version %s; unknown keys are ignored",
                stored_version,
                CONFIG_VERSION,
            )

        config, updated = self._ensure_config_defaults(config)
        if updated:
            logger.debug("Filled missing configuration keys with defaults")
        return config

    def _ensure_config_defaults(self, config: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
        """Merge ``config`` over the defaults, reporting whether keys were missing"""
        updated = False

        def merge(defaults: Dict[str, Any], current: Dict[str, Any]) -> Dict[str, Any]:
            nonlocal updated
            merged = {}
            for key, default in defaults.items():
                if key not in current:
                    merged[key] = copy.deepcopy(default)
                    updated = True
                elif isinstance(default, dict):
                    value = current[key]
                    if not isinstance(value, dict):
                        logger.warning(f"Config section '{key}' is not an object; using defaults")
                        value = {}
                        updated = True
                    merged[key] = merge(default, value)
                else:
                    merged[key] = current[key]
            for key, value in current.items():
                merged.setdefault(key, value)
            return merged

        return merge(self.get_default_config(), config), updated

    def get_setting(self, key: str, default=None):
        """Get a setting value"""
        value = self.config_data
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set_setting(self, key: str, value: Any):
        """Set a setting value for this session"""
        keys = key.split('.')
        current = self.config_data
        for k in keys[:-1]:
            if k not in current or not isinstance(current[k], dict):
                current[k] = {}
            current = current[k]
        current[keys[-1]] = value

        self.setting_changed.emit(key, value)
        logger.debug(f"Setting {key} = {value}")

    def reset_to_defaults(self):
        self.config_data = self.get_default_config()

    def _get_number(self, key: str, fallback: float, minimum: Optional[float] = None, above: Optional[float] = None) -> float:
        raw = self.get_setting(key, fallback)
        try:
            value = float(raw)
        except (TypeError, ValueError):
            logger.warning(f"Invalid value {raw!r} for {key}; using {fallback}")
            return fallback

        if minimum is not None and value < minimum:
            logger.warning(f"{key}={value} is below {minimum}; using {fallback}")
            return fallback
        if above is not None and value <= above:
            logger.warning(f"{key}={value} must be greater than {above}; using {fallback}")
            return fallback
        return value

    def get_list_settings(self) -> ListSettings:
        defaults = ListSettings()
        return ListSettings(
            spacing=self._get_number('list.spacing', defaults.spacing, minimum=0.0),
            padding=self._get_number('list.padding', defaults.padding, minimum=0.0),
            layout_duration_ms=self._get_number('list.layout_duration_ms', defaults.layout_duration_ms, minimum=0.0),
            drag_threshold=self._get_number('list.drag_threshold', defaults.drag_threshold, minimum=0.0),
            handle_width=self._get_number('list.handle_width', defaults.handle_width, minimum=0.0),
            row_height=self._get_number('list.row_height', defaults.row_height, above=0.0),
        )

    def get_autoscroll_settings(self) -> AutoscrollSettings:
        defaults = AutoscrollSettings()
        return AutoscrollSettings(
            trigger_distance=self._get_number('autoscroll.trigger_distance', defaults.trigger_distance, minimum=0.0),
            max_power=self._get_number('autoscroll.max_power', defaults.max_power, minimum=0.0),
            exp_base=self._get_number('autoscroll.exp_base', defaults.exp_base, above=1.0),
            interval_ms=int(self._get_number('autoscroll.interval_ms', defaults.interval_ms, above=0.0)),
        )
