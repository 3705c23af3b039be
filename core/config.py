"""
Configuration management for the accessibility interaction engine.
Handles live-region timing, id generation, keyboard and motion preferences.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from core.constants import (
    ANNOUNCEMENT_CLEAR_MAX_MS,
    ANNOUNCEMENT_CLEAR_MIN_MS,
    ANNOUNCEMENT_CLEAR_MS,
    ID_SUFFIX_LENGTH,
    ID_SUFFIX_MAX_LENGTH,
    PRIORITY_ASSERTIVE,
    PRIORITY_POLITE,
)

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".a11y_engine"
VALID_ORIENTATIONS = ("horizontal", "vertical")


def get_config_dir() -> Path:
    """
    Get the engine config directory.

    Returns:
        Path to the config directory (~/.a11y_engine/)
    """
    config_dir = Path.home() / CONFIG_DIR_NAME
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


class EngineConfig:
    """
    Engine configuration with JSON persistence.

    Key ideas:
    - Every controller works without a config (built-in constants apply);
      hosts pass one in to tune timing or keyboard behavior.
    - The backing store is a JSON file on disk, merged over defaults so
      newly added keys always appear.
    - Setters apply guardrails and save immediately.
    """

    # NOTE: Treated as immutable. Use _default_config_deepcopy() for a
    # fresh copy of defaults.
    DEFAULT_CONFIG: Dict[str, Any] = {
        "announcer": {
            "clear_delay_ms": ANNOUNCEMENT_CLEAR_MS,
            "default_priority": PRIORITY_POLITE,
        },
        "ids": {
            "suffix_length": ID_SUFFIX_LENGTH,
        },
        "keyboard": {
            "roving_orientation": "horizontal",
            # Extra key identifier aliases, e.g. {"Del": "Delete"}
            "key_aliases": {},
        },
        "accessibility": {
            "reduce_animations": False,  # Reduce motion for accessibility
        },
    }

    def __init__(self, config_file: Optional[Path] = None) -> None:
        """
        Initialize configuration.

        Args:
            config_file: Optional path to config JSON file. When omitted,
                         ~/.a11y_engine/config.json is used.
        """
        self.config_file: Path = self._resolve_config_path(config_file)
        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        self.data: Dict[str, Any] = self._load()
        logger.info(f"Config loaded from {self.config_file}")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_config_path(config_file: Optional[Path]) -> Path:
        if config_file is not None:
            return config_file
        return get_config_dir() / "config.json"

    def _load(self) -> Dict[str, Any]:
        """Load configuration from JSON file, merging with defaults."""
        if not self.config_file.exists():
            logger.info("No config file found, using defaults")
            return self._default_config_deepcopy()

        try:
            with self.config_file.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning(f"Failed to load config: {exc}. Using defaults.")
            return self._default_config_deepcopy()

        if not isinstance(raw, dict):
            logger.warning("Config file does not hold an object. Using defaults.")
            return self._default_config_deepcopy()

        return self._merge_with_defaults(raw)

    @classmethod
    def _default_config_deepcopy(cls) -> Dict[str, Any]:
        return copy.deepcopy(cls.DEFAULT_CONFIG)

    def _merge_with_defaults(self, user_config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge user config with defaults to handle new keys.

        Nested section dictionaries are merged so new keys under e.g.
        "announcer" appear without discarding user-provided values.
        """
        merged = self._default_config_deepcopy()

        for key, value in user_config.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key].update(value)
            else:
                merged[key] = value

        return merged

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.data.get(name)
        return section if isinstance(section, dict) else {}

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Persist the current configuration to the config file."""
        try:
            with self.config_file.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2, ensure_ascii=False)
            logger.info("Configuration saved")
        except OSError as exc:
            logger.error(f"Failed to save config: {exc}")

    # ------------------------------------------------------------------
    # Live Announcer
    # ------------------------------------------------------------------

    @property
    def announcement_clear_ms(self) -> int:
        """Delay before an announcement is cleared (100 to 10000 ms)."""
        value = self._section("announcer").get("clear_delay_ms", ANNOUNCEMENT_CLEAR_MS)
        try:
            return max(ANNOUNCEMENT_CLEAR_MIN_MS, min(ANNOUNCEMENT_CLEAR_MAX_MS, int(value)))
        except (TypeError, ValueError):
            logger.warning(f"Invalid clear_delay_ms {value!r}, using {ANNOUNCEMENT_CLEAR_MS}")
            return ANNOUNCEMENT_CLEAR_MS

    @announcement_clear_ms.setter
    def announcement_clear_ms(self, value: int) -> None:
        clamped = max(ANNOUNCEMENT_CLEAR_MIN_MS, min(ANNOUNCEMENT_CLEAR_MAX_MS, int(value)))
        self.data.setdefault("announcer", {})["clear_delay_ms"] = clamped
        self.save()

    @property
    def default_priority(self) -> str:
        """Priority used when announce() is called without one."""
        value = self._section("announcer").get("default_priority", PRIORITY_POLITE)
        if value not in (PRIORITY_POLITE, PRIORITY_ASSERTIVE):
            logger.warning(f"Unknown announcement priority {value!r}, using polite")
            return PRIORITY_POLITE
        return value

    @default_priority.setter
    def default_priority(self, value: str) -> None:
        if value not in (PRIORITY_POLITE, PRIORITY_ASSERTIVE):
            raise ValueError(f"Unknown announcement priority: {value}")
        self.data.setdefault("announcer", {})["default_priority"] = value
        self.save()

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------

    @property
    def id_suffix_length(self) -> int:
        """Random suffix length for generated ids (9 to 32)."""
        value = self._section("ids").get("suffix_length", ID_SUFFIX_LENGTH)
        try:
            return max(ID_SUFFIX_LENGTH, min(ID_SUFFIX_MAX_LENGTH, int(value)))
        except (TypeError, ValueError):
            return ID_SUFFIX_LENGTH

    @id_suffix_length.setter
    def id_suffix_length(self, value: int) -> None:
        self.data.setdefault("ids", {})["suffix_length"] = max(
            ID_SUFFIX_LENGTH, min(ID_SUFFIX_MAX_LENGTH, int(value))
        )
        self.save()

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    @property
    def roving_orientation(self) -> str:
        """Default orientation for roving focus controllers."""
        value = self._section("keyboard").get("roving_orientation", "horizontal")
        if value not in VALID_ORIENTATIONS:
            logger.warning(f"Unknown orientation {value!r}, using horizontal")
            return "horizontal"
        return value

    @roving_orientation.setter
    def roving_orientation(self, value: str) -> None:
        if value not in VALID_ORIENTATIONS:
            raise ValueError(f"Unknown orientation: {value}")
        self.data.setdefault("keyboard", {})["roving_orientation"] = value
        self.save()

    @property
    def key_aliases(self) -> Dict[str, str]:
        """User-defined key identifier aliases (alias -> canonical key)."""
        aliases = self._section("keyboard").get("key_aliases", {})
        if not isinstance(aliases, dict):
            return {}
        return {str(k): str(v) for k, v in aliases.items()}

    def set_key_alias(self, alias: str, key: str) -> None:
        self.data.setdefault("keyboard", {}).setdefault("key_aliases", {})[alias] = key
        self.save()

    # ------------------------------------------------------------------
    # Accessibility Preferences
    # ------------------------------------------------------------------

    @property
    def reduce_animations(self) -> bool:
        """Whether to reduce animations for accessibility."""
        return bool(self._section("accessibility").get("reduce_animations", False))

    @reduce_animations.setter
    def reduce_animations(self, value: bool) -> None:
        self.data.setdefault("accessibility", {})["reduce_animations"] = bool(value)
        self.save()
