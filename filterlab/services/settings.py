"""
Settings management for Filter Lab.

Handles persistent storage of filter preferences in settings.ini.
"""

import logging
from configparser import ConfigParser, Error as ConfigError
from pathlib import Path
from typing import Any, Dict, Optional, Union


logger = logging.getLogger(__name__)


class Settings:
    """Manages filter settings via settings.ini."""

    # Settings file location (project root)
    SETTINGS_FILE = Path(__file__).parent.parent.parent / "settings.ini"

    # Section and keys
    SECTION = "filters"
    KEY_BRIGHTNESS_OFFSET = "brightness_offset"
    KEY_SEPIA_DEPTH = "sepia_depth"
    KEY_GAUSSIAN_RADIUS = "gaussian_radius"
    KEY_GAUSSIAN_SIGMA = "gaussian_sigma"
    KEY_LAST_FILTER = "last_filter"

    DEFAULTS = {
        KEY_BRIGHTNESS_OFFSET: "20",
        KEY_SEPIA_DEPTH: "40",
        KEY_GAUSSIAN_RADIUS: "3",
        KEY_GAUSSIAN_SIGMA: "2.0",
        KEY_LAST_FILTER: "invert",
    }

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """Initialize settings from file or create defaults."""
        self.path = Path(path) if path is not None else self.SETTINGS_FILE
        self.config = ConfigParser()
        self._load()

    def _load(self) -> None:
        """Load settings from file or create defaults."""
        if self.path.exists():
            try:
                self.config.read(self.path)
            except ConfigError as e:
                logger.warning("Unreadable settings file %s, restoring defaults: %s", self.path, e)
                self.config = ConfigParser()
        if not self.config.has_section(self.SECTION):
            self.config.add_section(self.SECTION)
        missing = False
        for key, value in self.DEFAULTS.items():
            if not self.config.has_option(self.SECTION, key):
                self.config.set(self.SECTION, key, value)
                missing = True
        if missing:
            self._save()

    def _save(self) -> None:
        """Save settings to file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            self.config.write(f)

    def _set(self, key: str, value: Any) -> None:
        self.config.set(self.SECTION, key, str(value))
        self._save()

    def _get_int(self, key: str) -> int:
        try:
            return self.config.getint(self.SECTION, key)
        except (ConfigError, ValueError):
            logger.warning("Invalid value for %s in %s, using default", key, self.path)
            return int(self.DEFAULTS[key])

    def _get_float(self, key: str) -> float:
        try:
            return self.config.getfloat(self.SECTION, key)
        except (ConfigError, ValueError):
            logger.warning("Invalid value for %s in %s, using default", key, self.path)
            return float(self.DEFAULTS[key])

    def get_brightness_offset(self) -> int:
        """Get brightness offset (default: 20)."""
        return self._get_int(self.KEY_BRIGHTNESS_OFFSET)

    def set_brightness_offset(self, offset: int) -> None:
        self._set(self.KEY_BRIGHTNESS_OFFSET, int(offset))

    def get_sepia_depth(self) -> int:
        """Get sepia depth k (default: 40)."""
        return self._get_int(self.KEY_SEPIA_DEPTH)

    def set_sepia_depth(self, depth: int) -> None:
        self._set(self.KEY_SEPIA_DEPTH, int(depth))

    def get_gaussian_radius(self) -> int:
        """Get gaussian radius (default: 3)."""
        return self._get_int(self.KEY_GAUSSIAN_RADIUS)

    def set_gaussian_radius(self, radius: int) -> None:
        self._set(self.KEY_GAUSSIAN_RADIUS, int(radius))

    def get_gaussian_sigma(self) -> float:
        """Get gaussian sigma (default: 2.0)."""
        return self._get_float(self.KEY_GAUSSIAN_SIGMA)

    def set_gaussian_sigma(self, sigma: float) -> None:
        self._set(self.KEY_GAUSSIAN_SIGMA, float(sigma))

    def get_last_filter(self) -> str:
        """Get id of the last filter used (default: 'invert')."""
        return self.config.get(self.SECTION, self.KEY_LAST_FILTER) or self.DEFAULTS[self.KEY_LAST_FILTER]

    def set_last_filter(self, filter_id: str) -> None:
        self._set(self.KEY_LAST_FILTER, filter_id)

    def filter_params(self, filter_id: str) -> Dict[str, Any]:
        """Keyword arguments for create_filter() from stored preferences."""
        if filter_id == "brightness":
            return {"offset": self.get_brightness_offset()}
        if filter_id == "sepia":
            return {"depth": self.get_sepia_depth()}
        if filter_id == "gaussian":
            return {
                "radius": self.get_gaussian_radius(),
                "sigma": self.get_gaussian_sigma(),
            }
        return {}
