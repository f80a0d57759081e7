"""
Settings management for filterkit.

Reads run defaults from an optional INI file. Missing files and keys fall
back to built-in defaults; the file is never written by a run.
"""

import logging
from configparser import ConfigParser, Error as ConfigParserError
from pathlib import Path
from typing import Optional, Union

from ..core import RunConfig

logger = logging.getLogger(__name__)

DEFAULTS = RunConfig()


class Settings:
    """Manages run settings via an INI file."""

    # Default settings file location (current working directory)
    SETTINGS_FILE = Path("filterkit.ini")

    # Section and keys
    SECTION = "run"
    KEY_INPUT_PATH = "input_path"
    KEY_OUTPUT_DIR = "output_dir"
    KEY_QUALITY = "quality"
    KEY_CADENCE = "progress_cadence"
    KEY_PARALLEL = "parallel"
    KEY_STRICT = "strict"
    KEY_LOG_LEVEL = "log_level"

    DEFAULT_LOG_LEVEL = "WARNING"

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """Initialize settings from file, or defaults if there is none."""
        self.path = Path(path) if path is not None else self.SETTINGS_FILE
        self.config = ConfigParser()
        self._load()

    def _load(self) -> None:
        """Load settings from file if it exists."""
        if not self.path.exists():
            logger.debug("No settings file at %s, using defaults", self.path)
            return
        try:
            self.config.read(self.path, encoding="utf-8")
        except (ConfigParserError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            self.config = ConfigParser()

    def _get(self, key: str) -> Optional[str]:
        if not self.config.has_option(self.SECTION, key):
            return None
        value = self.config.get(self.SECTION, key).strip()
        return value if value else None

    def _get_typed(self, getter, key: str, default):
        if self._get(key) is None:
            return default
        try:
            return getter(self.SECTION, key)
        except ValueError:
            logger.warning(
                "Invalid value for %s in %s: %r, using %r",
                key, self.path, self.config.get(self.SECTION, key), default,
            )
            return default

    def get_input_path(self) -> str:
        """Get input image path (default: 'input.jpg')."""
        return self._get(self.KEY_INPUT_PATH) or DEFAULTS.input_path

    def get_output_dir(self) -> str:
        """Get output directory (default: current directory)."""
        return self._get(self.KEY_OUTPUT_DIR) or DEFAULTS.output_dir

    def get_quality(self) -> int:
        """Get output quality (default: 100)."""
        return self._get_typed(self.config.getint, self.KEY_QUALITY, DEFAULTS.quality)

    def get_progress_cadence(self) -> float:
        """Get progress cadence as a fraction of image height (default: 1/50)."""
        return self._get_typed(self.config.getfloat, self.KEY_CADENCE, DEFAULTS.progress_cadence)

    def get_parallel(self) -> bool:
        """Get whether filters run concurrently (default: True)."""
        return self._get_typed(self.config.getboolean, self.KEY_PARALLEL, DEFAULTS.parallel)

    def get_strict(self) -> bool:
        """Get whether filter failures change the exit code (default: False)."""
        return self._get_typed(self.config.getboolean, self.KEY_STRICT, DEFAULTS.strict)

    def get_log_level(self) -> str:
        """Get logging level name (default: 'WARNING')."""
        return (self._get(self.KEY_LOG_LEVEL) or self.DEFAULT_LOG_LEVEL).upper()

    def to_run_config(self, **overrides) -> RunConfig:
        """
        Build a RunConfig from these settings.

        Keyword overrides with a value of None are ignored, so parsed
        command-line options can be passed straight through.
        """
        values = {
            "input_path": self.get_input_path(),
            "output_dir": self.get_output_dir(),
            "quality": self.get_quality(),
            "progress_cadence": self.get_progress_cadence(),
            "parallel": self.get_parallel(),
            "strict": self.get_strict(),
        }
        for key, value in overrides.items():
            if key not in values:
                raise TypeError(f"Unknown setting: {key}")
            if value is not None:
                values[key] = value
        return RunConfig(**values)
