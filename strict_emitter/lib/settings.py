"""Emitter settings loaded from a config file."""

from __future__ import annotations

import configparser
import logging
import os

logger = logging.getLogger(__name__)

SECTION = "EMITTER"


class EmitterSettings:
    """Settings for EventEmitter instances, read from config.ini under [EMITTER].

    Recognized options:
        max_listeners: positive integer, the per-event listener threshold.
        strict_max_listeners: boolean (true/false, yes/no, on/off, 1/0),
            raise instead of warn once the threshold would be exceeded.

    A missing file, section or option falls back to DEFAULTS. A value that
    is present but malformed raises ValueError naming the option.
    """

    DEFAULTS = {
        "max_listeners": 10,
        "strict_max_listeners": False,
    }

    def __init__(self, config_file_path: str = "config.ini") -> None:
        """Initialize with a config path (relative paths resolve against the cwd)."""
        self.config_file_path = os.path.abspath(config_file_path)
        self._config_obj = configparser.ConfigParser()
        # Silently ignores missing files
        self._config_obj.read(self.config_file_path, encoding="utf-8")

        logger.debug(f"Using emitter config file: {self.config_file_path}")

    def has(self, option: str) -> bool:
        return self._config_obj.has_option(SECTION, option)

    @property
    def max_listeners(self) -> int:
        if not self.has("max_listeners"):
            return self.DEFAULTS["max_listeners"]
        try:
            value = self._config_obj.getint(SECTION, "max_listeners")
        except ValueError:
            value = 0
        if value < 1:
            raise ValueError(self._invalid("max_listeners", "a positive integer"))
        return value

    @property
    def strict_max_listeners(self) -> bool:
        if not self.has("strict_max_listeners"):
            return self.DEFAULTS["strict_max_listeners"]
        try:
            return self._config_obj.getboolean(SECTION, "strict_max_listeners")
        except ValueError:
            raise ValueError(self._invalid("strict_max_listeners", "a boolean")) from None

    def _invalid(self, option: str, expected: str) -> str:
        raw = self._config_obj.get(SECTION, option)
        return f"[{SECTION}] {option} in {self.config_file_path} must be {expected}, got {raw!r}"
