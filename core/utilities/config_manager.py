# core/utilities/config_manager.py
import json
import logging
from pathlib import Path
from typing import Optional
from config import PathConfig

logger = logging.getLogger(__name__)

class ConfigManager:
    LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

    DEFAULT_SETTINGS = {
        'bm25_k1': 1.2,      # Term frequency saturation
        'bm25_b': 0.75,      # Field length normalization strength
        'inbox_size': 1024,  # Pending requests the search worker will hold
        'log_level': 'WARNING'
    }

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = Path(config_path) if config_path else PathConfig.get_config_path()
        self.load()

    def load(self):
        try:
            if self.config_path.exists():
                with open(self.config_path, 'r') as f:
                    self.settings = json.load(f)
                if not isinstance(self.settings, dict):
                    raise ValueError("Config root must be an object")

                # Ensure new settings exist
                for key, default in self.DEFAULT_SETTINGS.items():
                    if key not in self.settings:
                        self.settings[key] = default
            else:
                self.settings = self.DEFAULT_SETTINGS.copy()
        except (json.JSONDecodeError, ValueError, IOError) as e:
            logger.warning(f"Ignoring unreadable config {self.config_path}: {e}")
            self.settings = self.DEFAULT_SETTINGS.copy()

    def save(self):
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w') as f:
            json.dump(self.settings, f, indent=2)

    def get(self, key, default=None):
        return self.settings.get(key, default)

    def set(self, key, value):
        self.settings[key] = value
        self.save()

    def _checked(self, key, convert, is_valid):
        """Return a stored setting, or its default when the stored value is unusable."""
        default = self.DEFAULT_SETTINGS[key]
        try:
            value = convert(self.get(key, default))
        except (TypeError, ValueError):
            value = None
        if value is None or not is_valid(value):
            logger.warning(f"Invalid {key} in {self.config_path}: {self.get(key)!r}, using {default!r}")
            return default
        return value

    def get_k1(self) -> float:
        return self._checked('bm25_k1', float, lambda v: 0.0 <= v < float('inf'))

    def set_k1(self, value: float):
        """Set BM25 k1 (must be non-negative)."""
        value = float(value)
        if value < 0:
            raise ValueError("k1 must be non-negative")
        self.set('bm25_k1', value)

    def get_b(self) -> float:
        return self._checked('bm25_b', float, lambda v: 0.0 <= v <= 1.0)

    def set_b(self, value: float):
        """Set BM25 b (0.0-1.0)."""
        value = float(value)
        if not 0.0 <= value <= 1.0:
            raise ValueError("b must be between 0.0 and 1.0")
        self.set('bm25_b', value)

    def get_inbox_size(self) -> int:
        return self._checked('inbox_size', int, lambda v: 1 <= v <= 1_000_000)

    def set_inbox_size(self, value: int):
        """Set worker inbox capacity (1-1M)."""
        value = max(1, min(1_000_000, int(value)))
        self.set('inbox_size', value)

    def get_log_level(self) -> str:
        level = str(self.get('log_level', 'WARNING')).upper()
        return level if level in self.LOG_LEVELS else 'WARNING'

    def set_log_level(self, value: str):
        value = str(value).upper()
        if value not in self.LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        self.set('log_level', value)

# Singleton access
config_manager = ConfigManager()
