# config.py
import tomllib
from pathlib import Path

def _get_version():
    """Read the package version from pyproject.toml"""
    try:
        pyproject_path = Path(__file__).parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        return data["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return "unknown"  # Fallback if pyproject.toml is missing

VERSION = _get_version()
FRAME_WIDTH = 70 # For CLI UI headings

# Track fields that are indexed and searched
SEARCH_FIELDS = ("album", "artist", "title")

class PathConfig:
    BASE_DIR = Path(__file__).parent
    DATA = BASE_DIR / "data"

    @classmethod
    def get_config_path(cls):
        return cls.DATA / "config.json"
