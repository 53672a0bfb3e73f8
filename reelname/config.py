"""Configuration: API key discovery and default locations."""
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

log = logging.getLogger(__name__)

APP_NAME = "reelname"
LOG_FILE = "reelname.log"
DEFAULT_MIN_FILE_SIZE_MB = 120
FALLBACK_MIN_FILE_SIZE = 2 * 1000 * 1000  # bytes, used when the size flag is garbage


def config_dir() -> Path:
    """Return the platform config directory, creating it if needed."""
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home()))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    d = base / APP_NAME
    d.mkdir(parents=True, exist_ok=True)
    return d


def default_movie_folder() -> Path:
    return Path.home() / "media" / "Movies"


def default_series_folder() -> Path:
    return Path.home() / "media" / "TV Shows"


def default_music_folder() -> Path:
    return Path.home() / "media" / "Music"


def default_extract_folder() -> Path:
    return Path.home() / "media" / "extracted"


def load_api_key() -> str | None:
    """
    Load TMDB API key from environment or .env file.

    Priority:
    1. TMDB_API_KEY environment variable
    2. .env file in current directory
    3. .env file in user home directory

    Returns:
        API key string or None if not found
    """
    api_key = os.environ.get("TMDB_API_KEY")
    if api_key:
        return api_key

    for env_path in (Path.cwd() / ".env", Path.home() / ".env"):
        if env_path.exists():
            load_dotenv(env_path)
            api_key = os.environ.get("TMDB_API_KEY")
            if api_key:
                return api_key

    return None


def min_file_size_bytes(value: str) -> int:
    """Convert a size in MB given on the command line to bytes."""
    try:
        return int(value) * 1000 * 1000
    except (TypeError, ValueError):
        log.warning("Could not parse min file size %r, using the default", value)
        return FALLBACK_MIN_FILE_SIZE
