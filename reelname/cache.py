"""On-disk JSON cache for catalog lookups.

Each kind of lookup lives in its own section of a single JSON document.
Keys are built from the lookup arguments; string parts are lower-cased
so that "The Flash" and "the flash" share an entry.
"""
import json
import logging
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

CACHE_FILE = ".reelname_cache.json"

SECTIONS = ("movie_searches", "series_searches", "episodes", "seasons")


def _key(*parts: Any) -> str:
    return ":".join(
        part.lower().strip() if isinstance(part, str) else str(part)
        for part in parts
    )


class Cache:
    """Local JSON cache for TMDB lookups."""

    def __init__(self, cache_dir: Path | None = None):
        """
        Open (or start) the cache file in *cache_dir*.

        Args:
            cache_dir: Directory holding the cache file. Defaults to the
                       current directory.
        """
        self.cache_path = Path(cache_dir or Path.cwd()) / CACHE_FILE
        self._data = self._read()

    @staticmethod
    def _blank() -> dict[str, dict]:
        return {section: {} for section in SECTIONS}

    def _read(self) -> dict[str, dict]:
        data = self._blank()
        if not self.cache_path.exists():
            return data
        try:
            stored = json.loads(self.cache_path.read_text(encoding='utf-8'))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Ignoring unreadable cache %s: %s", self.cache_path, e)
            return data
        if not isinstance(stored, dict):
            log.warning("Ignoring cache %s, expected a JSON object", self.cache_path)
            return data
        for section in SECTIONS:
            if isinstance(stored.get(section), dict):
                data[section] = stored[section]
        return data

    def _write(self) -> None:
        try:
            self.cache_path.write_text(
                json.dumps(self._data, indent=2, ensure_ascii=False),
                encoding='utf-8',
            )
        except OSError as e:
            log.warning("Could not write cache %s: %s", self.cache_path, e)

    def _lookup(self, section: str, key: str) -> Any:
        return self._data[section].get(key)

    def _store(self, section: str, key: str, value: Any) -> None:
        self._data[section][key] = value
        self._write()

    def get_movie_search(self, title: str, qualifier: str = "") -> list[dict] | None:
        """
        Return cached movie search results.

        Args:
            title: The search title
            qualifier: Year/language part of the key

        Returns:
            The cached result list (possibly empty), or None on a miss
        """
        return self._lookup("movie_searches", _key(title, qualifier))

    def set_movie_search(self, title: str, qualifier: str, results: list[dict]) -> None:
        self._store("movie_searches", _key(title, qualifier), results)

    def get_series_search(self, title: str, qualifier: str = "") -> list[dict] | None:
        return self._lookup("series_searches", _key(title, qualifier))

    def set_series_search(self, title: str, qualifier: str, results: list[dict]) -> None:
        self._store("series_searches", _key(title, qualifier), results)

    def get_episode(
        self, series_id: int, season: int, episode: int, language: str = ""
    ) -> dict | None:
        return self._lookup("episodes", _key(series_id, f"s{season}e{episode}", language))

    def set_episode(
        self, series_id: int, season: int, episode: int, language: str, result: dict
    ) -> None:
        self._store("episodes", _key(series_id, f"s{season}e{episode}", language), result)

    def get_seasons(self, series_id: int, language: str = "") -> list[dict] | None:
        return self._lookup("seasons", _key(series_id, language))

    def set_seasons(self, series_id: int, language: str, seasons: list[dict]) -> None:
        self._store("seasons", _key(series_id, language), seasons)

    def clear(self) -> None:
        """Drop every cached lookup."""
        self._data = self._blank()
        self._write()
