"""TMDB API client module."""
import logging
import time
from typing import Any

import requests

from .cache import Cache
from .config import load_api_key
from .models import TMDBEpisode, TMDBMovie, TMDBSeason, TMDBSeries
from .patterns import DEFAULT_TMDB_LANGUAGE

log = logging.getLogger(__name__)

TMDB_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_TIMEOUT = 10
RATE_LIMIT_DELAY = 0.25  # 250ms between requests to avoid rate limiting

# Hint keys forwarded to TMDB as query parameters.
_HINT_PARAMS = ("language", "year", "first_air_date_year")


class TMDBError(Exception):
    """Exception raised for TMDB API errors."""
    pass


class TMDBNotFound(TMDBError):
    """The requested TMDB resource does not exist."""
    pass


def _year_of(date: str | None) -> int | None:
    if date and len(date) >= 4:
        try:
            return int(date[:4])
        except ValueError:
            return None
    return None


def _retry_after(value: str | None) -> int:
    """Seconds to wait from a Retry-After header; HTTP dates fall back to 1."""
    if value is None:
        return 1
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        log.debug("Unusable Retry-After header %r, waiting 1s", value)
        return 1


class TMDBClient:
    """Client for TMDB API."""

    def __init__(
        self,
        api_key: str | None = None,
        cache: Cache | None = None,
        language: str | None = None,
        session: requests.Session | None = None,
    ):
        """
        Initialize TMDB client.

        Args:
            api_key: TMDB API key. If not provided, attempts to load from env/.env.
            cache: Cache instance for storing lookups.
            language: TMDB API language tag (e.g. "en-US"), used when a
                      call carries no language hint.
            session: requests session to reuse connections with.

        Raises:
            TMDBError: If API key is not found
        """
        self.api_key = api_key or load_api_key()
        if not self.api_key:
            raise TMDBError(
                "TMDB API key not found.\n"
                "Set it using one of these methods:\n"
                "  1. Environment variable: export TMDB_API_KEY=your_key\n"
                "  2. Create a .env file with: TMDB_API_KEY=your_key\n"
                "Get your free API key at: https://www.themoviedb.org/settings/api"
            )
        self.cache = cache or Cache()
        self.language = language or DEFAULT_TMDB_LANGUAGE
        self.session = session or requests.Session()
        self._last_request_time = 0.0
        log.debug("Using TMDB language: %s", self.language)

    def _rate_limit(self) -> None:
        """Apply rate limiting between requests."""
        elapsed = time.time() - self._last_request_time
        if elapsed < RATE_LIMIT_DELAY:
            time.sleep(RATE_LIMIT_DELAY - elapsed)
        self._last_request_time = time.time()

    def _params(self, hints: dict[str, Any] | None) -> dict[str, Any]:
        params = {"language": self.language}
        for key in _HINT_PARAMS:
            if hints and hints.get(key):
                params[key] = hints[key]
        return params

    def _request(
        self,
        endpoint: str,
        params: dict | None = None,
        retries: int = 3
    ) -> dict:
        """
        Make a request to the TMDB API.

        Args:
            endpoint: API endpoint (e.g., '/search/movie')
            params: Query parameters
            retries: Number of retries on failure

        Returns:
            Decoded JSON response

        Raises:
            TMDBNotFound: On HTTP 404
            TMDBError: When every attempt failed
        """
        url = f"{TMDB_BASE_URL}{endpoint}"
        all_params = {"api_key": self.api_key, **(params or {})}

        # Log the request (hide API key)
        log_params = {k: v for k, v in all_params.items() if k != "api_key"}
        log.debug("GET %s params=%s", endpoint, log_params)

        last_error: Exception | None = None
        for attempt in range(retries):
            self._rate_limit()
            try:
                response = self.session.get(url, params=all_params, timeout=DEFAULT_TIMEOUT)
                log.debug("Response status: %s", response.status_code)

                if response.status_code == 429:  # Rate limited
                    retry_after = _retry_after(response.headers.get("Retry-After"))
                    log.debug("Rate limited, waiting %ss", retry_after)
                    time.sleep(retry_after)
                    continue
                if response.status_code == 404:
                    raise TMDBNotFound(f"{endpoint} not found")

                response.raise_for_status()
                return response.json()

            except requests.exceptions.RequestException as e:
                last_error = e
                log.debug("Request error: %s (attempt %d/%d)", e, attempt + 1, retries)
                if attempt < retries - 1:
                    time.sleep(1)

        raise TMDBError(f"Request to {endpoint} failed: {last_error or 'rate limited'}")

    def search_movie(self, title: str, hints: dict[str, Any] | None = None) -> list[TMDBMovie]:
        """
        Search for a movie on TMDB.

        Args:
            title: Movie title to search for
            hints: Optional ``language`` and ``year``

        Returns:
            Matching movies in TMDB's ranking order
        """
        params = self._params(hints)
        params.pop("first_air_date_year", None)
        key = f"{params.get('year', '')}:{params['language']}"

        cached = self.cache.get_movie_search(title, key)
        if cached is None:
            data = self._request("/search/movie", {"query": title, **params})
            cached = [
                {
                    "id": r["id"],
                    "title": r.get("title", ""),
                    "original_title": r.get("original_title", ""),
                    "year": _year_of(r.get("release_date")),
                    "overview": r.get("overview", ""),
                }
                for r in data.get("results", [])
            ]
            self.cache.set_movie_search(title, key, cached)

        return [TMDBMovie(**entry) for entry in cached]

    def search_series(self, title: str, hints: dict[str, Any] | None = None) -> list[TMDBSeries]:
        """
        Search for a TV series on TMDB.

        Args:
            title: Series title to search for
            hints: Optional ``language`` and ``first_air_date_year``

        Returns:
            Matching series in TMDB's ranking order
        """
        params = self._params(hints)
        params.pop("year", None)
        key = f"{params.get('first_air_date_year', '')}:{params['language']}"

        cached = self.cache.get_series_search(title, key)
        if cached is None:
            data = self._request("/search/tv", {"query": title, **params})
            cached = [
                {
                    "id": r["id"],
                    "name": r.get("name", ""),
                    "original_name": r.get("original_name", ""),
                    "first_air_year": _year_of(r.get("first_air_date")),
                    "overview": r.get("overview", ""),
                }
                for r in data.get("results", [])
            ]
            self.cache.set_series_search(title, key, cached)

        return [TMDBSeries(**entry) for entry in cached]

    def get_episode_details(
        self,
        series_id: int,
        season: int,
        episode: int,
        language: str | None = None,
    ) -> TMDBEpisode:
        """
        Get episode details from TMDB.

        Args:
            series_id: TMDB series ID
            season: Season number
            episode: Episode number
            language: Optional language override (e.g. "ja" or "en-US").

        Returns:
            The episode

        Raises:
            TMDBNotFound: If TMDB has no such episode
        """
        language = language or self.language
        cached = self.cache.get_episode(series_id, season, episode, language)
        if cached:
            return TMDBEpisode(**cached)

        endpoint = f"/tv/{series_id}/season/{season}/episode/{episode}"
        data = self._request(endpoint, {"language": language})

        ep = TMDBEpisode(
            series_id=series_id,
            season_number=season,
            episode_number=episode,
            name=data.get("name", ""),
            overview=data.get("overview", "")
        )
        self.cache.set_episode(series_id, season, episode, language, {
            "series_id": ep.series_id,
            "season_number": ep.season_number,
            "episode_number": ep.episode_number,
            "name": ep.name,
            "overview": ep.overview
        })
        return ep

    def get_episode_title(
        self,
        series_id: int,
        season: int,
        episode: int,
        hints: dict[str, Any] | None = None,
    ) -> str | None:
        """Return the episode's title, or None when TMDB has none."""
        language = self._params(hints)["language"]
        return self.get_episode_details(series_id, season, episode, language).name or None

    def get_season_list(
        self, series_id: int, hints: dict[str, Any] | None = None
    ) -> list[TMDBSeason]:
        """Return the seasons of a series as listed on its TMDB page."""
        language = self._params(hints)["language"]
        cached = self.cache.get_seasons(series_id, language)
        if cached is None:
            data = self._request(f"/tv/{series_id}", {"language": language})
            cached = [
                {"ordinal": s["season_number"], "display_name": s.get("name", "")}
                for s in data.get("seasons", [])
            ]
            self.cache.set_seasons(series_id, language, cached)

        return [TMDBSeason(**entry) for entry in cached]
