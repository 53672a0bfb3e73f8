"""Shared fixtures for the reelname tests."""
import pytest

from reelname.tmdb import TMDBError


class FakeCatalog:
    """In-memory catalog that records every call it receives."""

    def __init__(
        self,
        series=None,
        movies=None,
        episodes=None,
        seasons=None,
        fail=(),
    ):
        self.series = series or []
        self.movies = movies or []
        self.episodes = episodes or {}
        self.seasons = seasons or []
        self.fail = set(fail)
        self.calls = []

    def _check(self, name, *args):
        self.calls.append((name, *args))
        if name in self.fail or (name, *args[:-1]) in self.fail:
            raise TMDBError(f"{name} failed")

    def search_series(self, title, hints):
        self._check("search_series", title, hints)
        return list(self.series)

    def search_movie(self, title, hints):
        self._check("search_movie", title, hints)
        return list(self.movies)

    def get_episode_title(self, series_id, season, episode, hints):
        self._check("get_episode_title", series_id, season, episode, hints)
        return self.episodes.get((season, episode))

    def get_season_list(self, series_id, hints):
        self._check("get_season_list", series_id, hints)
        return list(self.seasons)


@pytest.fixture
def catalog_factory():
    return FakeCatalog
