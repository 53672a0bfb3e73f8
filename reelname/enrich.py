"""Replace locally parsed metadata with catalog data.

The catalog is anything implementing :class:`Catalog`; ``TMDBClient``
is the production one.  Every catalog failure degrades to the locally
parsed values, nothing here raises.
"""
import logging
from typing import Any, Protocol

from .episode import EpisodeParseError, parse_episode_string
from .models import EpisodeInfo, ParsedFile, TMDBMovie, TMDBSeason, TMDBSeries
from .tmdb import TMDBError

log = logging.getLogger(__name__)


class Catalog(Protocol):
    """Lookups the enrichment step needs from a metadata catalog."""

    def search_series(self, title: str, hints: dict[str, Any]) -> list[TMDBSeries]:
        ...

    def search_movie(self, title: str, hints: dict[str, Any]) -> list[TMDBMovie]:
        ...

    def get_episode_title(
        self, series_id: int, season: int, episode: int, hints: dict[str, Any]
    ) -> str | None:
        ...

    def get_season_list(self, series_id: int, hints: dict[str, Any]) -> list[TMDBSeason]:
        ...


def build_hints(parsed: ParsedFile) -> dict[str, Any]:
    """Query hints sent with every catalog call."""
    hints: dict[str, Any] = {"language": parsed.options.tmdb_language}
    if parsed.year:
        hints["year"] = parsed.year
        hints["first_air_date_year"] = parsed.year
    return hints


def enrich(parsed: ParsedFile, catalog: Catalog) -> None:
    """Look *parsed* up in *catalog* and overwrite its fields in place."""
    hints = build_hints(parsed)
    log.debug("Trying to locate %r (year %r) in the catalog", parsed.clean_name, parsed.year)

    if parsed.is_series:
        _enrich_series(parsed, catalog, hints)
    elif parsed.is_movie:
        _enrich_movie(parsed, catalog, hints)

    log.debug(
        "Received catalog results: external_id=%s external_name=%r",
        parsed.external_id, parsed.external_name,
    )

    if parsed.external_id and parsed.has_year_as_season:
        translate_year_season(parsed, catalog, hints)


def _enrich_movie(parsed: ParsedFile, catalog: Catalog, hints: dict[str, Any]) -> None:
    try:
        results = catalog.search_movie(parsed.clean_name, hints)
    except TMDBError as e:
        log.warning("Got an error from the catalog for %r: %s", parsed.clean_name, e)
        return

    if not results:
        log.debug("No results found in the catalog")
        return

    movie = results[0]
    parsed.external_id = movie.id
    parsed.external_name = movie.title
    parsed.clean_name = movie.title


def _enrich_series(parsed: ParsedFile, catalog: Catalog, hints: dict[str, Any]) -> None:
    try:
        results = catalog.search_series(parsed.clean_name, hints)
    except TMDBError as e:
        log.warning("Got an error from the catalog for %r: %s", parsed.clean_name, e)
        return

    if not results:
        log.debug("No results found in the catalog")
        return

    series = results[0]
    parsed.external_id = series.id
    parsed.external_name = series.name
    parsed.clean_name = series.name
    if series.first_air_year and not parsed.year:
        parsed.year = str(series.first_air_year)

    try:
        season = int(parsed.season)
    except ValueError:
        log.warning("Could not convert season %r to int, skipping episode titles", parsed.season)
        return

    try:
        info = parse_episode_string(parsed.episode)
    except EpisodeParseError as e:
        log.warning("Could not parse episode string %r: %s", parsed.episode, e)
        info = EpisodeInfo(start=1, end=1, is_range=False)

    titles = fetch_episode_titles(catalog, series.id, season, info, hints)
    if titles:
        parsed.episode_name = " & ".join(titles)


def fetch_episode_titles(
    catalog: Catalog,
    series_id: int,
    season: int,
    info: EpisodeInfo,
    hints: dict[str, Any],
) -> list[str]:
    """Fetch the title of every episode in *info*, skipping failed lookups."""
    titles = []
    for number in info.numbers():
        log.debug("Fetching episode S%02dE%02d of series %s", season, number, series_id)
        try:
            title = catalog.get_episode_title(series_id, season, number, hints)
        except TMDBError as e:
            log.debug("Could not fetch episode S%02dE%02d: %s", season, number, e)
            continue
        if title:
            titles.append(title)
    return titles


def translate_year_season(parsed: ParsedFile, catalog: Catalog, hints: dict[str, Any]) -> bool:
    """
    Replace a year used as season number with the catalog's season ordinal.

    Returns:
        True when the season was translated.
    """
    try:
        seasons = catalog.get_season_list(parsed.external_id, hints)
    except TMDBError as e:
        log.error("Could not fetch the season list for %s: %s", parsed.external_id, e)
        return False

    wanted = f"Season {parsed.season}"
    for season in seasons:
        if season.display_name == wanted:
            log.debug("Found %r, using season number %s", wanted, season.ordinal)
            parsed.season = f"{season.ordinal:02d}"
            return True

    log.warning("Could not translate season %s (a year) to a normal season", parsed.season)
    return False
