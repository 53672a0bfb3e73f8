"""Parser module for identifying media files from their names."""
import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from . import patterns
from .cleaner import clean_name
from .enrich import Catalog, enrich
from .episode import EpisodeParseError, parse_episode_string
from .models import Options, ParsedFile
from .patterns import (
    ADD_YEAR_TO_SERIES,
    MUSIC_EXTENSIONS,
    VIDEO_EXTENSIONS,
    Matcher,
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Matcher callbacks
# ---------------------------------------------------------------------------

def _apply_year_as_season(parsed: ParsedFile, match: re.Match) -> None:
    log.debug("Found year as season: %s", match.group(2))
    parsed.has_year_as_season = True
    parsed.season = match.group(2)


def _apply_year(parsed: ParsedFile, match: re.Match) -> bool:
    if parsed.season == match.group(2):
        log.warning(
            "Found a year that is the same as the season, ignoring the year "
            "to avoid looking up the wrong one"
        )
        return False
    parsed.year = match.group(2)
    return True


def _apply_season(parsed: ParsedFile, match: re.Match) -> bool:
    if parsed.season:
        log.debug("Already found a season earlier, skipping the normal season match")
        return False
    parsed.season = match.group(2).zfill(2)
    return True


def _apply_episode(parsed: ParsedFile, match: re.Match) -> None:
    token = match.group(0).upper().replace('X', 'E')
    try:
        parsed.episode = parse_episode_string(token).padded()
    except EpisodeParseError as e:
        log.debug("Could not parse episode string %r: %s", token, e)
        parsed.episode = match.group(1).zfill(2)


def _apply_episode_anime(parsed: ParsedFile, match: re.Match) -> bool:
    if parsed.episode:
        return False
    parsed.episode = match.group(1)
    parsed.season = "00"
    return True


def _apply_group_anime(parsed: ParsedFile, match: re.Match) -> None:
    parsed.anime_group = match.group(1)


def _apply_resolution(parsed: ParsedFile, match: re.Match) -> None:
    parsed.resolution = match.group(2)


def _apply_quality(parsed: ParsedFile, match: re.Match) -> None:
    parsed.quality = match.group(1)


def _apply_group(parsed: ParsedFile, match: re.Match) -> None:
    parsed.group = match.group(2).strip()


# Evaluated top to bottom; earlier matchers win over later ones.
MATCHERS: tuple[Matcher, ...] = (
    Matcher("year_as_season", patterns.YEAR_AS_SEASON, _apply_year_as_season),
    Matcher("year", patterns.YEAR, _apply_year),
    Matcher("season", patterns.SEASON, _apply_season, strip_group=1),
    Matcher("episode", patterns.EPISODE, _apply_episode, strip_group=0),
    Matcher("episode_anime", patterns.EPISODE_ANIME, _apply_episode_anime),
    Matcher("group_anime", patterns.GROUP_ANIME, _apply_group_anime, strip_group=1),
    Matcher("audio", patterns.AUDIO),
    Matcher("resolution", patterns.RESOLUTION, _apply_resolution),
    Matcher("quality", patterns.QUALITY, _apply_quality),
    Matcher("codec", patterns.CODEC),
    Matcher("group", patterns.GROUP, _apply_group),
    Matcher("proper", patterns.PROPER),
    Matcher("repack", patterns.REPACK),
    Matcher("hardcoded", patterns.HARDCODED),
    Matcher("extended", patterns.EXTENDED),
    Matcher("internal", patterns.INTERNAL),
)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def extract_fields(parsed: ParsedFile, matchers: Sequence[Matcher] = MATCHERS) -> None:
    """
    Run every matcher against the file name and copy hits into *parsed*.

    The names of the matchers whose hit was used are collected in
    ``parsed.matched``; the title cleaner only strips those.
    """
    for matcher in matchers:
        match = matcher.pattern.search(parsed.file_name)
        if not match:
            continue
        if matcher.apply is not None and matcher.apply(parsed, match) is False:
            continue
        parsed.matched.add(matcher.name)


def classify(parsed: ParsedFile, options: Options) -> bool:
    """
    Decide whether *parsed* is a movie or a series episode.

    Returns:
        True when a decision was made, False when nothing sensible was found.
    """
    if options.force_movie:
        parsed.is_movie = True
        parsed.episode = ""
        parsed.season = ""
        log.debug("Identified file as a movie (forced)")
    elif options.force_series:
        parsed.is_series = True
        log.debug("Identified file as a series (forced)")
    elif parsed.season:
        parsed.is_series = True
        log.debug("Identified file as an episode (has season)")
    elif parsed.year and not parsed.episode:
        parsed.is_movie = True
        log.debug("Identified file as a movie (has year, no episode)")
    elif parsed.year and parsed.episode:
        # A bare number next to a year is read as noise, not an episode.
        log.debug(
            "Identified file as a movie, clearing false positive episode %r (year %s)",
            parsed.episode, parsed.year,
        )
        parsed.is_movie = True
        parsed.episode = ""
        parsed.season = ""
    elif parsed.episode and parsed.season:
        parsed.is_series = True
        log.debug("Identified file as an episode (has both season and episode)")
    else:
        return False
    return True


def _identify(
    file_path: str,
    options: Options,
    matchers: Sequence[Matcher],
) -> tuple[ParsedFile, bool]:
    """Parse one candidate name. Returns the file and whether it was classified."""
    path = Path(file_path)
    parsed = ParsedFile(
        file_path=file_path,
        file_name=path.stem,
        extension=path.suffix,
        original_file=options.original_file,
        options=options,
    )
    log.debug("Checking file %s", parsed.file_name)

    extension = parsed.extension.lower()
    if extension not in VIDEO_EXTENSIONS:
        parsed.is_music = extension in MUSIC_EXTENSIONS
        return parsed, True

    extract_fields(parsed, matchers)
    log.debug(
        "Pre-parsing done: year=%r season=%r episode=%r",
        parsed.year, parsed.season, parsed.episode,
    )
    return parsed, classify(parsed, options)


def parse_file(
    file_path: str | Path,
    options: Options | None = None,
    catalog: Catalog | None = None,
    matchers: Sequence[Matcher] = MATCHERS,
) -> ParsedFile:
    """
    Identify a media file from its name.

    When nothing useful is found the name of the parent directory is tried
    once instead, keeping the real path in ``original_file``.

    Args:
        file_path: Path to the media file.
        options: Parse options; defaults are used when omitted.
        catalog: Metadata catalog consulted when ``options.lookup`` is set.
        matchers: Ordered matcher table.

    Returns:
        ParsedFile with the extracted metadata.
    """
    options = (options or Options()).with_defaults()
    log.debug("Parsing filename with options: %s", options)
    file_path = str(file_path)

    for _ in range(2):
        parsed, classified = _identify(file_path, options, matchers)
        if classified or options.original_file:
            break
        parent = Path(file_path).parent.name
        if not parent:
            break
        log.warning(
            "Nothing sensible found in %s, trying again with parent %s",
            parsed.file_name, parent,
        )
        options = replace(options, original_file=file_path)
        file_path = parent + parsed.extension

    if parsed.extension.lower() not in VIDEO_EXTENSIONS:
        return parsed

    parsed.clean_name = clean_name(
        parsed.file_name,
        matchers,
        is_movie=parsed.is_movie,
        is_series=parsed.is_series,
        is_anime=bool(parsed.anime_group),
        skip={m.name for m in matchers} - parsed.matched,
    )

    if options.lookup:
        if catalog is None:
            log.warning("Lookup is enabled but no catalog was supplied, skipping lookup")
        else:
            enrich(parsed, catalog)
    elif parsed.has_year_as_season:
        log.warning(
            "Found an episode that has a year as season but lookup is disabled, "
            "not translating it to a normal season"
        )

    if parsed.clean_name in ADD_YEAR_TO_SERIES and parsed.year:
        log.debug(
            "Series name %r is shared by several shows, adding year %s",
            parsed.clean_name, parsed.year,
        )
        parsed.clean_name = f"{parsed.clean_name} ({parsed.year})"

    parsed.clean_name = parsed.clean_name.replace(':', '')
    log.info("Done parsing filename: %s", parsed)
    return parsed
