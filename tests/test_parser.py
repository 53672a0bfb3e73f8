"""Tests for filename identification."""
import logging

import pytest

from reelname.models import Options
from reelname.parser import MATCHERS, classify, parse_file
from reelname.models import ParsedFile

NO_LOOKUP = Options(lookup=False)


@pytest.mark.parametrize("path, season, episode, year, name", [
    ("The.Flash.2014.S06E07.720p.HDTV.x264-SVA.mkv", "06", "07", "2014", "The Flash"),
    ("Downton Abbey 5x06 HDTV x264-FoV [eztv].mkv", "05", "06", "", "Downton Abbey"),
    ("Breaking.Bad.S01E05.mkv", "01", "05", "", "Breaking Bad"),
    ("Spidey.S01E22E23.mkv", "01", "22-23", "", "Spidey"),
    ("Series.S02E10-E11.mkv", "02", "10-11", "", "Series"),
    ("Game of Thrones (2011) S08E06 720p.mkv", "08", "06", "2011", "Game of Thrones"),
    ("breaking.bad.s01e05.mkv", "01", "05", "", "Breaking Bad"),
])
def test_series(path, season, episode, year, name):
    parsed = parse_file(path, NO_LOOKUP)

    assert parsed.is_series
    assert not parsed.is_movie
    assert parsed.season == season
    assert parsed.episode == episode
    assert parsed.year == year
    assert name in parsed.clean_name


@pytest.mark.parametrize("path, year, name", [
    ("The Matrix Revolutions - 2003.mkv", "2003", "The Matrix Revolutions"),
    ("Avatar (2009) 1080p.mkv", "2009", "Avatar"),
    ("Inception.2010.1080p.BluRay.x264.mkv", "2010", "Inception"),
    ("Movie Title 2020.mkv", "2020", "Movie Title"),
])
def test_movies(path, year, name):
    parsed = parse_file(path, NO_LOOKUP)

    assert parsed.is_movie
    assert not parsed.is_series
    assert parsed.year == year
    assert parsed.clean_name == name
    assert parsed.episode == ""
    assert parsed.season == ""


def test_extracted_technical_fields():
    parsed = parse_file("The.Flash.2014.S06E07.720p.HDTV.x264-SVA.mkv", NO_LOOKUP)

    assert parsed.resolution == "720p"
    assert parsed.quality == "HDTV"
    assert parsed.group == "SVA"
    assert parsed.file_name == "The.Flash.2014.S06E07.720p.HDTV.x264-SVA"
    assert parsed.extension == ".mkv"


def test_shared_series_name_gets_year():
    parsed = parse_file("The.Flash.2014.S06E07.720p.HDTV.x264-SVA.mkv", NO_LOOKUP)
    assert parsed.clean_name == "The Flash (2014)"


def test_year_as_season_without_lookup(caplog):
    with caplog.at_level(logging.WARNING, logger="reelname.parser"):
        parsed = parse_file("Mythbusters.S2005E03.Brown.Note.mkv", NO_LOOKUP)

    assert parsed.is_series
    assert parsed.season == "2005"
    assert parsed.episode == "03"
    assert parsed.year == ""
    assert parsed.has_year_as_season
    assert parsed.clean_name == "Mythbusters"
    assert "lookup is disabled" in caplog.text


def test_year_and_episode_without_season_is_movie(caplog):
    with caplog.at_level(logging.DEBUG, logger="reelname.parser"):
        parsed = parse_file("Inception.2010.1080p.BluRay.x264.mkv", NO_LOOKUP)

    assert parsed.is_movie
    assert parsed.episode == ""
    assert "false positive" in caplog.text


def test_anime_release():
    parsed = parse_file("[Group] Series - 01 [1080p].mkv", NO_LOOKUP)

    assert parsed.is_series
    assert parsed.season == "00"
    assert parsed.episode == "01"
    assert parsed.anime_group == "[Group]"
    assert parsed.resolution == "1080p"
    assert parsed.clean_name == "Series"


def test_force_movie_clears_season_and_episode():
    parsed = parse_file("This.Is.A.Series.S01E22.mkv", Options(force_movie=True))

    assert parsed.is_movie
    assert not parsed.is_series
    assert parsed.season == ""
    assert parsed.episode == ""


@pytest.mark.parametrize("options, is_movie, is_series", [
    (Options(force_movie=True), True, False),
    (Options(force_series=True), False, True),
])
def test_force_flags(options, is_movie, is_series):
    parsed = parse_file("Ambiguous.File.mkv", options)

    assert parsed.is_movie == is_movie
    assert parsed.is_series == is_series
    assert parsed.clean_name == "Ambiguous File"


def test_dry_run_does_not_affect_parsing():
    parsed = parse_file("The.Flash.2014.S06E07.mkv", Options(dry_run=True))
    assert parsed.is_series
    assert not parsed.is_movie


def test_parent_directory_fallback():
    path = "path/to/The.Flash.2014.S06E07.720p.HDTV.x264-SVA/jioasdjioasd9012.mkv"
    parsed = parse_file(path, NO_LOOKUP)

    assert parsed.is_series
    assert parsed.season == "06"
    assert parsed.episode == "07"
    assert "The Flash" in parsed.clean_name
    assert parsed.original_file == path
    assert parsed.source_path() == path
    assert parsed.file_path == "The.Flash.2014.S06E07.720p.HDTV.x264-SVA.mkv"


def test_fallback_happens_only_once():
    parsed = parse_file("path/Nothing Here/jioasdjioasd9012.mkv", NO_LOOKUP)

    assert not parsed.is_movie
    assert not parsed.is_series
    assert parsed.original_file == "path/Nothing Here/jioasdjioasd9012.mkv"
    assert parsed.file_name == "Nothing Here"


def test_unclassified_without_parent():
    parsed = parse_file("The Godfather 1080p.mkv", NO_LOOKUP)

    assert not parsed.is_movie
    assert not parsed.is_series
    assert not parsed.is_music
    assert parsed.original_file == ""
    assert parsed.clean_name == "The Godfather 1080p"


def test_music_file():
    parsed = parse_file("Artist - Song.mp3", NO_LOOKUP)

    assert parsed.is_music
    assert not parsed.is_movie
    assert not parsed.is_series
    assert parsed.clean_name == ""


def test_unknown_extension():
    parsed = parse_file("path/to/The.Flash.S01E01/readme.txt", NO_LOOKUP)

    assert not parsed.is_music
    assert not parsed.is_movie
    assert not parsed.is_series
    assert parsed.original_file == ""


def test_extension_case_is_ignored():
    parsed = parse_file("Breaking.Bad.S01E05.MKV", NO_LOOKUP)
    assert parsed.is_series
    assert parsed.extension == ".MKV"


@pytest.mark.parametrize("path", [
    "Breaking.Bad.S01E05.mkv",
    "The Matrix Revolutions - 2003.mkv",
    "Spidey.S01E22E23.mkv",
])
def test_parsing_is_repeatable(path):
    first = parse_file(path, NO_LOOKUP)
    second = parse_file(path, NO_LOOKUP)
    assert first == second


@pytest.mark.parametrize("path, template_kind", [
    ("Breaking.Bad.S01E05.mkv", "series"),
    ("The Matrix Revolutions - 2003.mkv", "movie"),
])
def test_target_name_classifies_the_same(path, template_kind):
    options = Options(movie_format="{n} ({y})", series_format="{n} - S{s}E{e}")
    parsed = parse_file(path, options)
    again = parse_file(parsed.target_name(), options)

    assert (again.is_movie, again.is_series, again.is_music) == \
        (parsed.is_movie, parsed.is_series, parsed.is_music)
    assert again.clean_name == parsed.clean_name
    assert (template_kind == "series") == again.is_series


def test_substituted_matcher_table():
    matchers = tuple(m for m in MATCHERS if m.name != "year")
    parsed = parse_file("Movie Title 2020.mkv", NO_LOOKUP, matchers=matchers)
    assert parsed.year == ""
    assert not parsed.is_movie


def test_classify_keeps_classification_once_set():
    parsed = ParsedFile(file_path="x.mkv", season="01", episode="02")
    assert classify(parsed, Options())
    assert parsed.is_series
    assert not parsed.is_movie

    empty = ParsedFile(file_path="x.mkv")
    assert not classify(empty, Options())


@pytest.mark.parametrize("path, season, episode, name", [
    ("Area 51 5x03.mkv", "05", "03", "Area 51"),
    ("Room 104 1x05.mkv", "01", "05", "Room 104"),
])
def test_numbers_in_series_title_survive(path, season, episode, name):
    parsed = parse_file(path, NO_LOOKUP)

    assert parsed.is_series
    assert parsed.season == season
    assert parsed.episode == episode
    assert parsed.clean_name == name


def test_declined_matches_are_not_recorded():
    parsed = parse_file("Area 51 5x03.mkv", NO_LOOKUP)

    assert {"season", "episode"} <= parsed.matched
    assert "episode_anime" not in parsed.matched
