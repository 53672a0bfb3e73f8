"""
reelname - Media File Identifier

Identifies movie and series files from their names and renders
normalized target names, optionally using TMDB metadata.
"""
from .models import (
    Options,
    ParsedFile,
    EpisodeInfo,
    TMDBMovie,
    TMDBSeries,
    TMDBEpisode,
    TMDBSeason,
    ActionResult,
)
from .episode import parse_episode_string, EpisodeParseError
from .parser import parse_file, MATCHERS
from .cleaner import clean_name, proper_title_case
from .enrich import Catalog, enrich
from .formatter import target_name, render_template
from .tmdb import TMDBClient, TMDBError, TMDBNotFound
from .cache import Cache

__version__ = "0.9.1"
__all__ = [
    "Options",
    "ParsedFile",
    "EpisodeInfo",
    "TMDBMovie",
    "TMDBSeries",
    "TMDBEpisode",
    "TMDBSeason",
    "ActionResult",
    "parse_episode_string",
    "EpisodeParseError",
    "parse_file",
    "MATCHERS",
    "clean_name",
    "proper_title_case",
    "Catalog",
    "enrich",
    "target_name",
    "render_template",
    "TMDBClient",
    "TMDBError",
    "TMDBNotFound",
    "Cache",
]
