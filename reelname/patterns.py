"""Static pattern tables used to identify media filenames.

Everything here is built once at import time and never mutated.  The
parser receives the matcher table by argument, so tests can substitute
their own.
"""
import re
from typing import Callable, NamedTuple

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_MOVIE_FORMAT = "{n} ({y})/{n} ({y}) {r}"
DEFAULT_SERIES_FORMAT = "{n}/Season {s}/{n} - S{s}E{e} - {x}{r}"
DEFAULT_TMDB_LANGUAGE = "en-US"

# ---------------------------------------------------------------------------
# Extensions
# ---------------------------------------------------------------------------

VIDEO_EXTENSIONS = frozenset({
    '.mp4', '.mkv', '.mov', '.avi', '.webm', '.wmv', '.mpg', '.mpeg', '.m2ts',
})

MUSIC_EXTENSIONS = frozenset({
    '.mp3', '.flac', '.3pg', '.aac', '.alac', '.opus', '.ogg', '.wav',
    '.wmv', '.ape',
})

COMPRESSED_EXTENSIONS = frozenset({'.rar', '.zip', '.tar', '.bz2', '.gz'})

# ---------------------------------------------------------------------------
# Title tables
# ---------------------------------------------------------------------------

# Series sharing a name with an older/newer show; the year is kept in the name.
ADD_YEAR_TO_SERIES = frozenset({
    "The Flash",
    "Doctor Who",
    "Magnum P.I.",
    "Charmed",
})

# Words kept lower-case by title-casing unless they open the title.
MINOR_WORDS = frozenset({
    "a", "an", "and", "as", "at", "but", "by", "for", "in", "of",
    "on", "or", "the", "to", "via",
})

# ---------------------------------------------------------------------------
# Matcher patterns
# ---------------------------------------------------------------------------

YEAR = re.compile(r'([\[\(]?((?:19[0-9]|20[012])[0-9])[\]\)]?)')
SEASON = re.compile(r'(s?([0-9]{1,2}))[EX]', re.IGNORECASE)
YEAR_AS_SEASON = re.compile(r'(s?([0-9]{4}))[EX]', re.IGNORECASE)
EPISODE = re.compile(r'[EX]([0-9]{2})(?:-?[EX]?([0-9]{2}))?', re.IGNORECASE)
EPISODE_ANIME = re.compile(r'[-_ p.](\d{2})[-_ (v\[](\d{2})?')
GROUP_ANIME = re.compile(r'^(\[\w*\])\s(.*)\s-')
AUDIO = re.compile(
    r'MP3|DD5\.?1|Dual[\- ]Audio|LiNE|DTS|AAC(?:\.?2\.0)?|AC3(?:\.5\.1)?'
)
RESOLUTION = re.compile(r'(([0-9]{3,4}p))', re.IGNORECASE)
QUALITY = re.compile(
    r'((?:PPV\.)?[HP]DTV|(?:HD)?CAM|B[DR]Rip|(?:HD-?)?TS'
    r'|(?:PPV )?WEB-?DL(?: DVDRip)?|HDRip|DVDRip|DVDRIP|CamRip|W[EB]BRip'
    r'|BluRay|DvDScr|hdtv|telesync)'
)
CODEC = re.compile(r'xvid|x264|x265|h265|h\.?264|h\.?265', re.IGNORECASE)
GROUP = re.compile(r'(- ?([^-]+(?:-=\{[^-]+-?$)?))$')
PROPER = re.compile(r'PROPER')
REPACK = re.compile(r'REPACK')
HARDCODED = re.compile(r'HC')
EXTENDED = re.compile(r'(EXTENDED(:?.CUT)?)')
INTERNAL = re.compile(r'INTERNAL', re.IGNORECASE)


class Matcher(NamedTuple):
    """One entry of the ordered matcher table.

    ``apply`` copies the match into a ParsedFile (``None`` when the
    matcher only exists to be stripped from the title) and returns
    ``False`` when it declines the match.  ``strip_group``
    names the capture group removed by the title cleaner; ``None``
    removes every occurrence of the whole pattern.
    """
    name: str
    pattern: re.Pattern
    apply: Callable | None = None
    strip_group: int | None = None


# Matchers whose spans carry no meaning in a movie title.
MOVIE_IGNORED = frozenset({"season", "episode", "episode_anime", "group_anime"})
