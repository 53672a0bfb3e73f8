"""Data models for the reelname package."""
import logging
from dataclasses import dataclass, field, replace

from .patterns import (
    DEFAULT_MOVIE_FORMAT,
    DEFAULT_SERIES_FORMAT,
    DEFAULT_TMDB_LANGUAGE,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Options:
    """Caller-supplied configuration for a single parse."""
    lookup: bool = False
    force_movie: bool = False
    force_series: bool = False
    original_file: str = ""
    movie_format: str = DEFAULT_MOVIE_FORMAT
    series_format: str = DEFAULT_SERIES_FORMAT
    dry_run: bool = False
    tmdb_language: str = DEFAULT_TMDB_LANGUAGE

    def with_defaults(self) -> "Options":
        """Return a copy where empty templates and locale use the defaults."""
        return replace(
            self,
            movie_format=self.movie_format or DEFAULT_MOVIE_FORMAT,
            series_format=self.series_format or DEFAULT_SERIES_FORMAT,
            tmdb_language=self.tmdb_language or DEFAULT_TMDB_LANGUAGE,
        )

    def __str__(self) -> str:
        return (
            f"Lookup: {self.lookup}, ForceMovie: {self.force_movie}, "
            f"ForceSeries: {self.force_series}, OriginalFile: {self.original_file}, "
            f"MovieFormat: {self.movie_format}, SeriesFormat: {self.series_format}, "
            f"DryRun: {self.dry_run}, TMDBLanguage: {self.tmdb_language}"
        )


@dataclass(frozen=True)
class EpisodeInfo:
    """Episode number or inclusive episode range."""
    start: int
    end: int
    is_range: bool = False

    def first_episode_for_lookup(self) -> int:
        return self.start

    def episode_range(self) -> str:
        """Unpadded form used for display and lookups: "22" or "22-23"."""
        if self.is_range:
            return f"{self.start}-{self.end}"
        return f"{self.start}"

    def padded(self) -> str:
        """Zero-padded form used inside filenames: "05" or "22-23"."""
        if self.is_range:
            return f"{self.start:02d}-{self.end:02d}"
        return f"{self.start:02d}"

    def numbers(self) -> range:
        return range(self.start, self.end + 1)


@dataclass
class ParsedFile:
    """Metadata extracted from one media file path."""
    file_path: str
    file_name: str = ""
    extension: str = ""
    year: str = ""
    season: str = ""
    episode: str = ""
    episode_name: str = ""
    external_name: str = ""
    clean_name: str = ""
    quality: str = ""
    resolution: str = ""
    group: str = ""
    anime_group: str = ""
    is_series: bool = False
    is_movie: bool = False
    is_music: bool = False
    external_id: int = 0
    original_file: str = ""
    options: Options = field(default_factory=Options)
    has_year_as_season: bool = field(default=False, repr=False)
    # Names of the matchers that contributed to this result.
    matched: set[str] = field(default_factory=set, repr=False, compare=False)

    def __str__(self) -> str:
        return (
            f"Year: {self.year}, Season: {self.season}, Episode: {self.episode}, "
            f"EpisodeName: {self.episode_name}, Name: {self.clean_name}, "
            f"Movie: {self.is_movie}, Series: {self.is_series}"
        )

    def source_path(self) -> str:
        """Path of the file on disk, even when parsed through its parent folder."""
        return self.original_file or self.file_path

    def full_name(self) -> str:
        return self.file_name + self.extension

    def target_name(self) -> str:
        """Name the file should be placed under, extension included."""
        from .formatter import target_name
        return target_name(self)

    def episode_num(self) -> int:
        try:
            return int(self.episode)
        except ValueError as e:
            log.warning("Received error when converting episode to int: %s", e)
            return 0

    def season_num(self) -> int:
        try:
            return int(self.season)
        except ValueError as e:
            log.warning("Received error when converting season to int: %s", e)
            return 0


@dataclass
class TMDBMovie:
    """Represents a movie from TMDB."""
    id: int
    title: str
    original_title: str = ""
    year: int | None = None
    overview: str = ""


@dataclass
class TMDBSeries:
    """Represents a TV series from TMDB."""
    id: int
    name: str
    original_name: str = ""
    first_air_year: int | None = None
    overview: str = ""


@dataclass
class TMDBEpisode:
    """Represents an episode from TMDB."""
    series_id: int
    season_number: int
    episode_number: int
    name: str
    overview: str = ""


@dataclass
class TMDBSeason:
    """One entry of a series' season list."""
    ordinal: int
    display_name: str


@dataclass
class ActionResult:
    """Outcome of placing one parsed file, serialisable as JSON."""
    external_id: int
    external_name: str
    clean_name: str
    year: str
    season: str
    episode: str
    episode_name: str
    source: str
    target: str
    action: str
    is_movie: bool
    is_series: bool
    resolution: str
    quality: str

    @classmethod
    def from_parsed(
        cls, parsed: ParsedFile, source: str, target: str, action: str
    ) -> "ActionResult":
        return cls(
            external_id=parsed.external_id,
            external_name=parsed.external_name,
            clean_name=parsed.clean_name,
            year=parsed.year,
            season=parsed.season,
            episode=parsed.episode,
            episode_name=parsed.episode_name,
            source=source,
            target=target,
            action=action,
            is_movie=parsed.is_movie,
            is_series=parsed.is_series,
            resolution=parsed.resolution,
            quality=parsed.quality,
        )

    def to_dict(self) -> dict:
        """Return the camelCase mapping written to JSON output."""
        return {
            "externalID": self.external_id,
            "externalName": self.external_name,
            "cleanName": self.clean_name,
            "year": self.year,
            "season": self.season,
            "episode": self.episode,
            "episodeName": self.episode_name,
            "source": self.source,
            "target": self.target,
            "action": self.action,
            "isMovie": self.is_movie,
            "isSeries": self.is_series,
            "resolution": self.resolution,
            "quality": self.quality,
        }
