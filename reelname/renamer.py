#!/usr/bin/env python3
"""
reelname - Media File Identifier

A CLI tool that identifies movie and series files by name and places them
in a library folder, optionally using TMDB metadata.
"""
import argparse
import logging
import sys
from pathlib import Path

from .actions import ACTIONS, act
from .cache import Cache
from .config import (
    LOG_FILE,
    DEFAULT_MIN_FILE_SIZE_MB,
    config_dir,
    default_extract_folder,
    default_movie_folder,
    default_music_folder,
    default_series_folder,
    min_file_size_bytes,
)
from .extract import extract_archive
from .models import Options
from .parser import parse_file
from .patterns import (
    COMPRESSED_EXTENSIONS,
    DEFAULT_MOVIE_FORMAT,
    DEFAULT_SERIES_FORMAT,
    DEFAULT_TMDB_LANGUAGE,
    VIDEO_EXTENSIONS,
)
from .tmdb import TMDBClient, TMDBError

log = logging.getLogger(__name__)


def configure_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Send log records to stdout and, optionally, to *log_file*."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


class App:
    """One identification run over a file or folder."""

    def __init__(
        self,
        options: Options,
        action: str = "symlink",
        movie_folder: Path | None = None,
        series_folder: Path | None = None,
        music_folder: Path | None = None,
        extract_path: Path | None = None,
        recursive: bool = True,
        skip_extracting: bool = False,
        min_file_size: str = str(DEFAULT_MIN_FILE_SIZE_MB),
        catalog: TMDBClient | None = None,
        json_output: bool = False,
        json_file: Path | None = None,
    ):
        self.options = options
        self.action = action
        self.movie_folder = movie_folder or default_movie_folder()
        self.series_folder = series_folder or default_series_folder()
        self.music_folder = music_folder or default_music_folder()
        self.extract_path = extract_path or default_extract_folder()
        self.recursive = recursive
        self.skip_extracting = skip_extracting
        self.min_file_size = min_file_size_bytes(min_file_size)
        self.catalog = catalog
        self.json_output = json_output
        self.json_file = json_file

    def start_run(self, path: Path) -> None:
        """Identify *path*, or every file below it when it is a folder."""
        path = Path(path)
        if not path.exists():
            log.error("Could not open %s", path)
            return

        if path.is_dir():
            if self.recursive:
                log.info("Scanning path '%s' recursively", path)
                files = sorted(p for p in path.rglob("*") if p.is_file())
            else:
                log.info("Scanning non-recursive path '%s'", path)
                files = sorted(p for p in path.iterdir() if p.is_file())
            for item in files:
                self.check_file(item)
        else:
            self.check_file(path)

    def _extract(self, archive: Path) -> None:
        log.info("Got a compressed file: %s", archive)
        try:
            extracted = extract_archive(archive, self.extract_path)
        except (ValueError, OSError) as e:
            log.warning("Received an error while looking through compressed data: %s", e)
            return
        if extracted is not None:
            recursive = self.recursive
            self.recursive = True
            try:
                self.start_run(extracted)
            finally:
                self.recursive = recursive

    def check_file(self, file_path: Path) -> None:
        """Identify a single file and place it in the library."""
        log.debug("Checking file %s", file_path)
        extension = file_path.suffix.lower()

        if extension in VIDEO_EXTENSIONS:
            size = file_path.stat().st_size
            if size < self.min_file_size:
                log.warning(
                    "File %s is smaller than the given limit (%d < %d bytes), not processing",
                    file_path, size, self.min_file_size,
                )
                return

        if extension in COMPRESSED_EXTENSIONS and not self.skip_extracting:
            self._extract(file_path)
            return

        parsed = parse_file(file_path, self.options, catalog=self.catalog)

        try:
            if parsed.is_movie:
                log.debug("File is a movie")
                act(parsed, self.movie_folder, self.action, self.json_output, self.json_file)
            elif parsed.is_series:
                log.debug("File is an episode")
                act(parsed, self.series_folder, self.action, self.json_output, self.json_file)
            elif parsed.is_music:
                log.debug(
                    "File is music, music is not supported yet so not placing it in %s",
                    self.music_folder,
                )
        except OSError as e:
            log.error("Received error while acting on %s: %s", file_path, e)

        log.debug("Done checking file %s", file_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reelname",
        description="Identify movie and series files and place them in a library."
    )
    parser.add_argument(
        "--filepath",
        type=Path,
        help="Path to scan (can be a folder or file)"
    )
    parser.add_argument(
        "--recursive",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Scan folders inside of other folders (default: True)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Don't actually modify any files"
    )
    parser.add_argument(
        "--action",
        choices=ACTIONS,
        default="symlink",
        help="How to act on files (default: symlink)"
    )
    parser.add_argument("--movie-folder", type=Path, default=default_movie_folder(),
                        help="Folder where movies should be placed")
    parser.add_argument("--series-folder", type=Path, default=default_series_folder(),
                        help="Folder where series should be placed")
    parser.add_argument("--music-folder", type=Path, default=default_music_folder(),
                        help="Folder where music should be placed")
    parser.add_argument(
        "--tmdb-lookup",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Use TMDB for better look-up and matching (default: True)"
    )
    parser.add_argument("--extract-path", type=Path, default=default_extract_folder(),
                        help="Path to extract archives to")
    parser.add_argument("--skip-extracting", action="store_true",
                        help="Disable automatic extraction")
    parser.add_argument(
        "--min-file-size",
        default=str(DEFAULT_MIN_FILE_SIZE_MB),
        metavar="MB",
        help="Minimal size in MB for a video file to be processed"
    )
    parser.add_argument("--movie-format", default=DEFAULT_MOVIE_FORMAT,
                        help="Format used to rename movies")
    parser.add_argument("--series-format", default=DEFAULT_SERIES_FORMAT,
                        help="Format used to rename series")
    parser.add_argument("--force-movie", action="store_true",
                        help="Force the path to be identified as a movie")
    parser.add_argument("--force-series", action="store_true",
                        help="Force the path to be identified as a series")
    parser.add_argument(
        "--language",
        default=DEFAULT_TMDB_LANGUAGE,
        help=f"Language for TMDB results (default: {DEFAULT_TMDB_LANGUAGE})"
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help="Directory for the TMDB cache file (default: config directory)"
    )
    parser.add_argument("--json", action="store_true",
                        help="Print a JSON result for every placed file")
    parser.add_argument("--json-file", type=Path, default=None,
                        help="Write the JSON result to this file instead of stdout")
    parser.add_argument("--log-to-file", action="store_true",
                        help="Write logs to a logfile as well as stdout")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug log information"
    )
    return parser


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    log_file = config_dir() / LOG_FILE if parsed_args.log_to_file else None
    configure_logging(parsed_args.verbose, log_file)

    if parsed_args.filepath is None:
        log.error("--filepath is a required argument")
        parser.print_help()
        return 1

    if parsed_args.force_movie and parsed_args.force_series:
        log.error("--force-movie and --force-series can't be used together")
        return 1

    if not parsed_args.filepath.exists():
        log.error("Path does not exist: %s", parsed_args.filepath)
        return 1

    if parsed_args.dry_run:
        log.warning("--dry-run is enabled, not touching files")

    catalog = None
    lookup = parsed_args.tmdb_lookup
    if lookup:
        try:
            catalog = TMDBClient(
                cache=Cache(parsed_args.cache_dir or config_dir()),
                language=parsed_args.language,
            )
        except TMDBError as e:
            log.error("%s", e)
            log.warning("Continuing without TMDB lookup")
            lookup = False

    options = Options(
        lookup=lookup,
        force_movie=parsed_args.force_movie,
        force_series=parsed_args.force_series,
        movie_format=parsed_args.movie_format,
        series_format=parsed_args.series_format,
        dry_run=parsed_args.dry_run,
        tmdb_language=parsed_args.language,
    )

    app = App(
        options,
        action=parsed_args.action,
        movie_folder=parsed_args.movie_folder,
        series_folder=parsed_args.series_folder,
        music_folder=parsed_args.music_folder,
        extract_path=parsed_args.extract_path,
        recursive=parsed_args.recursive,
        skip_extracting=parsed_args.skip_extracting,
        min_file_size=parsed_args.min_file_size,
        catalog=catalog,
        json_output=parsed_args.json or parsed_args.json_file is not None,
        json_file=parsed_args.json_file,
    )
    app.start_run(parsed_args.filepath)
    return 0


if __name__ == "__main__":
    sys.exit(main())
