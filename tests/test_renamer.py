"""Tests for the command line entry point."""
import logging
import zipfile

import pytest

from reelname import renamer

configure_logging = renamer.configure_logging


@pytest.fixture(autouse=True)
def isolated_logging(monkeypatch):
    # basicConfig(force=True) would drop the caplog handler.
    monkeypatch.setattr(renamer, "configure_logging", lambda *args, **kwargs: None)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def layout(tmp_path):
    downloads = tmp_path / "downloads"
    downloads.mkdir()
    return {
        "downloads": downloads,
        "movies": tmp_path / "movies",
        "series": tmp_path / "series",
        "extracted": tmp_path / "extracted",
        "cache": tmp_path,
    }


def _args(layout, *extra):
    return [
        "--filepath", str(layout["downloads"]),
        "--movie-folder", str(layout["movies"]),
        "--series-folder", str(layout["series"]),
        "--extract-path", str(layout["extracted"]),
        "--cache-dir", str(layout["cache"]),
        "--series-format", "{n} - S{s}E{e}",
        "--movie-format", "{n} ({y})",
        "--action", "copy",
        *extra,
    ]


def test_folder_run(layout):
    (layout["downloads"] / "Breaking.Bad.S01E05.mkv").write_bytes(b"ep")
    (layout["downloads"] / "Avatar (2009) 1080p.mkv").write_bytes(b"movie")
    (layout["downloads"] / "Artist - Song.mp3").write_bytes(b"song")

    code = renamer.main(_args(layout, "--no-tmdb-lookup", "--min-file-size", "0"))

    assert code == 0
    assert (layout["series"] / "Breaking Bad - S01E05.mkv").read_bytes() == b"ep"
    assert (layout["movies"] / "Avatar (2009).mkv").read_bytes() == b"movie"


def test_small_files_are_skipped(layout):
    (layout["downloads"] / "Breaking.Bad.S01E05.mkv").write_bytes(b"ep")

    assert renamer.main(_args(layout, "--no-tmdb-lookup")) == 0
    assert not layout["series"].exists()


def test_non_recursive(layout):
    nested = layout["downloads"] / "nested"
    nested.mkdir()
    (nested / "Breaking.Bad.S01E05.mkv").write_bytes(b"ep")

    renamer.main(_args(layout, "--no-tmdb-lookup", "--min-file-size", "0", "--no-recursive"))
    assert not layout["series"].exists()

    renamer.main(_args(layout, "--no-tmdb-lookup", "--min-file-size", "0"))
    assert (layout["series"] / "Breaking Bad - S01E05.mkv").exists()


def test_archive_is_extracted_and_scanned(layout):
    with zipfile.ZipFile(layout["downloads"] / "Show.S01E01.zip", "w") as zf:
        zf.writestr("Show.S01E01.mkv", b"ep")

    renamer.main(_args(layout, "--no-tmdb-lookup", "--min-file-size", "0", "--no-recursive"))

    assert (layout["extracted"] / "Show.S01E01" / "Show.S01E01.mkv").exists()
    assert (layout["series"] / "Show - S01E01.mkv").read_bytes() == b"ep"


def test_skip_extracting(layout):
    with zipfile.ZipFile(layout["downloads"] / "Show.S01E01.zip", "w") as zf:
        zf.writestr("Show.S01E01.mkv", b"ep")

    renamer.main(_args(layout, "--no-tmdb-lookup", "--min-file-size", "0", "--skip-extracting"))
    assert not layout["extracted"].exists()


def test_dry_run(layout):
    source = layout["downloads"] / "Breaking.Bad.S01E05.mkv"
    source.write_bytes(b"ep")

    renamer.main(_args(layout, "--no-tmdb-lookup", "--min-file-size", "0", "--dry-run"))
    assert not layout["series"].exists()
    assert source.exists()


def test_missing_api_key_continues_without_lookup(layout, monkeypatch, caplog):
    monkeypatch.setattr("reelname.tmdb.load_api_key", lambda: None)
    (layout["downloads"] / "Breaking.Bad.S01E05.mkv").write_bytes(b"ep")

    assert renamer.main(_args(layout, "--min-file-size", "0")) == 0
    assert (layout["series"] / "Breaking Bad - S01E05.mkv").exists()
    assert "Continuing without TMDB lookup" in caplog.text


def test_json_output(layout, capsys):
    (layout["downloads"] / "Breaking.Bad.S01E05.mkv").write_bytes(b"ep")

    renamer.main(_args(layout, "--no-tmdb-lookup", "--min-file-size", "0", "--json"))
    assert "JSON_RESULT:" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [
    [],
    ["--filepath", "/definitely/not/here"],
    ["--filepath", ".", "--force-movie", "--force-series"],
])
def test_invalid_arguments(argv):
    assert renamer.main(argv) == 1


def test_configure_logging_levels():
    configure_logging(verbose=True)
    assert logging.getLogger().level == logging.DEBUG
    configure_logging()
    assert logging.getLogger().level == logging.INFO
