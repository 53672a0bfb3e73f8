"""Tests for configuration helpers."""
import logging

import pytest

from reelname import config


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    # load_dotenv writes to os.environ; make sure the key is restored afterwards.
    monkeypatch.setenv("TMDB_API_KEY", "")
    monkeypatch.delenv("TMDB_API_KEY")
    monkeypatch.chdir(tmp_path)
    (tmp_path / "home").mkdir()
    return tmp_path / "home"


def test_api_key_from_environment(home, monkeypatch):
    monkeypatch.setenv("TMDB_API_KEY", "from-env")
    assert config.load_api_key() == "from-env"


def test_api_key_from_dotenv(home, tmp_path):
    (tmp_path / ".env").write_text("TMDB_API_KEY=from-dotenv\n", encoding="utf-8")
    assert config.load_api_key() == "from-dotenv"


def test_api_key_from_home_dotenv(home):
    (home / ".env").write_text("TMDB_API_KEY=from-home\n", encoding="utf-8")
    assert config.load_api_key() == "from-home"


def test_api_key_missing(home):
    assert config.load_api_key() is None


def test_config_dir_is_created(home, monkeypatch):
    monkeypatch.setattr(config.sys, "platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / "xdg"))
    path = config.config_dir()
    assert path == home / "xdg" / "reelname"
    assert path.is_dir()


def test_default_folders(home):
    assert config.default_movie_folder() == home / "media" / "Movies"
    assert config.default_series_folder() == home / "media" / "TV Shows"


@pytest.mark.parametrize("value, expected", [
    ("120", 120_000_000),
    ("0", 0),
    ("lots", config.FALLBACK_MIN_FILE_SIZE),
    (None, config.FALLBACK_MIN_FILE_SIZE),
])
def test_min_file_size_bytes(value, expected):
    assert config.min_file_size_bytes(value) == expected


def test_min_file_size_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="reelname.config"):
        config.min_file_size_bytes("lots")
    assert "lots" in caplog.text
