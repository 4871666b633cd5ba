"""
Pytest configuration and fixtures for chinook_reports tests.

Test Strategy:
    Report and seeding tests run against throwaway SQLite files built from the
    sample rows in db/setup_test_env.py. The sample database is built once per
    session and copied for every test, so tests may mutate it freely.

    MySQL code paths are covered with mocks of sqlalchemy.create_engine.
"""

import shutil

import pytest

from config.logging import setup_logging
from db.database import Database
from db.music_video import create_music_video_table, load_seed_videos
from db.setup_test_env import build_sample_database


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging(tmp_path_factory):
    """Log everything to a file for the session, INFO and up to the console."""
    log_file = tmp_path_factory.mktemp("logs") / "test.log"
    setup_logging(
        log_file=str(log_file),
        level="DEBUG",
        console=True,
        console_level="INFO",
    )
    yield log_file


@pytest.fixture(scope="session")
def sample_db_file(tmp_path_factory):
    """Path of a SQLite file holding the sample Chinook data."""
    path = tmp_path_factory.mktemp("template") / "chinook_sample.db"
    database = Database("", "", "", str(path), engine="sqlite")
    build_sample_database(database)
    database.close()
    return path


@pytest.fixture(scope="function")
def db_test(sample_db_file, tmp_path):
    """Fresh copy of the sample database. Fresh connection per test."""
    path = tmp_path / "chinook.db"
    shutil.copy(sample_db_file, path)
    database = Database("", "", "", str(path), engine="sqlite")
    database.connect()
    yield database
    if database.connection:
        database.close()


@pytest.fixture(scope="function")
def db_empty(tmp_path):
    """SQLite database with no tables at all."""
    database = Database("", "", "", str(tmp_path / "empty.db"), engine="sqlite")
    database.connect()
    yield database
    if database.connection:
        database.close()


@pytest.fixture(scope="function")
def db_seeded(db_test):
    """Sample database with the MusicVideo table created and seeded."""
    create_music_video_table(db_test)
    load_seed_videos(db_test)
    return db_test
