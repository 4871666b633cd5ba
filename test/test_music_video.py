"""
Tests for the MusicVideo table: schema setup, cascades and seeding.
"""

import pytest

from db import music_video as mv
from db.errors import (
    ConstraintViolation,
    ReferentialIntegrityError,
    SchemaError,
    UniqueConstraintViolation,
)


def video_rows(database):
    return database.execute_select_query(
        "SELECT track_id, video_director FROM MusicVideo ORDER BY track_id"
    )


class TestCreateMusicVideoTable:
    """Schema initializer."""

    def test_table_starts_empty(self, db_test):
        mv.create_music_video_table(db_test)
        assert db_test.table_exists("MusicVideo")
        assert video_rows(db_test) == []

    def test_recreate_drops_existing_rows(self, db_seeded):
        assert len(video_rows(db_seeded)) == 10

        mv.create_music_video_table(db_seeded)

        assert video_rows(db_seeded) == []

    def test_rejects_nonexistent_track(self, db_test):
        mv.create_music_video_table(db_test)
        with pytest.raises(ReferentialIntegrityError):
            db_test.execute_query(
                "INSERT INTO MusicVideo (track_id, video_director) VALUES (:id, :director)",
                {"id": 9999, "director": "Nobody"},
            )
        assert video_rows(db_test) == []

    def test_missing_tracks_table_raises_schema_error(self, db_empty):
        with pytest.raises(SchemaError):
            mv.create_music_video_table(db_empty)
        assert not db_empty.table_exists("MusicVideo")

    def test_missing_track_id_column_raises_schema_error(self, db_empty):
        db_empty.execute_query("CREATE TABLE tracks (Id INTEGER PRIMARY KEY, Name TEXT)")
        with pytest.raises(SchemaError):
            mv.create_music_video_table(db_empty)

    def test_director_is_required(self, db_test):
        mv.create_music_video_table(db_test)
        with pytest.raises(ConstraintViolation):
            db_test.execute_query(
                "INSERT INTO MusicVideo (track_id, video_director) VALUES (:id, :director)",
                {"id": 1, "director": None},
            )

    def test_director_must_not_be_empty(self, db_test):
        mv.create_music_video_table(db_test)
        with pytest.raises(ConstraintViolation):
            mv.add_music_video(db_test, "Voodoo", "")

    def test_deleting_track_deletes_video(self, db_seeded):
        # Princess of the Dawn (5) has a video and no invoice lines
        db_seeded.execute_query("DELETE FROM tracks WHERE TrackId = :id", {"id": 5})

        track_ids = [row[0] for row in video_rows(db_seeded)]
        assert 5 not in track_ids
        assert len(track_ids) == 9

    def test_renumbering_track_moves_video(self, db_seeded):
        db_seeded.execute_query(
            "UPDATE tracks SET TrackId = :new_id WHERE TrackId = :old_id", {"new_id": 600, "old_id": 6}
        )

        rows = dict(video_rows(db_seeded))
        assert 6 not in rows
        assert rows[600] == "Kei Tanaka"

    def test_drop_music_video_table(self, db_seeded):
        mv.drop_music_video_table(db_seeded)
        assert not db_seeded.table_exists("MusicVideo")


class TestLoadSeedVideos:
    """Seed loader and single name-lookup inserts."""

    def test_each_seed_name_gets_one_video(self, db_test):
        mv.create_music_video_table(db_test)

        stats = mv.load_seed_videos(db_test)

        assert stats == {"inserted": 10, "missing": []}
        videos = {name: director for _, name, director in mv.get_music_videos(db_test)}
        assert videos == dict(mv.SEED_VIDEOS)

    def test_rerun_raises_unique_violation(self, db_seeded):
        with pytest.raises(UniqueConstraintViolation):
            mv.load_seed_videos(db_seeded)
        assert len(video_rows(db_seeded)) == 10

    def test_rerun_fails_on_first_repeated_name(self, db_test):
        mv.create_music_video_table(db_test)
        mv.add_music_video(db_test, "Snowballed", "Lucia Moretti")

        with pytest.raises(UniqueConstraintViolation):
            mv.load_seed_videos(db_test)

        # Everything before Snowballed went in, nothing after it
        names = {name for _, name, _ in mv.get_music_videos(db_test)}
        assert "Inject The Venom" in names
        assert "Evil Walks" not in names

    def test_unknown_name_inserts_nothing(self, db_test):
        mv.create_music_video_table(db_test)

        stats = mv.load_seed_videos(db_test, [("No Such Song", "Someone"), ("Voodoo", "Jordan Rivers")])

        assert stats == {"inserted": 1, "missing": ["No Such Song"]}

    def test_name_match_is_exact(self, db_test):
        mv.create_music_video_table(db_test)
        assert mv.add_music_video(db_test, "voodoo", "Jordan Rivers") == 0
        assert mv.add_music_video(db_test, "Voodoo ", "Jordan Rivers") == 0

    def test_add_voodoo_video(self, db_seeded):
        track_name, director = mv.EXTRA_VIDEO

        assert mv.add_music_video(db_seeded, track_name, director) == 1

        assert (11, "Voodoo", "Jordan Rivers") in mv.get_music_videos(db_seeded)

    def test_ambiguous_name_gets_video_for_every_match(self, db_test):
        db_test.execute_query(
            "INSERT INTO tracks (TrackId, Name, Milliseconds, UnitPrice) VALUES (:id, :name, :ms, :price)",
            {"id": 99, "name": "Voodoo", "ms": 200000, "price": 0.99},
        )
        mv.create_music_video_table(db_test)

        assert mv.add_music_video(db_test, "Voodoo", "Jordan Rivers") == 2

        assert [row[0] for row in video_rows(db_test)] == [11, 99]


class TestReadSeedCsv:
    """Operator-supplied seed lists."""

    def test_reads_pairs_and_skips_incomplete_rows(self, tmp_path):
        csv_file = tmp_path / "videos.csv"
        csv_file.write_text(
            "track_name,director\n"
            "Voodoo,Jordan Rivers\n"
            "Hello,\n"
            "\"Let's Get It Up\",Maya Desai\n",
            encoding="utf-8",
        )

        videos = mv.read_seed_csv(csv_file)

        assert videos == [("Voodoo", "Jordan Rivers"), ("Let's Get It Up", "Maya Desai")]

    def test_values_are_not_trimmed(self, tmp_path):
        csv_file = tmp_path / "videos.csv"
        csv_file.write_text("track_name,director\n Voodoo ,Jordan Rivers \n", encoding="utf-8")

        assert mv.read_seed_csv(csv_file) == [(" Voodoo ", "Jordan Rivers ")]

    def test_whitespace_only_values_are_skipped(self, tmp_path):
        csv_file = tmp_path / "videos.csv"
        csv_file.write_text("track_name,director\n   ,Jordan Rivers\n", encoding="utf-8")

        assert mv.read_seed_csv(csv_file) == []

    @pytest.mark.parametrize(
        "header, missing",
        [
            ("name,director", "track_name"),
            ("track_name,directed_by", "director"),
            ("", "track_name, director"),
        ],
    )
    def test_missing_header_raises(self, tmp_path, header, missing):
        csv_file = tmp_path / "videos.csv"
        csv_file.write_text(f"{header}\nVoodoo,Jordan Rivers\n", encoding="utf-8")

        with pytest.raises(ValueError, match=missing):
            mv.read_seed_csv(csv_file)
