import csv

from loguru import logger

from . import queries
from .database import Database
from .errors import SchemaError

# (track name, director) pairs loaded by load_seed_videos
SEED_VIDEOS = [
    ("For Those About To Rock (We Salute You)", "Hannah Park"),
    ("Balls to the Wall", "Diego Alvarez"),
    ("Fast As a Shark", "Amina Khan"),
    ("Restless and Wild", "Noah Bennett"),
    ("Princess of the Dawn", "Sofia Ionescu"),
    ("Put The Finger On You", "Kei Tanaka"),
    ("Let's Get It Up", "Maya Desai"),
    ("Inject The Venom", "Owen Clarke"),
    ("Snowballed", "Lucia Moretti"),
    ("Evil Walks", "Ethan Walsh"),
]

EXTRA_VIDEO = ("Voodoo", "Jordan Rivers")

SEED_CSV_HEADERS = ("track_name", "director")


def create_music_video_table(database: Database):
    """
    Drop and recreate the MusicVideo table.

    Args:
        database: Database connection object

    Raises:
        SchemaError: if tracks.TrackId does not exist to be referenced
    """
    database.connect()
    if not database.column_exists("tracks", "TrackId"):
        logger.error("Cannot create MusicVideo: tracks.TrackId does not exist")
        raise SchemaError("MusicVideo references tracks(TrackId), which does not exist")

    database.drop_table(queries.MUSIC_VIDEO_TABLE)
    database.create_table(queries.CREATE_MUSIC_VIDEO_TABLE)
    logger.info("MusicVideo table created")


def drop_music_video_table(database: Database):
    database.connect()
    database.drop_table(queries.MUSIC_VIDEO_TABLE)


def add_music_video(database: Database, track_name: str, director: str) -> int:
    """
    Insert a video for every track named exactly ``track_name``.

    The track id is looked up by name inside the INSERT, so no id needs to be
    known up front. A name that matches nothing inserts nothing.

    Args:
        database: Database connection object
        track_name: exact (case-sensitive) track name
        director: name of the video director

    Returns:
        Number of MusicVideo rows inserted

    Raises:
        UniqueConstraintViolation: if a matching track already has a video
    """
    database.connect()
    query = queries.render(queries.INSERT_VIDEO_BY_TRACK_NAME, database.dialect)
    inserted = database.execute_query(query, {"director": director, "track_name": track_name})
    if inserted == 0:
        logger.warning(f"No track named '{track_name}'; no video inserted")
    elif inserted > 1:
        logger.warning(f"'{track_name}' matched {inserted} tracks; a video was added to each")
    else:
        logger.info(f"Added video for '{track_name}' directed by {director}")
    return inserted


def load_seed_videos(database: Database, videos=None) -> dict:
    """
    Insert a video for each (track name, director) pair, in order.

    Not idempotent: running it twice raises UniqueConstraintViolation on the
    first name whose track already has a video, and the remaining pairs are
    not attempted.

    Args:
        database: Database connection object
        videos: list of (track_name, director) tuples. Defaults to SEED_VIDEOS.

    Returns:
        dict with 'inserted' (row count) and 'missing' (names matching no track)
    """
    if videos is None:
        videos = SEED_VIDEOS

    stats = {"inserted": 0, "missing": []}
    for track_name, director in videos:
        count = add_music_video(database, track_name, director)
        stats["inserted"] += count
        if count == 0:
            stats["missing"].append(track_name)

    logger.info(
        f"Seeded {stats['inserted']} music videos from {len(videos)} entries "
        f"({len(stats['missing'])} unmatched)"
    )
    return stats


def read_seed_csv(csv_file) -> list[tuple[str, str]]:
    """
    Read (track_name, director) pairs from a CSV with those two headers.

    Values are kept exactly as written, since track names are matched
    byte-for-byte. Rows with a blank track name or director are skipped.

    Raises:
        ValueError: if the track_name or director header is missing
    """
    videos = []
    with open(csv_file, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = [h for h in SEED_CSV_HEADERS if h not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"{csv_file} is missing required column(s): {', '.join(missing)}")
        for row in reader:
            track_name = row["track_name"] or ""
            director = row["director"] or ""
            if not track_name.strip() or not director.strip():
                logger.warning(f"Skipping incomplete seed row: {row}")
                continue
            videos.append((track_name, director))
    logger.debug(f"Read {len(videos)} seed videos from {csv_file}")
    return videos


def get_music_videos(database: Database) -> list[tuple[int, str, str]]:
    """Return (track_id, track name, director) for every MusicVideo row."""
    database.connect()
    return database.execute_select_query(queries.SELECT_MUSIC_VIDEOS)
