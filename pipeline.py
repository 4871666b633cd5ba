"""
Pipeline orchestration for the Chinook report run.

Runs the MusicVideo schema setup, the seed inserts and every registered
report, in that order, against one open database connection. Any error stops
the run; nothing is retried.
"""

import os

from loguru import logger

import db.music_video as mv
from db.database import Database
from db.queries import CHINOOK_TABLES
from db.reports import REPORTS, export_report, run_report


def validate_environment(database: Database) -> dict:
    """
    Validate all prerequisites before running the pipeline.

    Args:
        database: Database connection object

    Returns:
        dict with keys: 'database_ok', 'schema_ok', 'missing_tables', 'errors'
    """
    errors = []
    result = {
        "database_ok": False,
        "schema_ok": False,
        "missing_tables": [],
        "errors": errors,
    }

    # Check database connection
    try:
        database.connect()
        database.execute_select_query("SELECT 1")
        result["database_ok"] = True
    except Exception as e:
        errors.append(f"Database connection failed: {e}")
        return result

    # Check the Chinook tables the reports read from
    missing = [table for table in CHINOOK_TABLES if not database.table_exists(table)]
    result["missing_tables"] = missing
    if missing:
        errors.append(f"Missing Chinook tables: {', '.join(missing)}")
    else:
        result["schema_ok"] = True

    return result


def seed_music_videos(database: Database, videos=None) -> dict:
    """
    Recreate the MusicVideo table and load the seed videos plus the extra one.

    The extra video is skipped when ``videos`` already names its track, since
    a second insert for the same track would violate the primary key.

    Args:
        database: Database connection object
        videos: optional list of (track_name, director); defaults to SEED_VIDEOS

    Returns:
        dict with 'inserted' and 'missing' (track names that matched nothing)
    """
    if videos is None:
        videos = mv.SEED_VIDEOS

    mv.create_music_video_table(database)
    stats = mv.load_seed_videos(database, videos)

    track_name, director = mv.EXTRA_VIDEO
    if any(name == track_name for name, _ in videos):
        logger.info(f"Seed list already includes '{track_name}'; skipping the extra video")
        return stats

    count = mv.add_music_video(database, track_name, director)
    stats["inserted"] += count
    if count == 0:
        stats["missing"].append(track_name)
    return stats


def run_reports(database: Database, export_dir: str | None = None) -> dict:
    """
    Run every registered report in order.

    Args:
        database: Database connection object
        export_dir: if given, each report is written to <export_dir>/<name>.csv

    Returns:
        dict mapping report name to its DataFrame
    """
    results = {}
    for name in REPORTS:
        logger.info(f"Running report {name}")
        df = run_report(database, name)
        results[name] = df
        if export_dir:
            export_report(df, os.path.join(export_dir, f"{name}.csv"))
    return results


def run_full_pipeline(
    database: Database,
    seed: bool = True,
    videos=None,
    export_dir: str | None = None,
) -> dict:
    """
    Run schema setup, seeding and all reports.

    Args:
        database: Database connection object
        seed: Recreate and seed the MusicVideo table before reporting
        videos: optional seed list overriding SEED_VIDEOS
        export_dir: Directory for CSV exports; None skips exporting

    Returns:
        dict with stats from processing and the report DataFrames under 'reports'

    Raises:
        MusicDbError: the first failing statement; later steps are not run
    """
    stats = {
        "videos_inserted": 0,
        "seed_misses": [],
        "report_rows": {},
        "exported": [],
        "reports": {},
    }

    database.connect()

    if seed:
        logger.info("Seeding MusicVideo table...")
        seed_stats = seed_music_videos(database, videos)
        stats["videos_inserted"] = seed_stats["inserted"]
        stats["seed_misses"] = seed_stats["missing"]
    else:
        logger.info("Skipping MusicVideo seeding")

    reports = run_reports(database, export_dir)
    stats["reports"] = reports
    stats["report_rows"] = {name: len(df) for name, df in reports.items()}
    if export_dir:
        stats["exported"] = [os.path.join(export_dir, f"{name}.csv") for name in reports]

    logger.info(f"Pipeline complete: {stats['report_rows']}")
    return stats
