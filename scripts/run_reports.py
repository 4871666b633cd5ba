#!/usr/bin/env python3
"""
Report runner.

Recreates and seeds the MusicVideo table, then runs every Chinook report and
optionally exports each one to CSV.
"""

import argparse
import sys
from datetime import datetime

from loguru import logger

from config import setup_logging
from db import LOG_FILE, LOG_LEVEL, REPORT_DIR
from db.database import Database
from db.errors import MusicDbError
from db.music_video import read_seed_csv
from pipeline import run_full_pipeline, validate_environment


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Seed MusicVideo and run the Chinook reports")
    parser.add_argument("--test", action="store_true", help="use the test database from config.ini")
    parser.add_argument("--no-seed", action="store_true", help="skip recreating MusicVideo")
    parser.add_argument("--seed-csv", help="CSV with track_name,director columns")
    parser.add_argument(
        "--export-dir",
        default=REPORT_DIR,
        help=f"directory for report CSVs (default: {REPORT_DIR}); empty string disables export",
    )
    parser.add_argument("--log-file", default=LOG_FILE)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, level=LOG_LEVEL, console_level="INFO")

    start_time = datetime.now()
    logger.info("=" * 60)
    logger.info(f"CHINOOK REPORT RUN - {start_time}")
    logger.info("=" * 60)

    db = Database.from_config(test=args.test)
    logger.info(f"Connecting to {db.backend} database: {db.database}")

    try:
        validation = validate_environment(db)
        logger.info(f"Validation result: {validation}")
        if validation["errors"]:
            logger.error(f"Environment validation failed: {validation['errors']}")
            return 1

        videos = read_seed_csv(args.seed_csv) if args.seed_csv else None
        stats = run_full_pipeline(
            db,
            seed=not args.no_seed,
            videos=videos,
            export_dir=args.export_dir or None,
        )
    except MusicDbError as error:
        logger.error(f"Report run aborted: {type(error).__name__}: {error}")
        return 1
    finally:
        db.close()

    duration = datetime.now() - start_time
    logger.info(f"Duration: {duration}")

    # Print summary
    print("\n" + "=" * 60)
    print("REPORT RUN COMPLETE")
    print("=" * 60)
    print(f"Duration: {duration}")
    print(f"Music videos inserted: {stats['videos_inserted']}")
    if stats["seed_misses"]:
        print(f"Seed names without a track: {', '.join(stats['seed_misses'])}")
    for name, rows in stats["report_rows"].items():
        print(f"{name}: {rows} rows")
    for path in stats["exported"]:
        print(f"Exported {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
