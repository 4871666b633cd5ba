"""
Read-only analytical reports over the Chinook schema.

Each report function takes a connected Database and returns the raw rows.
Reports are registered in REPORTS, in the order they should run, together
with their fixed column names so they can be turned into DataFrames.
"""

import os

import pandas as pd
from loguru import logger

from . import queries
from .database import Database

MAX_TRACK_MS = 900_000  # 15 minutes
PURCHASE_LIMIT = 50
TOP_GENRES = 5

REPORTS = {}


def register_report(name, columns):
    """
    A decorator that registers a report function under ``name``.

    Parameters
    ----------
    name : str
        the key used by run_report and for exported file names
    columns : list of str
        the column names of the rows the report returns
    """

    def decorator(func):
        func.report_name = name
        func.columns = list(columns)
        REPORTS[name] = func
        return func

    return decorator


def _check_not_negative(name, value):
    # SQLite treats a negative LIMIT as no limit at all
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")


@register_report("accented_tracks", ["TrackId", "Name"])
def accented_tracks(database: Database):
    """Tracks whose name contains an acute-accented vowel, ordered by name."""
    database.connect()
    query = queries.render(queries.ACCENTED_TRACKS, database.dialect)
    return database.execute_select_query(query, queries.accent_params())


@register_report(
    "purchase_details",
    ["Customer", "Track", "Album", "Artist", "UnitPrice", "Quantity", "InvoiceDate"],
)
def purchase_details(database: Database, limit: int = PURCHASE_LIMIT):
    """
    Who bought what: one row per invoice line, newest invoices first.

    Album and Artist are None for tracks without an album.
    """
    _check_not_negative("limit", limit)
    database.connect()
    query = queries.render(queries.PURCHASE_DETAILS, database.dialect)
    return database.execute_select_query(query, {"limit": limit})


@register_report("revenue_by_genre", ["Genre", "Revenue", "LineItems", "TracksSold"])
def revenue_by_genre(database: Database):
    """Revenue, line item count and units sold per genre, highest revenue first."""
    database.connect()
    return database.execute_select_query(queries.REVENUE_BY_GENRE)


@register_report("above_average_duration_customers", ["CustomerId", "Customer", "Email"])
def above_average_duration_customers(database: Database, max_ms: int = MAX_TRACK_MS):
    """
    Customers who bought at least one track longer than the average track.

    Only tracks of at most ``max_ms`` milliseconds take part: the average is
    computed over them alone and longer tracks are never candidates.
    """
    database.connect()
    query = queries.render(queries.ABOVE_AVERAGE_DURATION_CUSTOMERS, database.dialect)
    return database.execute_select_query(query, {"max_ms": max_ms})


@register_report("tracks_outside_top_genres", ["TrackId", "Name", "Genre", "Milliseconds"])
def tracks_outside_top_genres(database: Database, top_n: int = TOP_GENRES):
    """
    Tracks that are not in one of the ``top_n`` genres by total duration.

    Tracks without a genre are always included. Genres tied on total duration
    are ranked by GenreId.
    """
    _check_not_negative("top_n", top_n)
    database.connect()
    return database.execute_select_query(queries.TRACKS_OUTSIDE_TOP_GENRES, {"top_n": top_n})


def run_report(database: Database, name: str, **kwargs) -> pd.DataFrame:
    """
    Run a registered report and return its rows as a DataFrame.

    Args:
        database: Database connection object
        name: key in REPORTS
        **kwargs: passed through to the report function (e.g. limit, max_ms)

    Returns:
        DataFrame with the report's fixed columns (empty if no rows)
    """
    try:
        report = REPORTS[name]
    except KeyError:
        raise ValueError(f"Unknown report: {name}") from None

    rows = report(database, **kwargs)
    logger.info(f"Report {name} returned {len(rows)} rows")
    return pd.DataFrame([tuple(row) for row in rows], columns=report.columns)


def export_report(df: pd.DataFrame, file_path: str) -> str:
    """
    Write a report DataFrame to CSV, creating the directory if needed.

    Returns:
        The path written
    """
    os.makedirs(os.path.dirname(file_path) or ".", exist_ok=True)
    df.to_csv(file_path, index=False)
    logger.info(f"Report exported to {file_path}")
    return file_path
