"""
Build a small Chinook-shaped sandbox database for tests.

Creates the seven Chinook tables and fills them with a handful of rows that
cover the seed track names, accented names, tracks without a genre or album,
and one track longer than fifteen minutes.
"""

from loguru import logger

from db.database import Database

# Dropped in this order so child tables go before their parents
TABLES_TO_DROP = [
    "MusicVideo",
    "invoice_items",
    "invoices",
    "customers",
    "tracks",
    "albums",
    "artists",
    "genres",
]

CHINOOK_DDL = [
    """CREATE TABLE genres(
    GenreId INTEGER PRIMARY KEY
    , Name VARCHAR(120)
    )""",
    """CREATE TABLE artists(
    ArtistId INTEGER PRIMARY KEY
    , Name VARCHAR(120)
    )""",
    """CREATE TABLE albums(
    AlbumId INTEGER PRIMARY KEY
    , Title VARCHAR(160) NOT NULL
    , ArtistId INTEGER NOT NULL
    , FOREIGN KEY (ArtistId) REFERENCES artists(ArtistId)
    )""",
    """CREATE TABLE tracks(
    TrackId INTEGER PRIMARY KEY
    , Name VARCHAR(200) NOT NULL
    , AlbumId INTEGER
    , GenreId INTEGER
    , Milliseconds INTEGER NOT NULL
    , UnitPrice NUMERIC(10, 2) NOT NULL
    , FOREIGN KEY (AlbumId) REFERENCES albums(AlbumId)
    , FOREIGN KEY (GenreId) REFERENCES genres(GenreId)
    )""",
    """CREATE TABLE customers(
    CustomerId INTEGER PRIMARY KEY
    , FirstName VARCHAR(40) NOT NULL
    , LastName VARCHAR(20) NOT NULL
    , Email VARCHAR(60) NOT NULL
    )""",
    """CREATE TABLE invoices(
    InvoiceId INTEGER PRIMARY KEY
    , CustomerId INTEGER NOT NULL
    , InvoiceDate DATETIME NOT NULL
    , FOREIGN KEY (CustomerId) REFERENCES customers(CustomerId)
    )""",
    """CREATE TABLE invoice_items(
    InvoiceLineId INTEGER PRIMARY KEY
    , InvoiceId INTEGER NOT NULL
    , TrackId INTEGER NOT NULL
    , UnitPrice NUMERIC(10, 2) NOT NULL
    , Quantity INTEGER NOT NULL
    , FOREIGN KEY (InvoiceId) REFERENCES invoices(InvoiceId)
    , FOREIGN KEY (TrackId) REFERENCES tracks(TrackId)
    )""",
]

SAMPLE_GENRES = [
    (1, "Rock"),
    (2, "Jazz"),
    (3, "Metal"),
    (4, "Latin"),
    (5, "Blues"),
    (6, "Pop"),
    (7, "Classical"),
]

SAMPLE_ARTISTS = [
    (1, "AC/DC"),
    (2, "Accept"),
    (3, "Santana"),
]

SAMPLE_ALBUMS = [
    (1, "For Those About To Rock We Salute You", 1),
    (2, "Balls to the Wall", 2),
    (3, "Restless and Wild", 2),
    (4, "Supernatural", 3),
    (5, "Let There Be Rock", 1),
]

# TrackId, Name, AlbumId, GenreId, Milliseconds, UnitPrice
SAMPLE_TRACKS = [
    (1, "For Those About To Rock (We Salute You)", 1, 1, 343719, 0.99),
    (2, "Balls to the Wall", 2, 1, 342562, 0.99),
    (3, "Fast As a Shark", 3, 1, 230619, 0.99),
    (4, "Restless and Wild", 3, 1, 252051, 0.99),
    (5, "Princess of the Dawn", 3, 1, 375418, 0.99),
    (6, "Put The Finger On You", 1, 1, 205662, 0.99),
    (7, "Let's Get It Up", 1, 1, 233926, 0.99),
    (8, "Inject The Venom", 1, 1, 210834, 0.99),
    (9, "Snowballed", 1, 1, 203102, 0.99),
    (10, "Evil Walks", 1, 1, 263497, 0.99),
    (11, "Voodoo", 5, 1, 250000, 0.99),
    (12, "Óye Como Va", 4, 4, 255000, 0.99),
    (13, "Hello", None, None, 180000, 0.99),
    (14, "Canción del Mariachi", 4, 4, 300000, 0.99),
    (15, "So What", None, 2, 565000, 0.99),
    (16, "Dança da Solidão", 4, 4, 200000, 0.99),
    (17, "The Ring Cycle (Complete)", None, 7, 5400000, 1.99),
    (18, "Interlude", None, None, 60000, 0.99),
    (19, "Master of Puppets", None, 3, 515000, 0.99),
    (20, "Red House", None, 5, 224000, 0.99),
    (21, "Billie Jean", None, 6, 294000, 0.99),
]

SAMPLE_CUSTOMERS = [
    (1, "Luís", "Gonçalves", "luisg@embraer.com.br"),
    (2, "Leonie", "Köhler", "leonekohler@surfeu.de"),
    (3, "François", "Tremblay", "ftremblay@gmail.com"),
    (4, "Bjørn", "Hansen", "bjorn.hansen@yahoo.no"),
    (5, "Frank", "Harris", "fharris@google.com"),
]

SAMPLE_INVOICES = [
    (1, 1, "2025-01-10 00:00:00"),
    (2, 2, "2025-02-01 00:00:00"),
    (3, 3, "2025-01-20 00:00:00"),
    (4, 4, "2025-03-05 00:00:00"),
    (5, 4, "2025-03-15 00:00:00"),
    (6, 1, "2025-03-15 00:00:00"),
]

# InvoiceLineId, InvoiceId, TrackId, UnitPrice, Quantity
SAMPLE_INVOICE_ITEMS = [
    (1, 1, 2, 0.99, 1),
    (2, 1, 3, 0.99, 1),
    (3, 2, 17, 1.99, 1),
    (4, 3, 4, 0.99, 2),
    (5, 3, 12, 0.99, 1),
    (6, 4, 15, 0.99, 1),
    (7, 5, 15, 0.99, 1),
    (8, 5, 13, 0.99, 1),
    (9, 6, 1, 0.99, 3),
    (10, 6, 21, 0.99, 1),
]

SAMPLE_ROWS = {
    "genres": SAMPLE_GENRES,
    "artists": SAMPLE_ARTISTS,
    "albums": SAMPLE_ALBUMS,
    "tracks": SAMPLE_TRACKS,
    "customers": SAMPLE_CUSTOMERS,
    "invoices": SAMPLE_INVOICES,
    "invoice_items": SAMPLE_INVOICE_ITEMS,
}


def create_chinook_schema(database: Database):
    """
    Drop and recreate the Chinook tables, leaving them empty.

    Args:
        database: Connected Database instance
    """
    database.connect()
    for table in TABLES_TO_DROP:
        database.drop_table(table)
    for ddl in CHINOOK_DDL:
        database.create_table(ddl)
    logger.info("Created empty Chinook schema")


def insert_rows(database: Database, table: str, rows) -> int:
    """
    Insert positional rows into ``table``. Returns the number of rows inserted.
    """
    inserted = 0
    for row in rows:
        params = {f"p{i}": value for i, value in enumerate(row)}
        placeholders = ", ".join(f":{name}" for name in params)
        database.execute_query(f"INSERT INTO {table} VALUES ({placeholders})", params)
        inserted += 1
    logger.debug(f"Inserted {inserted} rows into {table}")
    return inserted


def build_sample_database(database: Database) -> int:
    """
    Create the Chinook schema and load the sample rows.

    Args:
        database: Connected Database instance

    Returns:
        Number of rows inserted across all tables
    """
    create_chinook_schema(database)
    total = 0
    for table, rows in SAMPLE_ROWS.items():
        total += insert_rows(database, table, rows)
    logger.info(f"Loaded {total} sample rows")
    return total


if __name__ == "__main__":
    db = Database.from_config(test=True)
    print(f"Building sandbox database: {db.database}")

    count = build_sample_database(db)
    db.close()

    print(f"Inserted {count} rows")
