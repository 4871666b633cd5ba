"""SQL statements for the MusicVideo table and the Chinook reports.

Statements use ``:name`` bind parameters for SQLAlchemy's ``text()``. Fragments
that differ between engines are written as ``{name}`` fields and filled in
by :func:`render`.
"""

# Tables every report depends on
CHINOOK_TABLES = (
    "tracks",
    "albums",
    "artists",
    "genres",
    "customers",
    "invoices",
    "invoice_items",
)

# =============================================================================
# MUSIC VIDEO
# =============================================================================
# A MusicVideo "is a" Track: the primary key doubles as the foreign key, so a
# track has at most one video and a video cannot outlive its track.

MUSIC_VIDEO_TABLE = "MusicVideo"

CREATE_MUSIC_VIDEO_TABLE = """
CREATE TABLE MusicVideo (
    track_id        INTEGER PRIMARY KEY,
    video_director  TEXT NOT NULL,
    CHECK (video_director <> ''),
    FOREIGN KEY (track_id) REFERENCES tracks(TrackId)
        ON DELETE CASCADE
        ON UPDATE CASCADE
)"""

INSERT_VIDEO_BY_TRACK_NAME = """
INSERT INTO MusicVideo (track_id, video_director)
SELECT TrackId, :director
FROM tracks
WHERE {track_name} = {name_param}
"""

SELECT_MUSIC_VIDEOS = """
SELECT mv.track_id, t.Name, mv.video_director
FROM MusicVideo mv
JOIN tracks t ON t.TrackId = mv.track_id
ORDER BY mv.track_id
"""

# =============================================================================
# REPORTS
# =============================================================================

ACCENTED_VOWELS = ("á", "é", "í", "ó", "ú", "Á", "É", "Í", "Ó", "Ú")

ACCENTED_TRACKS = """
SELECT TrackId, Name
FROM tracks
WHERE {accent_filter}
ORDER BY Name
"""

PURCHASE_DETAILS = """
SELECT
    {customer_name} AS Customer,
    t.Name AS Track,
    al.Title AS Album,
    ar.Name AS Artist,
    ii.UnitPrice,
    ii.Quantity,
    inv.InvoiceDate
FROM customers c
JOIN invoices inv        ON inv.CustomerId = c.CustomerId
JOIN invoice_items ii    ON ii.InvoiceId = inv.InvoiceId
JOIN tracks t            ON t.TrackId = ii.TrackId
LEFT JOIN albums al      ON al.AlbumId = t.AlbumId
LEFT JOIN artists ar     ON ar.ArtistId = al.ArtistId
ORDER BY inv.InvoiceDate DESC, Customer, Artist, Album, Track
LIMIT :limit
"""

REVENUE_BY_GENRE = """
SELECT
    g.Name AS Genre,
    ROUND(SUM(ii.UnitPrice * ii.Quantity), 2) AS Revenue,
    COUNT(*) AS LineItems,
    SUM(ii.Quantity) AS TracksSold
FROM invoice_items ii
JOIN tracks t      ON t.TrackId = ii.TrackId
LEFT JOIN genres g ON g.GenreId = t.GenreId
GROUP BY g.GenreId, g.Name
ORDER BY Revenue DESC
"""

# The mean is taken over the capped set only; long tracks never pull it up.
ABOVE_AVERAGE_DURATION_CUSTOMERS = """
WITH capped_tracks AS (
    SELECT TrackId, Milliseconds
    FROM tracks
    WHERE Milliseconds <= :max_ms
),
long_tracks AS (
    SELECT TrackId
    FROM capped_tracks
    WHERE Milliseconds > (SELECT AVG(Milliseconds) FROM capped_tracks)
)
SELECT DISTINCT
    c.CustomerId,
    {customer_name} AS Customer,
    c.Email
FROM customers c
JOIN invoices inv     ON inv.CustomerId = c.CustomerId
JOIN invoice_items ii ON ii.InvoiceId = inv.InvoiceId
JOIN long_tracks lt   ON lt.TrackId = ii.TrackId
ORDER BY Customer, c.CustomerId
"""

TRACKS_OUTSIDE_TOP_GENRES = """
WITH genre_totals AS (
    SELECT GenreId, SUM(Milliseconds) AS TotalMs
    FROM tracks
    WHERE GenreId IS NOT NULL
    GROUP BY GenreId
),
top_genres AS (
    SELECT GenreId
    FROM genre_totals
    ORDER BY TotalMs DESC, GenreId
    LIMIT :top_n
)
SELECT
    t.TrackId,
    t.Name,
    g.Name AS Genre,
    t.Milliseconds
FROM tracks t
LEFT JOIN genres g      ON g.GenreId = t.GenreId
LEFT JOIN top_genres tg ON tg.GenreId = t.GenreId
WHERE tg.GenreId IS NULL
ORDER BY Genre, t.Name
"""


def accent_params():
    """Bind values for :func:`accent_filter`, one ``%vowel%`` pattern each."""
    return {f"accent_{i}": f"%{vowel}%" for i, vowel in enumerate(ACCENTED_VOWELS)}


def accent_filter(dialect, column="Name"):
    """One byte-wise LIKE per accented vowel, OR-ed together."""
    clauses = [
        f"{dialect.binary(column)} LIKE {dialect.binary(':' + name)}"
        for name in accent_params()
    ]
    return "\n   OR ".join(clauses)


def render(template, dialect):
    """Fill the engine-specific fields of a statement template."""
    return template.format(
        customer_name=dialect.full_name("c"),
        track_name=dialect.binary("Name"),
        name_param=dialect.binary(":track_name"),
        accent_filter=accent_filter(dialect),
    )
