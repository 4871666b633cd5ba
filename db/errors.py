"""Exceptions raised by the database layer.

SQLAlchemy wraps driver errors from ``sqlite3`` and ``mysql.connector``;
:func:`translate_error` unwraps them into this hierarchy so callers never
depend on which backend is configured.
"""

import sqlite3

import mysql.connector
from sqlalchemy.exc import DBAPIError

# MySQL server error numbers
_MYSQL_UNIQUE = {1062}  # ER_DUP_ENTRY
_MYSQL_REFERENTIAL = {1451, 1452}  # ER_ROW_IS_REFERENCED_2, ER_NO_REFERENCED_ROW_2
_MYSQL_CONSTRAINT = {1048, 3819}  # ER_BAD_NULL_ERROR, ER_CHECK_CONSTRAINT_VIOLATED
_MYSQL_SCHEMA = {1054, 1146, 1215, 1824}  # bad field, no such table, FK target problems


class MusicDbError(Exception):
    """Base class for every error raised by the database layer."""


class ConnectionFailed(MusicDbError):
    """The database server or file could not be opened."""


class SchemaError(MusicDbError):
    """A referenced table or column does not exist."""


class ConstraintViolation(MusicDbError):
    """A row was rejected by a NOT NULL, CHECK, key or foreign key constraint."""


class UniqueConstraintViolation(ConstraintViolation):
    """A primary key or unique index already holds the inserted value."""


class ReferentialIntegrityError(ConstraintViolation):
    """A foreign key points at a row that does not exist."""


class QueryError(MusicDbError):
    """Any other failure while executing a statement."""


def translate_error(error: Exception) -> MusicDbError:
    """
    Map a SQLAlchemy or driver exception onto the MusicDbError hierarchy.

    Args:
        error: exception raised while executing a statement

    Returns:
        An unraised MusicDbError instance carrying the driver message.
    """
    if isinstance(error, DBAPIError) and error.orig is not None:
        error = error.orig
    message = str(error)

    if isinstance(error, sqlite3.Error):
        lowered = message.lower()
        if isinstance(error, sqlite3.IntegrityError):
            if "unique constraint" in lowered or "primary key" in lowered:
                return UniqueConstraintViolation(message)
            if "foreign key" in lowered:
                return ReferentialIntegrityError(message)
            return ConstraintViolation(message)
        if "no such table" in lowered or "no such column" in lowered:
            return SchemaError(message)
        return QueryError(message)

    if isinstance(error, mysql.connector.Error):
        errno = getattr(error, "errno", None)
        if errno in _MYSQL_UNIQUE:
            return UniqueConstraintViolation(message)
        if errno in _MYSQL_REFERENTIAL:
            return ReferentialIntegrityError(message)
        if errno in _MYSQL_CONSTRAINT or isinstance(error, mysql.connector.IntegrityError):
            return ConstraintViolation(message)
        if errno in _MYSQL_SCHEMA:
            return SchemaError(message)
        return QueryError(message)

    return QueryError(message)
