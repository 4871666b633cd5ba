from loguru import logger
from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError

from . import DB_DATABASE, DB_ENGINE, DB_HOST, DB_PASSWORD, DB_PORT, DB_USER, TEST_DB
from .dialects import get_dialect
from .errors import ConnectionFailed, translate_error

DRIVERS = {
    "sqlite": "sqlite",
    "mysql": "mysql+mysqlconnector",
}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # Cascades are only honoured with foreign key enforcement on
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class Database:
    """
    A class used to represent a connection to a Chinook database.

    Attributes
    ----------
    host : str
        the hostname of the MySQL server (unused for SQLite)
    user : str
        the username to connect to the MySQL server
    password : str
        the password to connect to the MySQL server
    database : str
        the name of the MySQL database, or the path of the SQLite file
    port : str or int, optional
        the MySQL server port
    dialect : db.dialects.Dialect
        SQL fragments for the configured backend
    sa_engine : sqlalchemy.engine.Engine or None
        the engine the connection was opened from
    connection : sqlalchemy.engine.Connection or None
        the open connection, if any
    """

    def __init__(self, host, user, password, database, port=None, engine="mysql"):
        """
        Constructs all the necessary attributes for the Database object.

        Parameters
        ----------
        host : str
            the hostname of the MySQL server
        user : str
            the username to connect to the MySQL server
        password : str
            the password to connect to the MySQL server
        database : str
            the name of the database to connect to (file path for SQLite)
        port : str or int, optional
            the MySQL server port
        engine : str, optional
            "mysql" (default) or "sqlite"
        """
        self.host = host
        self.user = user
        self.password = password
        self.database = database
        self.port = port
        self.dialect = get_dialect(engine)
        self.sa_engine = None
        self.connection = None

    @classmethod
    def from_config(cls, test=False):
        """Build a Database from the settings read out of config.ini."""
        return cls(
            DB_HOST,
            DB_USER,
            DB_PASSWORD,
            TEST_DB if test else DB_DATABASE,
            port=DB_PORT,
            engine=DB_ENGINE,
        )

    @property
    def backend(self):
        return self.dialect.name

    @property
    def url(self):
        """SQLAlchemy URL for the configured backend."""
        if self.backend == "sqlite":
            return URL.create(DRIVERS["sqlite"], database=self.database)
        return URL.create(
            DRIVERS["mysql"],
            username=self.user,
            password=self.password,
            host=self.host,
            port=int(self.port) if self.port else None,
            database=self.database,
        )

    def connect(self):
        """
        Opens the connection. Does nothing if a connection is already open.

        Raises
        ------
        ConnectionFailed
            if the server or file cannot be opened
        """
        if self.connection is not None:
            return
        try:
            self.sa_engine = create_engine(self.url)
            if self.backend == "sqlite":
                event.listen(self.sa_engine, "connect", _enable_sqlite_foreign_keys)
            self.connection = self.sa_engine.connect()
            logger.info(f"Connected to {self.backend} database {self.database}")
        except SQLAlchemyError as error:
            logger.error(f"There was an error connecting to {self.backend} database: {error}")
            if self.sa_engine is not None:
                self.sa_engine.dispose()
                self.sa_engine = None
            raise ConnectionFailed(str(error)) from error

    def close(self):
        """
        Closes the connection and disposes of the engine.
        """
        if self.connection:
            self.connection.close()
            self.connection = None
            self.sa_engine.dispose()
            self.sa_engine = None
            logger.info("Connection closed")

    def _execute(self, query, params):
        if not self.connection:
            self.connect()
        try:
            return self.connection.execute(text(query), params or {})
        except SQLAlchemyError as error:
            logger.error(f"Error executing query: {error}")
            self.connection.rollback()
            raise translate_error(error) from error

    def drop_table(self, table_name):
        """
        Drops a table from the database if it exists.

        Parameters
        ----------
        table_name : str
            the name of the table to drop
        """
        self.execute_query(f"DROP TABLE IF EXISTS {table_name}")
        logger.info(f"Table {table_name} dropped")

    def create_table(self, query):
        """
        Creates a table in the database using the provided SQL query.

        Parameters
        ----------
        query : str
            the SQL query to create the table
        """
        self.execute_query(query)
        logger.info("Table created")

    def execute_query(self, query, params=None):
        """
        Executes a data-changing SQL statement and commits it.

        Parameters
        ----------
        query : str
            the SQL query to execute, with ``:name`` bind parameters
        params : dict, optional
            values for the bind parameters

        Returns
        -------
        int
            the number of rows the statement affected

        Raises
        ------
        MusicDbError
            the translated driver error; the statement is rolled back
        """
        logger.debug(f"Executing query on {self.backend} database")
        result = self._execute(query, params)
        rowcount = result.rowcount
        self.connection.commit()
        return rowcount

    def execute_select_query(self, query, params=None):
        """
        Executes a SELECT SQL query on the database and returns the results.

        Parameters
        ----------
        query : str
            the SQL query to execute, with ``:name`` bind parameters
        params : dict, optional
            values for the bind parameters

        Returns
        -------
        list
            the results of the query, one tuple per row
        """
        logger.debug(f"Running select on {self.backend} database")
        result = self._execute(query, params)
        return [tuple(row) for row in result.fetchall()]

    def table_exists(self, table_name):
        """Return True if ``table_name`` exists in the connected database."""
        if not self.connection:
            self.connect()
        return inspect(self.connection).has_table(table_name)

    def column_exists(self, table_name, column_name):
        """Return True if ``table_name`` has a column called ``column_name``."""
        if not self.connection:
            self.connect()
        inspector = inspect(self.connection)
        if not inspector.has_table(table_name):
            return False
        return any(column["name"] == column_name for column in inspector.get_columns(table_name))
