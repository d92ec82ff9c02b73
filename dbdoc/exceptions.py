"""
Exceptions raised while documenting a database.

Every error that aborts a documentation run derives from DbDocError so the
command line can report it in one place.
"""
from typing import Optional


class DbDocError(Exception):
    """Base exception for all documenter errors."""

    pass


class ConfigError(DbDocError):
    """
    Raised when the run is not configured correctly.

    This exception is used when:
    - A required connection parameter is missing
    - The style (css) file cannot be read
    - The ODBC driver module is not installed
    """

    pass


class OutputDirectoryError(ConfigError):
    """Raised when the output path does not exist or is not a directory."""

    pass


class CatalogQueryError(DbDocError):
    """Raised when a metadata query fails. Keeps the failing statement."""

    def __init__(self, message: str, query: Optional[str] = None):
        super().__init__(message)
        self.query = query


class ConnectionFatalError(DbDocError):
    """
    Raised when the database connection reports a fatal error.

    Covers authentication failures, refused connections and other
    transport errors the run cannot continue after.
    """

    pass


class ConnectionLostError(ConnectionFatalError):
    """
    Raised when the server dropped the connection mid-run.

    The connection has already been re-opened with the same settings when
    this is raised, but the query that was in flight did not complete.
    """

    pass
