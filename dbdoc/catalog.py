"""
Catalog access: the ODBC connection and the metadata queries run against it.
"""
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .exceptions import CatalogQueryError, ConfigError, ConnectionFatalError, ConnectionLostError

try:
    import pyodbc
    HAS_PYODBC = True
except ImportError:
    pyodbc = None
    HAS_PYODBC = False
    print("PyODBC driver not available. To install, run: pip install pyodbc")

# Errors raised by the driver
DRIVER_ERRORS = (pyodbc.Error,) if HAS_PYODBC else ()

DEFAULT_DRIVER = 'MySQL ODBC 8.0 Unicode Driver'
DEFAULT_PORT = 3306

CONNECTION_LOST_STATES = ('08S01', '08003', '08007')
CONNECTION_LOST_MESSAGES = ('lost connection', 'gone away')

PARAMS_SOURCES = ('proc', 'information_schema')


def build_connection_string(host: str, user: str, password: str, database: str,
                            port: int = DEFAULT_PORT, driver: str = DEFAULT_DRIVER) -> str:
    """Build a MySQL ODBC connection string"""
    connection_string = f"DRIVER={{{driver}}};"
    connection_string += f"SERVER={host};"
    connection_string += f"PORT={port};"
    connection_string += f"DATABASE={_odbc_value(database)};"
    connection_string += f"UID={_odbc_value(user)};"
    connection_string += f"PWD={_odbc_value(password)};"
    return connection_string


def _odbc_value(value: str) -> str:
    # Values with separators must be braced, closing braces doubled
    if any(char in value for char in ';{}=') or value != value.strip():
        return '{' + value.replace('}', '}}') + '}'
    return value


def _error_details(error: Exception) -> Tuple[str, str]:
    error_code = error.args[0] if len(error.args) > 0 else "Unknown"
    error_message = error.args[1] if len(error.args) > 1 else str(error)
    return str(error_code), str(error_message)


def is_connection_lost(error_code: str, error_message: str) -> bool:
    """Tell whether a driver error means the server dropped the connection"""
    if error_code in CONNECTION_LOST_STATES:
        return True
    message = error_message.lower()
    return any(text in message for text in CONNECTION_LOST_MESSAGES)


class CatalogConnection:
    """A single ODBC connection used for every catalog query of a run"""

    def __init__(self, connection_string: str, connect: Optional[Callable[[str], Any]] = None):
        self.connection_string = connection_string
        self._connect = connect
        self.connection = None
        self.cursor = None

    def connect(self) -> None:
        """Open the connection"""
        connect = self._connect
        if connect is None:
            if not HAS_PYODBC:
                raise ConfigError("pyodbc is not installed. Install with 'pip install pyodbc'")
            connect = pyodbc.connect

        try:
            print("Connecting to mysql database...")
            self.connection = connect(self.connection_string)
            self.cursor = self.connection.cursor()
            print("Connection successful!")
        except DRIVER_ERRORS as e:
            error_code, error_message = _error_details(e)
            print(f"Connection Error ({error_code}): {error_message}")
            raise ConnectionFatalError(f"Failed to connect to the database: {error_message}") from e

    def reconnect(self) -> None:
        """Close the current handles and connect again with the same settings"""
        try:
            self.disconnect()
        except DRIVER_ERRORS as e:
            # A dropped connection may refuse to close
            print(f"Warning: Failed to close lost connection: {str(e)}")
            self.cursor = None
            self.connection = None
        self.connect()

    def disconnect(self) -> None:
        """Disconnect from the database"""
        if self.cursor:
            self.cursor.close()
        if self.connection:
            self.connection.close()
        self.cursor = None
        self.connection = None

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    def execute(self, query: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Execute a query and return results as a list of dictionaries"""
        if self.cursor is None:
            raise ConnectionFatalError("Not connected to database")

        try:
            if params:
                self.cursor.execute(query, params)
            else:
                self.cursor.execute(query)

            # Upper-cased column labels
            columns = [column[0].upper() for column in self.cursor.description]

            results = []
            for row in self.cursor.fetchall():
                results.append(dict(zip(columns, row)))

            return results
        except DRIVER_ERRORS as e:
            raise self._translate_error(e, query) from e

    def _translate_error(self, error: Exception, query: str) -> Exception:
        error_code, error_message = _error_details(error)
        print(f"Error executing query ({error_code}): {error_message}")
        print(f"Query: {query}")

        if is_connection_lost(error_code, error_message):
            print("Connection lost, reconnecting...")
            try:
                self.reconnect()
            except ConnectionFatalError as reconnect_error:
                return ConnectionLostError(f"Connection lost while querying the catalog: {error_message}; "
                                           f"reconnect failed: {reconnect_error}")
            return ConnectionLostError(f"Connection lost while querying the catalog: {error_message}")
        if error_code.startswith('08'):
            return ConnectionFatalError(f"Database connection failed ({error_code}): {error_message}")
        return CatalogQueryError(f"Catalog query failed ({error_code}): {error_message}", query)


class CatalogQueries:
    """
    The five metadata queries of a documentation run.

    Every query is bound to the documented database name and returns the raw
    rows; correlating them is left to the aggregator.
    """

    def __init__(self, connection: CatalogConnection, database_name: str, params_source: str = 'proc'):
        if params_source not in PARAMS_SOURCES:
            raise ConfigError(f"Unsupported parameters source: {params_source}")
        self.connection = connection
        self.database_name = database_name
        self.params_source = params_source

    def list_tables(self) -> List[Dict[str, Any]]:
        """Tables of the database"""
        return self.connection.execute("""
            SELECT
                TABLE_NAME,
                ENGINE,
                CREATE_TIME,
                TABLE_COLLATION,
                TABLE_COMMENT
            FROM
                information_schema.TABLES
            WHERE
                TABLE_SCHEMA = ?
        """, (self.database_name,))

    def list_columns(self) -> List[Dict[str, Any]]:
        """Columns of every table, in ordinal order"""
        return self.connection.execute("""
            SELECT
                TABLE_NAME,
                COLUMN_NAME,
                ORDINAL_POSITION,
                COLUMN_DEFAULT,
                IS_NULLABLE,
                DATA_TYPE,
                CHARACTER_MAXIMUM_LENGTH,
                NUMERIC_PRECISION,
                COLLATION_NAME,
                COLUMN_TYPE,
                COLUMN_KEY,
                EXTRA,
                COLUMN_COMMENT
            FROM
                information_schema.COLUMNS
            WHERE
                TABLE_SCHEMA = ?
            ORDER BY
                TABLE_NAME, ORDINAL_POSITION
        """, (self.database_name,))

    def list_indexes(self) -> List[Dict[str, Any]]:
        """Indexes of every table; COLUMNS is joined in sequence-in-index order"""
        return self.connection.execute("""
            SELECT
                TABLE_NAME,
                INDEX_NAME,
                GROUP_CONCAT(COLUMN_NAME ORDER BY SEQ_IN_INDEX) AS COLUMNS
            FROM
                information_schema.STATISTICS
            WHERE
                TABLE_SCHEMA = ?
            GROUP BY
                TABLE_NAME, INDEX_NAME
        """, (self.database_name,))

    def list_procedures(self) -> List[Dict[str, Any]]:
        """Stored routines of the database"""
        return self.connection.execute("""
            SELECT
                ROUTINE_NAME,
                CREATED,
                ROUTINE_COMMENT,
                COLLATION_CONNECTION
            FROM
                information_schema.ROUTINES
            WHERE
                ROUTINE_SCHEMA = ?
        """, (self.database_name,))

    def list_procedure_params(self) -> List[Dict[str, Any]]:
        """One row per routine: NAME and the whole PARAM_LIST as free text"""
        if self.params_source == 'information_schema':
            # mysql.proc was removed in MySQL 8; rebuild the same text from PARAMETERS
            return self.connection.execute("""
                SELECT
                    SPECIFIC_NAME AS NAME,
                    GROUP_CONCAT(
                        CONCAT_WS(' ', PARAMETER_MODE, PARAMETER_NAME, DTD_IDENTIFIER)
                        ORDER BY ORDINAL_POSITION SEPARATOR ','
                    ) AS PARAM_LIST
                FROM
                    information_schema.PARAMETERS
                WHERE
                    SPECIFIC_SCHEMA = ?
                    AND ORDINAL_POSITION > 0
                GROUP BY
                    SPECIFIC_NAME
            """, (self.database_name,))

        return self.connection.execute("""
            SELECT
                proc.name AS NAME,
                proc.param_list AS PARAM_LIST
            FROM
                mysql.proc
            WHERE
                proc.db = ?
        """, (self.database_name,))
