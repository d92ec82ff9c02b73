"""
MySQL Schema Documenter
-----------------------
Connects to a MySQL database, reads its catalog and writes two HTML pages:
`<out><database>_tables.html` and `<out><database>_procedures.html`.
"""
import os
from typing import Any, Callable, Optional, Tuple

from .aggregator import SchemaAggregator
from .catalog import (DEFAULT_DRIVER, DEFAULT_PORT, CatalogConnection, CatalogQueries,
                      build_connection_string)
from .exceptions import ConfigError, OutputDirectoryError
from .html_generator import page_summary, render_procedures_page, render_tables_page


class MySQLDocumenter:
    def __init__(self, connect: Optional[Callable[[str], Any]] = None):
        """Initialize the documenter; `connect` replaces pyodbc.connect when given"""
        self.host = None
        self.user = None
        self.password = None
        self.database_name = None
        self.port = DEFAULT_PORT
        self.driver = DEFAULT_DRIVER
        self.params_source = 'proc'
        self.output_dir = './'
        self.css = None
        self._connect = connect

    def set_database(self, host: str, user: str, password: str, database_name: str,
                     port: int = DEFAULT_PORT, driver: str = DEFAULT_DRIVER) -> None:
        """Set the database connection details"""
        self.host = host
        self.user = user
        self.password = password
        self.database_name = database_name
        self.port = port
        self.driver = driver

    def set_style_template(self, file_path: str) -> None:
        """Replace the default stylesheet with the content of a css file"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                self.css = f.read()
        except OSError as e:
            raise ConfigError(f"Unable to read style file {file_path}: {e}") from e

    def set_output_directory(self, path: str) -> None:
        """
        Set the directory the html files are written to

        The file names are appended to `path` as is, so it should end with a
        path separator.
        """
        if os.path.exists(path) and os.path.isdir(path):
            self.output_dir = path
        else:
            raise OutputDirectoryError(f"{path} is not a valid directory")

    @property
    def tables_file(self) -> str:
        return f"{self.output_dir}{self.database_name}_tables.html"

    @property
    def procedures_file(self) -> str:
        return f"{self.output_dir}{self.database_name}_procedures.html"

    def _validate(self) -> None:
        details = {
            'host': self.host,
            'user': self.user,
            'password': self.password,
            'database': self.database_name,
        }
        missing = [name for name, value in details.items() if not value]
        if missing:
            raise ConfigError(f"Invalid database details, missing: {', '.join(missing)}")

    def generate(self) -> Tuple[str, str]:
        """
        Generate the documentation and save it to html files

        Returns:
            The paths of the tables page and the procedures page
        """
        self._validate()

        connection = CatalogConnection(
            build_connection_string(self.host, self.user, self.password, self.database_name,
                                    port=self.port, driver=self.driver),
            connect=self._connect
        )
        queries = CatalogQueries(connection, self.database_name, params_source=self.params_source)
        aggregator = SchemaAggregator()

        connection.connect()
        try:
            print("Extracting database schema...")
            self._extract_tables(queries, aggregator)
            self._write_page(self.tables_file,
                             render_tables_page(self.database_name, aggregator.tables, self.css))

            self._extract_procedures(queries, aggregator)
            self._write_page(self.procedures_file,
                             render_procedures_page(self.database_name, aggregator.procedures, self.css))
        finally:
            connection.disconnect()

        print(f"Documented {page_summary(aggregator.tables, aggregator.procedures)}")
        return self.tables_file, self.procedures_file

    def _extract_tables(self, queries: CatalogQueries, aggregator: SchemaAggregator) -> None:
        """Tables, then their columns, then their indexes"""
        print("Extracting tables...")
        aggregator.ingest_tables(queries.list_tables())
        print("Extracting columns...")
        aggregator.ingest_columns(queries.list_columns())
        print("Extracting indexes...")
        aggregator.ingest_indexes(queries.list_indexes())

    def _extract_procedures(self, queries: CatalogQueries, aggregator: SchemaAggregator) -> None:
        """Stored routines, then their parameters"""
        print("Extracting procedures...")
        aggregator.ingest_procedures(queries.list_procedures())
        print("Extracting procedure parameters...")
        aggregator.ingest_procedure_params(queries.list_procedure_params())

    def _write_page(self, html_file: str, content: str) -> None:
        with open(html_file, 'w', encoding='utf-8') as f:
            f.write(content)
        print(f"HTML documentation generated: {html_file}")
