"""
Database handle

A database handle bundles the connection to the target database with the
values the schema importer needs from it (table prefix, charset, collation).

Classes
-------
- DatabaseHandle: Base class for all database handles
"""
from abc import ABC, abstractmethod
from typing import ClassVar

from sandbox_db.database.schema_toolkit import SchemaDynamics, SQLDialect



class DatabaseHandle(ABC):
    """Database handle
    (Base class for SQLite and MySQL handles)

    Attributes
    ----------
    sql_dialect : ClassVar[SQLDialect]
        SQL dialect of the database
    prefix : str
        Table prefix of the platform (e.g. 'wp_')
    charset : str
        Default character set of the database
    collate : str
        Default collation of the database
    """
    sql_dialect: ClassVar[SQLDialect] = SQLDialect.OTHER

    def __init__(self, prefix: str, charset: str, collate: str):
        self.prefix = prefix
        """Table prefix of the platform"""
        self.charset = charset
        """Default character set of the database"""
        self.collate = collate
        """Default collation of the database"""

    def __enter__(self) -> "DatabaseHandle":
        return self

    def __exit__(self, exc_type, exc_value, traceback_) -> None:
        self.close()

    @property
    @abstractmethod
    def charset_collate(self) -> str:
        """Table options clause used in place of the dump's
        `ENGINE=... DEFAULT CHARSET=... COLLATE=...`"""

    def dynamics(self, db_prefix: str) -> SchemaDynamics:
        """Runtime values substituted into the schema dump

        Parameters
        ----------
        db_prefix : str
            Internal table prefix of this application (e.g. 'slds_')

        Returns
        -------
        SchemaDynamics
            Runtime values
        """
        return SchemaDynamics(
            table_prefix=self.prefix + db_prefix,
            charset_collate=self.charset_collate,
            charset=self.charset,
            collate=self.collate
        )

    @abstractmethod
    def schema_sync(self, sql: str) -> None:
        """Create the table if it does not exist.

        Implementations may upgrade the types of existing columns,
        but never add new columns.

        Parameters
        ----------
        sql : str
            CREATE TABLE statement
        """

    @abstractmethod
    def get_columns(self, table: str) -> list[str]:
        """Get the names of the columns currently present in the table

        Parameters
        ----------
        table : str
            Table name

        Returns
        -------
        list[str]
            Column names, empty if the table does not exist
        """

    @abstractmethod
    def query(self, sql: str) -> None:
        """Execute a statement

        Parameters
        ----------
        sql : str
            SQL statement
        """

    @abstractmethod
    def close(self) -> None:
        """Close the connection"""
