"""Database handle for MySQL / MariaDB

Classes
-------
- MySQLDatabaseHandle: Database handle for MySQL

Functions
---------
- get_mysql_connection: Get a connection object for MySQL
- normalize_column_type: Normalize a column type for comparison
- get_declared_type: Get the column type of a column declaration
- is_shrinking: Check if a type change would shrink a TEXT/BLOB column
"""
import re
from typing import Any, ClassVar, Optional

import pymysql

from sandbox_db.database.schema_toolkit import SQLDialect
from sandbox_db.database.schema_toolkit.sql_parser import inspect_statement
from ._handle import DatabaseHandle



_INT_DISPLAY_WIDTH = re.compile(r"\b(tinyint|smallint|mediumint|int|integer|bigint)\(\d+\)")
_TYPE_PUNCTUATION = re.compile(r"\s*([(,])\s*")
_BEFORE_CLOSING_PAREN = re.compile(r"\s+\)")
_DECLARED_TYPE = re.compile(
    r"`[^`]+`\s+([a-z]+(?:\s*\([^)]*\))?(?:\s+(?:unsigned|zerofill))*)", re.IGNORECASE
)

_LOB_SIZES = {
    f"{size}{family}": rank
    for family in ("text", "blob")
    for rank, size in enumerate(("tiny", "", "medium", "long"))
}


def get_mysql_connection(host: str, user: str, password: str, database: str,
                         port: int = 3306, charset: str = "utf8mb4"
                         ) -> pymysql.connections.Connection:
    """Get a connection object for MySQL

    Parameters
    ----------
    host : str
        Host name of the database server
    user : str
        User name
    password : str
        Password
    database : str
        Database (schema) name
    port : int, optional
        Port number, by default 3306
    charset : str, optional
        Connection charset, by default 'utf8mb4'

    Returns
    -------
    pymysql.connections.Connection
        Connection object
    """
    return pymysql.connect(
        host=host,
        port=port,
        user=user,
        password=password,
        database=database,
        charset=charset
    )

def normalize_column_type(column_type: str) -> str:
    """Normalize a column type for comparison

    The type is lowercased, whitespace around parentheses and commas is
    removed, and integer display widths are dropped because MySQL 8.0.19
    and later no longer report them in INFORMATION_SCHEMA.

    Examples
    --------
    >>> normalize_column_type("BIGINT(20) unsigned")
    'bigint unsigned'
    >>> normalize_column_type("enum('a', 'b')")
    "enum('a','b')"
    """
    ttype = " ".join(column_type.lower().split())
    ttype = _TYPE_PUNCTUATION.sub(r"\1", ttype)
    ttype = _BEFORE_CLOSING_PAREN.sub(")", ttype)
    return _INT_DISPLAY_WIDTH.sub(r"\1", ttype)

def get_declared_type(definition: str) -> str:
    """Get the column type of a column declaration

    Examples
    --------
    >>> get_declared_type("`price` decimal(10, 2) unsigned NOT NULL DEFAULT '0.00'")
    'decimal(10, 2) unsigned'
    """
    match = _DECLARED_TYPE.match(definition)
    return match.group(1) if match else ""

def is_shrinking(declared_type: str, live_type: str) -> bool:
    """Check if the change is to a smaller TEXT/BLOB type of the same family

    Such changes may truncate the stored data, so they are never applied.
    """
    declared = normalize_column_type(declared_type)
    live = normalize_column_type(live_type)
    if declared not in _LOB_SIZES or live not in _LOB_SIZES:
        return False
    if declared[-4:] != live[-4:]:
        return False
    return _LOB_SIZES[declared] < _LOB_SIZES[live]


class MySQLDatabaseHandle(DatabaseHandle):
    """Database handle for MySQL

    Attributes
    ----------
    database : str
        Database (schema) name, used for INFORMATION_SCHEMA lookups
    prefix : str
        Table prefix
    charset : str
        Default character set
    collate : str
        Default collation
    """
    sql_dialect: ClassVar[SQLDialect] = SQLDialect.MYSQL

    def __init__(self, database: str, *,
                 host: str = "127.0.0.1", port: int = 3306,
                 user: str = "root", password: str = "",
                 prefix: str = "wp_",
                 charset: str = "utf8mb4", collate: str = "utf8mb4_unicode_520_ci",
                 charset_collate: Optional[str] = None,
                 connection: Optional[Any] = None):
        """
        Parameters
        ----------
        database : str
            Database (schema) name
        charset_collate : str, optional
            Table options clause, by default
            'DEFAULT CHARACTER SET <charset> COLLATE <collate>'
        connection : optional
            Connection object to use instead of connecting with the parameters
        """
        super().__init__(prefix, charset, collate)
        self.database = database
        """Database (schema) name"""
        self._charset_collate = charset_collate
        """Table options clause (None: built from charset/collate)"""
        self._conn = connection if connection is not None \
                     else get_mysql_connection(host, user, password, database,
                                               port=port, charset=charset)
        """Connection object"""

    @property
    def charset_collate(self) -> str:
        if self._charset_collate:
            return self._charset_collate

        clause = ""
        if self.charset:
            clause = f"DEFAULT CHARACTER SET {self.charset}"
        if self.collate:
            clause += f" COLLATE {self.collate}"
        return clause.strip()

    def _fetch_all(self, sql: str, args: Optional[tuple] = None) -> list[tuple]:
        with self._conn.cursor() as cursor:
            cursor.execute(sql, args)
            return list(cursor.fetchall())

    def table_exists(self, table: str) -> bool:
        """Check if the table exists in the database"""
        rows = self._fetch_all(
            "SELECT TABLE_NAME FROM INFORMATION_SCHEMA.TABLES "
            "WHERE TABLE_SCHEMA=%s AND TABLE_NAME=%s",
            (self.database, table)
        )
        return len(rows) > 0

    def get_column_types(self, table: str) -> dict[str, str]:
        """Get column name -> column type (e.g. 'bigint unsigned')"""
        rows = self._fetch_all(
            "SELECT COLUMN_NAME, COLUMN_TYPE FROM INFORMATION_SCHEMA.COLUMNS "
            "WHERE TABLE_SCHEMA=%s AND TABLE_NAME=%s",
            (self.database, table)
        )
        return {name: ttype for name, ttype in rows}

    def schema_sync(self, sql: str) -> None:
        statement = inspect_statement(sql)
        if not statement.table or not self.table_exists(statement.table):
            self.query(sql)
            return

        # Upgrade the types of existing columns, new columns are left
        # to the caller
        live_types = self.get_column_types(statement.table)
        for name, definition in statement.columns.items():
            if name not in live_types:
                continue

            declared = get_declared_type(definition)
            if not declared or is_shrinking(declared, live_types[name]):
                continue
            if normalize_column_type(declared) != normalize_column_type(live_types[name]):
                self.query(f"ALTER TABLE {statement.table} MODIFY COLUMN {definition}")

    def get_columns(self, table: str) -> list[str]:
        rows = self._fetch_all(
            "SELECT DISTINCT COLUMN_NAME FROM INFORMATION_SCHEMA.COLUMNS "
            "WHERE TABLE_SCHEMA=%s AND TABLE_NAME=%s",
            (self.database, table)
        )
        return [row[0] for row in rows]

    def query(self, sql: str) -> None:
        with self._conn.cursor() as cursor:
            cursor.execute(sql)
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()
