"""Database handle for SQLite

Classes
-------
- SQLiteDatabaseHandle: Database handle for SQLite

Functions
---------
- get_connection: Get a connection object for SQLite
- to_sqlite: Remove column options that SQLite does not understand
- split_indexes: Move the index lines of a CREATE TABLE statement to CREATE INDEX statements
"""
import re
import sqlite3
from typing import ClassVar, Optional

from sandbox_db.database.schema_toolkit import SQLDialect
from sandbox_db.database.schema_toolkit.sql_parser import get_table_name
from ._handle import DatabaseHandle



SQLiteConnectionAlias = sqlite3.Connection
"""Type alias for SQLite connection"""

_MYSQL_ONLY_COLUMN_OPTIONS = re.compile(
    r"\s+(?:CHARACTER SET \w+|AUTO_INCREMENT|UNSIGNED|ZEROFILL)\b(?!\s*=)", re.IGNORECASE
)
_INT_DISPLAY_WIDTH = re.compile(
    r"\b(tinyint|smallint|mediumint|int|integer|bigint)\s*\(\d+\)", re.IGNORECASE
)
_INDEX_LINE = re.compile(
    r"^\s*(UNIQUE|FULLTEXT|SPATIAL)?\s*(?:KEY|INDEX)\s+(?:`([^`]+)`\s*)?\((.*)\)"
    r"(?:\s+USING\s+\w+)?\s*,?\s*$",
    re.IGNORECASE
)
_INDEX_PREFIX_LENGTH = re.compile(r"\s*\(\d+\)")
_DANGLING_COMMA = re.compile(r",(\s*\n\s*\))")

def get_connection(path:str, *, readonly:bool=False) -> SQLiteConnectionAlias:
    """Get a connection object for SQLite

    Parameters
    ----------
    path : str
        Path to the database file
    readonly : bool, optional
        If True, open the database in read-only mode

    Returns
    -------
    SQLiteConnectionAlias
        Connection object
    """
    if not readonly:
        return sqlite3.connect(path)

    return sqlite3.connect(
        f"file:{path}?mode=ro",
        uri=True
    )

def to_sqlite(sql:str) -> str:
    """Remove column options that SQLite does not understand

    `CHARACTER SET <charset>`, `AUTO_INCREMENT`, `UNSIGNED`, `ZEROFILL`
    and integer display widths are removed.

    Examples
    --------
    >>> to_sqlite("`id` bigint(20) unsigned NOT NULL AUTO_INCREMENT, `msg` text CHARACTER SET utf8")
    '`id` bigint NOT NULL, `msg` text'
    """
    sql = _MYSQL_ONLY_COLUMN_OPTIONS.sub("", sql)
    return _INT_DISPLAY_WIDTH.sub(r"\1", sql)

def split_indexes(sql:str, table:str) -> tuple[str, list[str]]:
    """Move the index lines of a CREATE TABLE statement to CREATE INDEX statements

    `KEY`, `INDEX`, `UNIQUE KEY`, `FULLTEXT KEY` and `SPATIAL KEY` lines
    (one per line, as exported by MySQL) cannot be written inside a
    CREATE TABLE statement of SQLite. They are removed from the statement
    and returned as separate statements. Index names are prefixed with the
    table name since SQLite index names are unique per database.

    Parameters
    ----------
    sql : str
        CREATE TABLE statement
    table : str
        Table name

    Returns
    -------
    tuple[str, list[str]]
        CREATE TABLE statement without the index lines,
        and the CREATE INDEX statements

    Examples
    --------
    >>> split_indexes("CREATE TABLE IF NOT EXISTS `t` (\\n`k` int,\\nKEY `k` (`k`)\\n);", "t")
    ('CREATE TABLE IF NOT EXISTS `t` (\\n`k` int\\n);', ['CREATE INDEX IF NOT EXISTS `t__k` ON `t` (`k`)'])
    """
    lines = []
    indexes = []
    names: set[str] = set()
    for line in sql.splitlines():
        if (match := _INDEX_LINE.match(line)) is None:
            lines.append(line)
            continue

        unique = "UNIQUE " if (match.group(1) or "").upper() == "UNIQUE" else ""
        columns = _INDEX_PREFIX_LENGTH.sub("", match.group(3))
        # Unnamed indexes are named after their first column with a numeric
        # suffix on collision, as MySQL does
        name = match.group(2) or columns.split(",")[0].strip(" `")
        if name in names:
            name = next(f"{name}_{i}" for i in range(2, len(names) + 3)
                        if f"{name}_{i}" not in names)
        names.add(name)
        indexes.append(f"CREATE {unique}INDEX IF NOT EXISTS `{table}__{name}` "
                       f"ON `{table}` ({columns})")

    if not indexes:
        return sql, []

    # The line before the removed ones may end with a dangling comma
    return _DANGLING_COMMA.sub(r"\1", "\n".join(lines)), indexes


class SQLiteDatabaseHandle(DatabaseHandle):
    """Database handle for SQLite

    SQLite has neither table options nor character sets, so the table
    options clause is removed and the column collation is replaced with
    `BINARY` by default. MySQL-only column options are removed from
    statements before execution (see `to_sqlite`), and index lines are
    created as separate indexes (see `split_indexes`).

    Attributes
    ----------
    path : str
        Path to the database file (':memory:' for in-memory database)
    prefix : str
        Table prefix
    charset : str
        Character set written into column declarations
    collate : str
        Collation written into column declarations
    """
    sql_dialect: ClassVar[SQLDialect] = SQLDialect.SQLITE

    def __init__(self, path: str = ":memory:", *,
                 prefix: str = "", charset: str = "utf8", collate: str = "BINARY",
                 readonly: bool = False,
                 connection: Optional[sqlite3.Connection] = None):
        super().__init__(prefix, charset, collate)
        self.path = path
        """Path to the database file"""
        self._conn = connection if connection is not None \
                     else get_connection(path, readonly=readonly)
        """Connection object"""

    @property
    def connection(self) -> sqlite3.Connection:
        """Connection object"""
        return self._conn

    @property
    def charset_collate(self) -> str:
        return ""

    def schema_sync(self, sql: str) -> None:
        # SQLite cannot change the type of an existing column,
        # so only the creation of the table and its indexes is performed here.
        sql = to_sqlite(sql)
        indexes = []
        if (table := get_table_name(sql)):
            sql, indexes = split_indexes(sql, table)

        self._conn.execute(sql)
        for index in indexes:
            self._conn.execute(index)
        self._conn.commit()

    def get_columns(self, table: str) -> list[str]:
        table_info = self._conn.execute(
            "SELECT name FROM pragma_table_info(?)", (table,)
        ).fetchall()
        return [row[0] for row in table_info]

    def query(self, sql: str) -> None:
        self._conn.execute(to_sqlite(sql))
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()
