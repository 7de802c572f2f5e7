"""
Core data structures for schema toolkit.

This module defines the core data structures used in the schema toolkit.

Classes
-------
- `SQLDialect`: Supported SQL dialects
- `SchemaDynamics`: Runtime values substituted into a schema dump
- `ParsedStatement`: Rewritten CREATE TABLE statement and its declared columns

Constants
---------
- `PLACEHOLDER_TABLE_PREFIX`: Table prefix used in the bundled dump
- `PLACEHOLDER_TABLE_OPTIONS`: Table options clause used in the bundled dump
- `PLACEHOLDER_COLUMN_CHARSET`: Column charset clause used in the bundled dump
- `PLACEHOLDER_COLUMN_COLLATE`: Column collation clause used in the bundled dump
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Final



PLACEHOLDER_TABLE_PREFIX: Final[str] = "wp_slds_"
"""Table prefix written in the dump, replaced with the runtime prefix"""
PLACEHOLDER_TABLE_OPTIONS: Final[str] = \
    "ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_520_ci"
"""Table options written in the dump, replaced with the resolved charset/collate clause"""
PLACEHOLDER_COLUMN_CHARSET: Final[str] = "CHARACTER SET utf8mb4"
"""Column charset written in the dump"""
PLACEHOLDER_COLUMN_COLLATE: Final[str] = "COLLATE utf8mb4_unicode_520_ci"
"""Column collation written in the dump"""


class SQLDialect(Enum):
    """Supported SQL dialects."""
    SQLITE = auto()
    MYSQL = auto()
    OTHER = auto()

@dataclass(frozen=True)
class SchemaDynamics:
    """Runtime values substituted into a schema dump

    Attributes:
    -----------
    table_prefix : str
        Platform table prefix followed by the internal prefix (e.g. 'wp_slds_')
    charset_collate : str
        Table options clause resolved by the database
        (e.g. 'DEFAULT CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_520_ci')
    charset : str
        Default character set of the database (e.g. 'utf8mb4')
    collate : str
        Default collation of the database (e.g. 'utf8mb4_unicode_520_ci')
    """
    table_prefix: str
    """Platform table prefix followed by the internal prefix"""
    charset_collate: str
    """Table options clause"""
    charset: str
    """Default character set"""
    collate: str
    """Default collation"""

@dataclass
class ParsedStatement:
    """CREATE TABLE statement after substitution

    Attributes:
    -----------
    query : str
        Rewritten CREATE TABLE statement
    table : str
        Table name, empty if the name could not be extracted
    columns : dict[str, str]
        Column name -> full column declaration (trailing comma stripped)
        in order of appearance

    Examples
    --------
    ```sql
    CREATE TABLE IF NOT EXISTS `wp_slds_users` (
        `id` bigint unsigned NOT NULL AUTO_INCREMENT,
        `name` varchar(255) NOT NULL,
        PRIMARY KEY (`id`)
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_520_ci;
    ```

    is represented as:

    ```python
    ParsedStatement(
        query='CREATE TABLE IF NOT EXISTS `wp_slds_users` (...',
        table='wp_slds_users',
        columns={
            'id': '`id` bigint unsigned NOT NULL AUTO_INCREMENT',
            'name': '`name` varchar(255) NOT NULL'
        }
    )
    ```
    """
    query: str
    """Rewritten CREATE TABLE statement"""
    table: str = ""
    """Table name"""
    columns: dict[str, str] = field(default_factory=dict)
    """Column name -> column declaration"""

    @property
    def is_valid(self) -> bool:
        """True if the table name was extracted from the statement"""
        return self.table != ""
