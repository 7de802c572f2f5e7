"""Module for analyzing the bundled schema dump and comparing it
with the actual database.

Classes
-------
- Enum for SQL dialects
  - `SQLDialect`: Supported SQL dialects
- Classes for representing the schema dump
  - `SchemaDynamics`: Runtime values substituted into the dump
  - `ParsedStatement`: Rewritten CREATE TABLE statement and its columns

Functions
---------
- SQL dump analysis functions
  - `parse_sql`: Extract, rewrite and inspect CREATE TABLE statements.
- Column verification functions
  - `get_missing_columns`: Get declared columns absent from the live table.
  - `check_table_columns`: Check if every declared column exists.
"""
from ._core import (
    ParsedStatement, SchemaDynamics, SQLDialect,
    PLACEHOLDER_TABLE_PREFIX, PLACEHOLDER_TABLE_OPTIONS,
    PLACEHOLDER_COLUMN_CHARSET, PLACEHOLDER_COLUMN_COLLATE
)

from .sql_parser import parse_sql
from .validator import check_table_columns, get_missing_columns
