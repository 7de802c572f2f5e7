"""Module for comparing declared columns against the live database.

Functions
---------
- `get_missing_columns`: Get declared columns that do not exist in the live table.
- `check_table_columns`: Check if every declared column exists in the live table.
"""
from typing import Iterable, Optional

from ._core import ParsedStatement


def get_missing_columns(live_columns: Iterable[str],
                        statement: ParsedStatement) -> list[tuple[str, str]]:
    """Get declared columns that do not exist in the live table.

    Args
    ----
    live_columns : Iterable[str]
        Column names currently present in the table
    statement : ParsedStatement
        Parsed CREATE TABLE statement

    Returns
    -------
    list[tuple[str, str]]
        (column_name, column_declaration) in declaration order
    """
    live = set(live_columns)
    return [(name, definition) for name, definition in statement.columns.items()
            if name not in live]

def check_table_columns(handle, statement: ParsedStatement) -> Optional[str]:
    """Check if every declared column exists in the live table.

    Args
    ----
    handle : DatabaseHandle
        Handle of the target database
    statement : ParsedStatement
        Parsed CREATE TABLE statement

    Returns
    -------
    str : Error message if a declared column does not exist
          None if all the declared columns exist
    """
    live_columns = handle.get_columns(statement.table)
    if not live_columns:
        return f"Table '{statement.table}' does not exist or has no columns."

    if (missing := get_missing_columns(live_columns, statement)):
        return f"Column '{missing[0][0]}' does not exist " \
               f"in table '{statement.table}'."

    return None
