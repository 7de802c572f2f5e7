"""
This module parses the bundled schema dump: it extracts CREATE TABLE
statements, substitutes the placeholder tokens with runtime values and
picks out the table name and column declarations of each statement.

## Functions

- `get_create_table_clauses`: Extract CREATE TABLE clauses from SQL strings.
- `apply_dynamics`: Replace placeholder tokens in a statement.
- `get_table_name`: Extract the table name of a statement.
- `get_column_definitions`: Extract the column declarations of a statement.
- `inspect_statement`: Build a `ParsedStatement` from a rewritten statement.
- `parse_sql`: Run all of the above on a whole dump.

## Authoring convention of the dump

The dump is expected to be exported with the following tokens so that
they can be replaced with the configuration of the target database.

1. Table prefix: `wp_slds_`
2. Table options: `ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_520_ci`
3. Column charset: `CHARACTER SET utf8mb4`
4. Column collation: `COLLATE utf8mb4_unicode_520_ci`
5. `CREATE TABLE IF NOT EXISTS` with a backquoted table name
6. One column per line, each line starting with the backquoted column name

## Example SQL Statement and Parsed Output

```sql
CREATE TABLE IF NOT EXISTS `wp_slds_sites` (
  `site_id` bigint(20) unsigned NOT NULL AUTO_INCREMENT,
  `site_url` varchar(255) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_520_ci NOT NULL,
  `created_at` datetime NOT NULL,
  PRIMARY KEY (`site_id`)
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_520_ci;
```

With the table prefix `wp_demo_` and the charset `utf8`/`utf8_general_ci`,
this statement is parsed as:

```
Table: wp_demo_sites
Columns:
  - site_id: `site_id` bigint(20) unsigned NOT NULL AUTO_INCREMENT
  - site_url: `site_url` varchar(255) CHARACTER SET utf8 COLLATE utf8_general_ci NOT NULL
  - created_at: `created_at` datetime NOT NULL
```

## Notes

- Substitution is purely textual. Any occurrence of the tokens above is
  replaced, including ones inside comments or string literals.
- The `PRIMARY KEY`/`KEY` lines are not treated as columns.
"""
import re

from ._core import (
    ParsedStatement, SchemaDynamics,
    PLACEHOLDER_TABLE_PREFIX, PLACEHOLDER_TABLE_OPTIONS,
    PLACEHOLDER_COLUMN_CHARSET, PLACEHOLDER_COLUMN_COLLATE
)



_CREATE_TABLE_PATTERN = re.compile(r"CREATE TABLE .*?;", re.IGNORECASE | re.DOTALL)
_TABLE_NAME_PATTERN = re.compile(r"CREATE TABLE IF NOT EXISTS `([^`]+)`")


#
# SQL Splitting Functions
#

def get_create_table_clauses(sql: str) -> list[str]:
    """
    Extract CREATE TABLE clauses from the given SQL string.

    Each clause ends at the first semicolon after `CREATE TABLE`,
    so semicolons inside the statement are not supported.

    Args
    ----
    sql : str
        The SQL string containing CREATE TABLE statements.

    Returns
    -------
    list[str]
        A list of CREATE TABLE clauses (including the semicolon)
        in the order they appear in the SQL string.
    """
    return _CREATE_TABLE_PATTERN.findall(sql)

#
# Substitution
#

def apply_dynamics(query: str, dynamics: SchemaDynamics,
                   placeholder_prefix: str = PLACEHOLDER_TABLE_PREFIX) -> str:
    """Replace the placeholder tokens of a statement with runtime values.

    Args
    ----
    query : str
        CREATE TABLE statement written with the placeholder tokens
    dynamics : SchemaDynamics
        Runtime values
    placeholder_prefix : str, optional
        Table prefix used in the dump, by default `wp_slds_`

    Returns
    -------
    str
        Rewritten statement

    Examples
    --------
    >>> d = SchemaDynamics("wp_demo_", "", "utf8", "utf8_general_ci")
    >>> apply_dynamics("`wp_slds_log` text CHARACTER SET utf8mb4", d)
    '`wp_demo_log` text CHARACTER SET utf8'
    """
    # Table prefix
    query = query.replace(placeholder_prefix, dynamics.table_prefix)

    # Table options
    query = query.replace(PLACEHOLDER_TABLE_OPTIONS, dynamics.charset_collate)

    # Column options
    query = query.replace(PLACEHOLDER_COLUMN_CHARSET, f"CHARACTER SET {dynamics.charset}")
    query = query.replace(PLACEHOLDER_COLUMN_COLLATE, f"COLLATE {dynamics.collate}")

    return query

#
# SQL Parsing Functions
#

def get_table_name(query: str) -> str:
    """Extract the table name from `CREATE TABLE IF NOT EXISTS `name``.

    Args
    ----
    query : str
        CREATE TABLE statement

    Returns
    -------
    str
        Table name, or an empty string if the statement does not match
    """
    if (match := _TABLE_NAME_PATTERN.search(query)):
        return match.group(1)
    return ""

def get_column_definitions(query: str) -> dict[str, str]:
    """Extract column declarations from a CREATE TABLE statement.

    Only lines starting with a backquote are regarded as column declarations.

    Args
    ----
    query : str
        CREATE TABLE statement

    Returns
    -------
    dict[str, str]
        Column name -> column declaration without the trailing comma

    Examples
    --------
    >>> get_column_definitions("CREATE TABLE IF NOT EXISTS `t` (\\n  `id` int,\\n  `name` text\\n);")
    {'id': '`id` int', 'name': '`name` text'}
    """
    columns: dict[str, str] = {}

    for line in query.splitlines():
        line = line.strip()
        if not line.startswith("`"):
            continue

        end = line.find("`", 1)
        if end <= 1:
            # No closing backquote or an empty name
            continue

        columns[line[1:end]] = line.rstrip(",")

    return columns

def inspect_statement(query: str) -> ParsedStatement:
    """Build a ParsedStatement from a rewritten statement.

    Args
    ----
    query : str
        Rewritten CREATE TABLE statement

    Returns
    -------
    ParsedStatement
        Parsed statement, `table` is empty if the name could not be extracted
    """
    return ParsedStatement(
        query=query,
        table=get_table_name(query),
        columns=get_column_definitions(query)
    )

def parse_sql(sql: str, dynamics: SchemaDynamics,
              placeholder_prefix: str = PLACEHOLDER_TABLE_PREFIX
              ) -> list[ParsedStatement]:
    """Parse a schema dump into rewritten statements.

    Args
    ----
    sql : str
        Raw exported SQL
    dynamics : SchemaDynamics
        Runtime values
    placeholder_prefix : str, optional
        Table prefix used in the dump

    Returns
    -------
    list[ParsedStatement]
        Parsed statements in document order
        If no CREATE TABLE statements are found in the SQL, an empty list is returned
    """
    return [
        inspect_statement(apply_dynamics(clause, dynamics, placeholder_prefix))
        for clause in get_create_table_clauses(sql)
    ]
