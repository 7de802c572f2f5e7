"""
Import the bundled schema dump into the target database

Classes
-------
- `ImportSettings`: Settings of the application for the import
- `SchemaImporter`: Create tables and add missing columns from the dump

Examples
--------
```python
from sandbox_db.database import SchemaImporter, SQLiteDatabaseHandle, ImportSettings

with open("schema.sql", encoding="utf-8") as f:
    sql = f.read()

with SQLiteDatabaseHandle("sandbox.db", prefix="wp_") as handle:
    importer = SchemaImporter(handle, ImportSettings(db_prefix="slds_"))
    importer.import_sql(sql)
    print(importer.table_name("sites"))  # wp_slds_sites
```
"""
from dataclasses import dataclass
from typing import Optional

from sandbox_db.status import warnings as sw
from sandbox_db.status.progress import ImportStage, LogLevel
from .schema_toolkit import ParsedStatement, PLACEHOLDER_TABLE_PREFIX
from .schema_toolkit.sql_parser import parse_sql
from .schema_toolkit.validator import get_missing_columns
from ._handle import DatabaseHandle



@dataclass(frozen=True)
class ImportSettings:
    """Settings of the application for the import

    Attributes
    ----------
    db_prefix : str
        Internal table prefix of this application
    placeholder_prefix : str
        Table prefix written in the dump
    """
    db_prefix: str = "slds_"
    """Internal table prefix of this application"""
    placeholder_prefix: str = PLACEHOLDER_TABLE_PREFIX
    """Table prefix written in the dump"""


class SchemaImporter:
    """Create tables and add missing columns from the bundled schema dump

    `import_sql` can be called every time the application starts;
    the second and later calls do nothing as long as the dump is unchanged.
    Errors raised by the database are not caught.
    """

    def __init__(self, handle: DatabaseHandle,
                 settings: Optional[ImportSettings] = None,
                 logger=None):
        """
        Parameters
        ----------
        handle : DatabaseHandle
            Handle of the target database
        settings : ImportSettings, optional
            Settings of the application, by default `ImportSettings()`
        logger : Logger, optional
            Logger, nothing is logged if None
        """
        self.handle = handle
        """Handle of the target database"""
        self.settings = ImportSettings() if settings is None else settings
        """Settings of the application"""
        self._logger = logger
        """Logger"""
        self.warnings: list[sw.SchemaWarningData] = []
        """Warnings issued by the last `import_sql` call"""

    def table_name(self, name: str) -> str:
        """Get the actual name of a table of this application

        Parameters
        ----------
        name : str
            Table name without prefixes (e.g. 'sites')

        Returns
        -------
        str
            Table name with the platform and internal prefixes (e.g. 'wp_slds_sites')
        """
        return self.handle.prefix + self.settings.db_prefix + name

    def prepare(self, sql: str) -> list[ParsedStatement]:
        """Extract, rewrite and inspect the CREATE TABLE statements

        Parameters
        ----------
        sql : str
            Raw exported SQL

        Returns
        -------
        list[ParsedStatement]
            Statements ready to be applied
        """
        return parse_sql(sql,
                         self.handle.dynamics(self.settings.db_prefix),
                         self.settings.placeholder_prefix)

    def import_sql(self, sql: str) -> None:
        """Import the schema dump

        Parameters
        ----------
        sql : str
            Raw exported SQL
        """
        self.warnings = []

        statements = self.prepare(sql)
        self._log(ImportStage.EXTRACTING,
                  f"{len(statements)} CREATE TABLE statement(s) found.")

        for statement in statements:
            if not statement.is_valid:
                self._warn(sw.TableNameNotFound(statement.query))
                continue

            self._apply(statement)

    def _apply(self, statement: ParsedStatement) -> None:
        """Create the table and add the columns missing in the database"""
        self.handle.schema_sync(statement.query)

        # schema_sync only creates new tables,
        # so columns added to the dump later must be added here
        current_columns = self.handle.get_columns(statement.table)
        added = 0
        for column, definition in get_missing_columns(current_columns, statement):
            self.handle.query(f"ALTER TABLE {statement.table} ADD {definition}")
            self._log(ImportStage.APPLYING,
                      f"Column '{column}' added to '{statement.table}'.")
            added += 1

        self._log(ImportStage.APPLYING,
                  f"Table '{statement.table}' synchronized ({added} column(s) added).")

    def _warn(self, warning: sw.SchemaWarningData) -> None:
        self.warnings.append(warning)
        self._log(ImportStage.EXTRACTING, warning.warning_message(), LogLevel.WARNING)

    def _log(self, stage: ImportStage, message: str,
             level: LogLevel = LogLevel.INFO) -> None:
        if self._logger is not None:
            self._logger.log(stage, message, level)
