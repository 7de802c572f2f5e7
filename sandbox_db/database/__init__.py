"""
sandbox_db.database

Import the bundled schema dump into the target database

Modules
-------
- `schema_toolkit`: Parse the dump and compare it with the live database
- `importer`: Create tables and add missing columns
- `pagination`: Normalize limit and page parameters of queries

Classes
-------
- `DatabaseHandle`: Base class of database handles
- `SQLiteDatabaseHandle`: Database handle for SQLite
- `MySQLDatabaseHandle`: Database handle for MySQL
- `ImportSettings`: Settings of the application for the import
- `SchemaImporter`: Create tables and add missing columns from the dump
"""
from ._handle import DatabaseHandle
from ._handle_sqlite import SQLiteDatabaseHandle
from ._handle_mysql import MySQLDatabaseHandle
from .importer import ImportSettings, SchemaImporter
from .pagination import resolve_limit, resolve_page
