"""
Database client — SQLAlchemy-backed management operations.
Supports SQL Server, PostgreSQL and SQLite. Creates databases and tables,
runs SELECT queries and lists databases/tables, rendering everything as text.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from core.errors import (
    DatabaseOperationError,
    InvalidIdentifierError,
    QueryNotAllowedError,
    require_text,
)

logger = logging.getLogger(__name__)

NO_QUERY_RESULTS = "Query returned no results"
NO_DATABASES = "No user databases found"
NO_TABLES = "No tables found in database"


@dataclass(frozen=True)
class DialectSQL:
    """Per-engine statements. {name} placeholders are validated identifiers."""
    table_exists: str
    create_table: str
    list_tables: str
    maintenance_db: Optional[str] = None
    database_exists: Optional[str] = None
    create_database: Optional[str] = None
    list_databases: Optional[str] = None


_DIALECTS: dict[str, DialectSQL] = {
    "mssql": DialectSQL(
        maintenance_db="master",
        database_exists="SELECT COUNT(*) FROM sys.databases WHERE name = :name",
        create_database="CREATE DATABASE [{name}]",
        list_databases="SELECT name FROM sys.databases WHERE database_id > 4 ORDER BY name",
        table_exists="SELECT COUNT(*) FROM INFORMATION_SCHEMA.TABLES WHERE TABLE_NAME = :name",
        create_table="CREATE TABLE [{name}] ({columns})",
        list_tables=(
            "SELECT TABLE_SCHEMA, TABLE_NAME FROM INFORMATION_SCHEMA.TABLES "
            "WHERE TABLE_TYPE = 'BASE TABLE' ORDER BY TABLE_SCHEMA, TABLE_NAME"
        ),
    ),
    "postgresql": DialectSQL(
        maintenance_db="postgres",
        database_exists="SELECT COUNT(*) FROM pg_database WHERE datname = :name",
        create_database='CREATE DATABASE "{name}"',
        list_databases=(
            "SELECT datname FROM pg_database "
            "WHERE NOT datistemplate AND datname <> 'postgres' ORDER BY datname"
        ),
        table_exists=(
            "SELECT COUNT(*) FROM information_schema.tables "
            "WHERE table_schema = current_schema() AND table_name = :name"
        ),
        create_table='CREATE TABLE "{name}" ({columns})',
        list_tables=(
            "SELECT table_schema, table_name FROM information_schema.tables "
            "WHERE table_type = 'BASE TABLE' AND table_schema NOT IN ('pg_catalog', 'information_schema') "
            "ORDER BY table_schema, table_name"
        ),
    ),
    # SQLite has no server catalog: databases are sibling .db files
    "sqlite": DialectSQL(
        table_exists="SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name = :name COLLATE NOCASE",
        create_table='CREATE TABLE "{name}" ({columns})',
        list_tables=(
            "SELECT 'main', name FROM sqlite_master "
            "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        ),
    ),
}


def is_valid_identifier(identifier: Optional[str]) -> bool:
    """Letters, digits and underscores only; must not start with a digit."""
    if not identifier or not identifier.strip():
        return False
    return (
        all(c.isalnum() or c == "_" for c in identifier)
        and (identifier[0].isalpha() or identifier[0] == "_")
    )


def validate_identifier(identifier: str, what: str) -> str:
    require_text(identifier, f"{what} name")
    if not is_valid_identifier(identifier):
        raise InvalidIdentifierError(f"Invalid {what.lower()} name: {identifier!r}")
    return identifier


def ensure_select_only(sql: str) -> str:
    """Only statements whose leading token is SELECT (any case) pass."""
    require_text(sql, "Query")
    if not sql.lstrip().upper().startswith("SELECT"):
        raise QueryNotAllowedError("Only SELECT queries are allowed")
    return sql


def format_result_table(columns: Sequence[str], rows: Sequence[Sequence[Any]], max_rows: int = 100) -> str:
    """Pipe-delimited table with a rule line and a trailing row count."""
    lines = [" | ".join(columns)]
    width = sum(len(c) for c in columns) + max(len(columns) - 1, 0) * 3
    lines.append("-" * width)
    for row in rows:
        lines.append(" | ".join("NULL" if v is None else str(v) for v in row))
    limited = f" (limited to {max_rows})" if len(rows) >= max_rows else ""
    lines.append("")
    lines.append(f"Total rows: {len(rows)}{limited}")
    return "\n".join(lines) + "\n"


def format_bullets(title: str, items: Sequence[str], empty: str) -> str:
    if not items:
        return empty
    return f"{title}:\n- " + "\n- ".join(items)


def _describe(e: Exception) -> str:
    """Driver message without SQLAlchemy's statement/background-link decoration."""
    orig = getattr(e, "orig", None)
    return str(orig) if orig is not None else str(e)


class DatabaseClient:
    """
    Management operations against one configured database.
    Each call opens (and closes) its own pooled connection.
    """

    def __init__(self, url: str, query_timeout: int = 30, max_rows: int = 100):
        require_text(url, "Connection string")
        self.url = url
        self.query_timeout = query_timeout
        self.max_rows = max_rows
        self._engine: Optional[Engine] = None
        self._admin_engine: Optional[Engine] = None

    # ── Engines ───────────────────────────────────────────────────────────────

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            try:
                self._engine = create_engine(self.url, pool_pre_ping=True)
            except (ArgumentError, ImportError) as e:
                # bad URL, unknown dialect or a DBAPI driver that is not installed
                raise DatabaseOperationError(f"Could not create database engine: {e}") from e
        return self._engine

    @property
    def dialect(self) -> DialectSQL:
        name = self.engine.dialect.name
        if name not in _DIALECTS:
            raise DatabaseOperationError(f"Unsupported database dialect: {name}")
        return _DIALECTS[name]

    def _admin(self) -> Engine:
        """Autocommit engine on the server's maintenance database (CREATE DATABASE can't run in a transaction)."""
        if self._admin_engine is None:
            url = self.engine.url.set(database=self.dialect.maintenance_db)
            self._admin_engine = create_engine(url, pool_pre_ping=True, isolation_level="AUTOCOMMIT")
        return self._admin_engine

    def dispose(self) -> None:
        for engine in (self._engine, self._admin_engine):
            if engine is not None:
                engine.dispose()
        self._engine = self._admin_engine = None

    # ── Databases ─────────────────────────────────────────────────────────────

    def create_database(self, name: str) -> str:
        validate_identifier(name, "Database")
        try:
            if self.engine.dialect.name == "sqlite":
                return self._create_sqlite_database(name)
            sql = self.dialect
            with self._admin().connect() as conn:
                exists = (conn.execute(text(sql.database_exists), {"name": name}).scalar() or 0) > 0
                if exists:
                    return f"Database '{name}' already exists"
                conn.execute(text(sql.create_database.format(name=name)))
        except (SQLAlchemyError, OSError) as e:
            raise DatabaseOperationError(f"Failed to create database: {_describe(e)}") from e
        logger.info("Created database %s", name)
        return f"Database '{name}' created successfully"

    def list_databases(self) -> str:
        try:
            if self.engine.dialect.name == "sqlite":
                names = sorted(p.stem for p in self._sqlite_dir().glob("*.db"))
            else:
                with self._admin().connect() as conn:
                    names = [row[0] for row in conn.execute(text(self.dialect.list_databases))]
        except (SQLAlchemyError, OSError) as e:
            raise DatabaseOperationError(f"Failed to list databases: {_describe(e)}") from e
        return format_bullets("User Databases", names, NO_DATABASES)

    def _sqlite_dir(self) -> Path:
        path = self.engine.url.database
        if not path or path == ":memory:":
            raise DatabaseOperationError("In-memory SQLite databases cannot hold other databases")
        return Path(path).resolve().parent

    def _create_sqlite_database(self, name: str) -> str:
        target = self._sqlite_dir() / f"{name}.db"
        if target.exists():
            return f"Database '{name}' already exists"
        # a zero-length file is a valid empty SQLite database
        target.touch(exist_ok=False)
        logger.info("Created SQLite database file %s", target)
        return f"Database '{name}' created successfully"

    # ── Tables ────────────────────────────────────────────────────────────────

    def create_table(self, name: str, column_definitions: str) -> str:
        validate_identifier(name, "Table")
        require_text(column_definitions, "Column definitions")
        sql = self.dialect
        try:
            with self.engine.begin() as conn:
                exists = (conn.execute(text(sql.table_exists), {"name": name}).scalar() or 0) > 0
                if exists:
                    return f"Table '{name}' already exists"
                # column definitions are embedded verbatim; only the table name is validated
                conn.exec_driver_sql(sql.create_table.format(name=name, columns=column_definitions))
        except SQLAlchemyError as e:
            raise DatabaseOperationError(f"Failed to create table: {_describe(e)}") from e
        logger.info("Created table %s", name)
        return f"Table '{name}' created successfully"

    def list_tables(self) -> str:
        try:
            with self.engine.connect() as conn:
                tables = [f"{schema}.{table}" for schema, table in conn.execute(text(self.dialect.list_tables))]
        except SQLAlchemyError as e:
            raise DatabaseOperationError(f"Failed to list tables: {_describe(e)}") from e
        return format_bullets("Tables", tables, NO_TABLES)

    # ── Queries ───────────────────────────────────────────────────────────────

    def query(self, sql: str) -> str:
        """Run a SELECT and render at most max_rows rows."""
        ensure_select_only(sql)
        try:
            with self.engine.connect() as conn:
                self._apply_statement_timeout(conn)
                result = conn.exec_driver_sql(sql)
                if not result.returns_rows:
                    return NO_QUERY_RESULTS
                columns = [str(c) for c in result.keys()]
                rows = result.fetchmany(self.max_rows)
        except SQLAlchemyError as e:
            raise DatabaseOperationError(f"Query failed: {_describe(e)}") from e

        if not rows:
            return NO_QUERY_RESULTS
        logger.info("Query returned %d rows", len(rows))
        return format_result_table(columns, rows, self.max_rows)

    def _apply_statement_timeout(self, conn: Connection) -> None:
        dialect = self.engine.dialect.name
        if dialect == "postgresql":
            conn.exec_driver_sql(f"SET statement_timeout = {int(self.query_timeout) * 1000}")
        elif dialect == "mssql":
            # pyodbc exposes the per-statement timeout on the DBAPI connection
            dbapi_conn = conn.connection.dbapi_connection
            if hasattr(dbapi_conn, "timeout"):
                dbapi_conn.timeout = int(self.query_timeout)
        # sqlite3 has no statement timeout
