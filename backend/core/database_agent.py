"""
Database agent — keyword dispatch over the five database operations.
Free-text parameters (names, column lists, SQL) are extracted by the
language model; the database client validates whatever comes back.
"""
import asyncio
import logging

from core.db_connector import DatabaseClient
from core.errors import require_text
from integrations.llm_client import ChatClient
from prompts.agent_prompts import (
    extract_database_name_prompt,
    extract_table_prompt,
    extract_sql_prompt,
    friendly_result_prompt,
)

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_NAME = "TestDB"
DEFAULT_TABLE_DEFINITION = "TestTable|Id INT"
DEFAULT_TABLE_NAME = "TestTable"
DEFAULT_COLUMNS = "Id INT PRIMARY KEY"
DEFAULT_SQL = "SELECT 1"

HELP_TEXT = (
    "Supported operations:\n"
    "- List databases\n"
    "- List tables\n"
    "- Create database\n"
    "- Create table\n"
    "- Run SELECT query"
)

# Quotes and brackets a model tends to wrap a bare name in; anything else stays for validation
_NAME_STRIP_CHARS = "\"'`[]"


def _extract_name(reply: str, fallback: str) -> str:
    tokens = reply.strip().split()
    if not tokens:
        return fallback
    return tokens[-1].strip(_NAME_STRIP_CHARS) or fallback


def _split_table_definition(reply: str) -> tuple[str, str]:
    name, _, columns = reply.partition("|")
    return name.strip() or DEFAULT_TABLE_NAME, columns.strip() or DEFAULT_COLUMNS


def _strip_sql_fences(sql: str) -> str:
    sql = sql.strip()
    for fence in ("```sql", "```SQL", "```"):
        if sql.startswith(fence):
            sql = sql[len(fence):]
    return sql.rstrip("`").strip()


class DatabaseAgent:
    """Routes a database request to one operation, first match wins."""

    def __init__(self, db: DatabaseClient, chat_client: ChatClient, reformat_results: bool = False):
        self.db = db
        self.chat_client = chat_client
        self.reformat_results = reformat_results

    async def handle(self, request: str) -> str:
        require_text(request, "Request")
        lower = request.lower()

        if "list database" in lower or "show database" in lower:
            operation = "list_databases"
            result = await asyncio.to_thread(self.db.list_databases)
        elif "list table" in lower or "show table" in lower:
            operation = "list_tables"
            result = await asyncio.to_thread(self.db.list_tables)
        elif "create database" in lower:
            operation = "create_database"
            reply = await self._extract(extract_database_name_prompt.format(request=request))
            name = _extract_name(reply, DEFAULT_DATABASE_NAME)
            result = await asyncio.to_thread(self.db.create_database, name)
        elif "create table" in lower:
            operation = "create_table"
            reply = await self._extract(extract_table_prompt.format(request=request))
            name, columns = _split_table_definition(reply or DEFAULT_TABLE_DEFINITION)
            result = await asyncio.to_thread(self.db.create_table, name, columns)
        elif "select " in lower or "query" in lower:
            operation = "query"
            reply = await self._extract(extract_sql_prompt.format(request=request))
            sql = _strip_sql_fences(reply) or DEFAULT_SQL
            result = await asyncio.to_thread(self.db.query, sql)
        else:
            return HELP_TEXT

        logger.info("Database operation %s completed", operation)
        if self.reformat_results:
            friendly = await self.chat_client.ask(friendly_result_prompt.format(result=result))
            return friendly or result
        return result

    async def _extract(self, prompt: str) -> str:
        return (await self.chat_client.ask(prompt)).strip()
