import pytest
from unittest.mock import AsyncMock, MagicMock

from conftest import ScriptedChatClient
from core.coordinator import MultiAgentCoordinator, classify_by_keywords, parse_route_reply
from core.errors import DatabaseOperationError, InvalidRequestError
from models.chat import Route


def _agents(search_result="S", db_result="D"):
    search = MagicMock()
    search.handle = AsyncMock(return_value=search_result)
    database = MagicMock()
    database.handle = AsyncMock(return_value=db_result)
    return search, database


@pytest.mark.parametrize("request_text, route", [
    ("search for information", Route.SEARCH),
    ("create a database called Foo", Route.DATABASE),
    ("Run a SQL query", Route.DATABASE),
    ("search the database for tables", Route.SEARCH),
    ("hello there", Route.SEARCH),
    ("Who is Ada Lovelace?", Route.SEARCH),
])
def test_keyword_routing(request_text, route):
    assert classify_by_keywords(request_text) is route


@pytest.mark.parametrize("reply, route", [
    ("search", Route.SEARCH),
    ("  Database\n", Route.DATABASE),
    ("BOTH", Route.BOTH),
    ("I think search", Route.BOTH),
    ("", Route.BOTH),
])
def test_parse_route_reply(reply, route):
    assert parse_route_reply(reply) is route


@pytest.mark.asyncio
async def test_keyword_dispatch_to_database_only():
    search, database = _agents()
    coordinator = MultiAgentCoordinator(search, database, ScriptedChatClient())
    assert await coordinator.dispatch("list tables in the database") == "D"
    database.handle.assert_awaited_once_with("list tables in the database")
    search.handle.assert_not_awaited()


@pytest.mark.asyncio
async def test_keyword_dispatch_mixed_falls_back_to_search():
    search, database = _agents()
    chat = ScriptedChatClient()
    coordinator = MultiAgentCoordinator(search, database, chat)
    assert await coordinator.dispatch("search the database for tables") == "S"
    database.handle.assert_not_awaited()
    assert chat.prompts == []


@pytest.mark.asyncio
async def test_llm_routing_single_agent():
    search, database = _agents()
    chat = ScriptedChatClient("database")
    coordinator = MultiAgentCoordinator(search, database, chat, routing_mode="llm")
    assert await coordinator.dispatch("what tables exist?") == "D"
    assert chat.prompts[0].startswith("Request: what tables exist?")


@pytest.mark.asyncio
async def test_llm_routing_unrecognised_reply_runs_both():
    search, database = _agents("search text", "db text")
    coordinator = MultiAgentCoordinator(search, database, ScriptedChatClient("no idea"), routing_mode="llm")
    result = await coordinator.dispatch("anything")
    assert result == "Search Results:\nsearch text\n\nDatabase Results:\ndb text\n"
    search.handle.assert_awaited_once()
    database.handle.assert_awaited_once()


@pytest.mark.asyncio
async def test_fan_out_failure_aborts_dispatch():
    search, database = _agents()
    database.handle = AsyncMock(side_effect=DatabaseOperationError("Query failed: timeout"))
    coordinator = MultiAgentCoordinator(search, database, ScriptedChatClient("both"), routing_mode="llm")
    with pytest.raises(DatabaseOperationError):
        await coordinator.dispatch("look it up everywhere")


@pytest.mark.asyncio
async def test_empty_request_makes_no_calls():
    search, database = _agents()
    chat = ScriptedChatClient("both")
    coordinator = MultiAgentCoordinator(search, database, chat, routing_mode="llm")
    with pytest.raises(InvalidRequestError):
        await coordinator.dispatch("   ")
    assert chat.prompts == []
    search.handle.assert_not_awaited()
    database.handle.assert_not_awaited()


def test_unknown_routing_mode():
    search, database = _agents()
    with pytest.raises(ValueError):
        MultiAgentCoordinator(search, database, ScriptedChatClient(), routing_mode="random")
