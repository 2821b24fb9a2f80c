"""
Coordinator — picks the search agent, the database agent, or both.
Routing is either keyword-based or delegated to the language model.
"""
import asyncio
import logging

from core.database_agent import DatabaseAgent
from core.errors import require_text
from core.search_agent import SearchAgent
from integrations.llm_client import ChatClient
from models.chat import Route
from prompts.agent_prompts import route_prompt

logger = logging.getLogger(__name__)

DATABASE_KEYWORDS = ("database", "table", "sql", "query")
SEARCH_KEYWORDS = ("search", "find", "what is", "who is")


def classify_by_keywords(request: str) -> Route:
    """Database-only or search-only keywords pick that agent; anything else goes to search."""
    lower = request.lower()
    is_database = any(kw in lower for kw in DATABASE_KEYWORDS)
    is_search = any(kw in lower for kw in SEARCH_KEYWORDS)
    if is_database and not is_search:
        return Route.DATABASE
    return Route.SEARCH


def parse_route_reply(reply: str) -> Route:
    """Model reply to Route; anything unrecognised runs both agents."""
    try:
        return Route(reply.strip().lower())
    except ValueError:
        return Route.BOTH


class MultiAgentCoordinator:
    """Dispatches a free-text request to the agent(s) that can serve it."""

    def __init__(
        self,
        search_agent: SearchAgent,
        database_agent: DatabaseAgent,
        chat_client: ChatClient,
        routing_mode: str = "keyword",
    ):
        if routing_mode not in ("keyword", "llm"):
            raise ValueError(f"Unknown routing mode: {routing_mode!r}")
        self.search_agent = search_agent
        self.database_agent = database_agent
        self.chat_client = chat_client
        self.routing_mode = routing_mode

    async def route(self, request: str) -> Route:
        if self.routing_mode == "llm":
            reply = await self.chat_client.ask(route_prompt.format(request=request))
            return parse_route_reply(reply)
        return classify_by_keywords(request)

    async def dispatch(self, request: str) -> str:
        require_text(request, "Request")
        route = await self.route(request)
        logger.info("Routing (%s) to %s: %s", self.routing_mode, route.value, request[:80])

        if route is Route.DATABASE:
            return await self.database_agent.handle(request)
        if route is Route.SEARCH:
            return await self.search_agent.handle(request)

        # first failure propagates; the sibling task is left to finish on its own
        search_result, db_result = await asyncio.gather(
            self.search_agent.handle(request),
            self.database_agent.handle(request),
        )
        return f"Search Results:\n{search_result}\n\nDatabase Results:\n{db_result}\n"
