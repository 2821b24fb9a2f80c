"""
Search agent — one DuckDuckGo lookup, summarised by the language model.
"""
import logging

from core.errors import require_text
from integrations.llm_client import ChatClient
from integrations.search_client import DuckDuckGoSearchClient
from prompts.agent_prompts import search_summary_prompt

logger = logging.getLogger(__name__)

# Only this much of the rendered search text is handed to the model
RESULT_PREVIEW_CHARS = 500


class SearchAgent:
    """Answers a question from internet search results."""

    def __init__(self, search_client: DuckDuckGoSearchClient, chat_client: ChatClient):
        self.search_client = search_client
        self.chat_client = chat_client

    async def handle(self, query: str) -> str:
        require_text(query, "Query")
        results = await self.search_client.search(query)
        logger.info("Search returned %d chars for: %s", len(results), query[:80])

        prompt = search_summary_prompt.format(query=query, results=results[:RESULT_PREVIEW_CHARS])
        answer = await self.chat_client.ask(prompt)
        return answer or results
