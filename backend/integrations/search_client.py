"""
DuckDuckGo Instant Answer API client.
One GET per query; the fixed-schema JSON answer is rendered as plain text.
"""
import logging
from typing import Any, Optional
import httpx

from core.errors import SearchError, require_text

logger = logging.getLogger(__name__)

NO_RESULTS = "No results found"
NO_RELEVANT_RESULTS = "No relevant results found"
MAX_RELATED_TOPICS = 5


class DuckDuckGoSearchClient:
    """Wraps https://api.duckduckgo.com/?format=json."""

    def __init__(
        self,
        base_url: str = "https://api.duckduckgo.com",
        user_agent: str = "MCP-Search-Agent/1.0",
        timeout: float = 30,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = {"User-Agent": user_agent}
        self.timeout = timeout
        self._http = http_client

    async def search(self, query: str) -> str:
        """Search DuckDuckGo for instant answers and render them as text."""
        require_text(query, "Query")
        params = {"q": query, "format": "json", "no_html": "1", "skip_disambig": "1"}
        try:
            payload = await self._get_json(params)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("DuckDuckGo search failed for %r: %s", query[:80], e)
            raise SearchError(f"Search failed: {e}") from e
        return format_instant_answer(payload)

    async def _get_json(self, params: dict) -> Any:
        url = f"{self.base_url}/"
        if self._http is not None:
            resp = await self._http.get(url, params=params, headers=self.headers, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout, headers=self.headers) as client:
                resp = await client.get(url, params=params)
        resp.raise_for_status()
        # DuckDuckGo answers with application/x-javascript, so decode regardless of content type
        return resp.json()


def format_instant_answer(payload: Optional[dict]) -> str:
    """Render the fields present in an Instant Answer document, in a fixed order."""
    if payload is None:
        return NO_RESULTS
    if not isinstance(payload, dict):
        raise SearchError(f"Search failed: unexpected response type {type(payload).__name__}")

    lines: list[str] = []

    if payload.get("AbstractText"):
        lines.append(f"Abstract: {payload['AbstractText']}")
        if payload.get("AbstractSource"):
            lines.append(f"Source: {payload['AbstractSource']}")
        if payload.get("AbstractURL"):
            lines.append(f"URL: {payload['AbstractURL']}")

    if payload.get("Answer"):
        lines.append(f"Answer: {payload['Answer']}")

    if payload.get("Definition"):
        lines.append(f"Definition: {payload['Definition']}")
        if payload.get("DefinitionSource"):
            lines.append(f"Source: {payload['DefinitionSource']}")

    topics = payload.get("RelatedTopics") or []
    if topics:
        lines.append("")
        lines.append("Related Topics:")
        for topic in topics[:MAX_RELATED_TOPICS]:
            if not isinstance(topic, dict):
                continue
            if topic.get("Text"):
                lines.append(f"- {topic['Text']}")
            if topic.get("FirstURL"):
                lines.append(f"  URL: {topic['FirstURL']}")

    if not lines:
        return NO_RELEVANT_RESULTS
    return "\n".join(lines) + "\n"
