"""
Process-wide client/agent wiring. Settings are read here and passed
explicitly into constructors; tests swap these out via dependency_overrides.
"""
from functools import lru_cache

from config import settings
from core.coordinator import MultiAgentCoordinator
from core.database_agent import DatabaseAgent
from core.db_connector import DatabaseClient
from core.search_agent import SearchAgent
from integrations.llm_client import ChatClient, build_chat_client
from integrations.search_client import DuckDuckGoSearchClient


@lru_cache
def get_chat_client() -> ChatClient:
    return build_chat_client(
        settings.LLM_PROVIDER,
        ollama_host=settings.OLLAMA_HOST,
        ollama_model=settings.OLLAMA_MODEL,
        ollama_timeout=settings.OLLAMA_TIMEOUT_SECONDS,
        ollama_max_retries=settings.OLLAMA_MAX_RETRIES,
    )


@lru_cache
def get_search_client() -> DuckDuckGoSearchClient:
    return DuckDuckGoSearchClient(
        base_url=settings.SEARCH_BASE_URL,
        user_agent=settings.SEARCH_USER_AGENT,
        timeout=settings.SEARCH_TIMEOUT_SECONDS,
    )


@lru_cache
def get_database_client() -> DatabaseClient:
    return DatabaseClient(
        settings.DATABASE_URL,
        query_timeout=settings.QUERY_TIMEOUT_SECONDS,
        max_rows=settings.MAX_QUERY_ROWS,
    )


@lru_cache
def get_search_agent() -> SearchAgent:
    return SearchAgent(get_search_client(), get_chat_client())


@lru_cache
def get_database_agent() -> DatabaseAgent:
    return DatabaseAgent(
        get_database_client(),
        get_chat_client(),
        reformat_results=settings.DATABASE_REFORMAT_RESULTS,
    )


@lru_cache
def get_coordinator() -> MultiAgentCoordinator:
    return MultiAgentCoordinator(
        get_search_agent(),
        get_database_agent(),
        get_chat_client(),
        routing_mode=settings.ROUTING_MODE,
    )


def shutdown() -> None:
    """Release pooled database connections if the client was ever built."""
    if get_database_client.cache_info().currsize:
        get_database_client().dispose()
