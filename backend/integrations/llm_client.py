"""
Language-model clients.
ChatClient is the capability the agents depend on; MockChatClient is a
deterministic stand-in and OllamaChatClient wraps the Ollama /api/chat
endpoint.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence
import httpx

from core.errors import LLMError
from models.chat import ChatMessage

logger = logging.getLogger(__name__)


class ChatClient(ABC):
    """Submit a conversation, get back a single text completion."""

    name: str = "chat-client"

    @abstractmethod
    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        ...

    async def ask(self, prompt: str) -> str:
        """Single-turn convenience wrapper around complete()."""
        return await self.complete([ChatMessage.user(prompt)])


class MockChatClient(ChatClient):
    """Echoes the first 50 characters of the last message."""

    name = "mock-client"
    PREFIX_CHARS = 50

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        last = messages[-1].text if messages else ""
        return f"Mock response to: {last[:self.PREFIX_CHARS]}..."


class OllamaChatClient(ChatClient):
    """Thin async client for the Ollama local LLM server."""

    name = "ollama"

    def __init__(
        self,
        host: str,
        model: str,
        timeout: float = 120,
        max_retries: int = 1,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.host = host.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self._http = http_client

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        """
        Call Ollama /api/chat with the messages mapped to {role, content}.
        Returns the assistant's reply as a string.
        """
        payload = {
            "model": self.model,
            "messages": [{"role": m.role, "content": m.text} for m in messages],
            "stream": False,
            "options": {"num_ctx": 4096, "temperature": 0.2},
        }
        last_err: Optional[Exception] = None
        for attempt in range(1, self.max_retries + 1):
            try:
                resp = await self._post("/api/chat", payload)
                resp.raise_for_status()
                text = resp.json()["message"]["content"].strip()
                logger.debug("Ollama response length: %d chars", len(text))
                return text
            except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
                last_err = e
                logger.warning("Ollama chat attempt %d/%d failed: %s", attempt, self.max_retries, e)
                if attempt < self.max_retries:
                    await asyncio.sleep(2 ** attempt)  # exponential back-off: 2s, 4s
        raise LLMError(f"Ollama chat failed after {self.max_retries} attempts: {last_err}")

    async def _post(self, path: str, payload: dict) -> httpx.Response:
        if self._http is not None:
            return await self._http.post(f"{self.host}{path}", json=payload, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(f"{self.host}{path}", json=payload)


def build_chat_client(
    provider: str,
    ollama_host: str = "http://localhost:11434",
    ollama_model: str = "qwen2.5-coder:3b",
    ollama_timeout: float = 120,
    ollama_max_retries: int = 1,
) -> ChatClient:
    if provider == "mock":
        return MockChatClient()
    if provider == "ollama":
        return OllamaChatClient(
            host=ollama_host,
            model=ollama_model,
            timeout=ollama_timeout,
            max_retries=ollama_max_retries,
        )
    raise ValueError(f"Unknown LLM provider: {provider!r}")
