import json
import httpx
import pytest

from core.errors import LLMError
from integrations.llm_client import MockChatClient, OllamaChatClient, build_chat_client
from models.chat import ChatMessage


@pytest.mark.asyncio
async def test_mock_echoes_prompt_prefix():
    client = MockChatClient()
    reply = await client.ask("x" * 80)
    assert reply == f"Mock response to: {'x' * 50}..."
    assert await client.ask("hi") == "Mock response to: hi..."


@pytest.mark.asyncio
async def test_mock_uses_last_message():
    client = MockChatClient()
    messages = [ChatMessage.user("first"), ChatMessage(role="assistant", text="second")]
    assert await client.complete(messages) == "Mock response to: second..."


@pytest.mark.asyncio
async def test_ollama_chat_payload_and_reply():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": {"role": "assistant", "content": "  database \n"}})

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = OllamaChatClient(host="http://ollama.test/", model="tiny", http_client=http)
    assert await client.ask("classify me") == "database"
    assert seen["url"] == "http://ollama.test/api/chat"
    assert seen["body"]["model"] == "tiny"
    assert seen["body"]["stream"] is False
    assert seen["body"]["messages"] == [{"role": "user", "content": "classify me"}]


@pytest.mark.asyncio
async def test_ollama_failure_raises_llm_error():
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    client = OllamaChatClient(host="http://ollama.test", model="tiny", max_retries=1, http_client=http)
    with pytest.raises(LLMError):
        await client.ask("hello")


def test_build_chat_client():
    assert isinstance(build_chat_client("mock"), MockChatClient)
    ollama = build_chat_client("ollama", ollama_host="http://h:1", ollama_model="m")
    assert isinstance(ollama, OllamaChatClient)
    assert ollama.host == "http://h:1"
    with pytest.raises(ValueError):
        build_chat_client("gpt")
