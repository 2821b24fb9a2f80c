import pytest
from pydantic import ValidationError

from models.chat import ChatMessage, Route
from models.requests import AgentRequest, HealthResponse, SearchRequest


def test_chat_message():
    msg = ChatMessage.user("hello")
    assert msg.role == "user"
    assert msg.text == "hello"
    with pytest.raises(ValidationError):
        ChatMessage(role="system", text="not a supported role")


def test_route_values():
    assert Route("search") is Route.SEARCH
    assert [r.value for r in Route] == ["search", "database", "both"]


def test_request_models():
    assert SearchRequest(query="q").query == "q"
    assert AgentRequest(request="r").request == "r"
    with pytest.raises(ValidationError):
        SearchRequest()


def test_health_response_serialises_timestamp():
    body = HealthResponse(status="healthy", timestamp="2026-01-01T00:00:00Z", service="svc").model_dump(mode="json")
    assert body["status"] == "healthy"
    assert body["timestamp"].startswith("2026-01-01T00:00:00")
