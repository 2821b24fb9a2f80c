"""
Exception hierarchy shared by the clients, agents and the HTTP layer.
Messages are user-facing: the API returns them verbatim as {"error": ...}.
"""
from typing import Optional


class AgentError(Exception):
    """Base class for every fault raised by an agent or a client."""


class InvalidRequestError(AgentError, ValueError):
    """Empty input or arguments that fail validation before any call is made."""


class InvalidIdentifierError(InvalidRequestError):
    """Database or table name outside the identifier allow-list."""


class QueryNotAllowedError(InvalidRequestError):
    """Anything other than a SELECT statement sent to the query operation."""


class SearchError(AgentError):
    pass


class DatabaseOperationError(AgentError):
    pass


class LLMError(AgentError):
    pass


def require_text(value: Optional[str], what: str) -> str:
    """Raise InvalidRequestError if value is None, empty or whitespace-only."""
    if value is None or not value.strip():
        raise InvalidRequestError(f"{what} cannot be empty")
    return value
