"""Pydantic schemas for language-model messages and routing decisions."""
from enum import Enum
from typing import Literal
from pydantic import BaseModel


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    text: str

    @classmethod
    def user(cls, text: str) -> "ChatMessage":
        return cls(role="user", text=text)


class Route(str, Enum):
    SEARCH = "search"
    DATABASE = "database"
    BOTH = "both"
