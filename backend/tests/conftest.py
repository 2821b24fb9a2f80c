import os
import sys

# Add the parent directory (backend) to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
import sqlite3
from typing import Optional, Sequence
from fastapi.testclient import TestClient

from main import app
from integrations.llm_client import ChatClient
from models.chat import ChatMessage


class ScriptedChatClient(ChatClient):
    """Replays canned replies in order (the last one repeats) and records every prompt."""

    name = "scripted"

    def __init__(self, *replies: str):
        self.replies = list(replies) or [""]
        self.prompts: list[str] = []

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        self.prompts.append(messages[-1].text)
        index = min(len(self.prompts), len(self.replies)) - 1
        return self.replies[index]


class FakeSearchClient:
    def __init__(self, result: str = "Abstract: canned\n", error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.queries: list[str] = []

    async def search(self, query: str) -> str:
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.result


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def overrides():
    yield app.dependency_overrides
    app.dependency_overrides.clear()


@pytest.fixture
def sqlite_db(tmp_path):
    path = tmp_path / "TestDB.db"
    conn = sqlite3.connect(path)
    cur = conn.cursor()
    cur.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, email TEXT UNIQUE);")
    cur.executemany(
        "INSERT INTO users (name, email) VALUES (?, ?);",
        [(f"user{i}", None if i % 50 == 0 else f"user{i}@example.com") for i in range(1, 151)],
    )
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def sqlite_url(sqlite_db):
    return f"sqlite:///{sqlite_db}"
