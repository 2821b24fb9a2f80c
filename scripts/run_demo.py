#!/usr/bin/env python3
"""
Console walkthrough of the three agents, wired from .env settings.
Usage (from the repository root):
    python scripts/run_demo.py
The database step needs a reachable DATABASE_URL (see seed_demo_db.py).
"""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from api.dependencies import get_coordinator, get_database_agent, get_search_agent, shutdown  # noqa: E402

DEMOS = [
    ("Demo 1: Search Agent - DuckDuckGo Internet Search",
     lambda: get_search_agent().handle("What is Python?")),
    ("Demo 2: Database Agent - List Operations",
     lambda: get_database_agent().handle("List databases")),
    ("Demo 3: Multi-Agent Coordinator",
     lambda: get_coordinator().dispatch("Search for information about FastAPI")),
]


async def run():
    print("=== MCP Multi-Agent POC Demo ===\n")
    try:
        for title, demo in DEMOS:
            print(title)
            print("=" * len(title) + "\n")
            try:
                print(f"Result: {await demo()}\n")
            except Exception as e:
                print(f"Error: {e}\n")
    finally:
        shutdown()
    print("=== Demo Complete ===")


if __name__ == "__main__":
    asyncio.run(run())
