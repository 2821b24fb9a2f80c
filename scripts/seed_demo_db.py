#!/usr/bin/env python3
"""
Seed a local SQLite database for trying the database agent without SQL Server.
Usage (from the repository root):
    python scripts/seed_demo_db.py
Creates: scripts/TestDB.db (point DATABASE_URL at sqlite:///scripts/TestDB.db)
"""
import random
import sqlite3
from datetime import datetime, timedelta
from pathlib import Path

DB_PATH = Path(__file__).parent / "TestDB.db"

DDL = [
    """
    CREATE TABLE IF NOT EXISTS Users (
        Id          INTEGER PRIMARY KEY AUTOINCREMENT,
        UserName    TEXT    NOT NULL,
        Email       TEXT    UNIQUE NOT NULL,
        Country     TEXT,
        CreatedAt   TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )""",
    """
    CREATE TABLE IF NOT EXISTS Products (
        Id          INTEGER PRIMARY KEY AUTOINCREMENT,
        Sku         TEXT    UNIQUE NOT NULL,
        Name        TEXT    NOT NULL,
        Price       REAL    NOT NULL
    )""",
    """
    CREATE TABLE IF NOT EXISTS Orders (
        Id          INTEGER PRIMARY KEY AUTOINCREMENT,
        UserId      INTEGER REFERENCES Users(Id),
        ProductId   INTEGER REFERENCES Products(Id),
        Quantity    INTEGER NOT NULL,
        OrderedAt   TIMESTAMP
    )""",
]

COUNTRIES = ["US", "UK", "DE", "IN", "JP", None]


def seed():
    conn = sqlite3.connect(DB_PATH)
    cur  = conn.cursor()

    for stmt in DDL:
        cur.execute(stmt)

    # Users (150): more rows than the 100-row query cap
    for i in range(1, 151):
        cur.execute("INSERT OR IGNORE INTO Users(UserName, Email, Country, CreatedAt) VALUES (?,?,?,?)",
                    (f"user{i}", f"user{i}@example.com", random.choice(COUNTRIES),
                     datetime.now() - timedelta(days=random.randint(1, 365))))

    # Products (20)
    for i in range(1, 21):
        cur.execute("INSERT OR IGNORE INTO Products(Sku, Name, Price) VALUES (?,?,?)",
                    (f"SKU-{i:04d}", f"Product {i}", round(random.uniform(5, 500), 2)))

    # Orders (300)
    for _ in range(300):
        cur.execute("INSERT INTO Orders(UserId, ProductId, Quantity, OrderedAt) VALUES (?,?,?,?)",
                    (random.randint(1, 150), random.randint(1, 20), random.randint(1, 5),
                     datetime.now() - timedelta(days=random.randint(0, 90))))

    conn.commit()
    conn.close()
    print(f"Demo database seeded: {DB_PATH}")
    print("   Tables: Users, Products, Orders")


if __name__ == "__main__":
    seed()
