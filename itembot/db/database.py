from __future__ import annotations

import sqlite3
from pathlib import Path

from itembot.config import DB_PATH


def get_connection(db_path: str | Path = DB_PATH) -> sqlite3.Connection:
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    with conn:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                item TEXT NOT NULL UNIQUE COLLATE NOCASE,
                value REAL NOT NULL DEFAULT 0,
                weight REAL NOT NULL DEFAULT 0,
                recipe TEXT,
                quantity INTEGER NOT NULL DEFAULT 0
            );

            CREATE TABLE IF NOT EXISTS inventory (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user TEXT NOT NULL,
                item INTEGER NOT NULL,
                time TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (item)
                    REFERENCES items (id)
                    ON DELETE CASCADE
            );

            CREATE INDEX IF NOT EXISTS inventory_user_item
                ON inventory (user, item);

            CREATE TABLE IF NOT EXISTS tips (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user TEXT NOT NULL,
                message TEXT NOT NULL,
                time TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            );
            """
        )
        _ensure_items_columns(conn)


def _ensure_items_columns(conn: sqlite3.Connection) -> None:
    columns = {
        row["name"]
        for row in conn.execute("PRAGMA table_info(items);").fetchall()
    }
    if "recipe" not in columns:
        conn.execute("ALTER TABLE items ADD COLUMN recipe TEXT;")
    if "quantity" not in columns:
        conn.execute(
            "ALTER TABLE items ADD COLUMN quantity INTEGER NOT NULL DEFAULT 0;"
        )
