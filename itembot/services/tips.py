from __future__ import annotations

import sqlite3
from random import Random

from itembot.db import add_tip as _insert_tip
from itembot.db import count_tips, get_tip_at, get_tips

_rng = Random()


def add_tip(conn: sqlite3.Connection, user: str, message: str) -> int | None:
    text = " ".join(message.split())
    if not text:
        return None
    with conn:
        return _insert_tip(conn, user, text)


def random_tip(conn: sqlite3.Connection, *, rng: Random | None = None) -> dict | None:
    total = count_tips(conn)
    if total <= 0:
        return None
    return get_tip_at(conn, (rng or _rng).randrange(total))


def list_tips(conn: sqlite3.Connection) -> list[dict]:
    return get_tips(conn)
