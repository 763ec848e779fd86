import sqlite3

from itembot.db import add_item, get_connection, init_db


def memory_db() -> sqlite3.Connection:
    conn = get_connection(":memory:")
    init_db(conn)
    return conn


def seed_workshop(conn: sqlite3.Connection) -> dict[str, int]:
    ids = {
        "Wood": add_item(conn, "Wood", 1.0, weight=5),
        "Nail": add_item(conn, "Nail", 0.25, weight=10),
        "Gold": add_item(conn, "Gold", 100.0, weight=0),
    }
    ids["Chair"] = add_item(
        conn,
        "Chair",
        15.0,
        recipe=f'{{"{ids["Wood"]}": 2, "{ids["Nail"]}": 1}}',
    )
    conn.commit()
    return ids


def give(conn: sqlite3.Connection, user: str, item_id: int, time: str = "2024-01-01 00:00:00") -> int:
    cur = conn.execute(
        "INSERT INTO inventory (user, item, time) VALUES (?, ?, ?)",
        (user, item_id, time),
    )
    conn.commit()
    return int(cur.lastrowid)


def held(conn: sqlite3.Connection, user: str, item_id: int) -> int:
    row = conn.execute(
        "SELECT COUNT(*) AS n FROM inventory WHERE user = ? AND item = ?",
        (user, item_id),
    ).fetchone()
    return int(row["n"])
