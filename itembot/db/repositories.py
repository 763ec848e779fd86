from __future__ import annotations

import sqlite3
from typing import Callable


def add_item(
    conn: sqlite3.Connection,
    name: str,
    value: float,
    weight: float = 0.0,
    recipe: str | None = None,
) -> int:
    cur = conn.execute(
        """
        INSERT INTO items (item, value, weight, recipe)
        VALUES (?, ?, ?, ?)
        """,
        (name, value, weight, recipe),
    )
    return int(cur.lastrowid)


def get_recipe_item(conn: sqlite3.Connection, name: str) -> dict | None:
    row = conn.execute(
        """
        SELECT id, item, recipe
        FROM items
        WHERE recipe IS NOT NULL AND item = ? COLLATE NOCASE
        LIMIT 1
        """,
        (name,),
    ).fetchone()
    return dict(row) if row else None


def item_ids_exist(conn: sqlite3.Connection, item_ids: list[int]) -> bool:
    if not item_ids:
        return False
    placeholders = ",".join(["?"] * len(item_ids))
    row = conn.execute(
        f"""
        SELECT COUNT(*) AS n
        FROM items
        WHERE id IN ({placeholders})
        """,
        tuple(item_ids),
    ).fetchone()
    return int(row["n"]) == len(set(item_ids))


def pick_weighted_item(
    conn: sqlite3.Connection,
    weighted_key: Callable[[float], float],
) -> dict | None:
    # Smallest -ln(U)/weight wins; equivalent to weight-proportional sampling.
    conn.create_function("weighted_key", 1, weighted_key)
    row = conn.execute(
        """
        SELECT id, item, value
        FROM items
        WHERE weight > 0
        ORDER BY weighted_key(weight)
        LIMIT 1
        """
    ).fetchone()
    return dict(row) if row else None


def give_item(conn: sqlite3.Connection, user: str, item_id: int) -> int:
    cur = conn.execute(
        "INSERT INTO inventory (user, item) VALUES (?, ?)",
        (user, item_id),
    )
    return int(cur.lastrowid)


def add_to_store(conn: sqlite3.Connection, item_id: int) -> bool:
    cur = conn.execute(
        "UPDATE items SET quantity = quantity + 1 WHERE id = ?",
        (item_id,),
    )
    return cur.rowcount > 0


def find_inventory_entry(conn: sqlite3.Connection, user: str, name: str) -> dict | None:
    row = conn.execute(
        """
        SELECT inventory.id AS inventory_id, items.id AS item_id, items.item, items.value
        FROM inventory
        JOIN items ON items.id = inventory.item
        WHERE inventory.user = ? AND items.item = ? COLLATE NOCASE
        ORDER BY inventory.time ASC, inventory.id ASC
        LIMIT 1
        """,
        (user, name),
    ).fetchone()
    return dict(row) if row else None


def delete_inventory_entry(conn: sqlite3.Connection, inventory_id: int) -> bool:
    cur = conn.execute("DELETE FROM inventory WHERE id = ?", (inventory_id,))
    return cur.rowcount > 0


def delete_oldest_entries(
    conn: sqlite3.Connection,
    user: str,
    item_id: int,
    count: int,
) -> int:
    cur = conn.execute(
        """
        DELETE FROM inventory
        WHERE id IN (
            SELECT id
            FROM inventory
            WHERE user = ? AND item = ?
            ORDER BY time ASC, id ASC
            LIMIT ?
        )
        """,
        (user, item_id, count),
    )
    return cur.rowcount


def get_inventory_rows(conn: sqlite3.Connection, user: str | None = None) -> list[dict]:
    sql = """
        SELECT inventory.user AS user, items.id AS item_id, items.item AS item,
               items.value AS value, COUNT(*) AS quantity
        FROM inventory
        JOIN items ON items.id = inventory.item
    """
    params: tuple = ()
    if user:
        sql += " WHERE inventory.user = ?"
        params = (user,)
    sql += """
        GROUP BY inventory.user, items.id, items.item, items.value
        ORDER BY inventory.user ASC, items.item ASC
    """
    return [dict(row) for row in conn.execute(sql, params).fetchall()]


def add_tip(conn: sqlite3.Connection, user: str, message: str) -> int:
    cur = conn.execute(
        "INSERT INTO tips (user, message) VALUES (?, ?)",
        (user, message),
    )
    return int(cur.lastrowid)


def get_tips(conn: sqlite3.Connection) -> list[dict]:
    rows = conn.execute(
        """
        SELECT id, user, message, time
        FROM tips
        ORDER BY time DESC, id DESC
        """
    ).fetchall()
    return [dict(row) for row in rows]


def count_tips(conn: sqlite3.Connection) -> int:
    row = conn.execute("SELECT COUNT(*) AS n FROM tips").fetchone()
    return int(row["n"])


def get_tip_at(conn: sqlite3.Connection, offset: int) -> dict | None:
    row = conn.execute(
        """
        SELECT id, user, message, time
        FROM tips
        ORDER BY id ASC
        LIMIT 1 OFFSET ?
        """,
        (offset,),
    ).fetchone()
    return dict(row) if row else None
