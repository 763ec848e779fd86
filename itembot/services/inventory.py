from __future__ import annotations

import sqlite3

from itembot.db import get_inventory_rows
from itembot.services.money import fmt_money, money


def get_inventory(conn: sqlite3.Connection, user: str | None = None) -> list[dict]:
    rows = get_inventory_rows(conn, user)
    for row in rows:
        row["value"] = money(row["value"])
        row["quantity"] = int(row["quantity"])
    return rows


def summarize(rows: list[dict]) -> dict[str, dict]:
    """Group inventory rows per user, keeping the query's ordering."""
    users: dict[str, dict] = {}
    for row in rows:
        entry = users.setdefault(
            str(row["user"]),
            {"items": [], "total": {"items": 0, "value": 0.0}},
        )
        entry["items"].append(row)
        entry["total"]["items"] += int(row["quantity"])
        entry["total"]["value"] = money(
            entry["total"]["value"] + float(row["value"]) * int(row["quantity"])
        )
    return users


def describe(user: str, rows: list[dict]) -> str:
    if not rows:
        return f"{user} has no items."
    summary = summarize(rows).get(user)
    if summary is None:
        return f"{user} has no items."
    parts = [
        f"{row['item']} x{row['quantity']}" if row["quantity"] > 1 else str(row["item"])
        for row in summary["items"]
    ]
    total = summary["total"]
    return (
        f"{user} has {', '.join(parts)} "
        f"({total['items']} items worth {fmt_money(total['value'])})"
    )
