"""Item economy operations: finding, selling and crafting items."""

from __future__ import annotations

import json
import math
import sqlite3
from enum import IntEnum
from random import Random

from itembot.db import (
    add_to_store,
    delete_inventory_entry,
    delete_oldest_entries,
    find_inventory_entry,
    get_inventory_rows,
    get_recipe_item,
    give_item,
    item_ids_exist,
    pick_weighted_item,
)
from itembot.services.money import money

_rng = Random()


class CraftResult(IntEnum):
    SUCCESS = 0
    RECIPE_NOT_FOUND = 1
    MISSING_INGREDIENTS = 2
    DATABASE_ERROR = 3


def _weighted_key(rng: Random):
    def key(weight: float) -> float:
        # 1 - random() lies in (0, 1], so the log is always defined.
        return -math.log(1.0 - rng.random()) / float(weight)

    return key


def parse_recipe(raw: str | bytes | None) -> dict[int, int]:
    """Decode a recipe column into ``{ingredient_id: quantity}``.

    Anything that is not a non-empty JSON object of integer ids to positive
    integer quantities yields an empty dict.
    """
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return {}
    if not isinstance(data, dict) or not data:
        return {}
    ingredients: dict[int, int] = {}
    for key, value in data.items():
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            return {}
        try:
            item_id = int(key)
            quantity = int(value)
        except ValueError:
            return {}
        if quantity <= 0:
            return {}
        ingredients[item_id] = ingredients.get(item_id, 0) + quantity
    return ingredients


def find(conn: sqlite3.Connection, user: str, *, rng: Random | None = None) -> dict | None:
    """Give ``user`` one weighted random item, or ``None`` if none can spawn."""
    with conn:
        item = pick_weighted_item(conn, _weighted_key(rng or _rng))
        if item is None:
            return None
        give_item(conn, user, int(item["id"]))
    return {
        "user": user,
        "item_id": int(item["id"]),
        "description": str(item["item"]),
        "value": money(item["value"]),
    }


def sell(conn: sqlite3.Connection, user: str, item: str) -> dict | None:
    with conn:
        entry = find_inventory_entry(conn, user, item)
        if entry is None:
            return None
        delete_inventory_entry(conn, int(entry["inventory_id"]))
        add_to_store(conn, int(entry["item_id"]))
    return {
        "user": user,
        "item_id": int(entry["item_id"]),
        "description": str(entry["item"]),
        "value": money(entry["value"]),
    }


def craft(conn: sqlite3.Connection, user: str, item: str) -> CraftResult:
    """Turn the recipe ingredients held by ``user`` into one ``item``.

    Ingredients are consumed oldest first. Nothing is changed unless every
    ingredient is held in the required quantity.
    """
    target = get_recipe_item(conn, item)
    if target is None:
        return CraftResult.RECIPE_NOT_FOUND

    ingredients = parse_recipe(target["recipe"])
    if not ingredients or not item_ids_exist(conn, list(ingredients)):
        return CraftResult.RECIPE_NOT_FOUND

    try:
        rows = get_inventory_rows(conn, user)
    except sqlite3.Error:
        return CraftResult.DATABASE_ERROR

    held = {int(row["item_id"]): int(row["quantity"]) for row in rows}
    for item_id, quantity in ingredients.items():
        if held.get(item_id, 0) < quantity:
            return CraftResult.MISSING_INGREDIENTS

    with conn:
        for item_id, quantity in ingredients.items():
            delete_oldest_entries(conn, user, item_id, quantity)
        give_item(conn, user, int(target["id"]))
    return CraftResult.SUCCESS


def recipe_name(conn: sqlite3.Connection, item: str) -> str:
    target = get_recipe_item(conn, item)
    return str(target["item"]) if target else item
