from itembot.db.database import get_connection, init_db
from itembot.db.repositories import (
    add_item,
    add_tip,
    add_to_store,
    count_tips,
    delete_inventory_entry,
    delete_oldest_entries,
    find_inventory_entry,
    get_inventory_rows,
    get_recipe_item,
    get_tip_at,
    get_tips,
    give_item,
    item_ids_exist,
    pick_weighted_item,
)

__all__ = [
    "add_item",
    "add_tip",
    "add_to_store",
    "count_tips",
    "delete_inventory_entry",
    "delete_oldest_entries",
    "find_inventory_entry",
    "get_connection",
    "get_inventory_rows",
    "get_recipe_item",
    "get_tip_at",
    "get_tips",
    "give_item",
    "init_db",
    "item_ids_exist",
    "pick_weighted_item",
]
