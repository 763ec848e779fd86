from __future__ import annotations

from pathlib import Path
from typing import Callable

from flask import current_app, render_template_string, request

from itembot.config import CURRENCY
from itembot.services import inventory as inventory_service
from itembot.services import tips as tips_service
from itembot.services.items import CraftResult, craft, find, recipe_name, sell
from itembot.services.money import fmt_money
from itembot.web.db import get_db

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


def _load_template(name: str) -> str:
    return (TEMPLATE_DIR / name).read_text(encoding="utf-8")


LAYOUT_HTML = _load_template("layout.html")
INVENTORY_HTML = _load_template("inventory.html")
TIPS_HTML = _load_template("tips.html")


def plain(body: str, status: int = 200):
    return body, status, {"Content-Type": "text/plain; charset=utf-8"}


def _render(template: str, title: str, **context) -> str:
    content = render_template_string(template, currency=CURRENCY, fmt_money=fmt_money, **context)
    return render_template_string(LAYOUT_HTML, title=title, content=content)


def _cmd_find(user: str, _args: str):
    found = find(get_db(), user)
    if found is None:
        current_app.logger.warning("[bot] find user=%s: no item has a positive weight", user)
        return plain("")
    return plain(f"{user} found {found['description']} worth {fmt_money(found['value'])}!")


def _cmd_sell(user: str, args: str):
    if not args:
        return plain("Usage: sell <item>", 400)
    sold = sell(get_db(), user, args)
    if sold is None:
        return plain("")
    return plain(f"{user} sold {sold['description']} for {fmt_money(sold['value'])}.")


def _cmd_craft(user: str, args: str):
    if not args:
        return plain("Usage: craft <item>", 400)
    result = craft(get_db(), user, args)
    if result == CraftResult.SUCCESS:
        return plain(f"{user} crafted {recipe_name(get_db(), args)}!")
    if result == CraftResult.RECIPE_NOT_FOUND:
        return plain(f"{user}, there is no recipe for {args}.")
    if result == CraftResult.MISSING_INGREDIENTS:
        return plain(f"{user}, you don't have the ingredients to craft {args}.")
    current_app.logger.warning("[bot] craft user=%s item=%s failed: %s", user, args, result.name)
    return plain("500 Internal Server Error", 500)


def _cmd_inventory(user: str, _args: str):
    rows = inventory_service.get_inventory(get_db(), user)
    return plain(inventory_service.describe(user, rows))


def _cmd_tip(_user: str, _args: str):
    tip = tips_service.random_tip(get_db())
    if tip is None:
        return plain("")
    return plain(str(tip["message"]))


def _cmd_addtip(user: str, args: str):
    if tips_service.add_tip(get_db(), user, args) is None:
        return plain("Usage: addtip <message>", 400)
    return plain(f"Thanks {user}, your tip was saved.")


BOT_COMMANDS: dict[str, Callable[[str, str], tuple]] = {
    "find": _cmd_find,
    "sell": _cmd_sell,
    "craft": _cmd_craft,
    "inventory": _cmd_inventory,
    "tip": _cmd_tip,
    "addtip": _cmd_addtip,
}


def bot_page():
    user = (request.args.get("user") or "").strip()
    command = (request.args.get("command") or "").strip().lower()
    args = (request.args.get("args") or "").strip()
    if not command and args:
        # Chat bots often pass the whole "!cmd args" query in one parameter.
        head, _, args = args.partition(" ")
        command, args = head.lower(), args.strip()

    if not user:
        return plain("Missing user", 400)
    handler = BOT_COMMANDS.get(command)
    if handler is None:
        current_app.logger.warning("[bot] unknown command %r from user=%s", command, user)
        return plain("Unknown command", 400)
    return handler(user, args)


def inventory_page():
    user = (request.args.get("user") or "").strip() or None
    rows = inventory_service.get_inventory(get_db(), user)
    return _render(INVENTORY_HTML, "Inventory", inventory=inventory_service.summarize(rows))


def tips_page():
    return _render(TIPS_HTML, "Tips", tips=tips_service.list_tips(get_db()))


PAGES: dict[str, Callable[[], object]] = {
    "bot": bot_page,
    "inventory": inventory_page,
    "tips": tips_page,
}
