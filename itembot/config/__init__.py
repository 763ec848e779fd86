from itembot.config.settings import (
    CURRENCY,
    DB_PATH,
    HOST,
    PAGES,
    PORT,
    SECRET,
)

__all__ = [
    "CURRENCY",
    "DB_PATH",
    "HOST",
    "PAGES",
    "PORT",
    "SECRET",
]
