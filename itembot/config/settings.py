import os
from pathlib import Path


_ROOT = Path(__file__).resolve().parents[2]
_SECRET_PATH = _ROOT / "SECRET"


def _read_secret() -> str:
    env_value = os.getenv("ITEMBOT_SECRET", "").strip()
    if env_value:
        return env_value
    if _SECRET_PATH.exists():
        return _SECRET_PATH.read_text(encoding="utf-8").strip()
    return ""


SECRET = _read_secret()
DB_PATH = Path(os.getenv("ITEMBOT_DB_PATH", str(_ROOT / "data" / "itembot.db")))

# APP CONFIGS
HOST = os.getenv("ITEMBOT_HOST", "127.0.0.1")   # Bind address for the API server
PORT = int(os.getenv("ITEMBOT_PORT", "8080"))    # Bind port for the API server
PAGES = ("bot", "inventory", "tips")             # Pages reachable through ?page=
CURRENCY = "$"                                   # Prefix used when printing item values
