from __future__ import annotations

import hmac
import sqlite3

from flask import Flask, request

from itembot.config import DB_PATH, HOST, PORT, SECRET
from itembot.db import get_connection, init_db
from itembot.web.db import close_db
from itembot.web.pages import PAGES, plain


def _secret_matches(given: str, expected: str) -> bool:
    if not expected:
        return False
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def create_app(config: dict | None = None) -> Flask:
    app = Flask(__name__)
    app.config["SECRET"] = SECRET
    app.config["DB_PATH"] = str(DB_PATH)
    if config:
        app.config.update(config)

    conn = get_connection(app.config["DB_PATH"])
    try:
        init_db(conn)
    finally:
        conn.close()

    if not app.config["SECRET"]:
        app.logger.warning("No secret configured; every request will be rejected.")

    app.teardown_appcontext(close_db)

    @app.before_request
    def _authorize():
        secret = request.args.get("secret") or ""
        if _secret_matches(secret, str(app.config["SECRET"] or "")):
            return None
        app.logger.warning(
            "[auth] rejected %s %s from %s",
            request.method,
            request.path,
            request.remote_addr,
        )
        return plain("401 Unauthorized", 401)

    @app.errorhandler(404)
    def _not_found(_error):
        return plain("404 Not Found", 404)

    @app.errorhandler(sqlite3.Error)
    def _database_error(error: sqlite3.Error):
        app.logger.exception("[db] %s failed: %s", request.full_path, error)
        return plain("500 Internal Server Error", 500)

    @app.get("/")
    def index():
        page = (request.args.get("page") or "").strip().lower()
        handler = PAGES.get(page)
        if handler is None:
            return plain("404 Not Found", 404)
        return handler()

    return app


def main(host: str = HOST, port: int = PORT) -> None:
    app = create_app()
    app.run(host=host, port=port, debug=False)


if __name__ == "__main__":
    main()
