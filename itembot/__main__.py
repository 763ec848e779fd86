from __future__ import annotations

import argparse
from pathlib import Path

from itembot.config import DB_PATH, HOST, PORT
from itembot.db import get_connection, init_db


def _build_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat bot item economy API.")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument(
        "--host",
        default=HOST,
        help="Host bind address (default: 127.0.0.1 or ITEMBOT_HOST).",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=PORT,
        help="Port (default: 8080 or ITEMBOT_PORT).",
    )

    init = sub.add_parser("init-db", help="Create the database schema.")
    init.add_argument(
        "--db-path",
        default=str(DB_PATH),
        help="DB path (default: data/itembot.db or ITEMBOT_DB_PATH).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _build_args(argv)
    if args.command == "init-db":
        conn = get_connection(Path(args.db_path).expanduser())
        try:
            init_db(conn)
        finally:
            conn.close()
        print(f"Initialized {args.db_path}")
        return 0

    from itembot.web.app import main as serve

    if args.command == "serve":
        serve(host=args.host, port=args.port)
    else:
        serve()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
