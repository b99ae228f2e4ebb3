# catalog/client/cli.py
"""
Command-line front end for the catalog API.

Usage:
    python -m catalog.client states
    python -m catalog.client cities --search sao
    python -m catalog.client add "Campinas" SP
    python -m catalog.client edit 12 "Campinas" SP
    python -m catalog.client remove 12 --yes

The token is read from the token file (CATALOG_TOKEN_FILE) and asked for
with getpass when missing or rejected.
"""

import argparse
import getpass
import os
import sys
from typing import List, Optional

from catalog.client.controller import CatalogController
from catalog.client.http import ApiClient, ApiError
from catalog.client.session import Session, TokenRequired, TokenStore

DEFAULT_BASE_URL = "http://localhost:3000"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog",
        description="List and edit the States & Cities catalog.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("CATALOG_URL", DEFAULT_BASE_URL),
        help="Base URL of the API server",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("states", help="List states")

    cities = sub.add_parser("cities", help="List cities")
    cities.add_argument("--search", default="", help="Filter by name or UF")

    add = sub.add_parser("add", help="Add a city")
    add.add_argument("name")
    add.add_argument("uf")

    edit = sub.add_parser("edit", help="Rename or move a city")
    edit.add_argument("id", type=int)
    edit.add_argument("name")
    edit.add_argument("uf")

    remove = sub.add_parser("remove", help="Remove a city")
    remove.add_argument("id", type=int)
    remove.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    return parser


def _confirm(question: str) -> bool:
    return input(f"{question} [y/N] ").strip().lower() in ("y", "yes")


def run(args: argparse.Namespace, controller: CatalogController) -> int:
    if args.command == "states":
        for state in controller.load_states():
            print(f"{state['uf']} - {state['name']}")
        return 0

    if args.command == "cities":
        for city in controller.filter_cities(args.search):
            print(f"{city['id']:>6}  {city['state_uf']}  {city['name']}")
        return 0

    if args.command == "add":
        ok = controller.add_city(args.name, args.uf)
    elif args.command == "edit":
        ok = controller.edit_city(args.id, args.name, args.uf)
    else:
        confirm = (lambda _q: True) if args.yes else _confirm
        ok = controller.remove_city(args.id, confirm)
    return 0 if ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    session = Session(TokenStore(), prompt=getpass.getpass)
    with ApiClient(args.url, session) as api:
        controller = CatalogController(api, notify=print)
        try:
            session.ensure_token()
            return run(args, controller)
        except (ApiError, TokenRequired) as e:
            print(f"error: {e}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
