#!/usr/bin/env python3
"""
Maintenance CLI for the loyalty card database

Usage:
    python -m loyalty_keyring.scripts.manage_keyring list
    python -m loyalty_keyring.scripts.manage_keyring --db ./data/cards.db add Coffee QR_CODE abc123
    python -m loyalty_keyring.scripts.manage_keyring tag QR_CODE abc123 drinks
    python -m loyalty_keyring.scripts.manage_keyring rename-tag drinks beverages
"""

import argparse
import logging
import sys
from typing import List, Optional

from loyalty_keyring.config import settings
from loyalty_keyring.logging_config import configure_logging
from loyalty_keyring.services.card_store import CardStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"Inspect and edit the {settings.app_name} card database"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {settings.app_version}",
    )
    parser.add_argument(
        "--db",
        type=str,
        default=settings.database_path,
        help="Path to the card database",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List cards, optionally in one group")
    list_cmd.add_argument("--tag", type=str, default=None, help="Only cards in this group")

    commands.add_parser("groups", help="List groups in use")

    add_cmd = commands.add_parser("add", help="Add a card")
    add_cmd.add_argument("name")
    add_cmd.add_argument("format")
    add_cmd.add_argument("data")

    delete_cmd = commands.add_parser("delete", help="Delete a card and its memberships")
    delete_cmd.add_argument("format")
    delete_cmd.add_argument("data")

    for name, help_text in (("tag", "Put a card in a group"), ("untag", "Take a card out of a group")):
        cmd = commands.add_parser(name, help=help_text)
        cmd.add_argument("format")
        cmd.add_argument("data")
        cmd.add_argument("tag")

    rename_cmd = commands.add_parser("rename-tag", help="Rename a group")
    rename_cmd.add_argument("old")
    rename_cmd.add_argument("new")

    return parser


def run(args: argparse.Namespace, store: CardStore) -> bool:
    """Execute one command; returns False when the store rejected it"""
    if args.command == "list":
        for card in store.get_cards_by_tag(args.tag):
            print(f"{card.name}\t{card.format}\t{card.data}")
        return True

    if args.command == "groups":
        for group in store.get_all_groups():
            print(group)
        return True

    if args.command == "add":
        return store.add_card(args.name, args.format, args.data)

    if args.command == "delete":
        return store.delete_card(args.format, args.data)

    if args.command == "tag":
        return store.add_tag(args.format, args.data, args.tag)

    if args.command == "untag":
        return store.remove_tag(args.format, args.data, args.tag)

    if args.command == "rename-tag":
        moved = store.rename_tag(args.old, args.new)
        print(f"Moved {moved} cards")
        return moved > 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    store = CardStore(args.db)
    try:
        ok = run(args, store)
    finally:
        store.close()

    if not ok:
        logger.error(f"'{args.command}' was rejected by the store")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
