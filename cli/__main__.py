#!/usr/bin/env python3
"""
Éclat CLI - Command-line storefront for the catalog, cart, accounts and support chat.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   Manage catalog categories
    products     Browse products and add them to the cart
    cart         View and edit the cart
    account      View and update account profiles
    chat         Talk to the support assistant
    migrate      Database migrations

Examples:
    python -m cli categories tree
    python -m cli products list --category bras
    python -m cli products add-to-cart silk-balconette-bra --size M --color Red
    python -m cli cart list
    python -m cli migrate apply
"""

import sys
import argparse
from cli import account, cart, categories, chat, migrate, products
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging

SERVICE_COMMANDS = ("categories", "products", "cart", "account", "chat")


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Éclat - Storefront catalog, cart and account management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    categories.setup_parser(subparsers)
    products.setup_parser(subparsers)
    cart.setup_parser(subparsers)
    account.setup_parser(subparsers)
    chat.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            if args.command in SERVICE_COMMANDS:
                # One container per process; commands get it explicitly
                services = Services(config)
                args.func(args, services)
            elif args.command == "migrate":
                db_manager = DatabaseManager(config)
                args.func(args, db_manager)
            else:
                args.func(args)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
