#!/usr/bin/env python3

import sys
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the lines in the cart."""
    items = services.cart.items()

    if not items:
        logger.info("Your cart is empty.")
        return

    logger.info("\nCart:")
    logger.info("=" * 80)
    for item in items:
        logger.info(
            f"Variant {item.variant_id}: {item.name} ({item.size} / {item.color}) "
            f"x{item.quantity} @ ${item.price} = ${item.line_total}"
        )

    logger.info("-" * 80)
    logger.info(f"Items: {services.cart.item_count()}")
    logger.info(f"Total: ${services.cart.total()}")


def cmd_remove(args, services):
    """Remove a variant from the cart."""
    if not services.cart.remove(args.variant_id):
        logger.error(f"Variant {args.variant_id} is not in the cart.")
        sys.exit(1)


def cmd_update(args, services):
    """Change the quantity of a cart line."""
    if not services.cart.update_quantity(args.variant_id, args.quantity):
        logger.error(f"Variant {args.variant_id} is not in the cart.")
        sys.exit(1)

    logger.info(f"Cart now holds {services.cart.item_count()} item(s).")


def cmd_clear(args, services):
    """Empty the cart."""
    services.cart.clear()
    logger.info("Cart cleared.")


def setup_parser(subparsers):
    """Setup cart subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "cart",
        help="View and edit the cart",
        description="List, update and clear the shopping cart",
    )

    cart_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available cart commands",
        dest="subcommand",
        required=True,
    )

    list_parser = cart_subparsers.add_parser("list", help="Show the cart")
    list_parser.set_defaults(func=cmd_list)

    remove_parser = cart_subparsers.add_parser("remove", help="Remove a cart line")
    remove_parser.add_argument("variant_id", type=int, help="Variant ID to remove")
    remove_parser.set_defaults(func=cmd_remove)

    update_parser = cart_subparsers.add_parser(
        "update", help="Set the quantity of a cart line (0 removes it)"
    )
    update_parser.add_argument("variant_id", type=int, help="Variant ID to update")
    update_parser.add_argument("quantity", type=int, help="New quantity")
    update_parser.set_defaults(func=cmd_update)

    clear_parser = cart_subparsers.add_parser("clear", help="Empty the cart")
    clear_parser.set_defaults(func=cmd_clear)
