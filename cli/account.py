#!/usr/bin/env python3

import sys
from models.profile import COUNTRY_CODES, ShippingAddress, is_known_country_code
from logger import get_logger

logger = get_logger()


def cmd_show(args, services):
    """Show a user's profile."""
    profile = services.profiles.find(args.user_id)
    if not profile:
        logger.info(f"No profile saved for user {args.user_id}.")
        return

    address = profile.shipping_address
    logger.info("\nMy Account")
    logger.info("=" * 80)
    logger.info(f"Full Name: {profile.full_name}")
    logger.info(f"Mobile Number: {profile.country_code} {profile.local_number}")
    logger.info("Shipping Address:")
    logger.info(f"  {address.street}")
    logger.info(f"  {address.city}, {address.state} {address.postal_code}")
    logger.info(f"  {address.country}")
    if profile.updated_at:
        logger.info(f"Last updated: {profile.updated_at:%Y-%m-%d %H:%M}")


def _prompt(label: str, current: str) -> str:
    value = input(f"{label} [{current}]: ").strip()
    return value or current


def cmd_update(args, services):
    """Interactively update a user's profile, keeping current values on Enter."""
    profile = services.profiles.find_or_default(args.user_id)
    address = profile.shipping_address

    print("\nUpdate Profile")
    print("=" * 80)

    full_name = _prompt("Full name", profile.full_name)

    codes = ", ".join(f"{name} ({code})" for name, code in COUNTRY_CODES)
    print(f"\nCountry codes: {codes}")
    country_code = _prompt("Country code", profile.country_code)
    if not is_known_country_code(country_code):
        logger.error(f"Unsupported country code '{country_code}'.")
        sys.exit(1)
    local_number = _prompt("Mobile number", profile.local_number)

    print("\nShipping Address")
    shipping_address = ShippingAddress(
        street=_prompt("Street", address.street),
        city=_prompt("City", address.city),
        state=_prompt("State", address.state),
        postal_code=_prompt("Postal code", address.postal_code),
        country=_prompt("Country", address.country),
    )

    try:
        services.profiles.update(
            args.user_id, full_name, country_code, local_number, shipping_address
        )
    except Exception as e:
        logger.error(f"Error: Could not update profile. {e}")
        sys.exit(1)

    logger.info("Profile updated successfully!")


def setup_parser(subparsers):
    """Setup account subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "account",
        help="View and update account profiles",
        description="Manage personal information and shipping address",
    )

    account_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available account commands",
        dest="subcommand",
        required=True,
    )

    show_parser = account_subparsers.add_parser("show", help="Show a profile")
    show_parser.add_argument("user_id", help="User ID from the auth provider")
    show_parser.set_defaults(func=cmd_show)

    update_parser = account_subparsers.add_parser(
        "update", help="Update a profile interactively"
    )
    update_parser.add_argument("user_id", help="User ID from the auth provider")
    update_parser.set_defaults(func=cmd_update)
