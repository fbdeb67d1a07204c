#!/usr/bin/env python3

import sys
import json
from catalog.tree import flatten_tree
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all categories, each parent followed by its subcategories."""
    categories = flatten_tree(services.categories.get_tree())

    if not categories:
        logger.info("No categories found.")
        return

    names = {category.id: category.name for category in categories}

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(f"ID: {category.id}")
        logger.info(f"Name: {category.name}")
        if category.description:
            logger.info(f"Description: {category.description}")
        if category.parent_id:
            parent_name = names.get(category.parent_id, "Unknown")
            logger.info(f"Parent: {parent_name} (ID: {category.parent_id})")
        logger.info("-" * 80)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_tree(args, services):
    """Show categories as navigation: roots with their subcategories."""
    tree = services.categories.get_tree()

    if not tree:
        logger.info("No categories found.")
        return

    logger.info("\nCategories")
    logger.info("=" * 80)
    for root in tree:
        logger.info(f"{root.name}  [/products?category={root.slug}]")
        for child in root.children:
            logger.info(f"  - {child.name}  [/products?category={child.slug}]")


def cmd_create(args, services):
    """Interactively create a new category."""
    print("\nCreate New Category")
    print("=" * 80)

    name = input("Category name (e.g., Sleepwear): ").strip()
    if not name:
        logger.error("Category name cannot be empty.")
        sys.exit(1)

    description = input("Description (optional, press Enter to skip): ").strip()
    if not description:
        description = None

    parent_id = None
    parent_input = input("Parent category ID (optional, press Enter to skip): ").strip()
    if parent_input:
        try:
            parent_id = int(parent_input)
        except ValueError:
            logger.error("Parent category ID must be a number.")
            sys.exit(1)

    try:
        category = services.categories.create(name, description, parent_id)

        logger.info(f"\n✓ Category created successfully with ID: {category.id}")
        logger.info(f"  Name: {category.name}")
        if category.description:
            logger.info(f"  Description: {category.description}")
        if category.parent_id:
            logger.info(f"  Parent ID: {category.parent_id}")

    except Exception as e:
        logger.error(f"Error creating category: {e}")
        sys.exit(1)


def cmd_delete(args, services):
    """Delete a category by ID."""
    category_id = args.category_id

    category = services.categories.find(category_id)
    if not category:
        logger.error(f"Category with ID {category_id} not found.")
        sys.exit(1)

    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {category.id}")
    logger.info(f"  Name: {category.name}")

    confirm = (
        input("\nAre you sure you want to delete this category? (yes/no): ")
        .strip()
        .lower()
    )
    if confirm != "yes":
        logger.info("Deletion cancelled.")
        return

    if services.categories.delete(category_id):
        logger.info(f"✓ Category '{category.name}' deleted successfully.")
    else:
        logger.error("Failed to delete category.")
        sys.exit(1)


def cmd_seed(args, services):
    """Seed categories from JSON file."""
    logger.info("\nSeeding categories from db/seed/categories.json")
    logger.info("=" * 80)

    try:
        created_count, skipped_count = services.categories.seed()
    except FileNotFoundError as e:
        logger.error(f"Seed file not found: {e}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        logger.error(f"Error parsing JSON file: {e}")
        sys.exit(1)

    logger.info("=" * 80)
    logger.info("\nSeeding complete!")
    logger.info(f"Created: {created_count}")
    logger.info(f"Skipped: {skipped_count}")
    logger.info(f"Total: {created_count + skipped_count}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, and delete catalog categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    tree_parser = categories_subparsers.add_parser(
        "tree", help="Show categories as a navigation tree"
    )
    tree_parser.set_defaults(func=cmd_tree)

    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category interactively"
    )
    create_parser.set_defaults(func=cmd_create)

    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.set_defaults(func=cmd_delete)

    seed_parser = categories_subparsers.add_parser(
        "seed", help="Seed categories from JSON file"
    )
    seed_parser.set_defaults(func=cmd_seed)
