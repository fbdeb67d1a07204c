#!/usr/bin/env python3

import sys
from decimal import Decimal, InvalidOperation
from catalog.variants import (
    ColorNotSelected,
    CombinationUnavailable,
    InsufficientStock,
    SelectionError,
    SizeNotSelected,
    VariantSelector,
)
from services.products import category_title
from logger import get_logger

logger = get_logger()

FEATURED_TITLE = "New Arrivals"
FEATURED_EMPTY_MESSAGE = "Our new arrivals will be here soon. Stay tuned!"

SELECTION_ERROR_MESSAGES = {
    SizeNotSelected: "Please select a size.",
    ColorNotSelected: "Please select a color.",
    CombinationUnavailable: "This combination is not available.",
    InsufficientStock: "Not enough stock available.",
}


def selection_error_message(error: SelectionError) -> str:
    """User-facing message for a selection problem."""
    for error_type, message in SELECTION_ERROR_MESSAGES.items():
        if isinstance(error, error_type):
            return message
    return "Please check your selection."


def add_selection_to_cart(services, product, selector: VariantSelector):
    """Resolve the selector's current choice and add it to the cart.

    The cart is only touched once the variant resolves.

    Returns:
        The new or updated CartItem.

    Raises:
        SelectionError: If the selection is incomplete or cannot be fulfilled.
    """
    variant = selector.resolve_selection()
    return services.cart.add(product, variant, selector.state.quantity)


def cmd_list(args, services):
    """List products, optionally filtered by category slug."""
    products = services.products.find_by_category_slug(args.category)

    logger.info(f"\n{category_title(args.category)}")
    logger.info("=" * 80)

    if not products:
        logger.info("No products found.")
        return

    for product in products:
        category = product.category_name or "Uncategorized"
        logger.info(f"{product.name} (${product.price}) [{category}]  /products/{product.slug}")

    logger.info(f"\nTotal products: {len(products)}")


def cmd_featured(args, services):
    """Show the newest products, as on the home page."""
    products = services.products.find_featured()

    logger.info(f"\n{FEATURED_TITLE}")
    logger.info("=" * 80)

    if not products:
        logger.info(FEATURED_EMPTY_MESSAGE)
        return

    for product in products:
        image = product.primary_image_url or "no image"
        logger.info(f"{product.name} (${product.price})  /products/{product.slug}  [{image}]")


def cmd_show(args, services):
    """Show one product with its sizes, colors and stock."""
    product = services.products.find_by_slug(args.slug)
    if not product:
        logger.error(f"Product '{args.slug}' not found.")
        sys.exit(1)

    selector = VariantSelector(product.variants)

    logger.info(f"\n{product.name}")
    logger.info("=" * 80)
    logger.info(f"Price: ${product.price}")
    if product.category_name:
        logger.info(f"Category: {product.category_name}")
    if product.description:
        logger.info(product.description)
    if product.images:
        logger.info(f"Image: {product.primary_image_url}")

    sizes = selector.available_sizes()
    logger.info(f"\nSizes: {', '.join(sizes) if sizes else 'none'}")
    colors = selector.available_colors()
    logger.info(f"Colors: {', '.join(colors) if colors else 'none'}")
    for size in sizes:
        logger.info(f"  {size}: {', '.join(selector.colors_for_size(size))}")

    logger.info("\nVariants:")
    for variant in product.variants:
        logger.info(
            f"  ID {variant.id}: {variant.size} / {variant.color} "
            f"({variant.stock_quantity} in stock)"
        )


def cmd_create(args, services):
    """Interactively create a new product."""
    print("\nCreate New Product")
    print("=" * 80)

    name = input("Product name (e.g., Silk Balconette Bra): ").strip()
    if not name:
        logger.error("Product name cannot be empty.")
        sys.exit(1)

    default_slug = name.lower().replace(" ", "-")
    slug = input(f"Slug (press Enter for '{default_slug}'): ").strip() or default_slug

    try:
        price = Decimal(input("Price (e.g., 49.99): ").strip())
    except InvalidOperation:
        logger.error("Price must be a number.")
        sys.exit(1)

    description = input("Description (optional, press Enter to skip): ").strip() or None

    category_id = None
    category_input = input("Category ID (optional, press Enter to skip): ").strip()
    if category_input:
        try:
            category_id = int(category_input)
        except ValueError:
            logger.error("Category ID must be a number.")
            sys.exit(1)

    try:
        product = services.products.create(name, slug, price, description, category_id)
        logger.info(f"\n✓ Product created successfully with ID: {product.id}")
        logger.info(f"  Slug: {product.slug}")
    except Exception as e:
        logger.error(f"Error creating product: {e}")
        sys.exit(1)


def cmd_add_variant(args, services):
    """Add a size/color variant to a product."""
    product = services.products.find_by_slug(args.slug)
    if not product:
        logger.error(f"Product '{args.slug}' not found.")
        sys.exit(1)

    try:
        variant = services.products.add_variant(
            product.id, args.size, args.color, args.stock
        )
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(
        f"✓ Added variant {variant.size} / {variant.color} "
        f"(ID: {variant.id}, stock: {variant.stock_quantity})"
    )


def cmd_add_image(args, services):
    """Attach an image URL to a product."""
    product = services.products.find_by_slug(args.slug)
    if not product:
        logger.error(f"Product '{args.slug}' not found.")
        sys.exit(1)

    image = services.products.add_image(product.id, args.image_url, args.alt_text)
    logger.info(f"✓ Added image (ID: {image.id}) to '{product.name}'")


def cmd_add_to_cart(args, services):
    """Select a size and color and add the matching variant to the cart."""
    product = services.products.find_by_slug(args.slug)
    if not product:
        logger.error(f"Product '{args.slug}' not found.")
        sys.exit(1)

    selector = VariantSelector(product.variants)
    try:
        selector.set_quantity(args.quantity)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    if args.size:
        selector.select_size(args.size)
        if selector.state.selected_color and not args.color:
            logger.info(f"Color auto-selected: {selector.state.selected_color}")
    if args.color:
        selector.select_color(args.color)

    try:
        add_selection_to_cart(services, product, selector)
    except SelectionError as e:
        logger.error(selection_error_message(e))
        sys.exit(1)

    logger.info(f"Cart now holds {services.cart.item_count()} item(s).")


def setup_parser(subparsers):
    """Setup products subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "products",
        help="Browse and manage products",
        description="List, show and create products and add them to the cart",
    )

    products_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available product commands",
        dest="subcommand",
        required=True,
    )

    list_parser = products_subparsers.add_parser("list", help="List products")
    list_parser.add_argument(
        "--category",
        help="Category slug to filter by (e.g., pajama-sets)",
    )
    list_parser.set_defaults(func=cmd_list)

    featured_parser = products_subparsers.add_parser(
        "featured", help="Show the newest arrivals"
    )
    featured_parser.set_defaults(func=cmd_featured)

    show_parser = products_subparsers.add_parser("show", help="Show a product")
    show_parser.add_argument("slug", help="Product slug")
    show_parser.set_defaults(func=cmd_show)

    create_parser = products_subparsers.add_parser(
        "create", help="Create a new product interactively"
    )
    create_parser.set_defaults(func=cmd_create)

    variant_parser = products_subparsers.add_parser(
        "add-variant", help="Add a size/color variant to a product"
    )
    variant_parser.add_argument("slug", help="Product slug")
    variant_parser.add_argument("--size", required=True, help="Variant size")
    variant_parser.add_argument("--color", required=True, help="Variant color")
    variant_parser.add_argument(
        "--stock", type=int, default=0, help="Units in stock (default: 0)"
    )
    variant_parser.set_defaults(func=cmd_add_variant)

    image_parser = products_subparsers.add_parser(
        "add-image", help="Attach an image URL to a product"
    )
    image_parser.add_argument("slug", help="Product slug")
    image_parser.add_argument("image_url", help="Public URL of the image")
    image_parser.add_argument("--alt-text", dest="alt_text", help="Alternative text")
    image_parser.set_defaults(func=cmd_add_image)

    cart_parser = products_subparsers.add_parser(
        "add-to-cart", help="Add a product variant to the cart"
    )
    cart_parser.add_argument("slug", help="Product slug")
    cart_parser.add_argument("--size", help="Size to select")
    cart_parser.add_argument("--color", help="Color to select")
    cart_parser.add_argument(
        "--quantity", type=int, default=1, help="Number of units (default: 1)"
    )
    cart_parser.set_defaults(func=cmd_add_to_cart)
