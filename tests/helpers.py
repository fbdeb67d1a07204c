"""Helper utilities for tests."""

from decimal import Decimal
from pathlib import Path
import sqlite3

from db.migrator import Migrator


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    Migrator(conn, migrations_dir).apply_pending()


def create_product_with_variants(services, slug="silk-balconette-bra", variants=None, category_id=None):
    """Create a product and its variants.

    Args:
        services: Services container.
        slug: Product slug.
        variants: List of (size, color, stock) tuples.
        category_id: Optional category for the product.

    Returns:
        The product, re-read so that variants are attached.
    """
    product = services.products.create(
        slug.replace("-", " ").title(),
        slug,
        Decimal("49.99"),
        "Test product",
        category_id,
    )
    for size, color, stock in variants or []:
        services.products.add_variant(product.id, size, color, stock)
    return services.products.find(product.id)
