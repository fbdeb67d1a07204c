"""Product service for catalog database operations."""

from decimal import Decimal
from typing import List, Optional
from models.product import Product, ProductImage, ProductVariant
from services.base import NotFoundError

ALL_COLLECTIONS_TITLE = "All Collections"
FEATURED_LIMIT = 4

_PRODUCT_SELECT = """
    SELECT p.id, p.name, p.description, p.price, p.category_id, p.slug,
           c.name AS category_name
    FROM products p
    LEFT JOIN categories c ON c.id = p.category_id
"""


def _row_to_product(row) -> Product:
    return Product(
        id=row[0],
        name=row[1],
        description=row[2],
        price=Decimal(str(row[3])),
        category_id=row[4],
        slug=row[5],
        category_name=row[6],
    )


def category_name_from_slug(slug: str) -> str:
    """Turn a category slug back into a lowercase category name."""
    return slug.replace("-", " ").lower()


def category_title(slug: Optional[str]) -> str:
    """Page title for a catalog listing, filtered by category slug or not."""
    if not slug:
        return ALL_COLLECTIONS_TITLE
    name = slug.replace("-", " ")
    return name[:1].upper() + name[1:]


class ProductService:
    """Service for managing products, their variants and images."""

    def __init__(self, db_manager):
        """Initialize the product service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Product]:
        """Get all products with category name and images.

        Returns:
            List of Product objects, ordered by id.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(f"{_PRODUCT_SELECT} ORDER BY p.id")
            products = [_row_to_product(row) for row in cursor.fetchall()]

        for product in products:
            product.images = self.find_images(product.id)
        return products

    def find(self, product_id: int) -> Optional[Product]:
        """Get a single product by ID, with images and variants.

        Returns:
            Product object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(f"{_PRODUCT_SELECT} WHERE p.id = ?", (product_id,))
            row = cursor.fetchone()

        return self._with_details(_row_to_product(row)) if row else None

    def find_by_slug(self, slug: str) -> Optional[Product]:
        """Get a single product by slug, with images and variants.

        Returns:
            Product object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(f"{_PRODUCT_SELECT} WHERE p.slug = ?", (slug,))
            row = cursor.fetchone()

        return self._with_details(_row_to_product(row)) if row else None

    def find_featured(self, limit: int = FEATURED_LIMIT) -> List[Product]:
        """Get the first few products for the home page's new arrivals.

        Args:
            limit: Maximum number of products to return.

        Returns:
            Up to `limit` Product objects with category name and images.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(f"{_PRODUCT_SELECT} ORDER BY p.id LIMIT ?", (limit,))
            products = [_row_to_product(row) for row in cursor.fetchall()]

        for product in products:
            product.images = self.find_images(product.id)
        return products

    def find_by_category_slug(self, slug: Optional[str]) -> List[Product]:
        """Get products whose category name matches a slug.

        Hyphens in the slug stand for spaces and the comparison ignores case,
        so "pajama-sets" matches the "Pajama Sets" category. An empty slug
        returns every product.
        """
        products = self.find_all()
        if not slug:
            return products

        name = category_name_from_slug(slug)
        return [
            p
            for p in products
            if p.category_name is not None and p.category_name.lower() == name
        ]

    def find_variants(self, product_id: int) -> List[ProductVariant]:
        """Get a product's variants in insertion order."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT id, product_id, size, color, stock_quantity
                FROM product_variants WHERE product_id = ? ORDER BY id
                """,
                (product_id,),
            )
            return [
                ProductVariant(
                    id=row[0],
                    product_id=row[1],
                    size=row[2],
                    color=row[3],
                    stock_quantity=row[4],
                )
                for row in cursor.fetchall()
            ]

    def find_images(self, product_id: int) -> List[ProductImage]:
        """Get a product's images in insertion order."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT id, product_id, image_url, alt_text
                FROM product_images WHERE product_id = ? ORDER BY id
                """,
                (product_id,),
            )
            return [
                ProductImage(
                    id=row[0], product_id=row[1], image_url=row[2], alt_text=row[3]
                )
                for row in cursor.fetchall()
            ]

    def create(
        self,
        name: str,
        slug: str,
        price: Decimal,
        description: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> Product:
        """Create a new product.

        Args:
            name: Product name.
            slug: Unique URL slug.
            price: Unit price, must not be negative.
            description: Optional long description.
            category_id: Optional category the product belongs to.

        Returns:
            The created Product object with id populated.

        Raises:
            ValueError: If price is negative.
            sqlite3.IntegrityError: If the slug is already taken or the
                category does not exist.
        """
        price = Decimal(str(price))
        if price < 0:
            raise ValueError("Price cannot be negative")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO products (name, description, price, category_id, slug)
                VALUES (?, ?, ?, ?, ?)
                """,
                (name, description, float(price), category_id, slug),
            )
            conn.commit()
            product_id = cursor.lastrowid

        return self.find(product_id)

    def add_variant(
        self, product_id: int, size: str, color: str, stock_quantity: int = 0
    ) -> ProductVariant:
        """Add a size/color variant to a product.

        Raises:
            ValueError: If stock_quantity is negative.
            sqlite3.IntegrityError: If the product does not exist.
        """
        if stock_quantity < 0:
            raise ValueError("Stock quantity cannot be negative")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO product_variants (product_id, size, color, stock_quantity)
                VALUES (?, ?, ?, ?)
                """,
                (product_id, size, color, stock_quantity),
            )
            conn.commit()
            variant_id = cursor.lastrowid

        return ProductVariant(
            id=variant_id,
            product_id=product_id,
            size=size,
            color=color,
            stock_quantity=stock_quantity,
        )

    def update_stock(self, variant_id: int, stock_quantity: int) -> None:
        """Set the stock level of a variant.

        Raises:
            ValueError: If stock_quantity is negative.
            NotFoundError: If the variant does not exist.
        """
        if stock_quantity < 0:
            raise ValueError("Stock quantity cannot be negative")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE product_variants SET stock_quantity = ? WHERE id = ?",
                (stock_quantity, variant_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise NotFoundError(f"Variant with ID {variant_id} not found")

    def add_image(
        self, product_id: int, image_url: str, alt_text: Optional[str] = None
    ) -> ProductImage:
        """Attach an image URL to a product."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO product_images (product_id, image_url, alt_text) VALUES (?, ?, ?)",
                (product_id, image_url, alt_text),
            )
            conn.commit()
            image_id = cursor.lastrowid

        return ProductImage(
            id=image_id, product_id=product_id, image_url=image_url, alt_text=alt_text
        )

    def delete(self, product_id: int) -> bool:
        """Delete a product and, through the schema, its variants and images.

        Returns:
            True if product was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _with_details(self, product: Product) -> Product:
        product.images = self.find_images(product.id)
        product.variants = self.find_variants(product.id)
        return product
