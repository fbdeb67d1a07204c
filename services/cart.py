"""Cart store persisted as a JSON file."""

import json
from decimal import Decimal
from pathlib import Path
from typing import List, Optional
from logger import get_logger
from models.cart import CartItem
from models.product import Product, ProductVariant

logger = get_logger()


class CartService:
    """Service for the shopping cart.

    The cart is a list of lines keyed by variant id. It is loaded lazily from
    cart_path and written back after every change.

    Args:
        cart_path: JSON file the cart is stored in.
    """

    def __init__(self, cart_path: Path):
        self.cart_path = Path(cart_path)
        self._items: Optional[List[CartItem]] = None

    def items(self) -> List[CartItem]:
        """Get the cart lines in the order they were added."""
        return list(self._load())

    def find(self, variant_id: int) -> Optional[CartItem]:
        for item in self._load():
            if item.variant_id == variant_id:
                return item
        return None

    def add(self, product: Product, variant: ProductVariant, quantity: int) -> CartItem:
        """Add a variant to the cart, merging with an existing line.

        Callers are expected to have resolved the variant and checked stock.

        Args:
            product: Product the variant belongs to.
            variant: The resolved variant.
            quantity: Number of units to add.

        Returns:
            The new or updated cart line.

        Raises:
            ValueError: If quantity is less than 1.
        """
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")

        items = self._load()
        existing = self.find(variant.id)
        if existing:
            existing.quantity += quantity
            logger.info(f"Updated {product.name} quantity.")
            item = existing
        else:
            item = CartItem(
                variant_id=variant.id,
                product_id=product.id,
                name=product.name,
                price=product.price,
                quantity=quantity,
                image=product.primary_image_url,
                size=variant.size,
                color=variant.color,
            )
            items.append(item)
            logger.info(f"Added {product.name} to cart!")

        self._save()
        return item

    def remove(self, variant_id: int) -> bool:
        """Remove a line from the cart.

        Returns:
            True if a line was removed, False if the variant was not in the cart.
        """
        items = self._load()
        remaining = [item for item in items if item.variant_id != variant_id]
        if len(remaining) == len(items):
            return False

        self._items = remaining
        self._save()
        logger.info("Item removed from cart.")
        return True

    def update_quantity(self, variant_id: int, quantity: int) -> bool:
        """Set a line's quantity; zero or less removes the line.

        Returns:
            True if the cart changed, False if the variant was not in the cart.
        """
        if quantity <= 0:
            return self.remove(variant_id)

        item = self.find(variant_id)
        if item is None:
            return False

        item.quantity = quantity
        self._save()
        return True

    def clear(self) -> None:
        """Empty the cart and delete its file."""
        self._items = []
        if self.cart_path.exists():
            self.cart_path.unlink()

    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(item.quantity for item in self._load())

    def total(self) -> Decimal:
        return sum((item.line_total for item in self._load()), Decimal("0"))

    def _load(self) -> List[CartItem]:
        if self._items is None:
            if self.cart_path.exists():
                with open(self.cart_path, "r") as f:
                    data = json.load(f)
                self._items = [CartItem.from_dict(entry) for entry in data]
            else:
                self._items = []
        return self._items

    def _save(self) -> None:
        self.cart_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.cart_path, "w") as f:
            json.dump([item.to_dict() for item in self._load()], f, indent=2)
