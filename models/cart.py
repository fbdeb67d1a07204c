from dataclasses import dataclass, asdict
from decimal import Decimal


@dataclass
class CartItem:
    """One cart line. Lines are keyed by variant, not by product."""

    variant_id: int
    product_id: int
    name: str
    price: Decimal
    quantity: int
    image: str
    size: str
    color: str

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> dict:
        """Convert cart item to a JSON-serializable dictionary."""
        data = asdict(self)
        data["price"] = str(self.price)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Build a cart item from its stored dictionary form."""
        return cls(
            variant_id=int(data["variant_id"]),
            product_id=int(data["product_id"]),
            name=data["name"],
            price=Decimal(str(data["price"])),
            quantity=int(data["quantity"]),
            image=data.get("image", ""),
            size=data["size"],
            color=data["color"],
        )
