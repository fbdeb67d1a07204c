from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass
class ProductVariant:
    id: int
    product_id: int
    size: str
    color: str
    stock_quantity: int  # never negative


@dataclass
class ProductImage:
    id: int
    product_id: int
    image_url: str
    alt_text: Optional[str] = None


@dataclass
class Product:
    id: int
    name: str
    description: Optional[str]
    price: Decimal
    category_id: Optional[int]
    slug: str  # unique, e.g. "silk-balconette-bra"
    category_name: Optional[str] = None  # joined from categories
    images: List[ProductImage] = field(default_factory=list)
    variants: List[ProductVariant] = field(default_factory=list)

    @property
    def primary_image_url(self) -> str:
        """URL of the first image, or an empty string when there are none."""
        return self.images[0].image_url if self.images else ""
