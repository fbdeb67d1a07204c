"""Variant selection for a product's size/color combinations.

A VariantSelector holds the variants of one product and the customer's
current selection. Selecting a size recomputes which colors are valid and
applies the auto-select rule; resolving the selection either yields the
stocked variant to add to the cart or raises one of the SelectionError
subclasses, each of which the calling view reports with its own message.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional
from models.product import ProductVariant


class SelectionError(Exception):
    """Base class for expected, user-facing selection problems."""


class SizeNotSelected(SelectionError):
    pass


class ColorNotSelected(SelectionError):
    pass


class CombinationUnavailable(SelectionError):
    """No variant matches the requested size and color."""

    def __init__(self, size: str, color: str):
        super().__init__(f"No variant with size {size!r} and color {color!r}")
        self.size = size
        self.color = color


class InsufficientStock(SelectionError):
    """The matching variant has fewer units than requested."""

    def __init__(self, variant: ProductVariant, requested: int):
        super().__init__(
            f"Variant {variant.id} has {variant.stock_quantity} in stock, "
            f"{requested} requested"
        )
        self.variant = variant
        self.requested = requested


@dataclass
class SelectionState:
    selected_size: Optional[str] = None
    selected_color: Optional[str] = None
    quantity: int = 1


def _unique_truthy(values: Iterable[str]) -> List[str]:
    """Deduplicate values in first-seen order, skipping blanks."""
    seen = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


class VariantSelector:
    """Tracks size/color selection over one product's variants.

    Args:
        variants: The product's variants. Treated as a read-only snapshot.
        state: Optional starting selection; a fresh one is created if omitted.
    """

    def __init__(
        self,
        variants: Iterable[ProductVariant],
        state: Optional[SelectionState] = None,
    ):
        self.variants = tuple(variants)
        self.state = state or SelectionState()

    def available_sizes(self) -> List[str]:
        """Sizes offered by any variant, first-seen order."""
        return _unique_truthy(v.size for v in self.variants)

    def colors_for_size(self, size: Optional[str]) -> List[str]:
        """Colors offered by variants of exactly this size, first-seen order."""
        return _unique_truthy(v.color for v in self.variants if v.size == size)

    def available_colors(self) -> List[str]:
        """Colors valid for the current size, or every color when no size is set."""
        if self.state.selected_size is None:
            return _unique_truthy(v.color for v in self.variants)
        return self.colors_for_size(self.state.selected_size)

    def select_size(self, size: Optional[str]) -> SelectionState:
        """Change the selected size and apply the color auto-select rule.

        A single valid color is selected automatically. A previously selected
        color that is no longer valid is cleared when several colors remain;
        a still-valid color is kept.

        Returns:
            The updated selection state.
        """
        self.state.selected_size = size
        colors = self.colors_for_size(size)

        if len(colors) == 1:
            self.state.selected_color = colors[0]
        elif self.state.selected_color not in colors and len(colors) > 1:
            self.state.selected_color = None

        return self.state

    def select_color(self, color: Optional[str]) -> SelectionState:
        self.state.selected_color = color
        return self.state

    def set_quantity(self, quantity: int) -> SelectionState:
        """Set the requested quantity.

        Raises:
            ValueError: If quantity is less than 1.
        """
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        self.state.quantity = quantity
        return self.state

    def resolve_variant(
        self, size: str, color: str, quantity: int = 1
    ) -> ProductVariant:
        """Find the variant matching size and color with enough stock.

        Raises:
            CombinationUnavailable: If no variant has this exact size and color.
            InsufficientStock: If the match has fewer than quantity units.
        """
        for variant in self.variants:
            if variant.size == size and variant.color == color:
                if variant.stock_quantity < quantity:
                    raise InsufficientStock(variant, quantity)
                return variant

        raise CombinationUnavailable(size, color)

    def resolve_selection(self) -> ProductVariant:
        """Resolve the current selection, checking size and color are set first.

        Raises:
            SizeNotSelected: If no size is selected.
            ColorNotSelected: If no color is selected.
            CombinationUnavailable: See resolve_variant.
            InsufficientStock: See resolve_variant.
        """
        if not self.state.selected_size:
            raise SizeNotSelected("Size not selected")
        if not self.state.selected_color:
            raise ColorNotSelected("Color not selected")

        return self.resolve_variant(
            self.state.selected_size,
            self.state.selected_color,
            self.state.quantity,
        )
