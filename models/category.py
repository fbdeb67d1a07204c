"""Category models for catalog navigation."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Category:
    """Represents a catalog category row.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Category name (unique).
        description: Optional description shown in navigation.
        parent_id: Optional parent category ID; None for root categories.
    """

    id: int
    name: str
    description: Optional[str] = None
    parent_id: Optional[int] = None


@dataclass
class CategoryNode:
    """A category together with its child nodes.

    Nodes are built fresh from a snapshot of rows and are never persisted.
    """

    id: int
    name: str
    description: Optional[str] = None
    parent_id: Optional[int] = None
    children: List["CategoryNode"] = field(default_factory=list)

    @classmethod
    def from_category(cls, category: Category) -> "CategoryNode":
        """Create a childless node from a category row."""
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            parent_id=category.parent_id,
        )

    @property
    def slug(self) -> str:
        return self.name.lower().replace(" ", "-")
