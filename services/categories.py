"""Category service for database operations."""

import json
from pathlib import Path
from typing import List, Optional, Tuple
from catalog.tree import build_tree
from config import get_seed_dir
from logger import get_logger
from models.category import Category, CategoryNode
from services.base import NotFoundError

logger = get_logger()

_CATEGORY_SELECT_FIELDS = "id, name, description, parent_id"


def _row_to_category(row) -> Category:
    return Category(id=row[0], name=row[1], description=row[2], parent_id=row[3])


class CategoryService:
    """Service for managing catalog categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects, ordered by id (insertion order).
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories ORDER BY id"
            )
            return [_row_to_category(row) for row in cursor.fetchall()]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()
            return _row_to_category(row) if row else None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a single category by exact name.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE name = ?",
                (name,),
            )
            row = cursor.fetchone()
            return _row_to_category(row) if row else None

    def get_tree(self) -> List[CategoryNode]:
        """Get all categories arranged as a forest of root nodes.

        Returns:
            List of root CategoryNode objects with their children attached.
        """
        return build_tree(self.find_all())

    def create(
        self,
        name: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
    ) -> Category:
        """Create a new category.

        Args:
            name: Category name (must be unique).
            description: Optional description of the category.
            parent_id: Optional parent category ID.

        Returns:
            The created Category object with id populated.

        Raises:
            ValueError: If parent_id does not reference an existing category.
            sqlite3.IntegrityError: If the name is already taken.
        """
        if parent_id is not None and self.find(parent_id) is None:
            raise ValueError(f"Parent category with ID {parent_id} not found")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO categories (name, description, parent_id) VALUES (?, ?, ?)",
                (name, description, parent_id),
            )
            conn.commit()
            category_id = cursor.lastrowid

        logger.debug(f"Created category {name!r} (ID: {category_id})")
        return Category(
            id=category_id, name=name, description=description, parent_id=parent_id
        )

    def update(
        self,
        category_id: int,
        name: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
    ) -> Category:
        """Update an existing category.

        Raises:
            ValueError: If the category would become its own parent.
            NotFoundError: If the category does not exist.
        """
        if parent_id == category_id:
            raise ValueError("A category cannot be its own parent")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE categories SET name = ?, description = ?, parent_id = ? WHERE id = ?",
                (name, description, parent_id, category_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise NotFoundError(f"Category with ID {category_id} not found")

        return Category(
            id=category_id, name=name, description=description, parent_id=parent_id
        )

    def delete(self, category_id: int) -> bool:
        """Delete a category by ID.

        Children and products of the category are kept; their reference is
        cleared by the schema.

        Returns:
            True if category was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
            return cursor.rowcount > 0

    def seed(self, seed_file: Optional[Path] = None) -> Tuple[int, int]:
        """Create categories from a two-level JSON seed file.

        Each top-level entry has a name, an optional description and an
        optional list of children with the same fields. Categories that
        already exist by name are skipped but still used as parents.

        Args:
            seed_file: Path to the JSON file. Defaults to db/seed/categories.json.

        Returns:
            Tuple of (created_count, skipped_count).

        Raises:
            FileNotFoundError: If the seed file does not exist.
            json.JSONDecodeError: If the seed file is not valid JSON.
        """
        seed_file = seed_file or get_seed_dir() / "categories.json"
        with open(seed_file, "r") as f:
            categories_data = json.load(f)

        created_count = 0
        skipped_count = 0

        for category_data in categories_data:
            name = category_data.get("name")
            if not name:
                logger.warning("Skipping category with no name")
                continue

            parent = self.find_by_name(name)
            if parent:
                logger.info(f"⊘ Skipped '{name}' (already exists)")
                skipped_count += 1
            else:
                parent = self.create(name, category_data.get("description"))
                logger.info(f"✓ Created '{name}' (ID: {parent.id})")
                created_count += 1

            for child_data in category_data.get("children", []):
                child_name = child_data.get("name")
                if not child_name:
                    logger.warning(f"Skipping child of '{name}' with no name")
                    continue

                if self.find_by_name(child_name):
                    logger.info(f"  ⊘ Skipped '{child_name}' (already exists)")
                    skipped_count += 1
                    continue

                child = self.create(
                    child_name, child_data.get("description"), parent.id
                )
                logger.info(f"  ✓ Created '{child_name}' (ID: {child.id})")
                created_count += 1

        return created_count, skipped_count
