"""Category tree construction for catalog navigation."""

from typing import Dict, Iterable, List
from models.category import Category, CategoryNode


def build_tree(rows: Iterable[Category]) -> List[CategoryNode]:
    """Build a forest of category nodes from a flat list of rows.

    The first pass creates one node per row, keyed by id. The second pass
    attaches each row to its parent's children; rows without a parent, or
    whose parent is missing from the snapshot, become roots. Input order is
    preserved among roots and among siblings, and every row appears exactly
    once in the result.

    Rows are not modified. Chains deeper than two levels are linked as-is.

    Args:
        rows: Category rows in any order. May be empty.

    Returns:
        List of root CategoryNode objects.
    """
    rows = list(rows)
    nodes: Dict[int, CategoryNode] = {
        row.id: CategoryNode.from_category(row) for row in rows
    }

    roots: List[CategoryNode] = []
    for row in rows:
        node = nodes[row.id]
        if row.parent_id is not None and row.parent_id in nodes:
            nodes[row.parent_id].children.append(node)
        else:
            roots.append(node)

    return roots


def flatten_tree(roots: Iterable[CategoryNode]) -> List[CategoryNode]:
    """Walk a forest depth-first, parents before their children."""
    result: List[CategoryNode] = []
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        result.append(node)
        stack.extend(reversed(node.children))
    return result
