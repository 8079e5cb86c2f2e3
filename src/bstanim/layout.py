"""Target layout and per-frame easing for tree nodes."""

from typing import Optional

from bstanim.tree import TreeNode, iter_nodes

ROW_HEIGHT = 80.0
EASE_RATE = 5.0


def compute_layout(
    root: Optional[TreeNode],
    origin_x: float,
    origin_y: float,
    half_spread: float,
    row_height: float = ROW_HEIGHT,
) -> None:
    """
    Assign target positions by recursive half-width subdivision.

    The root goes to the origin; each child sits one row lower, offset
    horizontally by the current half spread, which halves at every level.
    Only targets are touched; current positions are left to ``ease_nodes``.

    Args:
        root: Tree root (None is a no-op)
        origin_x: Horizontal position of the root
        origin_y: Vertical position of the root
        half_spread: Horizontal offset of the root's children
        row_height: Vertical distance between levels
    """
    if root is None:
        return
    root.tx = origin_x
    root.ty = origin_y
    compute_layout(
        root.left, origin_x - half_spread, origin_y + row_height, half_spread / 2, row_height
    )
    compute_layout(
        root.right, origin_x + half_spread, origin_y + row_height, half_spread / 2, row_height
    )


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def ease_nodes(root: Optional[TreeNode], dt: float, rate: float = EASE_RATE) -> None:
    """Move every unpinned node a fixed fraction of the way to its target."""
    t = min(1.0, max(0.0, dt * rate))
    for node in iter_nodes(root):
        if node.pinned:
            continue
        node.x = lerp(node.x, node.tx, t)
        node.y = lerp(node.y, node.ty, t)
