"""Functions for building frame snapshots from the engine."""

from typing import Any, Dict, List, Optional, Tuple

from bstanim.engine import AnimationEngine
from bstanim.errors import InvariantViolationError
from bstanim.snapshot import (
    EdgeSnapshot,
    FrameSnapshot,
    NarrationSnapshot,
    NodeSnapshot,
)
from bstanim.tree import TreeNode, VisualTag


def display_tag(node: TreeNode, cursor: Optional[TreeNode], found: bool) -> VisualTag:
    """Resolve the tag a renderer should draw: the cursor overrides the node's own."""
    if node is cursor:
        return VisualTag.FOUND if found else VisualTag.CURSOR
    return node.tag


def build_snapshot(
    engine: AnimationEngine,
    annotations: Optional[Dict[str, Any]] = None,
) -> FrameSnapshot:
    """
    Build a frame snapshot from the engine's current state.

    Args:
        engine: Engine to read; it is not modified
        annotations: Optional extra metadata entries

    Returns:
        FrameSnapshot ready for rendering

    Raises:
        InvariantViolationError: If the cursor or highlighted edge refers to
            a node that is not part of the tree
    """
    nodes: List[NodeSnapshot] = []
    edges: List[EdgeSnapshot] = []
    highlighted = engine.edge

    # Pre-order walk carrying parent, side and depth; each edge is recorded
    # when its child is visited so edges share the node order
    stack: List[Tuple[TreeNode, Optional[TreeNode], Optional[str], int]] = []
    if engine.root is not None:
        stack.append((engine.root, None, None, 0))
    while stack:
        node, parent, side, depth = stack.pop()
        nodes.append(
            NodeSnapshot(
                key=node.key,
                parent_key=parent.key if parent is not None else None,
                depth=depth,
                x=node.x,
                y=node.y,
                target_x=node.tx,
                target_y=node.ty,
                opacity=node.opacity,
                tag=display_tag(node, engine.cursor, engine.found).value,
            )
        )
        if parent is not None and side is not None:
            edges.append(
                EdgeSnapshot(
                    source=parent.key,
                    target=node.key,
                    side=side,
                    highlighted=highlighted is not None
                    and highlighted[0] is parent
                    and highlighted[1] is node,
                )
            )
        if node.right is not None:
            stack.append((node.right, node, "right", depth + 1))
        if node.left is not None:
            stack.append((node.left, node, "left", depth + 1))

    if highlighted is not None and not any(edge.highlighted for edge in edges):
        raise InvariantViolationError(
            f"Highlighted edge {highlighted[0].key}->{highlighted[1].key} is not in the tree"
        )
    if engine.cursor is not None and engine.cursor.detached:
        raise InvariantViolationError(
            f"Cursor references removed node {engine.cursor.key}"
        )

    return FrameSnapshot.create_with_metadata(
        nodes=nodes,
        edges=edges,
        narration=NarrationSnapshot(
            steps=list(engine.narration.steps), index=engine.narration.index
        ),
        cursor=engine.cursor.key if engine.cursor is not None else None,
        highlighted_edge=[highlighted[0].key, highlighted[1].key]
        if highlighted is not None
        else None,
        mode=engine.mode.value,
        found=engine.found,
        pending_key=engine.pending_key,
        additional_metadata={
            "clock": engine.clock,
            "traversal_order": engine.traversal_order.value
            if engine.traversal_order is not None
            else None,
            **(annotations or {}),
        },
    )
