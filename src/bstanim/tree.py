"""Logical binary search tree with per-node visual state."""

import dataclasses
import enum
from typing import Iterable, Iterator, List, Optional

SPAWN_X = 350.0
SPAWN_Y = -100.0


class VisualTag(enum.Enum):
    """Rendering hint attached to a node. Never affects tree logic."""

    NORMAL = "normal"
    CURSOR = "cursor"
    FOUND = "found"
    FLASH_ON = "flash_on"
    FLASH_OFF = "flash_off"


@dataclasses.dataclass(eq=False)
class TreeNode:
    """A BST node that owns its children and carries its animation state."""

    key: int
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None

    # Current animated position
    x: float = SPAWN_X
    y: float = SPAWN_Y
    # Target position assigned by the layout engine
    tx: float = SPAWN_X
    ty: float = SPAWN_Y

    opacity: float = 1.0
    tag: VisualTag = VisualTag.NORMAL
    pinned: bool = False  # exempt from easing
    detached: bool = False  # removed from the tree

    @property
    def position(self):
        return (self.x, self.y)

    @property
    def target_position(self):
        return (self.tx, self.ty)

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def reset_visual_state(self) -> None:
        self.tag = VisualTag.NORMAL
        self.opacity = 1.0
        self.pinned = False

    def __repr__(self) -> str:
        return f"TreeNode(key={self.key})"


def create_node(
    key: int, spawn_x: float = SPAWN_X, spawn_y: float = SPAWN_Y
) -> TreeNode:
    """Create a node at the off-screen spawn point."""
    return TreeNode(key=key, x=spawn_x, y=spawn_y, tx=spawn_x, ty=spawn_y)


def insert(
    root: Optional[TreeNode],
    key: int,
    spawn_x: float = SPAWN_X,
    spawn_y: float = SPAWN_Y,
) -> TreeNode:
    """
    Insert a key and return the (possibly new) root.

    Duplicate keys are ignored.
    """
    if root is None:
        return create_node(key, spawn_x, spawn_y)
    if key < root.key:
        root.left = insert(root.left, key, spawn_x, spawn_y)
    elif key > root.key:
        root.right = insert(root.right, key, spawn_x, spawn_y)
    return root


def min_node(root: Optional[TreeNode]) -> Optional[TreeNode]:
    """Return the leftmost node of a subtree."""
    while root is not None and root.left is not None:
        root = root.left
    return root


def delete(root: Optional[TreeNode], key: int) -> Optional[TreeNode]:
    """
    Delete a key and return the new root.

    A node with two children takes its in-order successor's key and the
    successor is deleted from the right subtree instead. Deleting an absent
    key returns the tree unchanged.
    """
    if root is None:
        return None

    if key < root.key:
        root.left = delete(root.left, key)
    elif key > root.key:
        root.right = delete(root.right, key)
    else:
        if root.left is None or root.right is None:
            child = root.left if root.left is not None else root.right
            root.left = root.right = None
            root.detached = True
            return child
        successor = min_node(root.right)
        assert successor is not None
        root.key = successor.key
        root.right = delete(root.right, successor.key)
    return root


def find(root: Optional[TreeNode], key: int) -> Optional[TreeNode]:
    """Find the node holding ``key`` by comparison walk."""
    node = root
    while node is not None:
        if key == node.key:
            return node
        node = node.left if key < node.key else node.right
    return None


def find_path(root: Optional[TreeNode], key: int) -> List[TreeNode]:
    """Return every node visited while walking from the root toward ``key``."""
    path: List[TreeNode] = []
    node = root
    while node is not None:
        path.append(node)
        if key == node.key:
            break
        node = node.left if key < node.key else node.right
    return path


def iter_nodes(root: Optional[TreeNode]) -> Iterator[TreeNode]:
    """Iterate every node in pre-order without recursion."""
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def reset_visual_state(root: Optional[TreeNode]) -> None:
    for node in iter_nodes(root):
        node.reset_visual_state()


def height(root: Optional[TreeNode]) -> int:
    """Number of nodes on the longest root-to-leaf path (0 for an empty tree)."""
    if root is None:
        return 0
    return 1 + max(height(root.left), height(root.right))


def size(root: Optional[TreeNode]) -> int:
    return sum(1 for _ in iter_nodes(root))


def keys(root: Optional[TreeNode], order: str = "inorder") -> List[int]:
    """
    Collect keys with a plain recursive traversal.

    Args:
        root: Tree root
        order: One of "inorder", "preorder", "postorder"

    Returns:
        List of keys in traversal order
    """
    if order not in ("inorder", "preorder", "postorder"):
        raise ValueError(
            f"Unsupported order: {order}. Use 'inorder', 'preorder' or 'postorder'."
        )
    out: List[int] = []

    def walk(node: Optional[TreeNode]) -> None:
        if node is None:
            return
        if order == "preorder":
            out.append(node.key)
        walk(node.left)
        if order == "inorder":
            out.append(node.key)
        walk(node.right)
        if order == "postorder":
            out.append(node.key)

    walk(root)
    return out


def is_bst(root: Optional[TreeNode]) -> bool:
    in_order = keys(root, "inorder")
    return all(a < b for a, b in zip(in_order, in_order[1:]))


def build_tree(values: Iterable[int]) -> Optional[TreeNode]:
    """Build a tree by inserting values in order."""
    root: Optional[TreeNode] = None
    for value in values:
        root = insert(root, value)
    return root
