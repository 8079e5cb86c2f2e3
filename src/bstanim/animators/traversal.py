"""Traversal animator: recursive traversal replayed as an explicit frame stack."""

import dataclasses
import enum
import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from bstanim.animators.base import Mode
from bstanim.clock import INORDER_STEPS, POSTORDER_STEPS, PREORDER_STEPS, HopTimer
from bstanim.errors import InvariantViolationError
from bstanim.tree import TreeNode, VisualTag

if TYPE_CHECKING:
    from bstanim.engine import AnimationEngine

logger = logging.getLogger(__name__)


class TraversalOrder(enum.Enum):
    INORDER = "inorder"
    PREORDER = "preorder"
    POSTORDER = "postorder"


@dataclasses.dataclass
class TraversalFrame:
    """Stand-in for one live call of the recursive traversal."""

    node: TreeNode
    phase: int = 0  # 0-2 per order table, 3 = return


# Per order, the (action, moves_cursor) pair run at phases 0, 1 and 2.
_PHASE_TABLE: Dict[TraversalOrder, Tuple[Tuple[str, bool], ...]] = {
    TraversalOrder.INORDER: (("left", True), ("visit", True), ("right", False)),
    TraversalOrder.PREORDER: (("visit", True), ("left", False), ("right", False)),
    TraversalOrder.POSTORDER: (("left", True), ("right", True), ("visit", True)),
}

_STEPS = {
    TraversalOrder.INORDER: INORDER_STEPS,
    TraversalOrder.PREORDER: PREORDER_STEPS,
    TraversalOrder.POSTORDER: POSTORDER_STEPS,
}

RETURN_PHASE = 3


class TraversalAnimator:
    """Animator stepping an in-, pre- or post-order traversal one phase per hop."""

    mode = Mode.TRAVERSING

    def __init__(self, order: TraversalOrder):
        self.order = TraversalOrder(order)
        self.steps = _STEPS[self.order]
        self.stack: List[TraversalFrame] = []
        self.visited: List[int] = []
        self.max_depth = 0
        self.hops = 0
        self.timer: Optional[HopTimer] = None

    def start(self, engine: "AnimationEngine") -> bool:
        self.timer = HopTimer(engine.config.pacing.traversal_hop)
        self.stack = [TraversalFrame(engine.root)] if engine.root is not None else []
        self.visited = []
        self.max_depth = len(self.stack)
        self.hops = 0
        return bool(self.stack)

    @property
    def done(self) -> bool:
        return not self.stack

    def update(self, engine: "AnimationEngine", dt: float) -> bool:
        if not self.stack:
            engine.cursor = None
            engine.edge = None
            logger.info(
                "%s traversal finished after %d hops: %s",
                self.order.value,
                self.hops,
                self.visited,
            )
            return False

        engine.narration.advance(dt)

        assert self.timer is not None
        if self.timer.tick(dt):
            self.hop(engine)
        return True

    def hop(self, engine: "AnimationEngine") -> None:
        """Run exactly one phase transition on the top frame."""
        if not self.stack:
            raise InvariantViolationError("Traversal hop on an empty frame stack")

        engine.edge = None
        frame = self.stack[-1]
        node = frame.node
        if node.detached:
            raise InvariantViolationError(
                f"Traversal frame references removed node {node.key}"
            )
        self.hops += 1

        if frame.phase == RETURN_PHASE:
            self.stack.pop()
            logger.debug("Return from %d (depth %d)", node.key, len(self.stack))
            return
        if frame.phase > RETURN_PHASE:
            raise InvariantViolationError(f"Invalid traversal phase {frame.phase}")

        action, moves_cursor = _PHASE_TABLE[self.order][frame.phase]
        if moves_cursor:
            engine.cursor = node

        if action == "visit":
            node.tag = VisualTag.FOUND
            self.visited.append(node.key)
            logger.debug("Visit %d", node.key)
        else:
            child = node.left if action == "left" else node.right
            if child is not None:
                engine.edge = (node, child)
                self.stack.append(TraversalFrame(child))
                self.max_depth = max(self.max_depth, len(self.stack))
                logger.debug("Descend %s %d -> %d", action, node.key, child.key)

        frame.phase += 1
