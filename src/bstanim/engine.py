"""The engine context: tree, active animator, highlights and narration."""

import logging
from typing import Optional, Tuple, Union

from bstanim import tree
from bstanim.animators import (
    Animator,
    Mode,
    TraversalAnimator,
    TraversalOrder,
    get_animator,
)
from bstanim.clock import Narration
from bstanim.config import EngineConfig
from bstanim.layout import compute_layout, ease_nodes
from bstanim.tree import TreeNode

logger = logging.getLogger(__name__)

Edge = Tuple[TreeNode, TreeNode]


class AnimationEngine:
    """
    Single owner of all animation state.

    Input events call ``start_*``/``reset``/``adjust_key``; the frame loop
    calls ``update(dt)`` once per rendered frame and then reads ``root``,
    ``cursor``, ``edge``, ``narration`` and the nodes' visual attributes.

    At most one animator is active. Starting an operation discards the
    previous one along with every transient highlight it left behind.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.root: Optional[TreeNode] = None
        self.cursor: Optional[TreeNode] = None
        self.edge: Optional[Edge] = None
        self.found = False
        self.pending_key = self.config.initial_key
        self.narration = Narration(self.config.pacing.narration_interval)
        self.active: Optional[Animator] = None
        self.clock = 0.0

    @property
    def mode(self) -> Mode:
        return self.active.mode if self.active is not None else Mode.IDLE

    @property
    def is_idle(self) -> bool:
        return self.active is None

    @property
    def traversal_order(self) -> Optional[TraversalOrder]:
        """Order of the running traversal, None for any other mode."""
        if isinstance(self.active, TraversalAnimator):
            return self.active.order
        return None

    # ---------- Input events ----------

    def start(self, operation: str, key: Optional[int] = None) -> bool:
        """
        Start an animated operation, cancelling any operation in flight.

        Args:
            operation: Registered operation name ("insert", "search", "delete",
                "inorder", "preorder", "postorder", ...)
            key: Key to act on; defaults to the pending key

        Returns:
            False if the operation was a no-op (duplicate insert, absent key,
            empty tree) and the engine went straight back to idle

        Raises:
            UnknownOperationError: If the operation name is not registered
        """
        if key is None:
            key = self.pending_key
        animator = get_animator(operation, key)

        self._clear_transient()
        self.narration.restart(animator.steps)
        started = animator.start(self)
        self.active = animator if started else None
        logger.info(
            "Start %s (key=%s): %s", operation, key, "running" if started else "no-op"
        )
        return started

    def start_insert(self, key: Optional[int] = None) -> bool:
        return self.start("insert", key)

    def start_search(self, key: Optional[int] = None) -> bool:
        return self.start("search", key)

    def start_delete(self, key: Optional[int] = None) -> bool:
        return self.start("delete", key)

    def start_traversal(self, order: Union[str, TraversalOrder]) -> bool:
        return self.start(TraversalOrder(order).value)

    def reset(self) -> None:
        """Drop the whole tree and every piece of animation state."""
        self._clear_transient()
        self.root = None
        self.narration.clear()
        logger.info("Engine reset")

    def adjust_key(self, delta: int) -> int:
        self.pending_key += delta
        return self.pending_key

    # ---------- Frame loop ----------

    def update(self, dt: float, ticks: int = 1) -> None:
        """
        Advance node easing and the active animator.

        Args:
            dt: Elapsed time per tick in seconds
            ticks: Number of ticks of progress requested for this frame
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        for _ in range(max(ticks, 0)):
            self._tick(dt)

    def _tick(self, dt: float) -> None:
        self.clock += dt
        ease_nodes(self.root, dt, self.config.layout.ease_rate)
        if self.active is None:
            return
        if not self.active.update(self, dt):
            logger.info("%s finished", self.active.mode.value)
            self.active = None

    def run_until_idle(self, fps: float = 60.0, max_seconds: float = 600.0) -> float:
        """
        Drive the engine at a fixed frame rate until no animator is active.

        Returns:
            Simulated seconds elapsed
        """
        dt = 1.0 / fps
        elapsed = 0.0
        while self.active is not None and elapsed < max_seconds:
            self.update(dt)
            elapsed += dt
        return elapsed

    # ---------- Helpers used by animators ----------

    def relayout(self) -> None:
        layout = self.config.layout
        compute_layout(
            self.root,
            layout.origin_x,
            layout.origin_y,
            layout.half_spread,
            layout.row_height,
        )

    def _clear_transient(self) -> None:
        self.active = None
        self.cursor = None
        self.edge = None
        self.found = False
        tree.reset_visual_state(self.root)
