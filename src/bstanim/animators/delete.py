"""Delete animator: locate, flash, drop, fade, then structurally remove."""

import enum
import logging
from typing import TYPE_CHECKING, Optional

from bstanim import tree
from bstanim.animators.base import Mode
from bstanim.clock import DELETE_STEPS, HopTimer
from bstanim.tree import TreeNode, VisualTag

if TYPE_CHECKING:
    from bstanim.engine import AnimationEngine

logger = logging.getLogger(__name__)


class DeletePhase(enum.IntEnum):
    LOCATE = 0
    FLASH = 1
    DROP = 2
    FADE = 3
    COMMIT = 4


class DeleteAnimator:
    """
    Animator for BST deletion.

    Each phase runs its own per-frame sub-animation; the phase index only
    advances when that phase's exit condition holds (hold elapsed, toggle
    count reached, drop threshold passed, opacity at zero).
    """

    mode = Mode.DELETING
    steps = DELETE_STEPS

    def __init__(self, key: int):
        self.key = key
        self.phase = DeletePhase.LOCATE
        self.target: Optional[TreeNode] = None
        self.flash_count = 0
        self.hold_timer: Optional[HopTimer] = None
        self.flash_timer: Optional[HopTimer] = None

    def start(self, engine: "AnimationEngine") -> bool:
        pacing = engine.config.pacing
        self.phase = DeletePhase.LOCATE
        self.flash_count = 0
        self.hold_timer = HopTimer(pacing.delete_locate_hold)
        self.flash_timer = HopTimer(pacing.flash_interval)
        self.target = tree.find(engine.root, self.key)
        if self.target is None:
            logger.info("Delete %d: key not present", self.key)
            return False
        return True

    def _advance(self, phase: DeletePhase) -> None:
        logger.debug("Delete %d: %s -> %s", self.key, self.phase.name, phase.name)
        self.phase = phase

    def update(self, engine: "AnimationEngine", dt: float) -> bool:
        node = self.target
        if node is None:
            return False

        engine.narration.advance(dt, ceiling=int(self.phase))
        pacing = engine.config.pacing

        if self.phase == DeletePhase.LOCATE:
            assert self.hold_timer is not None
            if self.hold_timer.tick(dt):
                self._advance(DeletePhase.FLASH)
            return True

        if self.phase == DeletePhase.FLASH:
            assert self.flash_timer is not None
            if self.flash_timer.tick(dt):
                self.flash_count += 1
                node.tag = (
                    VisualTag.FLASH_ON
                    if self.flash_count % 2 == 0
                    else VisualTag.FLASH_OFF
                )
            if self.flash_count >= pacing.flash_toggles:
                node.pinned = True
                self._advance(DeletePhase.DROP)
            return True

        if self.phase == DeletePhase.DROP:
            node.y += pacing.drop_speed * dt
            if node.y > pacing.drop_threshold:
                self._advance(DeletePhase.FADE)
            return True

        if self.phase == DeletePhase.FADE:
            node.opacity = max(0.0, node.opacity - pacing.fade_speed * dt)
            if node.opacity > 0.0:
                return True
            self._advance(DeletePhase.COMMIT)

        self.commit(engine)
        return False

    def commit(self, engine: "AnimationEngine") -> None:
        """Apply the structural deletion and recompute the layout."""
        node = self.target
        assert node is not None

        successor = None
        if node.left is not None and node.right is not None:
            successor = tree.min_node(node.right)
        origin = (successor.x, successor.y) if successor is not None else None

        engine.root = tree.delete(engine.root, self.key)
        engine.narration.index = engine.narration.last_index

        if origin is not None:
            # The target node object now holds the successor's key; show it
            # sliding up from where the successor was drawn.
            node.x, node.y = origin
            node.reset_visual_state()

        engine.relayout()
        self.target = None
        logger.info("Delete %d: committed", self.key)
