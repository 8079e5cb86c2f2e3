"""Search animator: walks the cursor from the root toward a key, one hop per tick."""

import logging
from typing import TYPE_CHECKING, Optional

from bstanim.animators.base import Mode
from bstanim.clock import SEARCH_STEPS, HopTimer
from bstanim.tree import VisualTag

if TYPE_CHECKING:
    from bstanim.engine import AnimationEngine

logger = logging.getLogger(__name__)


class SearchAnimator:
    """Animator for BST search."""

    mode = Mode.SEARCHING
    steps = SEARCH_STEPS

    def __init__(self, key: int):
        self.key = key
        self.hops = 0
        self.timer: Optional[HopTimer] = None

    def start(self, engine: "AnimationEngine") -> bool:
        self.timer = HopTimer(engine.config.pacing.search_hop)
        self.hops = 0
        engine.found = False
        engine.cursor = engine.root
        return engine.root is not None

    def update(self, engine: "AnimationEngine", dt: float) -> bool:
        node = engine.cursor
        if node is None:
            logger.info("Search for %d: not found after %d hops", self.key, self.hops)
            return False

        engine.narration.advance(dt)

        assert self.timer is not None
        if not self.timer.tick(dt):
            return True
        self.hops += 1

        if self.key == node.key:
            engine.found = True
            node.tag = VisualTag.FOUND
            logger.info("Search for %d: found after %d hops", self.key, self.hops)
            return False

        engine.cursor = node.left if self.key < node.key else node.right
        logger.debug(
            "Search hop %d: %d -> %s",
            self.hops,
            node.key,
            engine.cursor.key if engine.cursor is not None else None,
        )
        return True
