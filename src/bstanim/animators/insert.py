"""Insert animator: instantaneous structural insert, timer-paced narration."""

import logging
from typing import TYPE_CHECKING

from bstanim import tree
from bstanim.animators.base import Mode
from bstanim.clock import INSERT_STEPS

if TYPE_CHECKING:
    from bstanim.engine import AnimationEngine

logger = logging.getLogger(__name__)


class InsertAnimator:
    """Animator for BST insertion. New nodes ease in from the spawn point."""

    mode = Mode.INSERTING
    steps = INSERT_STEPS

    def __init__(self, key: int):
        self.key = key

    def start(self, engine: "AnimationEngine") -> bool:
        if tree.find(engine.root, self.key) is not None:
            logger.info("Insert %d: duplicate key ignored", self.key)
            return False
        layout = engine.config.layout
        engine.root = tree.insert(engine.root, self.key, layout.spawn_x, layout.spawn_y)
        engine.relayout()
        logger.info("Insert %d: inserted", self.key)
        return True

    def update(self, engine: "AnimationEngine", dt: float) -> bool:
        engine.narration.advance(dt)
        return not engine.narration.is_complete
