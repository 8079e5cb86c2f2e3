"""Hop timers and step narration.

Structural progress (cursor hops, phase changes) and narration reveal are
paced by two separate timers fed from the same frame delta.
"""

import logging
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

INSERT_STEPS = (
    "Start at root",
    "Compare values",
    "Move left / right",
    "Insert at leaf",
    "Recalculate layout",
)
SEARCH_STEPS = (
    "Start at root",
    "Compare target",
    "Move left or right",
    "Repeat until found or NULL",
)
DELETE_STEPS = (
    "Find node",
    "Flash target node",
    "Drop node",
    "Fade node",
    "Delete & restructure",
)
INORDER_STEPS = ("In-order traversal:", "Go Left", "Visit Node", "Go Right")
PREORDER_STEPS = ("Pre-order traversal:", "Visit Node", "Go Left", "Go Right")
POSTORDER_STEPS = ("Post-order traversal:", "Go Left", "Go Right", "Visit Node")


class HopTimer:
    """Accumulates frame time and fires once the interval has elapsed."""

    def __init__(self, interval: float):
        self.interval = interval
        self.elapsed = 0.0

    def tick(self, dt: float) -> bool:
        self.elapsed += dt
        if self.elapsed < self.interval:
            return False
        self.elapsed = 0.0
        return True

    def reset(self) -> None:
        self.elapsed = 0.0


class Narration:
    """Step list with a reveal index that advances on its own timer."""

    def __init__(self, interval: float = 0.5):
        self.interval = interval
        self.steps: List[str] = []
        self.index = 0
        self.timer = 0.0

    def restart(self, steps: Sequence[str]) -> None:
        self.steps = list(steps)
        self.index = 0
        self.timer = 0.0

    def clear(self) -> None:
        self.restart(())

    @property
    def last_index(self) -> int:
        return max(len(self.steps) - 1, 0)

    @property
    def is_complete(self) -> bool:
        return self.index >= self.last_index

    @property
    def revealed(self) -> List[str]:
        return self.steps[: self.index + 1]

    @property
    def current(self) -> Optional[str]:
        return self.steps[self.index] if self.steps else None

    def advance(self, dt: float, ceiling: Optional[int] = None) -> bool:
        """
        Accumulate time and reveal at most one more step.

        Args:
            dt: Elapsed frame time
            ceiling: Optional highest index that may be revealed, used to
                keep narration from running ahead of a state machine's phase

        Returns:
            True if a new step was revealed
        """
        self.timer += dt
        limit = self.last_index if ceiling is None else min(ceiling, self.last_index)
        if self.timer > self.interval and self.index < limit:
            self.index += 1
            self.timer = 0.0
            logger.debug("Narration step %d: %s", self.index, self.steps[self.index])
            return True
        return False
