"""Base animator protocol shared by all operation state machines."""

import enum
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from bstanim.engine import AnimationEngine


class Mode(enum.Enum):
    """What the engine is currently animating."""

    IDLE = "idle"
    INSERTING = "inserting"
    SEARCHING = "searching"
    DELETING = "deleting"
    TRAVERSING = "traversing"


class Animator(Protocol):
    """Protocol for a resumable, per-frame operation state machine."""

    mode: Mode
    steps: Sequence[str]

    def start(self, engine: "AnimationEngine") -> bool:
        """
        Prepare the state machine against the engine's current tree.

        Args:
            engine: The engine context; transient state is already cleared

        Returns:
            False if the operation is a no-op and the engine should stay idle
        """
        ...

    def update(self, engine: "AnimationEngine", dt: float) -> bool:
        """
        Advance the state machine by one frame.

        Args:
            engine: The engine context
            dt: Elapsed frame time in seconds

        Returns:
            True while the operation is still running
        """
        ...
