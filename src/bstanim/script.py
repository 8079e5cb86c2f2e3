"""Headless replay of input event scripts.

A script is a YAML document with an ``events`` list. Each entry is a
one-key mapping (or the bare string ``reset``)::

    events:
      - insert: [50, 30, 70, 20, 40]
      - traverse: inorder
      - search: 40
      - delete: 30
      - adjust: -2
      - wait: 1.5
      - reset
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

import yaml

from bstanim.animators import TraversalOrder
from bstanim.build_snapshot import build_snapshot
from bstanim.engine import AnimationEngine
from bstanim.errors import ScriptError
from bstanim.snapshot import FrameSnapshot

logger = logging.getLogger(__name__)

KEYED_ACTIONS = ("insert", "search", "delete")
ACTIONS = KEYED_ACTIONS + ("traverse", "adjust", "wait", "reset")


@dataclasses.dataclass
class Event:
    action: str
    argument: Any = None


@dataclasses.dataclass
class EventResult:
    """Outcome of one replayed event."""

    event: Event
    started: bool
    elapsed: float
    snapshot: FrameSnapshot


def parse_events(data: Any) -> List[Event]:
    """
    Validate parsed YAML and expand it into single events.

    Lists of keys (``insert: [1, 2]``) expand to one event per key.

    Raises:
        ScriptError: If the structure or any argument is invalid
    """
    if isinstance(data, dict):
        data = data.get("events")
    if not isinstance(data, list):
        raise ScriptError("Script must be a list of events or a mapping with 'events'")

    events: List[Event] = []
    for position, entry in enumerate(data, 1):
        if entry == "reset":
            events.append(Event("reset"))
            continue
        if not isinstance(entry, dict) or len(entry) != 1:
            raise ScriptError(
                f"Event #{position} must be 'reset' or a single-key mapping, got {entry!r}"
            )
        action, argument = next(iter(entry.items()))
        if action not in ACTIONS:
            raise ScriptError(
                f"Event #{position}: unknown action '{action}'. "
                f"Valid actions: {', '.join(ACTIONS)}"
            )

        if action in KEYED_ACTIONS:
            values = argument if isinstance(argument, list) else [argument]
            for value in values:
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ScriptError(
                        f"Event #{position}: '{action}' needs integer keys, got {value!r}"
                    )
                events.append(Event(action, value))
        elif action == "traverse":
            try:
                events.append(Event(action, TraversalOrder(argument).value))
            except ValueError:
                raise ScriptError(
                    f"Event #{position}: unknown traversal order {argument!r}"
                )
        elif action == "adjust":
            if isinstance(argument, bool) or not isinstance(argument, int):
                raise ScriptError(f"Event #{position}: 'adjust' needs an integer delta")
            events.append(Event(action, argument))
        elif action == "wait":
            if isinstance(argument, bool) or not isinstance(argument, (int, float)) or argument < 0:
                raise ScriptError(
                    f"Event #{position}: 'wait' needs a non-negative number of seconds"
                )
            events.append(Event(action, float(argument)))
        else:
            events.append(Event(action))
    return events


def load_script(path: Union[str, Path]) -> List[Event]:
    """Load and parse an event script from a YAML file."""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ScriptError(f"Failed to read script {path}: {e}")
    except yaml.YAMLError as e:
        raise ScriptError(f"Invalid YAML in script {path}: {e}")
    return parse_events(data)


def run_script(
    engine: AnimationEngine,
    events: List[Event],
    *,
    fps: float = 60.0,
    max_seconds: float = 600.0,
    on_frame: Optional[Callable[[AnimationEngine], None]] = None,
) -> List[EventResult]:
    """
    Replay events against an engine at a fixed frame rate.

    Each animated event runs until the engine is idle again; ``wait``
    advances the clock without starting anything.

    Args:
        engine: Engine to drive
        events: Parsed events
        fps: Simulated frame rate
        max_seconds: Upper bound of simulated time per event
        on_frame: Optional callback invoked after every frame update

    Returns:
        One result per event, each with the snapshot taken once it settled
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")
    dt = 1.0 / fps
    results: List[EventResult] = []

    for event in events:
        started = True
        if event.action in KEYED_ACTIONS:
            started = engine.start(event.action, event.argument)
        elif event.action == "traverse":
            started = engine.start_traversal(event.argument)
        elif event.action == "adjust":
            engine.adjust_key(event.argument)
        elif event.action == "reset":
            engine.reset()

        elapsed = 0.0
        if event.action == "wait":
            while elapsed + dt / 2 < event.argument:
                engine.update(dt)
                elapsed += dt
                if on_frame is not None:
                    on_frame(engine)
        else:
            while not engine.is_idle and elapsed < max_seconds:
                engine.update(dt)
                elapsed += dt
                if on_frame is not None:
                    on_frame(engine)
            if not engine.is_idle:
                logger.warning(
                    "Event %s did not finish within %.1fs", event.action, max_seconds
                )

        logger.debug("Event %s(%s) settled after %.2fs", event.action, event.argument, elapsed)
        results.append(
            EventResult(
                event=event,
                started=started,
                elapsed=elapsed,
                snapshot=build_snapshot(engine),
            )
        )
    return results
