"""Animated binary search tree engine.

This package turns BST operations into step-wise, observable animations:

- Insert, search and delete with per-frame visual state
- In-, pre- and post-order traversal replayed one recursion phase per hop
- A narration panel paced independently of the structural animation
- Frame export to JSON, YAML, Mermaid, Graphviz and HTML

Example usage:

    >>> from bstanim import AnimationEngine, build_snapshot, render
    >>>
    >>> engine = AnimationEngine()
    >>> for key in (50, 30, 70, 20, 40):
    ...     engine.start_insert(key)
    >>> engine.start_traversal("inorder")
    >>>
    >>> # Frame loop: update, then read cursor/edge/narration
    >>> engine.update(1 / 60)
    >>> engine.cursor, engine.edge, engine.narration.revealed
    >>>
    >>> # Export the current frame
    >>> snapshot = build_snapshot(engine)
    >>> render(snapshot, "frame", format="html")
"""

from bstanim.animators import (
    DeletePhase,
    Mode,
    TraversalOrder,
    get_animator,
    list_operations,
    register_animator,
)
from bstanim.build_snapshot import build_snapshot
from bstanim.config import EngineConfig, LayoutConfig, PacingConfig, load_config
from bstanim.engine import AnimationEngine
from bstanim.errors import (
    AnimationError,
    ConfigError,
    DependencyNotFoundError,
    InvariantViolationError,
    RenderError,
    ScriptError,
    UnknownOperationError,
)
from bstanim.render import render
from bstanim.renderers import (
    dump_snapshot,
    render_graphviz,
    render_html,
    render_mermaid,
)
from bstanim.snapshot import (
    EdgeSnapshot,
    FrameSnapshot,
    NarrationSnapshot,
    NodeSnapshot,
)
from bstanim.tree import TreeNode, VisualTag

__all__ = [
    # Engine
    "AnimationEngine",
    "Mode",
    "TraversalOrder",
    "DeletePhase",
    "TreeNode",
    "VisualTag",
    # Configuration
    "EngineConfig",
    "PacingConfig",
    "LayoutConfig",
    "load_config",
    # High-level export API
    "render",
    "build_snapshot",
    # Low-level renderers
    "render_graphviz",
    "render_html",
    "render_mermaid",
    "dump_snapshot",
    # Data structures
    "FrameSnapshot",
    "NodeSnapshot",
    "EdgeSnapshot",
    "NarrationSnapshot",
    # Errors
    "AnimationError",
    "InvariantViolationError",
    "UnknownOperationError",
    "ConfigError",
    "ScriptError",
    "RenderError",
    "DependencyNotFoundError",
    # Animator registration
    "register_animator",
    "get_animator",
    "list_operations",
]
