"""Data structures for per-frame snapshots read by renderers."""

import dataclasses
from datetime import datetime, timezone
from functools import lru_cache
from importlib import metadata as importlib_metadata
from typing import Any, Dict, List, Optional


@dataclasses.dataclass
class NodeSnapshot:
    """Snapshot of a single node as it should be drawn this frame."""

    key: int
    parent_key: Optional[int]
    depth: int

    x: float
    y: float
    target_x: float
    target_y: float
    opacity: float
    tag: str  # display tag, cursor already resolved


@dataclasses.dataclass
class EdgeSnapshot:
    """Snapshot of a parent-child edge."""

    source: int
    target: int
    side: str  # "left" or "right"
    highlighted: bool = False


@dataclasses.dataclass
class NarrationSnapshot:
    steps: List[str]
    index: int

    @property
    def revealed(self) -> List[str]:
        return self.steps[: self.index + 1]


@dataclasses.dataclass
class FrameSnapshot:
    """Complete read-only view of the engine after an update."""

    nodes: List[NodeSnapshot]
    edges: List[EdgeSnapshot]
    narration: NarrationSnapshot
    cursor: Optional[int]
    highlighted_edge: Optional[List[int]]
    mode: str
    found: bool
    pending_key: int
    metadata: Dict[str, Any]

    def __post_init__(self):
        """Validate snapshot after initialization."""
        node_keys = {node.key for node in self.nodes}
        if len(node_keys) != len(self.nodes):
            raise ValueError("Snapshot node keys must be unique")
        if self.cursor is not None and self.cursor not in node_keys:
            raise ValueError(f"Cursor key {self.cursor} is not a node of the snapshot")

    def node(self, key: int) -> Optional[NodeSnapshot]:
        for node in self.nodes:
            if node.key == key:
                return node
        return None

    @classmethod
    def create_with_metadata(
        cls,
        nodes: List[NodeSnapshot],
        edges: List[EdgeSnapshot],
        narration: NarrationSnapshot,
        cursor: Optional[int],
        highlighted_edge: Optional[List[int]],
        mode: str,
        found: bool,
        pending_key: int,
        additional_metadata: Optional[Dict[str, Any]] = None,
    ) -> "FrameSnapshot":
        """Create a snapshot with auto-generated metadata."""
        metadata = {
            "created_at": datetime.now(timezone.utc).isoformat(),
            "bstanim_version": _get_bstanim_version(),
            "num_nodes": len(nodes),
            "num_edges": len(edges),
            "height": max((node.depth for node in nodes), default=-1) + 1,
        }

        if additional_metadata:
            metadata.update(additional_metadata)

        return cls(
            nodes=nodes,
            edges=edges,
            narration=narration,
            cursor=cursor,
            highlighted_edge=highlighted_edge,
            mode=mode,
            found=found,
            pending_key=pending_key,
            metadata=metadata,
        )


@lru_cache(maxsize=1)
def _get_bstanim_version() -> str:
    """Return the installed bstanim version or 'unknown'."""
    try:
        return importlib_metadata.version("bstanim")
    except importlib_metadata.PackageNotFoundError:
        return "unknown"
