"""JSON and YAML output for frame snapshots."""

import dataclasses
import json
from typing import Any, Dict, List, Optional

import yaml

from bstanim.errors import RenderError
from bstanim.snapshot import FrameSnapshot


def snapshot_to_dict(
    snapshot: FrameSnapshot,
    include_fields: Optional[List[str]] = None,
    include_narration: bool = True,
) -> Dict[str, Any]:
    """
    Convert a snapshot to a dictionary for serialization.

    Args:
        snapshot: Frame snapshot
        include_fields: Optional list of node fields to include
        include_narration: Whether to include the narration panel

    Returns:
        Dictionary representation of the snapshot
    """
    try:
        filtered_nodes = []
        for node in snapshot.nodes:
            node_dict = dataclasses.asdict(node)
            if include_fields is not None:
                node_dict = {k: v for k, v in node_dict.items() if k in include_fields}
            filtered_nodes.append(node_dict)

        result: Dict[str, Any] = {
            "nodes": filtered_nodes,
            "edges": [dataclasses.asdict(edge) for edge in snapshot.edges],
            "cursor": snapshot.cursor,
            "highlighted_edge": snapshot.highlighted_edge,
            "mode": snapshot.mode,
            "found": snapshot.found,
            "pending_key": snapshot.pending_key,
            "metadata": snapshot.metadata,
        }
        if include_narration:
            result["narration"] = {
                "steps": list(snapshot.narration.steps),
                "index": snapshot.narration.index,
                "revealed": snapshot.narration.revealed,
            }
        return result
    except Exception as e:
        raise RenderError(f"Failed to convert snapshot to dictionary: {e}")


def dump_snapshot(
    snapshot: FrameSnapshot,
    output_basename: str,
    *,
    format: str,
    include_fields: Optional[List[str]] = None,
    include_narration: bool = True,
    indent: int = 2,
) -> None:
    """
    Dump a frame snapshot to JSON or YAML format.

    Args:
        snapshot: Frame snapshot to dump
        output_basename: Output file path without extension
        format: Output format ("json" or "yaml")
        include_fields: Optional list of node fields to include.
                       If None, all fields are included.
        include_narration: Whether to include the narration panel
        indent: Indentation level for output

    Raises:
        RenderError: If serialization fails
        ValueError: If format is not supported
    """
    format = format.lower()
    if format not in ["json", "yaml"]:
        raise ValueError(f"Unsupported format: {format}. Use 'json' or 'yaml'.")

    snapshot_dict = snapshot_to_dict(
        snapshot,
        include_fields=include_fields,
        include_narration=include_narration,
    )

    output_path = f"{output_basename}.{format}"
    try:
        if format == "json":
            with open(output_path, "w") as f:
                json.dump(snapshot_dict, f, indent=indent)
        elif format == "yaml":
            with open(output_path, "w") as f:
                yaml.safe_dump(snapshot_dict, f, indent=indent, sort_keys=False)
    except Exception as e:
        raise RenderError(f"Failed to write {format.upper()} file: {e}")
