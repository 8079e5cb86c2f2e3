"""Graphviz renderer for frame snapshots."""

from typing import Any, Optional

from bstanim.errors import DependencyNotFoundError, RenderError
from bstanim.snapshot import FrameSnapshot
from bstanim.renderers.color_utils import (
    OUTLINE_COLOR,
    edge_color,
    resolve_palette,
)

# Graphviz positions are in points with y growing upward.
POSITION_SCALE = 1 / 72


def _import_graphviz():
    try:
        import graphviz  # type: ignore
    except ImportError:
        raise DependencyNotFoundError(
            "graphviz Python package is not installed. Install it with: pip install bstanim[vis]"
        )
    return graphviz


def snapshot_to_graph(
    snapshot: FrameSnapshot,
    *,
    title: Optional[str] = None,
    use_positions: bool = True,
    palette: Optional[Any] = None,
):
    """
    Build a ``graphviz.Digraph`` for a snapshot.

    Args:
        snapshot: Frame snapshot
        title: Optional title for the graph
        use_positions: Pin nodes at their animated positions (neato layout)
            instead of letting dot lay the tree out
        palette: Node palette, see ``resolve_palette``

    Raises:
        DependencyNotFoundError: If graphviz is not installed
    """
    graphviz = _import_graphviz()
    color_fn = resolve_palette(palette)

    dot = graphviz.Digraph(
        comment=title or "BST Frame",
        engine="neato" if use_positions else "dot",
    )
    if title:
        dot.attr(label=title, labelloc="t", fontsize="16")
    dot.attr("node", shape="circle", style="filled", fixedsize="true", width="0.7")

    for node in snapshot.nodes:
        attrs = {
            "label": str(node.key),
            "fillcolor": color_fn(node.tag, node.opacity),
            "color": OUTLINE_COLOR,
            "penwidth": "3" if node.key == snapshot.cursor else "1",
            "tooltip": (
                f"Key: {node.key}\\nTag: {node.tag}\\n"
                f"Position: ({node.x:.1f}, {node.y:.1f})\\nOpacity: {node.opacity:.2f}"
            ),
        }
        if use_positions:
            attrs["pos"] = f"{node.x * POSITION_SCALE:.3f},{-node.y * POSITION_SCALE:.3f}!"
        dot.node(str(node.key), **attrs)

    for edge in snapshot.edges:
        dot.edge(
            str(edge.source),
            str(edge.target),
            color=edge_color(edge.side, edge.highlighted),
            penwidth="3" if edge.highlighted else "1",
        )

    if snapshot.narration.steps:
        label = "Algorithm Steps\\l" + "".join(
            f"- {step}\\l" for step in snapshot.narration.revealed
        )
        dot.node(
            "narration",
            label=label,
            shape="box",
            style="filled",
            fillcolor="#e0e0e0",
            fixedsize="false",
        )

    return dot


def render_graphviz(
    snapshot: FrameSnapshot,
    output_basename: str,
    *,
    format: str,
    title: Optional[str] = None,
    use_positions: bool = True,
    palette: Optional[Any] = None,
) -> None:
    """
    Render a frame snapshot using Graphviz.

    Args:
        snapshot: Frame snapshot to render
        output_basename: Output file path without extension
        format: Output format (e.g., "pdf", "png", "svg", or "dot" for source only)
        title: Optional title for the graph
        use_positions: Pin nodes at their animated positions
        palette: Node palette, see ``resolve_palette``

    Raises:
        DependencyNotFoundError: If graphviz is not installed
        RenderError: If rendering fails
    """
    graphviz = _import_graphviz()

    format = format.lower()
    dot = snapshot_to_graph(
        snapshot, title=title, use_positions=use_positions, palette=palette
    )

    if format in ["dot", "gv"]:
        try:
            with open(f"{output_basename}.{format}", "w") as f:
                f.write(dot.source)
        except Exception as e:
            raise RenderError(f"Failed to write Graphviz source: {e}")
        return

    try:
        dot.render(filename=output_basename, format=format, cleanup=True)
    except graphviz.ExecutableNotFound:
        raise DependencyNotFoundError(
            "Graphviz executable is not in system PATH. "
            "Please install Graphviz: https://graphviz.org/download/"
        )
    except Exception as e:
        raise RenderError(f"Failed to render Graphviz output: {e}")
