"""Static HTML/SVG renderer for frame snapshots."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from bstanim.errors import DependencyNotFoundError, RenderError
from bstanim.snapshot import FrameSnapshot
from bstanim.renderers.json_yaml import snapshot_to_dict
from bstanim.renderers.color_utils import (
    BACKGROUND_COLOR,
    NARRATION_COLOR,
    OUTLINE_COLOR,
    TEXT_COLOR,
    edge_color,
    resolve_palette,
)

NODE_RADIUS = 25


def _get_template() -> str:
    """Load HTML template from assets directory."""
    template_path = Path(__file__).parents[1] / "assets" / "frame.html.jinja2"
    if not template_path.exists():
        raise RenderError(f"HTML template not found at {template_path}")
    with open(template_path, "r") as f:
        return f.read()


def render_html(
    snapshot: FrameSnapshot,
    output_basename: str,
    *,
    format: str = "html",
    width: int = 1000,
    height: int = 700,
    palette: Optional[Any] = None,
    title: str = "BST Visualizer",
) -> None:
    """
    Render a frame snapshot as a standalone HTML page with an inline SVG.

    Nodes are drawn at their animated positions with their opacity, the
    highlighted edge in red, and the revealed narration in a side panel.

    Args:
        snapshot: Frame snapshot to render
        output_basename: Output file path without extension
        format: Output format (should be "html")
        width: Canvas width in pixels
        height: Canvas height in pixels
        palette: Node palette, see ``resolve_palette``
        title: Page and canvas title

    Raises:
        DependencyNotFoundError: If jinja2 is not installed
        RenderError: If rendering fails
    """
    try:
        from jinja2 import Template
    except ImportError:
        raise DependencyNotFoundError(
            "jinja2 is not installed. Install it with: pip install jinja2"
        )

    format = format.lower()
    if format not in ["html"]:
        raise ValueError(f"Unsupported format: {format}. Use 'html'.")

    snapshot_dict = snapshot_to_dict(snapshot)
    template_str = _get_template()
    color_fn = resolve_palette(palette)

    try:
        positions = {node.key: (node.x, node.y) for node in snapshot.nodes}
        edges: List[Dict[str, Any]] = []
        for edge in snapshot.edges:
            x1, y1 = positions[edge.source]
            x2, y2 = positions[edge.target]
            edges.append(
                {
                    "x1": x1,
                    "y1": y1,
                    "x2": x2,
                    "y2": y2,
                    "color": edge_color(edge.side, edge.highlighted),
                    "width": 3 if edge.highlighted else 1.5,
                }
            )

        nodes: List[Dict[str, Any]] = [
            {
                "key": node.key,
                "x": node.x,
                "y": node.y,
                "opacity": node.opacity,
                "fill": color_fn(node.tag, 1.0),
                "tag": node.tag,
            }
            for node in snapshot.nodes
        ]

        template = Template(template_str, autoescape=True)
        html_content = template.render(
            title=title,
            width=width,
            height=height,
            radius=NODE_RADIUS,
            nodes=nodes,
            edges=edges,
            narration=snapshot.narration.revealed,
            snapshot_dict=snapshot_dict,
            metadata=snapshot.metadata,
            background=BACKGROUND_COLOR,
            outline=OUTLINE_COLOR,
            text_color=TEXT_COLOR,
            narration_color=NARRATION_COLOR,
        )

        with open(output_basename + ".html", "w") as f:
            f.write(html_content)
    except Exception as e:
        raise RenderError(f"Failed to render HTML frame: {e}")
