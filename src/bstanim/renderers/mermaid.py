"""Mermaid diagram renderer for frame snapshots."""

from typing import Any, List, Optional

from bstanim.errors import RenderError
from bstanim.snapshot import FrameSnapshot
from bstanim.renderers.color_utils import OUTLINE_COLOR, edge_color, resolve_palette


def snapshot_to_mermaid(
    snapshot: FrameSnapshot,
    *,
    theme: str = "default",
    palette: Optional[Any] = None,
    show_narration: bool = True,
) -> str:
    """Build the Mermaid source for a snapshot."""
    color_fn = resolve_palette(palette)

    lines = ["%%{init: {'theme':'" + theme + "'}}%%", "graph TD"]

    for node in snapshot.nodes:
        node_id = f"node{node.key}".replace("-", "_")
        lines.append(f'    {node_id}(("{node.key}"))')
        fill_color = color_fn(node.tag, node.opacity)
        stroke_width = "4px" if node.key == snapshot.cursor else "2px"
        lines.append(
            f"    style {node_id} fill:{fill_color},stroke:{OUTLINE_COLOR},"
            f"stroke-width:{stroke_width}"
        )

    # linkStyle indexes edges in declaration order
    link_styles: List[str] = []
    for index, edge in enumerate(snapshot.edges):
        source_id = f"node{edge.source}".replace("-", "_")
        target_id = f"node{edge.target}".replace("-", "_")
        lines.append(f'    {source_id} -->|"{edge.side[0].upper()}"| {target_id}')
        color = edge_color(edge.side, edge.highlighted)
        width = "4px" if edge.highlighted else "2px"
        link_styles.append(f"    linkStyle {index} stroke:{color},stroke-width:{width}")
    lines.extend(link_styles)

    if show_narration and snapshot.narration.steps:
        steps = "<br/>".join(f"- {step}" for step in snapshot.narration.revealed)
        lines.append(f'    narration["Algorithm Steps<br/>{steps}"]')
        lines.append("    style narration fill:#e0e0e0,stroke:#888,stroke-width:1px")

    return "\n".join(lines)


def render_mermaid(
    snapshot: FrameSnapshot,
    output_basename: str,
    *,
    format: str = "mermaid",
    theme: str = "default",
    palette: Optional[Any] = None,
    show_narration: bool = True,
) -> None:
    """
    Render a frame snapshot as a Mermaid diagram.

    Args:
        snapshot: Frame snapshot to render
        output_basename: Output file path without extension.
        format: Output format ("mermaid" or "md" for markdown)
        theme: Mermaid theme ("default", "dark", "forest", etc.)
        palette: Node palette. Can be:
            - None: Use the default palette
            - str: Palette name (e.g., 'classic', 'grayscale')
            - Mapping[str, str]: Tag to hex color mapping
            - Palette instance: Custom palette
            - Callable[[str, float], str]: Custom function mapping (tag, opacity) to hex color
        show_narration: Whether to add the revealed narration as a side node

    Raises:
        RenderError: If rendering fails
        ValueError: If format is not supported
    """
    format = format.lower()
    if format not in ["mermaid", "md", "markdown"]:
        raise ValueError(
            f"Unsupported format: {format}. Use 'mermaid', 'md', or 'markdown'."
        )

    try:
        mermaid_str = snapshot_to_mermaid(
            snapshot, theme=theme, palette=palette, show_narration=show_narration
        )

        if format in ["md", "markdown"]:
            mermaid_str = f"```mermaid\n{mermaid_str}\n```"

        ext = ".md" if format in ["md", "markdown"] else ".mermaid"
        with open(output_basename + ext, "w") as f:
            f.write(mermaid_str)
    except Exception as e:
        raise RenderError(f"Failed to render Mermaid diagram: {e}")
