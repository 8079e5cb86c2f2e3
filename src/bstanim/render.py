"""High-level API for exporting engine frames."""

import datetime as dt
import warnings
from pathlib import Path
from typing import Any, Dict, Optional, Union

from bstanim.build_snapshot import build_snapshot
from bstanim.engine import AnimationEngine
from bstanim.errors import RenderError
from bstanim.renderers.graphviz_renderer import render_graphviz
from bstanim.renderers.html import render_html
from bstanim.renderers.json_yaml import dump_snapshot
from bstanim.renderers.mermaid import render_mermaid
from bstanim.snapshot import FrameSnapshot

GRAPHVIZ_FORMATS = ["png", "pdf", "svg", "jpg", "jpeg", "dot", "gv"]
DATA_FORMATS = ["json", "yaml"]
MERMAID_FORMATS = ["mermaid", "md", "markdown"]
SUPPORTED_FORMATS = GRAPHVIZ_FORMATS + DATA_FORMATS + MERMAID_FORMATS + ["html"]


def output_extension(format: str) -> str:
    """Return the file extension the renderer for ``format`` writes."""
    format = format.lower()
    if format in ("md", "markdown"):
        return "md"
    return format


def render(
    engine_or_snapshot: Union[AnimationEngine, FrameSnapshot],
    output_basename: Union[str, Path],
    *,
    format: str,
    annotations: Optional[Dict[str, Any]] = None,
    **renderer_kwargs,
) -> None:
    """
    High-level API to export the current frame.

    Args:
        engine_or_snapshot: A running AnimationEngine or a prebuilt FrameSnapshot
        output_basename: Output file path without extension. If an existing directory is provided,
                         a timestamped filename (bstanim_YYYYMMDD_HHMMSS) will be generated inside it.
        format: Output format. Supported values:
               - "png", "pdf", "svg", "jpg", "jpeg", "dot", "gv": Graphviz formats
               - "json", "yaml": Data export formats
               - "mermaid", "md", "markdown": Mermaid diagram
               - "html": Static HTML page with an SVG frame (requires jinja2)
        annotations: Optional annotations to add to snapshot metadata
        **renderer_kwargs: Additional keyword arguments passed to the renderer

    Raises:
        RenderError: If the format is unsupported or rendering fails

    Examples:
        >>> from bstanim import AnimationEngine, render
        >>> engine = AnimationEngine()
        >>> for key in (50, 30, 70):
        ...     engine.start_insert(key)
        >>> engine.start_traversal("inorder")
        >>> engine.update(1.0)
        >>> render(engine, "frames/inorder", format="json")
    """
    if isinstance(engine_or_snapshot, FrameSnapshot):
        snapshot = engine_or_snapshot
    else:
        snapshot = build_snapshot(engine_or_snapshot, annotations=annotations)

    output_path = Path(output_basename).resolve()
    if output_path.is_dir():  # Generate filename with timestamp
        timestamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%d_%H%M%S")
        output_basename = str(output_path / f"bstanim_{timestamp}")
        warnings.warn(
            (
                f"Output path is a directory. Generated filename: {output_basename}\n"
                "This may lead to overwriting files if called multiple times within the same second."
            ),
            UserWarning,
        )
    else:
        output_basename = str(output_path)

    format = format.lower()
    if format in GRAPHVIZ_FORMATS:
        render_graphviz(snapshot, output_basename, format=format, **renderer_kwargs)
    elif format in DATA_FORMATS:
        dump_snapshot(snapshot, output_basename, format=format, **renderer_kwargs)
    elif format in MERMAID_FORMATS:
        render_mermaid(snapshot, output_basename, format=format, **renderer_kwargs)
    elif format == "html":
        render_html(snapshot, output_basename, format=format, **renderer_kwargs)
    else:
        raise RenderError(
            f"Unsupported format: {format}. "
            f"Supported formats: {', '.join(SUPPORTED_FORMATS)}"
        )
