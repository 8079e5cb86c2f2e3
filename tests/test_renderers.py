"""Tests for frame exporters."""

import importlib.util
import json
import re
import shutil
import tempfile
from pathlib import Path

import pytest
import yaml

from bstanim import AnimationEngine, build_snapshot, render
from bstanim.errors import DependencyNotFoundError, RenderError
from bstanim.renderers.mermaid import snapshot_to_mermaid


def create_test_engine():
    """Create an engine mid-way through an in-order traversal."""
    engine = AnimationEngine()
    for key in (50, 30, 70, 20, 40):
        engine.start_insert(key)
    engine.run_until_idle()
    engine.update(2.0)
    engine.start_traversal("inorder")
    # First hop descends 50 -> 30 and lights that edge
    engine.update(0.8)
    return engine


def test_render_json():
    """Test rendering to JSON format."""
    engine = create_test_engine()

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test"
        render(engine, output_basename=str(output_path), format="json")

        json_file = Path(str(output_path) + ".json")
        assert json_file.exists()

        with open(json_file) as f:
            data = json.load(f)

        assert len(data["nodes"]) == 5
        assert len(data["edges"]) == 4
        assert data["cursor"] == 50
        assert data["highlighted_edge"] == [50, 30]
        assert data["mode"] == "traversing"
        assert data["narration"]["steps"][0] == "In-order traversal:"
        assert data["metadata"]["num_nodes"] == 5


def test_render_yaml_with_annotations():
    engine = create_test_engine()

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test"
        render(
            engine,
            output_basename=str(output_path),
            format="yaml",
            annotations={"frame": 12},
            include_fields=["key", "tag"],
            include_narration=False,
        )

        with open(str(output_path) + ".yaml") as f:
            data = yaml.safe_load(f)

        assert data["metadata"]["frame"] == 12
        assert set(data["nodes"][0]) == {"key", "tag"}
        assert "narration" not in data


def test_render_mermaid():
    """Test rendering to Mermaid format."""
    engine = create_test_engine()

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test"
        render(engine, output_basename=str(output_path), format="mermaid")
        mermaid_file = Path(str(output_path) + ".mermaid")
        assert mermaid_file.exists()

        result = mermaid_file.read_text()
        defs = re.findall(r"^\s*node\d+\(\(", result, flags=re.MULTILINE)
        assert len(defs) == 5
        assert "In-order traversal:" in result


def test_mermaid_styles_cursor_and_highlighted_edge():
    snapshot = build_snapshot(create_test_engine())
    source = snapshot_to_mermaid(snapshot, show_narration=False)

    assert "style node50 fill:#ffa100" in source
    assert "stroke-width:4px" in source
    # Edge 50 -> 30 is declared first and drawn red
    assert "linkStyle 0 stroke:#e62937" in source
    assert "narration" not in source


def test_render_markdown_wraps_fence():
    engine = create_test_engine()

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test"
        render(engine, output_basename=str(output_path), format="md")
        content = Path(str(output_path) + ".md").read_text()

        assert content.startswith("```mermaid\n")
        assert content.endswith("\n```")


def test_render_graphviz_honors_dot_availability():
    """Graphviz rendering should succeed only when both module and `dot` binary exist."""
    engine = create_test_engine()
    graphviz_spec = importlib.util.find_spec("graphviz")
    dot_path = shutil.which("neato")

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test"
        if graphviz_spec is None or dot_path is None:
            with pytest.raises(DependencyNotFoundError):
                render(engine, output_basename=str(output_path), format="png")
        else:
            render(engine, output_basename=str(output_path), format="png")
            png_file = Path(str(output_path) + ".png")
            assert png_file.is_file(), "PNG file was not created"


def test_render_dot_source_pins_positions():
    pytest.importorskip("graphviz")
    engine = create_test_engine()

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test"
        render(engine, output_basename=str(output_path), format="dot", title="Frame")
        source = Path(str(output_path) + ".dot").read_text()

        # Root settles at (350, 80), i.e. (4.861, -1.111) in inches
        assert 'pos="4.861,-1.111!"' in source
        assert "Algorithm Steps" in source


def test_render_html():
    """Test rendering to HTML format."""
    engine = create_test_engine()

    jinja2_spec = importlib.util.find_spec("jinja2")
    if jinja2_spec is None:
        pytest.skip("jinja2 not installed")
    else:
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "test"
            render(engine, output_basename=str(output_path), format="html")

            html_file = Path(str(output_path) + ".html")
            assert html_file.exists()

            content = html_file.read_text()

            assert "BST Visualizer" in content
            assert "Algorithm Steps" in content
            assert "snapshotData" in content
            assert content.count("<circle") == 5
            assert 'stroke="#e62937"' in content


def test_render_with_snapshot():
    """Test rendering with pre-built snapshot."""
    snapshot = build_snapshot(create_test_engine())

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "test"
        render(snapshot, str(output_path), format="json")

        json_file = Path(str(output_path) + ".json")
        assert json_file.exists()


def test_render_empty_tree():
    engine = AnimationEngine()

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "empty"
        render(engine, str(output_path), format="json")
        data = json.loads(Path(str(output_path) + ".json").read_text())

        assert data["nodes"] == []
        assert data["cursor"] is None
        assert data["metadata"]["height"] == 0


def test_render_into_directory_warns():
    engine = create_test_engine()

    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.warns(UserWarning, match="directory"):
            render(engine, tmpdir, format="json")
        assert len(list(Path(tmpdir).glob("bstanim_*.json"))) == 1


def test_render_invalid_format():
    """Test that rendering with invalid format raises error."""
    engine = create_test_engine()

    with pytest.raises(RenderError):
        render(engine, output_basename="test", format="invalid_format")
