"""Tests for event script parsing and replay."""

import pytest

from bstanim import AnimationEngine, ScriptError, tree
from bstanim.script import Event, load_script, parse_events, run_script


def test_parse_expands_key_lists():
    events = parse_events(
        {
            "events": [
                {"insert": [50, 30]},
                {"traverse": "preorder"},
                {"search": 30},
                {"adjust": -2},
                {"wait": 1},
                "reset",
            ]
        }
    )

    assert events == [
        Event("insert", 50),
        Event("insert", 30),
        Event("traverse", "preorder"),
        Event("search", 30),
        Event("adjust", -2),
        Event("wait", 1.0),
        Event("reset"),
    ]


def test_parse_accepts_bare_list():
    assert parse_events([{"delete": 5}]) == [Event("delete", 5)]


@pytest.mark.parametrize(
    "data",
    [
        None,
        {"steps": []},
        ["jump"],
        [{"insert": 1, "delete": 2}],
        [{"rotate": 3}],
        [{"insert": "ten"}],
        [{"search": [1, 2.5]}],
        [{"traverse": "levelorder"}],
        [{"adjust": True}],
        [{"wait": -1}],
    ],
)
def test_parse_rejects_invalid_scripts(data):
    with pytest.raises(ScriptError):
        parse_events(data)


def test_load_script(tmp_path):
    path = tmp_path / "demo.yaml"
    path.write_text("events:\n  - insert: [2, 1, 3]\n  - traverse: inorder\n")

    events = load_script(path)
    assert [e.action for e in events] == ["insert", "insert", "insert", "traverse"]

    with pytest.raises(ScriptError):
        load_script(tmp_path / "missing.yaml")


def test_run_script_settles_each_event():
    engine = AnimationEngine()
    events = parse_events(
        [
            {"insert": [50, 30, 70, 20, 40]},
            {"insert": 30},
            {"search": 40},
            {"delete": 30},
            {"traverse": "inorder"},
        ]
    )
    frames = []

    results = run_script(engine, events, on_frame=lambda e: frames.append(e.clock))

    assert len(results) == len(events)
    assert [r.started for r in results] == [True] * 5 + [False] + [True] * 3
    assert results[5].elapsed == 0.0

    search_result = results[6]
    assert search_result.snapshot.found
    assert search_result.snapshot.cursor == 40

    delete_result = results[7]
    assert [n.key for n in delete_result.snapshot.nodes] == [50, 40, 20, 70]

    assert results[-1].snapshot.cursor is None
    assert results[-1].snapshot.mode == "idle"
    assert tree.keys(engine.root) == [20, 40, 50, 70]
    assert frames == sorted(frames)
    assert engine.is_idle


def test_run_script_wait_and_adjust():
    engine = AnimationEngine()
    results = run_script(
        engine, parse_events([{"adjust": 5}, {"wait": 0.5}, {"insert": 15}, "reset"])
    )

    assert engine.pending_key == 15
    assert results[1].elapsed == pytest.approx(0.5)
    assert results[2].snapshot.nodes[0].key == 15
    assert results[3].snapshot.nodes == []


def test_run_script_rejects_bad_fps():
    with pytest.raises(ValueError):
        run_script(AnimationEngine(), [], fps=0)
