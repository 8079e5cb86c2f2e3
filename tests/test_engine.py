"""Tests for the engine context, insert flow and animator registry."""

import pytest

from bstanim import (
    AnimationEngine,
    EngineConfig,
    Mode,
    UnknownOperationError,
    get_animator,
    list_operations,
    register_animator,
    tree,
)
from bstanim.animators import _ANIMATOR_REGISTRY, SearchAnimator
from bstanim.clock import INSERT_STEPS, SEARCH_STEPS, HopTimer, Narration


class TestInsert:
    def test_insert_spawns_and_eases_to_target(self):
        engine = AnimationEngine()

        assert engine.start_insert(50)
        assert engine.mode is Mode.INSERTING
        assert engine.root.key == 50
        assert engine.root.position == (350.0, -100.0)
        assert engine.root.target_position == (350.0, 80.0)
        assert engine.cursor is None

        engine.update(0.1)
        assert engine.root.y == pytest.approx(-10.0)

    def test_insert_narration_runs_to_completion(self):
        engine = AnimationEngine()
        engine.start_insert(50)
        assert engine.narration.steps == list(INSERT_STEPS)

        elapsed = engine.run_until_idle(fps=60)

        assert engine.mode is Mode.IDLE
        assert engine.narration.index == len(INSERT_STEPS) - 1
        # One reveal per narration interval
        assert elapsed == pytest.approx(4 * 0.5, abs=0.1)

    def test_insert_relayouts_existing_nodes(self):
        engine = AnimationEngine()
        engine.start_insert(50)
        engine.start_insert(30)
        engine.start_insert(70)

        assert engine.root.left.target_position == (150.0, 160.0)
        assert engine.root.right.target_position == (550.0, 160.0)

    def test_duplicate_insert_is_noop(self):
        engine = AnimationEngine()
        engine.start_insert(50)

        assert not engine.start_insert(50)
        assert engine.mode is Mode.IDLE
        assert tree.size(engine.root) == 1

    def test_insert_uses_pending_key(self):
        engine = AnimationEngine()
        assert engine.pending_key == 10

        engine.start_insert()
        assert engine.adjust_key(-3) == 7
        engine.start_insert()

        assert tree.keys(engine.root) == [7, 10]


class TestEngine:
    def test_new_engine_is_idle_and_empty(self):
        engine = AnimationEngine()

        assert engine.mode is Mode.IDLE
        assert engine.is_idle
        assert engine.root is None
        assert engine.narration.revealed == []

    def test_update_while_idle_only_eases(self):
        engine = AnimationEngine()
        engine.start_insert(1)
        engine.run_until_idle()

        engine.update(1.0)

        assert engine.mode is Mode.IDLE
        assert engine.root.position == pytest.approx((350.0, 80.0))

    def test_negative_dt_rejected(self):
        engine = AnimationEngine()
        with pytest.raises(ValueError):
            engine.update(-0.1)

    def test_ticks_apply_repeated_updates(self):
        engine = AnimationEngine()
        for key in (50, 30, 70):
            engine.start_insert(key)
        engine.start_traversal("inorder")

        engine.update(0.4, ticks=2)

        assert engine.cursor.key == 50
        assert engine.clock == pytest.approx(0.8)

    def test_starting_operation_cancels_previous(self):
        engine = AnimationEngine()
        for key in (50, 30, 70):
            engine.start_insert(key)
        engine.start_traversal("preorder")
        engine.update(0.8)
        engine.update(0.8)
        assert engine.edge is not None

        engine.start_search(70)

        assert engine.mode is Mode.SEARCHING
        assert engine.edge is None
        assert engine.cursor is engine.root
        assert engine.narration.steps == list(SEARCH_STEPS)
        assert engine.narration.index == 0
        assert all(n.tag.value == "normal" for n in tree.iter_nodes(engine.root))

    def test_reset_clears_everything(self):
        engine = AnimationEngine()
        for key in (50, 30, 70):
            engine.start_insert(key)
        engine.start_search(30)
        engine.update(0.6)

        engine.reset()

        assert engine.root is None
        assert engine.cursor is None
        assert engine.edge is None
        assert not engine.found
        assert engine.mode is Mode.IDLE
        assert engine.narration.steps == []

    def test_custom_config_changes_pacing(self):
        config = EngineConfig.from_dict({"pacing": {"search_hop": 0.1}})
        engine = AnimationEngine(config)
        for key in (50, 30):
            engine.start_insert(key)
        engine.start_search(30)

        engine.update(0.1)
        assert engine.cursor.key == 30

    def test_unknown_operation_raises(self):
        engine = AnimationEngine()
        with pytest.raises(UnknownOperationError):
            engine.start("rotate", 5)


class TestClock:
    def test_hop_timer_fires_and_resets(self):
        timer = HopTimer(0.5)

        assert not timer.tick(0.25)
        assert timer.tick(0.25)
        assert timer.elapsed == 0.0
        assert not timer.tick(0.1)

        timer.reset()
        assert timer.elapsed == 0.0

    def test_narration_reveals_one_step_per_interval(self):
        narration = Narration(0.5)
        narration.restart(["a", "b", "c"])
        assert narration.revealed == ["a"]

        # A long frame still reveals at most one step
        assert narration.advance(5.0)
        assert narration.index == 1
        assert not narration.advance(0.5)
        assert narration.advance(0.01)
        assert narration.revealed == ["a", "b", "c"]
        assert narration.is_complete
        assert not narration.advance(1.0)
        assert narration.current == "c"

    def test_narration_ceiling(self):
        narration = Narration(0.5)
        narration.restart(["a", "b", "c"])

        assert not narration.advance(1.0, ceiling=0)
        assert narration.index == 0
        # Accumulated time reveals as soon as the ceiling allows
        assert narration.advance(0.0, ceiling=1)
        assert narration.index == 1

    def test_empty_narration(self):
        narration = Narration()
        assert narration.current is None
        assert narration.revealed == []
        assert not narration.advance(1.0)


class TestRegistry:
    def test_builtin_operations(self):
        assert list_operations() == [
            "delete",
            "inorder",
            "insert",
            "postorder",
            "preorder",
            "search",
        ]

    def test_get_animator_is_case_insensitive(self):
        animator = get_animator("Search", 5)
        assert isinstance(animator, SearchAnimator)
        assert animator.key == 5

    def test_get_unknown_animator(self):
        with pytest.raises(UnknownOperationError):
            get_animator("rotate", 1)

    def test_register_custom_animator(self):
        class NoopAnimator:
            mode = Mode.SEARCHING
            steps = ("Nothing to do",)

            def __init__(self, key):
                self.key = key

            def start(self, engine):
                return True

            def update(self, engine, dt):
                return False

        try:
            register_animator("Noop", NoopAnimator)
            assert "noop" in list_operations()

            engine = AnimationEngine()
            assert engine.start("noop", 3)
            assert engine.narration.steps == ["Nothing to do"]
            engine.update(0.1)
            assert engine.mode is Mode.IDLE
        finally:
            _ANIMATOR_REGISTRY.pop("noop", None)

    def test_register_existing_warns(self):
        with pytest.warns(UserWarning, match="already registered"):
            register_animator("search", SearchAnimator)
        assert isinstance(get_animator("search", 1), SearchAnimator)
