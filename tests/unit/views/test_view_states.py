"""View controller transitions: loaded, filtering, filtered, and error views.

Drives the view model through ``run_until_idle`` so effects emitted by a
transition (refresh, cancel, quit) are executed the way the host loop would.
"""

from __future__ import annotations

import unittest
from dataclasses import dataclass

from lazylog.messages import (
    ErrorOccurredMsg,
    KeyMsg,
    QuitMsg,
    RecordsLoadedMsg,
    ResizeMsg,
    TickMsg,
    emit,
)
from lazylog.runtime.effects import run_until_idle
from lazylog.table.model import LogTable
from lazylog.table.records import DEFAULT_FIELDS, FieldSpec, parse_log_lines
from lazylog.ui_theme import PLAIN_THEME
from lazylog.views.application import Application
from lazylog.views.model import ViewModel
from lazylog.views.states import ErrorView, FilteredView, FilteringView, LoadedView
from lazylog.widgets.pill_input import Phase, new_filter_input

FIELDS = (
    FieldSpec("level", ("level",)),
    FieldSpec("message", ("message", "msg")),
    FieldSpec("timestamp", ("timestamp",)),
)

LINES = [
    '{"level": "info", "message": "service started", "timestamp": "2024-01-01T00:00:00"}',
    '{"level": "error", "message": "disk full", "timestamp": "2024-01-01T00:00:01"}',
    '{"level": "warn", "message": "retrying error path", "timestamp": "2024-01-01T00:00:02"}',
    '{"level": "error", "message": "connection reset", "timestamp": "2024-01-01T00:00:03"}',
]


def _keys(*keys: str) -> list[KeyMsg]:
    return [KeyMsg(key) for key in keys]


def _text(text: str) -> list[KeyMsg]:
    return [KeyMsg(ch) for ch in text]


def _loaded_model(lines: list[str] | None = None) -> ViewModel:
    app = Application(fields=FIELDS, theme=PLAIN_THEME, columns=100, lines=20)
    model = ViewModel.start(app)
    records = parse_log_lines(LINES if lines is None else lines)
    model, _ = run_until_idle(model, [RecordsLoadedMsg(records)])
    return model


@dataclass(frozen=True)
class _TickingTable:
    """Table stand-in that schedules work on every tick."""

    ticks: int = 0

    def update(self, msg):
        if isinstance(msg, TickMsg):
            return _TickingTable(self.ticks + 1), [emit(ResizeMsg(1, 1))]
        return self, []


class LoadedViewTests(unittest.TestCase):
    def test_records_loaded_fill_the_table(self) -> None:
        model = _loaded_model()

        self.assertIsInstance(model.current, LoadedView)
        self.assertEqual(len(model.current.table.records), 4)

    def test_filter_key_opens_filter_input_over_loaded_table(self) -> None:
        model = _loaded_model()
        loaded_table = model.current.table

        model, quit_requested = run_until_idle(model, _keys("f"))

        self.assertFalse(quit_requested)
        self.assertIsInstance(model.current, FilteringView)
        self.assertIs(model.current.table, loaded_table)
        self.assertEqual(model.current.input.phase, Phase.FIELD_SELECT)
        self.assertEqual(model.current.input.active_suggestions, ("level", "message", "timestamp"))

    def test_back_quits_from_loaded(self) -> None:
        for key in ("ESC", "q"):
            _, quit_requested = run_until_idle(_loaded_model(), _keys(key))
            self.assertTrue(quit_requested, key)

    def test_navigation_keys_move_the_table_cursor(self) -> None:
        model, _ = run_until_idle(_loaded_model(), _keys("j", "j", "DOWN"))
        self.assertEqual(model.current.table.cursor, 3)

        model, _ = run_until_idle(model, _keys("k"))
        self.assertEqual(model.current.table.cursor, 2)

    def test_reload_without_source_does_nothing(self) -> None:
        model = _loaded_model()
        after, quit_requested = run_until_idle(model, _keys("r"))

        self.assertFalse(quit_requested)
        self.assertEqual(after.stack, model.stack)


class FilteringViewTests(unittest.TestCase):
    def test_back_restores_loaded_table_unchanged(self) -> None:
        model = _loaded_model()
        loaded = model.current

        model, quit_requested = run_until_idle(model, _keys("f", *"lev", "TAB", *"err", "ESC"))

        self.assertFalse(quit_requested)
        self.assertEqual(len(model.stack), 1)
        self.assertIsInstance(model.current, LoadedView)
        self.assertIs(model.current.table.records, loaded.table.records)
        self.assertEqual(model.current.table.cursor, loaded.table.cursor)

    def test_commit_produces_filtered_view_with_exact_pair(self) -> None:
        model = _loaded_model()

        model, _ = run_until_idle(model, [*_keys("f"), *_text("lev"), *_keys("TAB"), *_text("err"), *_keys("ENTER")])

        filtered = model.current
        self.assertIsInstance(filtered, FilteredView)
        self.assertEqual((filtered.field, filtered.term), ("level", "err"))
        self.assertEqual([record.line_number for record in filtered.table.records], [2, 4])
        self.assertIsInstance(model.stack[-2], LoadedView)

    def test_free_text_commit_matches_whole_line(self) -> None:
        model, _ = run_until_idle(_loaded_model(), [*_keys("f"), *_text("error"), *_keys("ENTER")])

        filtered = model.current
        self.assertIsInstance(filtered, FilteredView)
        self.assertIsNone(filtered.field)
        self.assertEqual([record.line_number for record in filtered.table.records], [2, 3, 4])

    def test_empty_commit_returns_to_loaded(self) -> None:
        model = _loaded_model()
        loaded_records = model.current.table.records

        model, quit_requested = run_until_idle(model, _keys("f", "TAB", "ENTER"))

        self.assertFalse(quit_requested)
        self.assertIsInstance(model.current, LoadedView)
        self.assertIs(model.current.table.records, loaded_records)

    def test_empty_commit_leaves_filter_in_the_same_step(self) -> None:
        model, _ = run_until_idle(_loaded_model(), _keys("f"))

        stack, effects = model.current.update(model.app, model.stack[:-1], KeyMsg("ENTER"))

        self.assertEqual(stack, model.stack[:-1])
        self.assertEqual([effect() for effect in effects], [ResizeMsg(100, 20)])

    def test_key_queued_after_empty_commit_reaches_loaded_view(self) -> None:
        model, quit_requested = run_until_idle(_loaded_model(), _keys("f", "ENTER", "f"))

        self.assertFalse(quit_requested)
        self.assertIsInstance(model.current, FilteringView)
        self.assertEqual(model.current.input.buffer, "")
        self.assertEqual(len(model.stack), 2)

    def test_q_is_typed_as_text_while_filtering(self) -> None:
        model, quit_requested = run_until_idle(_loaded_model(), _keys("f", "q"))

        self.assertFalse(quit_requested)
        self.assertIsInstance(model.current, FilteringView)
        self.assertEqual(model.current.input.buffer, "q")

    def test_navigation_keys_are_not_forwarded_to_table(self) -> None:
        model, _ = run_until_idle(_loaded_model(), _keys("f", "j", "DOWN"))

        self.assertEqual(model.current.table.cursor, 0)
        self.assertEqual(model.current.input.buffer, "j")

    def test_non_key_messages_reach_table_and_keep_effects(self) -> None:
        app = Application(fields=FIELDS, theme=PLAIN_THEME)
        loaded = LoadedView(LogTable(fields=FIELDS))
        view = FilteringView(table=_TickingTable(), input=new_filter_input(app.field_names))

        stack, effects = view.update(app, (loaded,), TickMsg(1.0))

        self.assertEqual(len(stack), 2)
        self.assertIs(stack[0], loaded)
        self.assertEqual(stack[-1].table, _TickingTable(1))
        self.assertEqual(stack[-1].input, view.input)
        self.assertEqual(len(effects), 1)
        self.assertEqual(effects[0](), ResizeMsg(1, 1))

    def test_resize_while_filtering_updates_overlay_table(self) -> None:
        model, _ = run_until_idle(_loaded_model(), [*_keys("f"), ResizeMsg(60, 10)])

        self.assertEqual(model.current.table.width, 60)
        self.assertEqual(model.current.table.height, 7)
        self.assertEqual(model.app.columns, 60)

    def test_back_emits_refresh_with_current_size(self) -> None:
        model, _ = run_until_idle(_loaded_model(), [*_keys("f"), ResizeMsg(60, 10), *_keys("ESC")])

        self.assertIsInstance(model.current, LoadedView)
        self.assertEqual(model.current.table.width, 60)
        self.assertEqual(model.current.table.height, 7)

    def test_render_shows_pill_and_help(self) -> None:
        model, _ = run_until_idle(_loaded_model(), _keys("f", "TAB", "e"))

        frame = model.render()
        self.assertIn("level:", frame)
        self.assertIn("tab complete", frame)


class FilteredViewTests(unittest.TestCase):
    def _filtered_model(self) -> ViewModel:
        model, _ = run_until_idle(
            _loaded_model(),
            [*_keys("f"), *_text("lev"), *_keys("TAB"), *_text("err"), *_keys("ENTER")],
        )
        return model

    def test_back_returns_to_all_records(self) -> None:
        model, quit_requested = run_until_idle(self._filtered_model(), _keys("ESC"))

        self.assertFalse(quit_requested)
        self.assertIsInstance(model.current, LoadedView)
        self.assertEqual(len(model.current.table.records), 4)

    def test_filter_key_reopens_input_over_loaded_records(self) -> None:
        model, _ = run_until_idle(self._filtered_model(), _keys("/"))

        self.assertIsInstance(model.current, FilteringView)
        self.assertEqual(len(model.current.table.records), 4)
        self.assertEqual(len(model.stack), 2)
        self.assertIsInstance(model.stack[0], LoadedView)

    def test_reloaded_records_are_refiltered(self) -> None:
        model = self._filtered_model()
        records = parse_log_lines([*LINES, '{"level": "error", "message": "late failure"}'])

        model, _ = run_until_idle(model, [RecordsLoadedMsg(records)])

        self.assertIsInstance(model.current, FilteredView)
        self.assertEqual([record.line_number for record in model.current.table.records], [2, 4, 5])
        self.assertEqual(len(model.stack[0].table.records), 5)

    def test_status_line_describes_filter(self) -> None:
        frame = self._filtered_model().render()
        self.assertIn("filter level:err • 2 records", frame)


class ErrorHandlingTests(unittest.TestCase):
    def _assert_error_from(self, model: ViewModel) -> None:
        error = OSError("cannot read")

        model, quit_requested = run_until_idle(model, [ErrorOccurredMsg(error)])

        self.assertFalse(quit_requested)
        self.assertIsInstance(model.current, ErrorView)
        self.assertIs(model.current.error, error)
        self.assertIn("cannot read", model.render())

    def test_error_short_circuits_from_every_view(self) -> None:
        loaded = _loaded_model()
        filtering, _ = run_until_idle(loaded, _keys("f", "a"))
        filtered, _ = run_until_idle(loaded, [*_keys("f"), *_text("disk"), *_keys("ENTER")])

        for model in (loaded, filtering, filtered):
            with self.subTest(view=type(model.current).__name__):
                self._assert_error_from(model)

    def test_error_view_ignores_other_keys_and_quits_on_back(self) -> None:
        model, _ = run_until_idle(_loaded_model(), [ErrorOccurredMsg(ValueError("bad"))])

        model, quit_requested = run_until_idle(model, _keys("f", "j"))
        self.assertFalse(quit_requested)
        self.assertIsInstance(model.current, ErrorView)

        _, quit_requested = run_until_idle(model, _keys("ESC"))
        self.assertTrue(quit_requested)

    def test_second_error_replaces_the_first(self) -> None:
        model, _ = run_until_idle(
            _loaded_model(),
            [ErrorOccurredMsg(ValueError("first")), ErrorOccurredMsg(ValueError("second"))],
        )

        self.assertEqual(len(model.stack), 2)
        self.assertEqual(str(model.current.error), "second")


class GlobalKeyTests(unittest.TestCase):
    def test_ctrl_c_quits_from_every_view(self) -> None:
        loaded = _loaded_model()
        filtering, _ = run_until_idle(loaded, _keys("f"))

        for model in (loaded, filtering):
            _, quit_requested = run_until_idle(model, _keys("CTRL_C"))
            self.assertTrue(quit_requested)

    def test_processing_stops_at_quit(self) -> None:
        model, quit_requested = run_until_idle(_loaded_model(), [QuitMsg(), *_keys("f")])

        self.assertTrue(quit_requested)
        self.assertIsInstance(model.current, LoadedView)

    def test_ticks_advance_application_in_any_view(self) -> None:
        model, _ = run_until_idle(_loaded_model(), [*_keys("f"), TickMsg(1.0), TickMsg(2.0), TickMsg(3.0)])

        self.assertEqual(model.app.ticks, 3)
        self.assertFalse(model.app.cursor_visible)

    def test_view_model_requires_loaded_base(self) -> None:
        app = Application(fields=DEFAULT_FIELDS)
        with self.assertRaises(ValueError):
            ViewModel(app=app, stack=())
        with self.assertRaises(ValueError):
            ViewModel(app=app, stack=(ErrorView(ValueError("x")),))


if __name__ == "__main__":
    unittest.main()
