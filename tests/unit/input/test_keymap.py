from __future__ import annotations

import unittest

from lazylog.input.keymap import DEFAULT_KEYMAP, KeyBinding
from lazylog.views.states import is_filter_back_key
from lazylog.widgets.help import render_short_help
from lazylog.ui_theme import PLAIN_THEME


class KeyMapTests(unittest.TestCase):
    def test_default_bindings(self) -> None:
        self.assertTrue(DEFAULT_KEYMAP.back.matches("ESC"))
        self.assertTrue(DEFAULT_KEYMAP.back.matches("q"))
        self.assertTrue(DEFAULT_KEYMAP.open.matches("ENTER"))
        self.assertTrue(DEFAULT_KEYMAP.filter.matches("f"))
        self.assertTrue(DEFAULT_KEYMAP.filter.matches("/"))
        self.assertTrue(DEFAULT_KEYMAP.quit.matches("CTRL_C"))
        self.assertFalse(DEFAULT_KEYMAP.quit.matches("q"))

    def test_q_is_not_a_back_key_while_filtering(self) -> None:
        self.assertTrue(is_filter_back_key(DEFAULT_KEYMAP, "ESC"))
        self.assertFalse(is_filter_back_key(DEFAULT_KEYMAP, "q"))
        self.assertFalse(is_filter_back_key(DEFAULT_KEYMAP, "ENTER"))

    def test_short_help_joins_bindings(self) -> None:
        bindings = (KeyBinding(("f",), "f", "filter"), KeyBinding(("ESC",), "esc", "back"))
        self.assertEqual(render_short_help(bindings, PLAIN_THEME), "f filter • esc back")


if __name__ == "__main__":
    unittest.main()
