from __future__ import annotations

import unittest

from neopick.ansi import clip_cells, clip_text, display_width


class DisplayWidthTests(unittest.TestCase):
    def test_ascii_and_wide_characters(self) -> None:
        self.assertEqual(display_width("ab"), 2)
        self.assertEqual(display_width("日本"), 4)

    def test_tab_advances_to_next_stop(self) -> None:
        self.assertEqual(display_width("ab\t"), 8)


class ClipTests(unittest.TestCase):
    def test_wide_character_that_would_straddle_limit_is_dropped(self) -> None:
        self.assertEqual(clip_text("日本語", 5), "日本")

    def test_clip_cells_reports_source_offsets(self) -> None:
        self.assertEqual(clip_cells("x\ty", 10), [(0, "x"), (1, " " * 7), (2, "y")])

    def test_control_characters_are_replaced(self) -> None:
        self.assertEqual(clip_text("a\x01b", 10), "a?b")

    def test_zero_width_budget(self) -> None:
        self.assertEqual(clip_cells("abc", 0), [])


if __name__ == "__main__":
    unittest.main()
