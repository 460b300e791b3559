"""Tests for styled-text parsing, measuring, slicing and highlighting."""

from __future__ import annotations

import re
import unittest

from lazyless.ansi import StyledText, char_display_width, next_tab_stop


class StyledTextParsingTests(unittest.TestCase):
    def test_sgr_sequences_become_per_character_styles(self) -> None:
        text = StyledText.from_ansi("a\x1b[31mbc\x1b[0md")

        self.assertEqual(text.text, "abcd")
        self.assertEqual(text.styles, ("", "31", "31", ""))

    def test_sgr_parameters_accumulate_until_reset(self) -> None:
        text = StyledText.from_ansi("\x1b[1m\x1b[32mx\x1b[0;4my")

        self.assertEqual(text.styles, ("1;32", "4"))

    def test_non_sgr_csi_sequences_are_dropped(self) -> None:
        self.assertEqual(StyledText.from_ansi("a\x1b[2Kb").text, "ab")

    def test_tabs_expand_to_default_stops(self) -> None:
        self.assertEqual(StyledText.from_ansi("ab\tc").text, "ab  c")

    def test_tabs_expand_to_explicit_stops_and_repeat_last_interval(self) -> None:
        text = StyledText.from_ansi("\tx\ty\tz", tabs=(2, 5))

        self.assertEqual(text.text, "  x  y  z")

    def test_control_characters_use_caret_notation(self) -> None:
        self.assertEqual(StyledText.from_ansi("a\x01b\x7f").text, "a^Ab^?")

    def test_next_tab_stop_uniform_step(self) -> None:
        self.assertEqual(next_tab_stop(0, (8,)), 8)
        self.assertEqual(next_tab_stop(8, (8,)), 16)


class StyledTextMeasureTests(unittest.TestCase):
    def test_wide_characters_take_two_columns(self) -> None:
        self.assertEqual(char_display_width("界"), 2)
        self.assertEqual(StyledText.plain("a界b").column_length(), 4)

    def test_column_slice_leaves_wide_character_at_end_for_next_slice(self) -> None:
        text = StyledText.plain("a界b")

        self.assertEqual(text.column_slice(0, 2).text, "a")
        self.assertEqual(text.column_slice(2).text, "界b")
        self.assertEqual(text.column_slice(1, 4).text, "界b")

    def test_column_slice_keeps_width_when_wide_character_straddles_start(self) -> None:
        text = StyledText.plain("a界bc")

        self.assertEqual(text.column_slice(2, 4).text, "界")
        self.assertEqual(text.column_slice(2, 5).text, "界b")

    def test_open_ended_slice_returns_tail(self) -> None:
        self.assertEqual(StyledText.plain("abcdef").column_slice(4).text, "ef")

    def test_concatenation_keeps_styles(self) -> None:
        joined = StyledText.plain("1 ") + StyledText.styled("x", "7")

        self.assertEqual(joined.text, "1 x")
        self.assertEqual(joined.styles, ("", "", "7"))


class StyledTextHighlightTests(unittest.TestCase):
    def test_highlight_marks_every_match_inverse(self) -> None:
        text = StyledText.from_ansi("foo bar foo").highlight(re.compile("(foo)"))

        self.assertEqual(text.styles[:4], ("7", "7", "7", ""))
        self.assertEqual(text.styles[-3:], ("7", "7", "7"))

    def test_highlight_extends_existing_style(self) -> None:
        text = StyledText.from_ansi("\x1b[31mab").highlight(re.compile("(b)"))

        self.assertEqual(text.styles, ("31", "31;7"))

    def test_highlight_without_match_returns_same_value(self) -> None:
        text = StyledText.plain("abc")

        self.assertIs(text.highlight(re.compile("(z)")), text)

    def test_to_ansi_round_trips_styles(self) -> None:
        raw = "a\x1b[31mbc\x1b[0md"

        self.assertEqual(StyledText.from_ansi(raw).to_ansi(), "a\x1b[31mbc\x1b[0md")


if __name__ == "__main__":
    unittest.main()
