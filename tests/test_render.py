"""Tests for frame composition, the status row, and the single-screen probe."""

from __future__ import annotations

import unittest
from unittest import mock

from lazyless.render import compose_frame, file_info, status_text
from lazyless.runtime.app import print_if_one_screen
from lazyless.runtime.state import LineEditMode, PatternEntryMode, PatternKind

from support import MemorySource, make_pager


def _texts(frame) -> list[str]:
    return [row.text for row in frame.rows]


class ComposeFrameTests(unittest.TestCase):
    def test_short_content_is_padded_with_filler(self) -> None:
        pager = make_pager(["a", "b"], rows=4, columns=20)

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(_texts(frame), ["a", "b", "~", "test.txt"])
        self.assertEqual(frame.rows[-1].styles, ("7",) * len("test.txt"))
        self.assertIsNone(frame.cursor)

    def test_line_numbers_prefix_content_rows_only(self) -> None:
        pager = make_pager(["a", "b"], rows=4, columns=20, print_line_numbers=True)

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(_texts(frame)[:3], ["      1 a", "      2 b", "~"])

    def test_long_line_wraps_in_fold_mode(self) -> None:
        pager = make_pager(["x" * 25, "y"], rows=5, columns=10)

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(_texts(frame)[:4], ["x" * 10, "x" * 10, "x" * 5, "y"])

    def test_long_line_is_cut_in_chop_mode(self) -> None:
        pager = make_pager(["x" * 25, "y"], rows=4, columns=10, chop_long_lines=True)

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(_texts(frame)[:3], ["x" * 10, "y", "~"])

    def test_wrap_offset_skips_segments_already_shown(self) -> None:
        pager = make_pager(["x" * 15 + "y" * 10, "z"], rows=4, columns=10)
        pager.state.view.offset_in_line = 10

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(_texts(frame)[:3], ["xxxxxyyyyy", "yyyyy", "z"])

    def test_wide_character_at_wrap_boundary_moves_to_next_row(self) -> None:
        pager = make_pager(["abcd一xyz"], rows=4, columns=5)

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(_texts(frame)[:3], ["abcd", "一xyz", "~"])

    def test_wrap_offset_inside_wide_character_keeps_it(self) -> None:
        pager = make_pager(["ab一cdefgh"], rows=4, columns=5)
        pager.state.view.offset_in_line = 3

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(_texts(frame)[:2], ["一cde", "fgh"])

    def test_horizontal_pan_shifts_columns(self) -> None:
        pager = make_pager(["0123456789abcdef"], rows=3, columns=10)
        pager.state.view.first_column_to_display = 5

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(_texts(frame)[0], "56789abcde")

    def test_search_matches_are_highlighted(self) -> None:
        pager = make_pager(["abc"], rows=3, columns=10)
        pager.state.patterns.set_search("b", pager.state.options.case_policy)

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(frame.rows[0].styles, ("", "7", ""))

    def test_filter_hides_non_matching_rows(self) -> None:
        pager = make_pager(["abc", "bar", "baz"], rows=4, columns=10)
        pager.state.patterns.set_filter("ba", pager.state.options.case_policy)

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(_texts(frame)[:3], ["bar", "baz", "~"])

    def test_cursor_follows_buffer_while_editing(self) -> None:
        pager = make_pager(["abc"], rows=3, columns=20)
        pager.state.mode = PatternEntryMode(PatternKind.SEARCH_FORWARD)
        pager.state.buffer = "/fo"
        pager.state.cursor = 3

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(frame.rows[-1].text, " /fo")
        self.assertEqual(frame.cursor, (2, 4))

        pager.state.mode = LineEditMode(9)
        self.assertEqual(compose_frame(pager.state, pager.navigator).cursor, (2, 4))

    def test_status_row_is_cut_to_screen_width(self) -> None:
        pager = make_pager(["abc"], rows=3, columns=5)
        pager.state.message = "a very long message"

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(frame.rows[-1].text, "a ver")


class StatusTextTests(unittest.TestCase):
    def test_precedence_of_status_sources(self) -> None:
        pager = make_pager(["abc"], rows=3)
        state = pager.state
        state.message = "note"
        state.buffer = "12"

        self.assertEqual(status_text(state, ":", False).text, " 12")

        state.clear_buffer()
        self.assertEqual(status_text(state, "\x1b[", False).text, " ESC[")
        self.assertEqual(status_text(state, ":", True).text, "note")

        state.message = None
        state.patterns.set_filter("a", state.options.case_policy)
        self.assertEqual(status_text(state).text, "&")

        state.patterns.set_filter(None, state.options.case_policy)
        self.assertEqual(status_text(state).text, ":")

    def test_file_info_reports_range_and_end(self) -> None:
        pager = make_pager(["a", "b", "c"], rows=10)
        pager.state.show_file_info = True

        frame = compose_frame(pager.state, pager.navigator)

        self.assertEqual(frame.rows[-1].text, "test.txt lines 1-3/3 (END)")

    def test_file_info_names_position_among_sources(self) -> None:
        pager = make_pager([MemorySource("a.txt", ["1", "2", "3", "4"]), MemorySource("b.txt", ["x"])], rows=3)

        self.assertEqual(file_info(pager.state, 2, False), "a.txt (file 1 of 2) lines 1-2/4")


class OneScreenProbeTests(unittest.TestCase):
    def test_content_shorter_than_screen_fits(self) -> None:
        pager = make_pager(["a", "b"], rows=4)

        frame = compose_frame(pager.state, pager.navigator, one_screen=True)

        self.assertTrue(frame.fits)
        self.assertEqual(_texts(frame), ["a", "b"])

    def test_content_exactly_filling_screen_fits(self) -> None:
        pager = make_pager(["a", "b", "c"], rows=4)

        self.assertTrue(compose_frame(pager.state, pager.navigator, one_screen=True).fits)

    def test_content_longer_than_screen_does_not_fit(self) -> None:
        pager = make_pager(["a", "b", "c", "d"], rows=4)

        self.assertFalse(compose_frame(pager.state, pager.navigator, one_screen=True).fits)

    def test_wrapped_line_overflowing_screen_does_not_fit(self) -> None:
        pager = make_pager(["x" * 25], rows=3, columns=10)

        self.assertFalse(compose_frame(pager.state, pager.navigator, one_screen=True).fits)

    def test_print_if_one_screen_writes_rows(self) -> None:
        pager = make_pager(["a", "b"], rows=4)
        terminal = mock.Mock()

        self.assertTrue(print_if_one_screen(pager.state, pager.navigator, terminal))
        terminal.write.assert_called_once_with("a\nb\n")

    def test_print_if_one_screen_leaves_long_content_alone(self) -> None:
        pager = make_pager(["a", "b", "c", "d"], rows=4)
        terminal = mock.Mock()

        self.assertFalse(print_if_one_screen(pager.state, pager.navigator, terminal))
        terminal.write.assert_not_called()


if __name__ == "__main__":
    unittest.main()
