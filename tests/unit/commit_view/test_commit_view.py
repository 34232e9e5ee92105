"""Tests for the per-ref commit viewport cache and its rendering."""

from __future__ import annotations

import unittest
from datetime import datetime, timezone

from lazyrefs.actions import ACTION_FIRST_LINE, ACTION_LAST_LINE, ACTION_NEXT_LINE, ACTION_PREV_LINE
from lazyrefs.commit_view import CommitView, format_commit_row
from lazyrefs.errors import DataLoadError, ViewStateError
from lazyrefs.repo.types import Commit, Oid
from lazyrefs.runtime.channels import Channels
from lazyrefs.ui_theme import PLAIN_THEME
from lazyrefs.window import RenderWindow
from tests.fakes import DEV_OID, MAIN_OID, FakeRepoData, make_commits


def _render(view: CommitView, rows: int = 10, cols: int = 60) -> RenderWindow:
    win = RenderWindow("commit", rows, cols, PLAIN_THEME)
    view.render(win)
    return win


class CommitViewSelectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = FakeRepoData()
        self.channels = Channels()
        self.view = CommitView(self.repo, self.channels)
        self.view.initialise()

    def test_first_selection_starts_load_and_creates_view_index(self) -> None:
        self.view.on_ref_select("main", MAIN_OID)

        self.assertEqual(self.repo.commit_loads, [MAIN_OID])
        self.assertIn(MAIN_OID.id, self.view.view_index)
        self.assertEqual(self.view.active_oid, MAIN_OID)
        self.assertTrue(self.channels.consume_update())

    def test_reselecting_identity_keeps_cursor_and_does_not_reload(self) -> None:
        self.repo.commit_data[MAIN_OID.id] = make_commits(5)
        self.view.on_ref_select("main", MAIN_OID)
        self.view.handle_action(ACTION_NEXT_LINE)
        self.view.handle_action(ACTION_NEXT_LINE)
        _render(self.view, rows=4)
        self.assertEqual(self.view.view_index[MAIN_OID.id].view_start_index, 1)

        self.view.on_ref_select("dev", DEV_OID)
        self.view.on_ref_select("main", MAIN_OID)

        self.assertEqual(self.repo.commit_loads, [MAIN_OID, DEV_OID])
        self.assertEqual(self.view.view_index[MAIN_OID.id].active_index, 2)
        self.assertEqual(self.view.view_index[MAIN_OID.id].view_start_index, 1)
        self.assertEqual(self.view.active_oid, MAIN_OID)

    def test_identity_is_keyed_by_oid_string(self) -> None:
        self.view.on_ref_select("main", Oid(MAIN_OID.id))
        self.view.on_ref_select("alias", Oid(MAIN_OID.id))

        self.assertEqual(len(self.repo.commit_loads), 1)
        self.assertEqual(list(self.view.view_index), [MAIN_OID.id])

    def test_failed_load_leaves_cache_untouched(self) -> None:
        self.repo.commit_load_error = DataLoadError("cannot start load")

        with self.assertRaises(DataLoadError):
            self.view.on_ref_select("main", MAIN_OID)

        self.assertEqual(self.view.view_index, {})
        self.assertIsNone(self.view.active_oid)

    def test_actions_before_any_selection_are_ignored(self) -> None:
        self.view.handle_action(ACTION_NEXT_LINE)
        self.view.handle_key_press("x")

        self.assertEqual(self.view.view_index, {})
        self.assertFalse(self.channels.consume_update())


class CommitViewNavigationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = FakeRepoData()
        self.repo.commit_data[MAIN_OID.id] = make_commits(10)
        self.channels = Channels()
        self.view = CommitView(self.repo, self.channels)
        self.view.on_ref_select("main", MAIN_OID)
        self.channels.consume_update()

    def test_moves_clamp_to_commit_range(self) -> None:
        view_index = self.view.view_index[MAIN_OID.id]

        self.view.handle_action(ACTION_PREV_LINE)
        self.assertEqual(view_index.active_index, 0)
        self.assertFalse(self.channels.consume_update())

        self.view.handle_action(ACTION_LAST_LINE)
        self.assertEqual(view_index.active_index, 9)
        self.view.handle_action(ACTION_NEXT_LINE)
        self.assertEqual(view_index.active_index, 9)
        self.view.handle_action(ACTION_FIRST_LINE)
        self.assertEqual(view_index.active_index, 0)
        self.assertTrue(self.channels.consume_update())

    def test_moves_leave_window_start_until_render(self) -> None:
        view_index = self.view.view_index[MAIN_OID.id]

        self.view.handle_action(ACTION_LAST_LINE)
        self.assertEqual(view_index.view_start_index, 0)

        win = _render(self.view, rows=5)

        self.assertEqual(view_index.view_start_index, 7)
        self.assertTrue(win.row_text(1).endswith("commit 7"))
        self.assertTrue(win.row_text(3).endswith("commit 9"))
        self.assertEqual(win.selected_row(), 3)

    def test_window_scrolls_back_up_when_cursor_moves_above_it(self) -> None:
        view_index = self.view.view_index[MAIN_OID.id]
        view_index.view_start_index = 6
        view_index.active_index = 2

        _render(self.view, rows=5)

        self.assertEqual(view_index.view_start_index, 2)


class CommitViewRenderTests(unittest.TestCase):
    def test_render_without_selection_raises(self) -> None:
        view = CommitView(FakeRepoData(), Channels())

        with self.assertRaises(ViewStateError):
            _render(view)

    def test_footer_reflects_loading_and_position(self) -> None:
        repo = FakeRepoData()
        view = CommitView(repo, Channels())
        view.on_ref_select("main", MAIN_OID)

        win = _render(view)
        self.assertEqual(win.footer_text(), "Commits: Loading...")
        self.assertEqual(win.title_text(), "Commits")
        self.assertIsNone(win.selected_row())

        repo.finish_commits(MAIN_OID, make_commits(4))
        view.handle_action(ACTION_NEXT_LINE)
        self.assertEqual(_render(view).footer_text(), "Commit 2 of 4")

        repo.finish_commits(MAIN_OID, [])
        self.assertEqual(_render(view).footer_text(), "Commits: 0")

    def test_selected_row_style_follows_focus(self) -> None:
        repo = FakeRepoData()
        repo.commit_data[MAIN_OID.id] = make_commits(2)
        view = CommitView(repo, Channels())
        view.on_ref_select("main", MAIN_OID)

        view.on_active_change(True)
        focused = _render(view).lines()[1]
        view.on_active_change(False)
        unfocused = _render(view).lines()[1]

        self.assertIn(PLAIN_THEME.selected_active, focused)
        self.assertIn(PLAIN_THEME.selected_inactive, unfocused)

    def test_status_and_help_bars_are_empty(self) -> None:
        view = CommitView(FakeRepoData(), Channels())

        self.assertIsNone(view.render_status_bar(None))
        self.assertIsNone(view.render_help_bar(None))


class FormatCommitRowTests(unittest.TestCase):
    def test_row_shows_date_author_and_summary(self) -> None:
        commit = Commit(
            oid=Oid("c" * 40),
            author_name="Alice",
            author_when=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            summary="Fix bug",
        )

        self.assertEqual(format_commit_row(commit), " 2024-01-02 03:04:05 +0000 Alice Fix bug")


if __name__ == "__main__":
    unittest.main()
