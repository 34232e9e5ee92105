"""Tests for ref row generation and head-branch placement."""

from __future__ import annotations

import unittest

from lazyrefs.ref_view.rows import (
    GROUP_TAGS,
    RV_BRANCH,
    RV_BRANCH_GROUP,
    RV_LOADING,
    RV_SPACE,
    RV_TAG,
    RV_TAG_GROUP,
    RefGroup,
    RefSnapshot,
    default_ref_groups,
    generate_rendered_refs,
    head_branch_row_index,
    member_rows,
)
from lazyrefs.repo.types import Branch, Oid, Tag

MAIN = Branch("main", Oid("1" * 40))
DEV = Branch("dev", Oid("2" * 40))
V1 = Tag("v1.0", Oid("3" * 40))


def _values(rows) -> list[str]:
    return [row.value for row in rows]


class GenerateRenderedRefsTests(unittest.TestCase):
    def test_empty_repository_with_default_groups(self) -> None:
        snapshot = RefSnapshot(branches_loading=False, tags_loading=False)

        rows = generate_rendered_refs(default_ref_groups(), snapshot)

        self.assertEqual(_values(rows), ["  [-] Branches", "", "  [+] Tags"])
        self.assertEqual([row.kind for row in rows], [RV_BRANCH_GROUP, RV_SPACE, RV_TAG_GROUP])

    def test_loading_branches_show_placeholder_row(self) -> None:
        rows = generate_rendered_refs(default_ref_groups(), RefSnapshot())

        self.assertEqual(_values(rows), ["  [-] Branches", "   Loading...", "", "  [+] Tags"])
        self.assertEqual(rows[1].kind, RV_LOADING)
        self.assertFalse(rows[1].selectable)
        self.assertFalse(rows[2].selectable)

    def test_branches_and_expanded_tags_get_ordinals(self) -> None:
        groups = default_ref_groups()
        groups[1].expanded = True
        snapshot = RefSnapshot(
            head=MAIN.oid,
            head_branch=MAIN,
            branches=(MAIN, DEV),
            branches_loading=False,
            tags=(V1,),
            tags_loading=False,
        )

        rows = generate_rendered_refs(groups, snapshot)

        self.assertEqual(
            _values(rows),
            ["  [-] Branches", "   main", "   dev", "", "  [-] Tags", "   v1.0"],
        )
        self.assertEqual([row.ref_num for row in rows if row.kind == RV_BRANCH], [1, 2])
        self.assertEqual(rows[5].kind, RV_TAG)
        self.assertEqual(rows[5].ref_num, 1)
        self.assertEqual(rows[5].oid, V1.oid)
        self.assertEqual(rows[2].ref_name(), "dev")

    def test_detached_head_gets_synthetic_first_branch_row(self) -> None:
        head = Oid("abcdef1234567890abcdef1234567890abcdef12")
        snapshot = RefSnapshot(head=head, branches=(MAIN,), branches_loading=False, tags_loading=False)

        rows = generate_rendered_refs(default_ref_groups(), snapshot)

        self.assertEqual(rows[1].value, "   HEAD detached at abcdef1")
        self.assertEqual(rows[1].ref_num, 1)
        self.assertEqual(rows[1].oid, head)
        self.assertEqual(rows[2].ref_num, 2)
        self.assertEqual(snapshot.branch_row_count(), 2)

    def test_detached_head_alone_counts_as_one_branch_row(self) -> None:
        snapshot = RefSnapshot(head=Oid("abcdef1234567890"), branches_loading=False)

        self.assertTrue(snapshot.head_detached)
        self.assertEqual(snapshot.branch_row_count(), 1)

    def test_toggling_group_twice_restores_rows(self) -> None:
        groups = default_ref_groups()
        snapshot = RefSnapshot(
            head=MAIN.oid,
            head_branch=MAIN,
            branches=(MAIN, DEV),
            branches_loading=False,
            tags=(V1,),
            tags_loading=False,
        )
        before = generate_rendered_refs(groups, snapshot)

        for group in groups:
            group.expanded = not group.expanded
            toggled = generate_rendered_refs(groups, snapshot)
            self.assertNotEqual(_values(toggled), _values(before))
            group.expanded = not group.expanded
            self.assertEqual(generate_rendered_refs(groups, snapshot), before)

    def test_unknown_group_kind_has_no_members(self) -> None:
        group = RefGroup(name="Remotes", kind="remotes", expanded=True)

        self.assertEqual(member_rows(group, RefSnapshot(branches_loading=False, tags_loading=False)), [])

    def test_tag_group_members_use_tag_rule(self) -> None:
        group = RefGroup(name="Tags", kind=GROUP_TAGS, expanded=True)

        rows = member_rows(group, RefSnapshot(tags=(V1,), tags_loading=False))

        self.assertEqual(_values(rows), ["   v1.0"])


class HeadBranchRowIndexTests(unittest.TestCase):
    def test_points_at_checked_out_branch(self) -> None:
        snapshot = RefSnapshot(head=DEV.oid, head_branch=DEV, branches=(MAIN, DEV), branches_loading=False)
        rows = generate_rendered_refs(default_ref_groups(), snapshot)

        self.assertEqual(head_branch_row_index(rows, snapshot), 2)

    def test_points_at_detached_row(self) -> None:
        snapshot = RefSnapshot(head=Oid("f" * 40), branches=(MAIN,), branches_loading=False)
        rows = generate_rendered_refs(default_ref_groups(), snapshot)

        self.assertEqual(head_branch_row_index(rows, snapshot), 1)

    def test_none_when_branches_collapsed_or_loading(self) -> None:
        snapshot = RefSnapshot(head=MAIN.oid, head_branch=MAIN, branches=(MAIN,), branches_loading=False)
        groups = default_ref_groups()
        groups[0].expanded = False
        collapsed_rows = generate_rendered_refs(groups, snapshot)
        loading = RefSnapshot(head=MAIN.oid, head_branch=MAIN)

        self.assertIsNone(head_branch_row_index(collapsed_rows, snapshot))
        self.assertIsNone(head_branch_row_index(generate_rendered_refs(default_ref_groups(), loading), loading))

    def test_none_when_head_branch_is_not_listed(self) -> None:
        snapshot = RefSnapshot(head=DEV.oid, head_branch=DEV, branches=(MAIN,), branches_loading=False)
        rows = generate_rendered_refs(default_ref_groups(), snapshot)

        self.assertIsNone(head_branch_row_index(rows, snapshot))


if __name__ == "__main__":
    unittest.main()
