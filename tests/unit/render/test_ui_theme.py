from __future__ import annotations

import unittest

from lazyrefs.ui_theme import (
    CMP_BORDER,
    CMP_NONE,
    CMP_REFVIEW_TAG,
    DEFAULT_THEME,
    OCEAN_THEME,
    PLAIN_THEME,
    available_theme_names,
    normalize_theme_name,
    resolve_theme,
)


class ThemeResolutionTests(unittest.TestCase):
    def test_available_names_exclude_plain(self) -> None:
        self.assertEqual(available_theme_names(), ("default", "ocean"))

    def test_normalize_falls_back_to_default(self) -> None:
        self.assertEqual(normalize_theme_name(" Ocean "), "ocean")
        self.assertEqual(normalize_theme_name("nope"), "default")
        self.assertEqual(normalize_theme_name(None), "default")

    def test_no_color_wins_over_name(self) -> None:
        self.assertIs(resolve_theme("ocean"), OCEAN_THEME)
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)

    def test_style_for_unknown_component_is_empty(self) -> None:
        self.assertEqual(DEFAULT_THEME.style_for(CMP_REFVIEW_TAG), DEFAULT_THEME.refview_tag)
        self.assertEqual(DEFAULT_THEME.style_for(CMP_BORDER), DEFAULT_THEME.border)
        self.assertEqual(DEFAULT_THEME.style_for(CMP_NONE), "")
        self.assertEqual(DEFAULT_THEME.style_for("name"), "")

    def test_plain_theme_keeps_selection_visible(self) -> None:
        self.assertEqual(PLAIN_THEME.style_for(CMP_REFVIEW_TAG), "")
        self.assertTrue(PLAIN_THEME.selected_active)
        self.assertTrue(PLAIN_THEME.selected_inactive)


if __name__ == "__main__":
    unittest.main()
