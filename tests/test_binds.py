import unittest

from autosustain.automation.binds import (
    format_bind_for_display,
    is_modifier_token,
    normalize_bind,
    parse_bind,
)


class BindTests(unittest.TestCase):
    def test_normalize_orders_modifiers_and_resolves_aliases(self) -> None:
        self.assertEqual(normalize_bind("Shift + Control + P"), "ctrl+shift+p")
        self.assertEqual(normalize_bind("left_alt+esc"), "alt+escape")
        self.assertEqual(normalize_bind("F12"), "f12")

    def test_invalid_binds_normalize_to_empty(self) -> None:
        self.assertEqual(normalize_bind(""), "")
        self.assertEqual(normalize_bind("ctrl+shift"), "")
        self.assertEqual(normalize_bind("a+b"), "")

    def test_parse_bind(self) -> None:
        self.assertEqual(parse_bind("ctrl+p"), (frozenset({"ctrl"}), "p"))
        self.assertIsNone(parse_bind(""))

    def test_modifier_tokens(self) -> None:
        self.assertTrue(is_modifier_token("Right Shift"))
        self.assertFalse(is_modifier_token("p"))

    def test_display(self) -> None:
        self.assertEqual(format_bind_for_display("ctrl+f12"), "Ctrl+F12")
        self.assertEqual(format_bind_for_display("page up"), "Page up")
        self.assertEqual(format_bind_for_display(""), "Not set")


if __name__ == "__main__":
    unittest.main()
