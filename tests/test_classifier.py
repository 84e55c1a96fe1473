import unittest

from autosustain.analysis.classifier import (
    classify,
    filter_category,
    match_category,
    strip_markup,
    total_count,
)
from autosustain.models import (
    CategoryRule,
    ConsumableCategory,
    MatchMode,
    default_health_rules,
    default_prayer_rules,
)
from tests.fakes import slot


class ClassifierTests(unittest.TestCase):
    def test_strip_markup_removes_colour_tags(self) -> None:
        self.assertEqual(strip_markup("<col=f8d56b>Shark"), "Shark")
        self.assertEqual(strip_markup("<col=ff0000>Saradomin brew (4)</col>"), "Saradomin brew (4)")

    def test_empty_and_stacked_slots_are_skipped(self) -> None:
        slots = [
            slot("Shark", item_id=-1),
            slot("Shark", item_id=385, size=5),
            slot("Shark", item_id=385, size=0),
            slot("Shark", item_id=385),
        ]
        items = classify(slots, default_health_rules())
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].count, 1)

    def test_identical_items_collapse_with_summed_count(self) -> None:
        slots = [slot("Shark", 385), slot("Rocktail", 15272), slot("<col=f8d56b>Shark", 385)]
        items = classify(slots, default_health_rules())
        self.assertEqual([(i.name, i.count) for i in items], [("Shark", 2), ("Rocktail", 1)])
        self.assertEqual(items[0].id, 385)

    def test_potions_match_by_substring_food_by_exact_name(self) -> None:
        slots = [
            slot("Saradomin brew (3)", 6687),
            slot("Shark fillet", 1),
            slot("Blue blubber jellyfish", 42265),
        ]
        items = classify(slots, default_health_rules())
        categories = {i.name: i.category for i in items}
        self.assertEqual(categories["Saradomin brew (3)"], ConsumableCategory.POTION)
        self.assertEqual(categories["Blue blubber jellyfish"], ConsumableCategory.JELLYFISH)
        self.assertNotIn("Shark fillet", categories)

    def test_first_matching_rule_wins(self) -> None:
        rules = [
            CategoryRule(ConsumableCategory.POTION, ("Shark",), MatchMode.SUBSTRING),
            CategoryRule(ConsumableCategory.FOOD, ("Shark",), MatchMode.EXACT),
        ]
        self.assertEqual(match_category("Shark", rules), ConsumableCategory.POTION)
        items = classify([slot("Shark")], rules)
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].category, ConsumableCategory.POTION)

    def test_no_match_returns_none(self) -> None:
        self.assertIsNone(match_category("Bronze dagger", default_health_rules()))

    def test_prayer_table(self) -> None:
        slots = [slot("Super restore (4)", 3024), slot("Prayer potion (2)", 143), slot("Shark", 385)]
        items = classify(slots, default_prayer_rules())
        self.assertEqual([i.name for i in items], ["Super restore (4)", "Prayer potion (2)"])
        self.assertEqual(total_count(items), 2)

    def test_reclassifying_unchanged_inventory_is_identical(self) -> None:
        slots = [
            slot("Shark", 385),
            slot("Saradomin brew (4)", 6685),
            slot("Green blubber jellyfish", 42267),
            slot("Shark", 385),
        ]
        first = classify(slots, default_health_rules())
        second = classify(slots, default_health_rules())
        self.assertEqual(first, second)

    def test_filter_category_keeps_order(self) -> None:
        slots = [slot("Shark", 1), slot("Saradomin brew (4)", 2), slot("Rocktail", 3)]
        items = classify(slots, default_health_rules())
        foods = filter_category(items, ConsumableCategory.FOOD)
        self.assertEqual([i.name for i in foods], ["Shark", "Rocktail"])


if __name__ == "__main__":
    unittest.main()
