import sqlite3
import unittest
from random import Random
from unittest import mock

from itembot.db import add_item
from itembot.services.items import CraftResult, craft, find, parse_recipe, recipe_name, sell
from tests.helpers import give, held, memory_db, seed_workshop


class FindTests(unittest.TestCase):
    def setUp(self) -> None:
        self.conn = memory_db()
        self.ids = seed_workshop(self.conn)

    def tearDown(self) -> None:
        self.conn.close()

    def test_records_found_item(self) -> None:
        found = find(self.conn, "alice", rng=Random(7))
        self.assertIsNotNone(found)
        self.assertEqual(found["user"], "alice")
        self.assertIn(found["description"], {"Wood", "Nail"})
        self.assertEqual(held(self.conn, "alice", found["item_id"]), 1)

    def test_never_finds_zero_weight_items(self) -> None:
        add_item(self.conn, "Cursed", 1.0, weight=-3)
        self.conn.commit()
        rng = Random(42)
        names = {find(self.conn, "bob", rng=rng)["description"] for _ in range(200)}
        self.assertNotIn("Gold", names)
        self.assertNotIn("Chair", names)
        self.assertNotIn("Cursed", names)

    def test_selection_follows_weights(self) -> None:
        conn = memory_db()
        add_item(conn, "Common", 1.0, weight=9)
        add_item(conn, "Rare", 50.0, weight=1)
        conn.commit()
        rng = Random(1234)
        draws = [find(conn, "carol", rng=rng)["description"] for _ in range(2000)]
        ratio = draws.count("Common") / len(draws)
        self.assertGreater(ratio, 0.85)
        self.assertLess(ratio, 0.95)
        conn.close()

    def test_returns_none_without_spawnable_items(self) -> None:
        conn = memory_db()
        add_item(conn, "Relic", 10.0, weight=0)
        conn.commit()
        self.assertIsNone(find(conn, "dave"))
        row = conn.execute("SELECT COUNT(*) AS n FROM inventory").fetchone()
        self.assertEqual(row["n"], 0)
        conn.close()


class SellTests(unittest.TestCase):
    def setUp(self) -> None:
        self.conn = memory_db()
        self.ids = seed_workshop(self.conn)

    def tearDown(self) -> None:
        self.conn.close()

    def test_selling_missing_item_fails(self) -> None:
        self.assertIsNone(sell(self.conn, "alice", "Wood"))
        give(self.conn, "bob", self.ids["Wood"])
        self.assertIsNone(sell(self.conn, "alice", "Wood"))
        self.assertIsNone(sell(self.conn, "bob", "Unobtainium"))

    def test_sells_exactly_one_oldest_entry(self) -> None:
        oldest = give(self.conn, "alice", self.ids["Nail"], "2024-01-01 10:00:00")
        give(self.conn, "alice", self.ids["Nail"], "2024-01-02 10:00:00")

        sold = sell(self.conn, "alice", "Nail")

        self.assertEqual(sold, {
            "user": "alice",
            "item_id": self.ids["Nail"],
            "description": "Nail",
            "value": 0.25,
        })
        self.assertEqual(held(self.conn, "alice", self.ids["Nail"]), 1)
        row = self.conn.execute("SELECT 1 FROM inventory WHERE id = ?", (oldest,)).fetchone()
        self.assertIsNone(row)

    def test_sell_ignores_case(self) -> None:
        give(self.conn, "alice", self.ids["Wood"])
        sold = sell(self.conn, "alice", "wOOD")
        self.assertIsNotNone(sold)
        self.assertEqual(sold["description"], "Wood")
        self.assertEqual(held(self.conn, "alice", self.ids["Wood"]), 0)

    def test_sold_item_goes_to_store(self) -> None:
        give(self.conn, "alice", self.ids["Wood"])
        sell(self.conn, "alice", "Wood")
        row = self.conn.execute(
            "SELECT quantity FROM items WHERE id = ?", (self.ids["Wood"],)
        ).fetchone()
        self.assertEqual(row["quantity"], 1)


class CraftTests(unittest.TestCase):
    def setUp(self) -> None:
        self.conn = memory_db()
        self.ids = seed_workshop(self.conn)

    def tearDown(self) -> None:
        self.conn.close()

    def _stock(self, user: str, wood: int, nails: int) -> None:
        for n in range(wood):
            give(self.conn, user, self.ids["Wood"], f"2024-01-0{n + 1} 00:00:00")
        for _ in range(nails):
            give(self.conn, user, self.ids["Nail"])

    def test_unknown_item_has_no_recipe(self) -> None:
        self.assertEqual(craft(self.conn, "alice", "Spaceship"), CraftResult.RECIPE_NOT_FOUND)

    def test_item_without_recipe(self) -> None:
        self._stock("alice", 5, 5)
        self.assertEqual(craft(self.conn, "alice", "Wood"), CraftResult.RECIPE_NOT_FOUND)

    def test_malformed_recipes_are_not_found(self) -> None:
        self._stock("alice", 5, 5)
        wood = self.ids["Wood"]
        for index, recipe in enumerate(
            ["not json", "[]", "{}", f'{{"{wood}": 0}}', f'{{"{wood}": -1}}', '{"999": 1}']
        ):
            add_item(self.conn, f"Broken{index}", 1.0, recipe=recipe)
        self.conn.commit()
        for index in range(6):
            self.assertEqual(
                craft(self.conn, "alice", f"Broken{index}"),
                CraftResult.RECIPE_NOT_FOUND,
            )
        self.assertEqual(held(self.conn, "alice", wood), 5)

    def test_missing_ingredients_changes_nothing(self) -> None:
        self._stock("alice", 1, 1)
        self.assertEqual(craft(self.conn, "alice", "Chair"), CraftResult.MISSING_INGREDIENTS)
        self.assertEqual(held(self.conn, "alice", self.ids["Wood"]), 1)
        self.assertEqual(held(self.conn, "alice", self.ids["Nail"]), 1)
        self.assertEqual(held(self.conn, "alice", self.ids["Chair"]), 0)

    def test_empty_inventory_is_missing_ingredients(self) -> None:
        self.assertEqual(craft(self.conn, "nobody", "Chair"), CraftResult.MISSING_INGREDIENTS)

    def test_other_users_items_do_not_count(self) -> None:
        self._stock("bob", 2, 1)
        self.assertEqual(craft(self.conn, "alice", "Chair"), CraftResult.MISSING_INGREDIENTS)
        self.assertEqual(held(self.conn, "bob", self.ids["Wood"]), 2)

    def test_successful_craft_consumes_exact_quantities(self) -> None:
        self._stock("alice", 3, 2)
        newest_wood = self.conn.execute(
            "SELECT id FROM inventory WHERE user = ? AND item = ? ORDER BY time DESC LIMIT 1",
            ("alice", self.ids["Wood"]),
        ).fetchone()["id"]

        self.assertEqual(craft(self.conn, "alice", "Chair"), CraftResult.SUCCESS)

        self.assertEqual(held(self.conn, "alice", self.ids["Wood"]), 1)
        self.assertEqual(held(self.conn, "alice", self.ids["Nail"]), 1)
        self.assertEqual(held(self.conn, "alice", self.ids["Chair"]), 1)
        remaining = self.conn.execute(
            "SELECT id FROM inventory WHERE user = ? AND item = ?",
            ("alice", self.ids["Wood"]),
        ).fetchone()["id"]
        self.assertEqual(remaining, newest_wood)

    def test_craft_ignores_case(self) -> None:
        self._stock("alice", 2, 1)
        self.assertEqual(craft(self.conn, "alice", "chair"), CraftResult.SUCCESS)
        self.assertEqual(held(self.conn, "alice", self.ids["Chair"]), 1)
        self.assertEqual(recipe_name(self.conn, "CHAIR"), "Chair")
        self.assertEqual(recipe_name(self.conn, "Stool"), "Stool")

    def test_inventory_failure_reports_database_error(self) -> None:
        self._stock("alice", 2, 1)
        with mock.patch(
            "itembot.services.items.get_inventory_rows",
            side_effect=sqlite3.OperationalError("disk I/O error"),
        ):
            result = craft(self.conn, "alice", "Chair")
        self.assertEqual(result, CraftResult.DATABASE_ERROR)
        self.assertEqual(held(self.conn, "alice", self.ids["Chair"]), 0)

    def test_result_codes_are_stable(self) -> None:
        self.assertEqual(
            [int(code) for code in CraftResult],
            [0, 1, 2, 3],
        )


class ParseRecipeTests(unittest.TestCase):
    def test_parses_ingredient_map(self) -> None:
        self.assertEqual(parse_recipe('{"1": 2, "4": 1}'), {1: 2, 4: 1})

    def test_rejects_bad_input(self) -> None:
        for raw in (None, "", "null", "[1, 2]", '{"a": 1}', '{"1": 1.5}', '{"1": true}'):
            self.assertEqual(parse_recipe(raw), {}, raw)


if __name__ == "__main__":
    unittest.main()
