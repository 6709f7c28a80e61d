import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from zoinkies.domain.models.player import Item, PlayerState


def _player(*items: tuple[str, int]) -> PlayerState:
    return PlayerState(
        name="Tester",
        character_type="character_type_1",
        energy_level=50,
        max_energy_level=100,
        inventory=[Item(item_id, quantity) for item_id, quantity in items],
    )


class PlayerInventoryTests(unittest.TestCase):
    def test_missing_entry_counts_as_zero(self) -> None:
        self.assertEqual(0, _player().get_quantity("gold_key"))

    def test_adding_merges_into_existing_entry(self) -> None:
        player = _player(("gold_key", 2))
        player.add_all_inventory_items([Item("gold_key", 1), Item("helmet_type_1", 1), Item("gold_key", 2)])
        self.assertEqual([("gold_key", 5), ("helmet_type_1", 1)], [(i.item_id, i.quantity) for i in player.inventory])

    def test_negative_quantities_never_create_entries(self) -> None:
        player = _player()
        player.add_inventory_item(Item("gold_key", -1))
        self.assertEqual([], player.inventory)

    def test_entries_reaching_zero_are_removed(self) -> None:
        player = _player(("gold_key", 1), ("shield_type_1", 1))
        player.add_inventory_item(Item("gold_key", -3))
        self.assertEqual(["shield_type_1"], [item.item_id for item in player.inventory])

    def test_remove_quantity_reports_amount_removed(self) -> None:
        player = _player(("diamond_key", 2))
        self.assertEqual(2, player.remove_quantity("diamond_key", 5))
        self.assertEqual(0, player.remove_quantity("diamond_key", 1))
        self.assertEqual(0, player.remove_quantity("diamond_key", 0))
        self.assertEqual([], player.inventory)

    def test_copy_is_independent(self) -> None:
        player = _player(("gold_key", 1))
        clone = player.copy()
        clone.add_inventory_item(Item("gold_key", 1))
        self.assertEqual(1, player.get_quantity("gold_key"))

    def test_payload_round_trip(self) -> None:
        player = _player(("gold_key", 3))
        player.equipped_weapon = "weapon_type_1"
        payload = player.to_payload()
        self.assertEqual({"itemId": "gold_key", "quantity": 3}, payload["inventory"][0])
        self.assertEqual(payload, PlayerState.from_payload(payload).to_payload())


if __name__ == "__main__":
    unittest.main()
