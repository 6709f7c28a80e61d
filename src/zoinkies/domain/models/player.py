from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional


@dataclass
class Item:
    """An (object type, quantity) pair.

    Negative quantities only ever appear in reward summaries to report a
    loss; inventory entries are always positive.
    """

    item_id: str
    quantity: int = 1

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Item":
        return cls(item_id=str(payload["itemId"]), quantity=int(payload.get("quantity", 0) or 0))

    def to_payload(self) -> dict[str, Any]:
        return {"itemId": self.item_id, "quantity": self.quantity}


@dataclass
class PlayerState:
    name: str
    character_type: str
    energy_level: int
    max_energy_level: int
    inventory: List[Item] = field(default_factory=list)
    equipped_weapon: Optional[str] = None
    equipped_body_armor: Optional[str] = None
    equipped_shield: Optional[str] = None
    equipped_helmet: Optional[str] = None

    def _entry(self, item_id: str) -> Optional[Item]:
        return next((row for row in self.inventory if row.item_id == item_id), None)

    def get_quantity(self, item_id: str) -> int:
        entry = self._entry(item_id)
        return entry.quantity if entry is not None else 0

    def add_inventory_item(self, item: Item) -> None:
        """Merge ``item`` into the inventory, clamping at zero and dropping empty entries."""
        entry = self._entry(item.item_id)
        if entry is None:
            if item.quantity > 0:
                self.inventory.append(Item(item.item_id, item.quantity))
            return
        entry.quantity = max(0, entry.quantity + item.quantity)
        if entry.quantity == 0:
            self.inventory.remove(entry)

    def add_all_inventory_items(self, items: Iterable[Item]) -> None:
        for item in items:
            self.add_inventory_item(item)

    def remove_quantity(self, item_id: str, quantity: int) -> int:
        """Deduct up to ``quantity`` units; returns the amount actually removed."""
        held = self.get_quantity(item_id)
        removed = min(held, max(0, int(quantity)))
        if removed:
            self.add_inventory_item(Item(item_id, -removed))
        return removed

    def copy(self) -> "PlayerState":
        return copy.deepcopy(self)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PlayerState":
        return cls(
            name=str(payload.get("name", "")),
            character_type=str(payload.get("characterType", "")),
            energy_level=int(payload.get("energyLevel", 0) or 0),
            max_energy_level=int(payload.get("maxEnergyLevel", 0) or 0),
            inventory=[Item.from_payload(row) for row in payload.get("inventory") or []],
            equipped_weapon=payload.get("equippedWeapon"),
            equipped_body_armor=payload.get("equippedBodyArmor"),
            equipped_shield=payload.get("equippedShield"),
            equipped_helmet=payload.get("equippedHelmet"),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "characterType": self.character_type,
            "energyLevel": self.energy_level,
            "maxEnergyLevel": self.max_energy_level,
            "inventory": [row.to_payload() for row in self.inventory],
            "equippedWeapon": self.equipped_weapon,
            "equippedBodyArmor": self.equipped_body_armor,
            "equippedShield": self.equipped_shield,
            "equippedHelmet": self.equipped_helmet,
        }
