from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from zoinkies.application.dtos import RewardsData
from zoinkies.domain.errors import IncompleteLootTable
from zoinkies.domain.models.object_types import ObjectType
from zoinkies.domain.models.player import Item


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LootEntry:
    object_type_id: str
    weight: float
    min_quantity: int = 1
    max_quantity: int = 1


LootTable = Sequence[LootEntry]


MINION_BATTLE_LOOT_TABLE: tuple[LootEntry, ...] = (
    LootEntry(ObjectType.HELMET_TYPE_1.value, 0.2),
    LootEntry(ObjectType.HELMET_TYPE_2.value, 0.05),
    LootEntry(ObjectType.BODY_ARMOR_TYPE_1.value, 0.2),
    LootEntry(ObjectType.BODY_ARMOR_TYPE_2.value, 0.05),
    LootEntry(ObjectType.SHIELD_TYPE_1.value, 0.2),
    LootEntry(ObjectType.SHIELD_TYPE_2.value, 0.05),
    LootEntry(ObjectType.WEAPON_TYPE_1.value, 0.2),
    LootEntry(ObjectType.WEAPON_TYPE_2.value, 0.05),
)

GENERAL_BATTLE_LOOT_TABLE: tuple[LootEntry, ...] = (
    LootEntry(ObjectType.GOLD_KEY.value, 0.4),
    LootEntry(ObjectType.HELMET_TYPE_2.value, 0.1),
    LootEntry(ObjectType.HELMET_TYPE_3.value, 0.05),
    LootEntry(ObjectType.BODY_ARMOR_TYPE_2.value, 0.1),
    LootEntry(ObjectType.BODY_ARMOR_TYPE_3.value, 0.05),
    LootEntry(ObjectType.SHIELD_TYPE_2.value, 0.1),
    LootEntry(ObjectType.SHIELD_TYPE_3.value, 0.05),
    LootEntry(ObjectType.WEAPON_TYPE_2.value, 0.1),
    LootEntry(ObjectType.WEAPON_TYPE_3.value, 0.05),
)

CHEST_LOOT_TABLE: tuple[LootEntry, ...] = (
    LootEntry(ObjectType.HELMET_TYPE_1.value, 0.15),
    LootEntry(ObjectType.HELMET_TYPE_2.value, 0.07),
    LootEntry(ObjectType.HELMET_TYPE_3.value, 0.03),
    LootEntry(ObjectType.BODY_ARMOR_TYPE_1.value, 0.15),
    LootEntry(ObjectType.BODY_ARMOR_TYPE_2.value, 0.07),
    LootEntry(ObjectType.BODY_ARMOR_TYPE_3.value, 0.03),
    LootEntry(ObjectType.SHIELD_TYPE_1.value, 0.15),
    LootEntry(ObjectType.SHIELD_TYPE_2.value, 0.07),
    LootEntry(ObjectType.SHIELD_TYPE_3.value, 0.03),
    LootEntry(ObjectType.WEAPON_TYPE_1.value, 0.15),
    LootEntry(ObjectType.WEAPON_TYPE_2.value, 0.07),
    LootEntry(ObjectType.WEAPON_TYPE_3.value, 0.03),
)


def total_weight(table: LootTable) -> Decimal:
    # Decimal over the literal weights keeps 0.2 + 0.05 + ... exactly at 1.
    return sum((Decimal(str(entry.weight)) for entry in table), Decimal(0))


def sample(table: LootTable, rng: random.Random) -> Item:
    """Pick one entry by walking cumulative weights in table order.

    Entries past the point where the cumulative weight reaches 1 are never
    returned. A draw that falls beyond the table's total weight raises
    ``IncompleteLootTable``.
    """
    draw = rng.random()
    cumulative = Decimal(0)
    for entry in table:
        cumulative += Decimal(str(entry.weight))
        if draw <= cumulative:
            logger.debug("Loot draw %.6f selected %s", draw, entry.object_type_id)
            return Item(entry.object_type_id, entry.min_quantity)
    raise IncompleteLootTable(float(cumulative), draw)


def _build_rewards(guaranteed: str, table: LootTable, rolls: int, rng: random.Random) -> RewardsData:
    rewards = RewardsData(items=[Item(guaranteed, 1)])
    for _ in range(rolls):
        rewards.items.append(sample(table, rng))
    return rewards


def minion_battle_rewards(rng: random.Random) -> RewardsData:
    return _build_rewards(ObjectType.GOLD_KEY.value, MINION_BATTLE_LOOT_TABLE, 1, rng)


def general_battle_rewards(rng: random.Random) -> RewardsData:
    return _build_rewards(ObjectType.FREED_LEADERS.value, GENERAL_BATTLE_LOOT_TABLE, 2, rng)


def chest_rewards(rng: random.Random) -> RewardsData:
    return _build_rewards(ObjectType.DIAMOND_KEY.value, CHEST_LOOT_TABLE, 2, rng)
