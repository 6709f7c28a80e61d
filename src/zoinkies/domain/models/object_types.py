from __future__ import annotations

from enum import Enum


class ObjectType(str, Enum):
    # Location objects
    MINION = "minion"
    GENERAL = "general"
    TOWER = "tower"
    CHEST = "chest"
    ENERGY_STATION = "energy_station"

    # Collectibles
    GOLD_KEY = "gold_key"
    DIAMOND_KEY = "diamond_key"
    FREED_LEADERS = "freed_leaders"

    # Equipment
    HELMET_TYPE_1 = "helmet_type_1"
    HELMET_TYPE_2 = "helmet_type_2"
    HELMET_TYPE_3 = "helmet_type_3"
    BODY_ARMOR_TYPE_1 = "body_armor_type_1"
    BODY_ARMOR_TYPE_2 = "body_armor_type_2"
    BODY_ARMOR_TYPE_3 = "body_armor_type_3"
    SHIELD_TYPE_1 = "shield_type_1"
    SHIELD_TYPE_2 = "shield_type_2"
    SHIELD_TYPE_3 = "shield_type_3"
    WEAPON_TYPE_1 = "weapon_type_1"
    WEAPON_TYPE_2 = "weapon_type_2"
    WEAPON_TYPE_3 = "weapon_type_3"

    # Playable characters
    CHARACTER_TYPE_1 = "character_type_1"
    CHARACTER_TYPE_2 = "character_type_2"
    CHARACTER_TYPE_3 = "character_type_3"
    CHARACTER_TYPE_4 = "character_type_4"


BATTLE_TARGETS = frozenset({ObjectType.MINION.value, ObjectType.TOWER.value})


def object_type_id(value: ObjectType | str | None) -> str | None:
    """Return the plain string id for an enum member or raw id."""
    if value is None:
        return None
    if isinstance(value, ObjectType):
        return value.value
    return str(value)
