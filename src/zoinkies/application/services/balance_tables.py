from __future__ import annotations

from zoinkies.domain.models.object_types import ObjectType


FREED_LEADERS_TO_WIN = 4

DEFAULT_PLAYER_NAME = "Player"
DEFAULT_PLAYER_ENERGY_LEVEL = 100
DEFAULT_PLAYER_CHARACTER_TYPE = ObjectType.CHARACTER_TYPE_1.value
DEFAULT_PLAYER_INVENTORY = (
    (ObjectType.BODY_ARMOR_TYPE_1.value, 1),
    (ObjectType.WEAPON_TYPE_1.value, 1),
    (ObjectType.CHARACTER_TYPE_1.value, 1),
    (ObjectType.CHARACTER_TYPE_2.value, 1),
    (ObjectType.CHARACTER_TYPE_3.value, 1),
    (ObjectType.CHARACTER_TYPE_4.value, 1),
)
DEFAULT_EQUIPPED_BODY_ARMOR = ObjectType.BODY_ARMOR_TYPE_1.value
DEFAULT_EQUIPPED_WEAPON = ObjectType.WEAPON_TYPE_1.value

DEFAULT_MINION_ENERGY_LEVEL = 25
DEFAULT_GENERAL_ENERGY_LEVEL = 60
MAX_ATTACK_BONUS_MINION = 5
MAX_DEFENSE_BONUS_MINION = 3
MAX_ATTACK_BONUS_GENERAL = 10
MAX_DEFENSE_BONUS_GENERAL = 8

CHEST_KEYS_TO_ACTIVATE = 3
TOWER_KEYS_TO_ACTIVATE = 3

SPAWN_DRAW_MIN = 0
SPAWN_DRAW_MAX = 100

# Inclusive (low, high) draw bounds, evaluated in order. The minion band
# covers 61 of the 101 possible draws.
SPAWN_BUCKETS = (
    (0, 4, ObjectType.ENERGY_STATION.value),
    (5, 24, ObjectType.CHEST.value),
    (25, 39, ObjectType.TOWER.value),
    (40, 100, ObjectType.MINION.value),
)


def is_between(value: int, lower: int, upper: int) -> bool:
    return lower <= value <= upper


def spawn_type_for_draw(draw: int) -> str:
    for lower, upper, object_type in SPAWN_BUCKETS:
        if is_between(draw, lower, upper):
            return object_type
    raise ValueError(f"Spawn draw {draw} outside [{SPAWN_DRAW_MIN}, {SPAWN_DRAW_MAX}]")


def has_won_the_game(freed_leaders: int, threshold: int = FREED_LEADERS_TO_WIN) -> bool:
    return int(freed_leaders) >= int(threshold)
