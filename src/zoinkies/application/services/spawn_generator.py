from __future__ import annotations

import logging
import random
from typing import Iterable

from zoinkies.application.services.balance_tables import (
    CHEST_KEYS_TO_ACTIVATE,
    SPAWN_DRAW_MAX,
    SPAWN_DRAW_MIN,
    TOWER_KEYS_TO_ACTIVATE,
    spawn_type_for_draw,
)
from zoinkies.domain.errors import InvalidLocationInput
from zoinkies.domain.models.location import RawLocation, SpawnLocation, WorldState
from zoinkies.domain.models.object_types import ObjectType


logger = logging.getLogger(__name__)

# object type -> (keys to activate, key type, respawns)
_SPAWN_PROFILES: dict[str, tuple[int, str | None, bool]] = {
    ObjectType.ENERGY_STATION.value: (0, None, True),
    ObjectType.CHEST.value: (CHEST_KEYS_TO_ACTIVATE, ObjectType.GOLD_KEY.value, True),
    ObjectType.TOWER.value: (TOWER_KEYS_TO_ACTIVATE, ObjectType.DIAMOND_KEY.value, False),
    ObjectType.MINION.value: (0, None, True),
}


def location_id_for_name(name: str) -> str:
    return name.replace("/", "_")


class SpawnGenerator:
    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def assign(self, raw_location: RawLocation | None) -> SpawnLocation:
        """Turn a freshly discovered location into a game object.

        Object types follow fixed draw buckets: 5% energy stations, 20%
        chests, 15% towers and the remaining draws minions.
        """
        if raw_location is None:
            raise InvalidLocationInput("Invalid location data found while creating random spawn location")
        if not raw_location.name:
            raise InvalidLocationInput("Invalid location name found while creating random spawn location")
        point = raw_location.snapped_point or raw_location.center_point
        if point is None:
            raise InvalidLocationInput(
                f"Location {raw_location.name!r} has neither a snapped nor a center point"
            )

        draw = self.rng.randint(SPAWN_DRAW_MIN, SPAWN_DRAW_MAX)
        object_type = spawn_type_for_draw(draw)
        keys, key_type, respawns = _SPAWN_PROFILES[object_type]
        location = SpawnLocation(
            id=location_id_for_name(raw_location.name),
            object_type_id=object_type,
            snapped_point=point,
            active=True,
            number_of_keys_to_activate=keys,
            key_type_id=key_type,
            respawns=respawns,
        )
        logger.debug("Spawn draw %d assigned %s to %s", draw, object_type, location.id)
        return location

    def assign_many(self, raw_locations: Iterable[RawLocation], world: WorldState) -> int:
        """Add every raw location not already present in ``world``; returns the count added."""
        added = 0
        for raw_location in raw_locations:
            if raw_location is not None and raw_location.name:
                if location_id_for_name(raw_location.name) in world.locations:
                    continue
            world.add(self.assign(raw_location))
            added += 1
        return added
