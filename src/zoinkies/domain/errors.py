from __future__ import annotations

from datetime import datetime
from enum import Enum


class ErrorKind(str, Enum):
    LOCATION_NOT_FOUND = "location_not_found"
    PLAYER_NOT_FOUND = "player_not_found"
    REFERENCE_ITEM_NOT_FOUND = "reference_item_not_found"
    STILL_RECOVERING = "still_recovering"
    INVALID_RESPAWN_STATE = "invalid_respawn_state"
    LOCATION_UNAVAILABLE = "location_unavailable"
    INSUFFICIENT_RESOURCES = "insufficient_resources"
    INVALID_BATTLE_TARGET = "invalid_battle_target"
    WRONG_LOCATION_TYPE = "wrong_location_type"
    INVALID_LOCATION_INPUT = "invalid_location_input"
    INCOMPLETE_LOOT_TABLE = "incomplete_loot_table"
    CATALOG_UNAVAILABLE = "catalog_unavailable"


class GameplayError(Exception):
    """Base class for every resolution failure surfaced to callers."""

    kind: ErrorKind


class LocationNotFound(GameplayError):
    kind = ErrorKind.LOCATION_NOT_FOUND

    def __init__(self, location_id: str) -> None:
        super().__init__(f"Location {location_id!r} not found")
        self.location_id = location_id


class PlayerNotFound(GameplayError):
    kind = ErrorKind.PLAYER_NOT_FOUND

    def __init__(self, player_id: str) -> None:
        super().__init__(f"Player {player_id!r} not found")
        self.player_id = player_id


class ReferenceItemNotFound(GameplayError):
    kind = ErrorKind.REFERENCE_ITEM_NOT_FOUND

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Reference item {item_id!r} not found")
        self.item_id = item_id


class StillRecovering(GameplayError):
    kind = ErrorKind.STILL_RECOVERING

    def __init__(self, location_id: str, respawn_time: datetime) -> None:
        super().__init__(f"Location {location_id!r} is still respawning until {respawn_time.isoformat()}")
        self.location_id = location_id
        self.respawn_time = respawn_time


class InvalidRespawnState(GameplayError):
    """An inactive location without a respawn timestamp."""

    kind = ErrorKind.INVALID_RESPAWN_STATE

    def __init__(self, location_id: str, message: str | None = None) -> None:
        super().__init__(message or f"Location {location_id!r} is inactive but has no respawn timestamp")
        self.location_id = location_id


class LocationUnavailable(InvalidRespawnState):
    """Inactive for good: the location never respawns, e.g. a defeated tower."""

    kind = ErrorKind.LOCATION_UNAVAILABLE

    def __init__(self, location_id: str) -> None:
        super().__init__(location_id, f"Location {location_id!r} is permanently unavailable")


class InsufficientResources(GameplayError):
    kind = ErrorKind.INSUFFICIENT_RESOURCES

    def __init__(self, key_type: str, required: int, available: int) -> None:
        super().__init__(f"Not enough {key_type} to unlock: {available} held, {required} required")
        self.key_type = key_type
        self.required = required
        self.available = available


class InvalidBattleTarget(GameplayError):
    kind = ErrorKind.INVALID_BATTLE_TARGET

    def __init__(self, location_id: str, object_type_id: str) -> None:
        super().__init__(
            f"Battles can only be started against minions and towers, {location_id!r} holds {object_type_id!r}"
        )
        self.location_id = location_id
        self.object_type_id = object_type_id


class WrongLocationType(GameplayError):
    kind = ErrorKind.WRONG_LOCATION_TYPE

    def __init__(self, location_id: str, expected: str, actual: str) -> None:
        super().__init__(f"Location {location_id!r} holds {actual!r}, not {expected!r}")
        self.location_id = location_id
        self.expected = expected
        self.actual = actual


class InvalidLocationInput(GameplayError):
    kind = ErrorKind.INVALID_LOCATION_INPUT


class IncompleteLootTable(GameplayError):
    kind = ErrorKind.INCOMPLETE_LOOT_TABLE

    def __init__(self, total_weight: float, draw: float) -> None:
        super().__init__(f"Loot table weights sum to {total_weight:.4f}; draw {draw:.4f} is not covered")
        self.total_weight = total_weight
        self.draw = draw


class CatalogUnavailable(GameplayError):
    kind = ErrorKind.CATALOG_UNAVAILABLE

    def __init__(self, source: str = "") -> None:
        detail = f" from {source}" if source else ""
        super().__init__(f"Reference data could not be loaded{detail}")
        self.source = source
