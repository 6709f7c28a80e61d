from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class LatLng:
    latitude: float
    longitude: float

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> Optional["LatLng"]:
        if not payload:
            return None
        return cls(latitude=float(payload["latitude"]), longitude=float(payload["longitude"]))

    def to_payload(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class RawLocation:
    """A candidate location as supplied by the points-of-interest feed."""

    name: str | None
    snapped_point: Optional[LatLng] = None
    center_point: Optional[LatLng] = None
    place_id: str | None = None
    types: tuple[str, ...] = ()


def _parse_timestamp(raw_value: Any) -> Optional[datetime]:
    if raw_value is None or raw_value == "":
        return None
    if isinstance(raw_value, datetime):
        parsed = raw_value
    else:
        parsed = datetime.fromisoformat(str(raw_value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class SpawnLocation:
    id: str
    object_type_id: str
    snapped_point: Optional[LatLng] = None
    active: bool = True
    respawn_time: Optional[datetime] = None
    number_of_keys_to_activate: int = 0
    key_type_id: Optional[str] = None
    respawns: bool = True

    @property
    def permanently_unavailable(self) -> bool:
        return not self.active and not self.respawns

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SpawnLocation":
        return cls(
            id=str(payload["id"]),
            object_type_id=str(payload["object_type_id"]),
            snapped_point=LatLng.from_payload(payload.get("snappedPoint")),
            active=bool(payload.get("active", True)),
            respawn_time=_parse_timestamp(payload.get("respawn_time")),
            number_of_keys_to_activate=int(payload.get("number_of_keys_to_activate", 0) or 0),
            key_type_id=payload.get("key_type_id"),
            respawns=bool(payload.get("respawns", True)),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "object_type_id": self.object_type_id,
            "snappedPoint": self.snapped_point.to_payload() if self.snapped_point else None,
            "active": self.active,
            "respawn_time": self.respawn_time.isoformat() if self.respawn_time else None,
            "number_of_keys_to_activate": self.number_of_keys_to_activate,
            "key_type_id": self.key_type_id,
            "respawns": self.respawns,
        }


@dataclass
class WorldState:
    locations: Dict[str, SpawnLocation] = field(default_factory=dict)

    def get(self, location_id: str) -> Optional[SpawnLocation]:
        return self.locations.get(location_id)

    def add(self, location: SpawnLocation) -> None:
        self.locations[location.id] = location

    def copy(self) -> "WorldState":
        return copy.deepcopy(self)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "WorldState":
        rows = payload.get("locations") or {}
        return cls(locations={str(key): SpawnLocation.from_payload(row) for key, row in rows.items()})

    def to_payload(self) -> dict[str, Any]:
        return {"locations": {key: location.to_payload() for key, location in self.locations.items()}}
