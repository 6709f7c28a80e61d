from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Iterable, Mapping, Optional

from zoinkies.domain.models.object_types import ObjectType, object_type_id


_DURATION_PATTERN = re.compile(
    r"^P(?:(?P<days>\d+(?:\.\d+)?)D)?"
    r"(?:T(?:(?P<hours>\d+(?:\.\d+)?)H)?(?:(?P<minutes>\d+(?:\.\d+)?)M)?(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$",
    re.IGNORECASE,
)


def parse_duration(raw_value: str | None) -> Optional[timedelta]:
    """Parse an ISO-8601 duration such as ``PT30S`` or ``P1DT2H``.

    Only day/time designators are accepted; year and month lengths are not
    fixed spans. Empty input yields ``None``.
    """
    text = str(raw_value or "").strip()
    if not text:
        return None
    match = _DURATION_PATTERN.match(text)
    if match is None or text.upper() in {"P", "PT"} or text.upper().endswith("T"):
        raise ValueError(f"Unsupported duration: {raw_value!r}")
    parts = {key: float(value) for key, value in match.groupdict().items() if value}
    return timedelta(**parts)


def format_duration(value: timedelta | None) -> str | None:
    if value is None:
        return None
    total = value.total_seconds()
    days, remainder = divmod(int(total), 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)
    fraction = total - int(total)
    text = "P"
    if days:
        text += f"{days}D"
    time_part = ""
    if hours:
        time_part += f"{hours}H"
    if minutes:
        time_part += f"{minutes}M"
    if seconds or fraction or not (days or hours or minutes):
        time_part += f"{seconds + fraction:g}S"
    if time_part:
        text += "T" + time_part
    return text


@dataclass(frozen=True)
class ReferenceItem:
    item_id: str
    name: str = ""
    description: str = ""
    respawn_duration: Optional[timedelta] = None
    cooldown: Optional[timedelta] = None
    attack_score_bonus: int = 0
    defense_score_bonus: int = 0

    @property
    def respawns(self) -> bool:
        return self.respawn_duration is not None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ReferenceItem":
        item_id = str(record.get("itemId") or record.get("item_id") or record.get("id") or "").strip()
        if not item_id:
            raise ValueError(f"Reference record without an identifier: {dict(record)!r}")
        return cls(
            item_id=item_id,
            name=str(record.get("name", "") or ""),
            description=str(record.get("description", "") or ""),
            respawn_duration=parse_duration(record.get("respawnDuration") or record.get("respawn_duration")),
            cooldown=parse_duration(record.get("cooldown")),
            attack_score_bonus=int(record.get("attackScoreBonus", record.get("attack_score_bonus", 0)) or 0),
            defense_score_bonus=int(record.get("defenseScoreBonus", record.get("defense_score_bonus", 0)) or 0),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "itemId": self.item_id,
            "name": self.name,
            "description": self.description,
            "respawnDuration": format_duration(self.respawn_duration),
            "cooldown": format_duration(self.cooldown),
            "attackScoreBonus": self.attack_score_bonus,
            "defenseScoreBonus": self.defense_score_bonus,
        }


@dataclass(frozen=True)
class ReferenceCatalog:
    """Immutable, ordered set of reference items keyed by id."""

    items: tuple[ReferenceItem, ...] = ()
    _by_id: Mapping[str, ReferenceItem] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, ReferenceItem] = {}
        for item in self.items:
            if item.item_id in index:
                raise ValueError(f"Duplicate reference item {item.item_id!r}")
            index[item.item_id] = item
        object.__setattr__(self, "_by_id", index)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "ReferenceCatalog":
        return cls(items=tuple(ReferenceItem.from_record(record) for record in records))

    def lookup(self, item_id: ObjectType | str | None) -> Optional[ReferenceItem]:
        key = object_type_id(item_id)
        if key is None:
            return None
        return self._by_id.get(key)

    def __contains__(self, item_id: object) -> bool:
        return self.lookup(item_id) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self.items)

    def to_payload(self) -> dict[str, Any]:
        return {"references": [item.to_payload() for item in self.items]}
