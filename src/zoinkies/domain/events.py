from dataclasses import dataclass
from datetime import datetime


@dataclass
class LocationRecovered:
    player_id: str
    location_id: str


@dataclass
class LocationRecoveryStarted:
    player_id: str
    location_id: str
    object_type_id: str
    respawn_time: datetime


@dataclass
class TowerUnlocked:
    player_id: str
    location_id: str
    keys_spent: int


@dataclass
class BattleResolved:
    player_id: str
    location_id: str
    opponent_type_id: str
    player_won: bool


@dataclass
class GameWon:
    player_id: str
    freed_leaders: int
