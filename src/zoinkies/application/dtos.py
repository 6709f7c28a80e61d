from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Generic, List, Optional, TypeVar

from zoinkies.domain.errors import ErrorKind, GameplayError
from zoinkies.domain.models.player import Item


T = TypeVar("T")


@dataclass
class RewardsData:
    id: str = ""
    items: List[Item] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "items": [item.to_payload() for item in self.items]}


@dataclass
class BattleData:
    id: str
    opponent_type_id: str
    player_starts: bool
    cooldown: Optional[timedelta]
    energy_level: int
    max_attack_score_bonus: Optional[int] = None
    max_defense_score_bonus: Optional[int] = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "opponentTypeId": self.opponent_type_id,
            "playerStarts": self.player_starts,
            "cooldown": self.cooldown.total_seconds() if self.cooldown is not None else None,
            "energyLevel": self.energy_level,
            "maxAttackScoreBonus": self.max_attack_score_bonus,
            "maxDefenseScoreBonus": self.max_defense_score_bonus,
        }


@dataclass
class BattleSummaryData:
    winner: bool
    won_the_game: bool = False
    rewards: RewardsData = field(default_factory=RewardsData)

    def to_payload(self) -> dict[str, Any]:
        return {
            "winner": self.winner,
            "wonTheGame": self.won_the_game,
            "rewards": self.rewards.to_payload(),
        }


@dataclass
class EnergyData:
    id: str
    amount_restored: int

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "amountRestored": self.amount_restored}


@dataclass
class ResolutionResult(Generic[T]):
    """Explicit success/failure envelope returned by the intent facade."""

    ok: bool
    value: Optional[T] = None
    error_kind: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, value: T) -> "ResolutionResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: GameplayError) -> "ResolutionResult[T]":
        return cls(ok=False, error_kind=error.kind, message=str(error))
