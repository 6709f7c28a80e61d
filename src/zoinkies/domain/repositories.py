from abc import ABC, abstractmethod
from typing import Optional

from zoinkies.domain.models.location import WorldState
from zoinkies.domain.models.player import PlayerState
from zoinkies.domain.models.reference import ReferenceCatalog


class WorldStateRepository(ABC):
    """Per-player world state.

    Implementations must serialise read-then-write sequences issued for the
    same player; the resolution services never lock.
    """

    @abstractmethod
    def get(self, player_id: str) -> WorldState:
        raise NotImplementedError

    @abstractmethod
    def set(self, player_id: str, world: WorldState) -> None:
        raise NotImplementedError


class PlayerStateRepository(ABC):
    @abstractmethod
    def get(self, player_id: str) -> Optional[PlayerState]:
        raise NotImplementedError

    @abstractmethod
    def set(self, player_id: str, player: PlayerState) -> None:
        raise NotImplementedError

    def exists(self, player_id: str) -> bool:
        return self.get(player_id) is not None


class ReferenceDataSource(ABC):
    @abstractmethod
    def load(self) -> Optional[ReferenceCatalog]:
        """Return the catalog, or ``None`` when it could not be read."""
        raise NotImplementedError
