from typing import Dict, Optional

from zoinkies.domain.models.location import WorldState
from zoinkies.domain.repositories import WorldStateRepository


class InMemoryWorldStateRepository(WorldStateRepository):
    """Keeps one world per player; reads and writes are full copies."""

    def __init__(self, worlds: Optional[Dict[str, WorldState]] = None) -> None:
        self._worlds: Dict[str, WorldState] = {
            player_id: world.copy() for player_id, world in (worlds or {}).items()
        }
        self.write_count = 0

    def get(self, player_id: str) -> WorldState:
        world = self._worlds.get(player_id)
        return world.copy() if world is not None else WorldState()

    def set(self, player_id: str, world: WorldState) -> None:
        self._worlds[player_id] = world.copy()
        self.write_count += 1

    def player_ids(self) -> list[str]:
        return sorted(self._worlds.keys())
