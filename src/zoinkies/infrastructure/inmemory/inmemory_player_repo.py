from typing import Dict, Optional

from zoinkies.domain.models.player import PlayerState
from zoinkies.domain.repositories import PlayerStateRepository


class InMemoryPlayerStateRepository(PlayerStateRepository):
    def __init__(self, players: Optional[Dict[str, PlayerState]] = None) -> None:
        self._players: Dict[str, PlayerState] = {
            player_id: player.copy() for player_id, player in (players or {}).items()
        }
        self.write_count = 0

    def get(self, player_id: str) -> Optional[PlayerState]:
        player = self._players.get(player_id)
        return player.copy() if player is not None else None

    def set(self, player_id: str, player: PlayerState) -> None:
        self._players[player_id] = player.copy()
        self.write_count += 1
