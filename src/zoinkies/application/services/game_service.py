from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, TypeVar

from zoinkies.application.dtos import (
    BattleData,
    BattleSummaryData,
    EnergyData,
    ResolutionResult,
    RewardsData,
)
from zoinkies.application.services.balance_tables import (
    DEFAULT_EQUIPPED_BODY_ARMOR,
    DEFAULT_EQUIPPED_WEAPON,
    DEFAULT_PLAYER_CHARACTER_TYPE,
    DEFAULT_PLAYER_ENERGY_LEVEL,
    DEFAULT_PLAYER_INVENTORY,
    DEFAULT_PLAYER_NAME,
)
from zoinkies.application.services.reference_service import ReferenceService
from zoinkies.application.services.resolution_service import ResolutionService
from zoinkies.application.services.spawn_generator import SpawnGenerator
from zoinkies.domain.errors import GameplayError
from zoinkies.domain.models.location import RawLocation, WorldState
from zoinkies.domain.models.player import Item, PlayerState
from zoinkies.domain.models.reference import ReferenceItem
from zoinkies.domain.repositories import PlayerStateRepository, WorldStateRepository


logger = logging.getLogger(__name__)

T = TypeVar("T")


def new_player_state(name: str = DEFAULT_PLAYER_NAME) -> PlayerState:
    return PlayerState(
        name=name,
        character_type=DEFAULT_PLAYER_CHARACTER_TYPE,
        energy_level=DEFAULT_PLAYER_ENERGY_LEVEL,
        max_energy_level=DEFAULT_PLAYER_ENERGY_LEVEL,
        inventory=[Item(item_id, quantity) for item_id, quantity in DEFAULT_PLAYER_INVENTORY],
        equipped_weapon=DEFAULT_EQUIPPED_WEAPON,
        equipped_body_armor=DEFAULT_EQUIPPED_BODY_ARMOR,
    )


class GameService:
    """Entry point for the transport layer.

    Each ``*_intent`` method returns a ``ResolutionResult``: gameplay failures
    come back as an ``error_kind`` the caller has to branch on, while
    collaborator failures still propagate as exceptions.
    """

    def __init__(
        self,
        world_repo: WorldStateRepository,
        player_repo: PlayerStateRepository,
        references: ReferenceService,
        resolver: ResolutionService,
        spawn_generator: SpawnGenerator,
    ) -> None:
        self.world_repo = world_repo
        self.player_repo = player_repo
        self.references = references
        self.resolver = resolver
        self.spawn_generator = spawn_generator

    def _run(self, intent: str, operation: Callable[..., T], *args: Any) -> ResolutionResult[T]:
        try:
            return ResolutionResult.success(operation(*args))
        except GameplayError as exc:
            logger.info("Intent rejected", extra={"intent": intent, "error_kind": exc.kind.value, "reason": str(exc)})
            return ResolutionResult.failure(exc)

    def create_new_player(self, player_id: str, name: str = DEFAULT_PLAYER_NAME) -> PlayerState:
        player = new_player_state(name)
        self.player_repo.set(player_id, player)
        return player

    def get_player(self, player_id: str) -> Optional[PlayerState]:
        return self.player_repo.get(player_id)

    def get_world(self, player_id: str) -> WorldState:
        return self.world_repo.get(player_id)

    def prepare_battle_intent(self, player_id: str, location_id: str) -> ResolutionResult[BattleData]:
        return self._run("prepare_battle", self.resolver.prepare_battle, player_id, location_id)

    def resolve_battle_intent(
        self, player_id: str, location_id: str, winner: bool
    ) -> ResolutionResult[BattleSummaryData]:
        return self._run("resolve_battle", self.resolver.resolve_battle, player_id, location_id, winner)

    def open_chest_intent(self, player_id: str, location_id: str) -> ResolutionResult[RewardsData]:
        return self._run("open_chest", self.resolver.resolve_chest, player_id, location_id)

    def use_energy_station_intent(self, player_id: str, location_id: str) -> ResolutionResult[EnergyData]:
        return self._run("use_energy_station", self.resolver.resolve_energy_station, player_id, location_id)

    def ingest_locations_intent(self, player_id: str, raw_locations: Iterable[RawLocation]) -> ResolutionResult[int]:
        def _ingest() -> int:
            world = self.world_repo.get(player_id)
            added = self.spawn_generator.assign_many(raw_locations, world)
            if added:
                self.world_repo.set(player_id, world)
            return added

        return self._run("ingest_locations", _ingest)

    def reference_item_intent(self, item_id: str) -> ResolutionResult[ReferenceItem]:
        return self._run("reference_item", self.references.require, item_id)

    def reference_data_intent(self) -> ResolutionResult[dict[str, Any]]:
        return self._run("reference_data", self.references.to_payload)
