from __future__ import annotations

import logging
import random

from zoinkies.application.dtos import BattleData, BattleSummaryData, EnergyData, RewardsData
from zoinkies.application.services import loot_tables
from zoinkies.application.services.balance_tables import (
    DEFAULT_GENERAL_ENERGY_LEVEL,
    DEFAULT_MINION_ENERGY_LEVEL,
    FREED_LEADERS_TO_WIN,
    MAX_DEFENSE_BONUS_GENERAL,
    MAX_DEFENSE_BONUS_MINION,
    has_won_the_game,
)
from zoinkies.application.services.event_bus import EventBus
from zoinkies.application.services.reference_service import ReferenceService
from zoinkies.application.services.respawn_service import RespawnService
from zoinkies.domain.errors import (
    InsufficientResources,
    InvalidBattleTarget,
    LocationNotFound,
    PlayerNotFound,
    WrongLocationType,
)
from zoinkies.domain.events import BattleResolved, GameWon, TowerUnlocked
from zoinkies.domain.models.location import SpawnLocation, WorldState
from zoinkies.domain.models.object_types import BATTLE_TARGETS, ObjectType
from zoinkies.domain.models.player import Item, PlayerState
from zoinkies.domain.repositories import PlayerStateRepository, WorldStateRepository


logger = logging.getLogger(__name__)

MINION = ObjectType.MINION.value
GENERAL = ObjectType.GENERAL.value
TOWER = ObjectType.TOWER.value
CHEST = ObjectType.CHEST.value
ENERGY_STATION = ObjectType.ENERGY_STATION.value
GOLD_KEY = ObjectType.GOLD_KEY.value
DIAMOND_KEY = ObjectType.DIAMOND_KEY.value
FREED_LEADERS = ObjectType.FREED_LEADERS.value


class ResolutionService:
    """Resolves battles, chests and energy stations for one player at a time.

    Every operation checks all of its preconditions before the first write, so
    a failure never leaves keys half spent.
    """

    def __init__(
        self,
        world_repo: WorldStateRepository,
        player_repo: PlayerStateRepository,
        references: ReferenceService,
        respawn: RespawnService,
        *,
        rng: random.Random | None = None,
        event_bus: EventBus | None = None,
        freed_leaders_to_win: int = FREED_LEADERS_TO_WIN,
    ) -> None:
        self.world_repo = world_repo
        self.player_repo = player_repo
        self.references = references
        self.respawn = respawn
        self.rng = rng or random.Random()
        self.event_bus = event_bus
        self.freed_leaders_to_win = freed_leaders_to_win

    def _publish(self, event: object) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event)

    def _load_location(self, player_id: str, location_id: str) -> tuple[WorldState, SpawnLocation]:
        world = self.world_repo.get(player_id)
        location = world.get(location_id)
        if location is None:
            raise LocationNotFound(location_id)
        return world, location

    def _load_player(self, player_id: str) -> PlayerState:
        player = self.player_repo.get(player_id)
        if player is None:
            raise PlayerNotFound(player_id)
        return player

    def prepare_battle(self, player_id: str, location_id: str) -> BattleData:
        world, location = self._load_location(player_id, location_id)

        if location.object_type_id == MINION:
            minion = self.references.require(MINION)
            self.respawn.ensure_available(player_id, location_id, world)
            # The bonus ceiling below is the defense constant stored in the
            # attack field, and the defense field stays unset.
            # MAX_ATTACK_BONUS_MINION and MAX_ATTACK_BONUS_GENERAL are unused
            # pending a product decision on which ceiling the client applies.
            return BattleData(
                id=location_id,
                opponent_type_id=MINION,
                player_starts=self.rng.choice((True, False)),
                cooldown=minion.cooldown,
                energy_level=DEFAULT_MINION_ENERGY_LEVEL,
                max_attack_score_bonus=MAX_DEFENSE_BONUS_MINION,
            )

        if location.object_type_id == TOWER:
            general = self.references.require(GENERAL)
            self.references.require(TOWER)
            self.references.require(DIAMOND_KEY)
            self.respawn.ensure_available(player_id, location_id, world)
            player = self._load_player(player_id)

            required = location.number_of_keys_to_activate
            held = player.get_quantity(DIAMOND_KEY)
            if held < required:
                raise InsufficientResources(DIAMOND_KEY, required=required, available=held)

            player.remove_quantity(DIAMOND_KEY, required)
            location.number_of_keys_to_activate = 0
            self.world_repo.set(player_id, world)
            self.player_repo.set(player_id, player)
            if required:
                logger.info(
                    "Tower unlocked",
                    extra={"player_id": player_id, "location_id": location_id, "keys_spent": required},
                )
                self._publish(TowerUnlocked(player_id=player_id, location_id=location_id, keys_spent=required))

            return BattleData(
                id=location_id,
                opponent_type_id=GENERAL,
                player_starts=self.rng.choice((True, False)),
                cooldown=general.cooldown,
                energy_level=DEFAULT_GENERAL_ENERGY_LEVEL,
                max_attack_score_bonus=MAX_DEFENSE_BONUS_GENERAL,
            )

        raise InvalidBattleTarget(location_id, location.object_type_id)

    def resolve_battle(self, player_id: str, location_id: str, winner: bool) -> BattleSummaryData:
        """Apply the outcome of a battle the client reports.

        The reported winner is trusted as is.
        """
        world, location = self._load_location(player_id, location_id)
        summary = BattleSummaryData(winner=bool(winner), won_the_game=False, rewards=RewardsData(id=location_id))
        if location.object_type_id not in BATTLE_TARGETS:
            return summary

        self.respawn.ensure_available(player_id, location_id, world)
        opponent = self.references.require(location.object_type_id)
        player = self._load_player(player_id)
        freed_leaders = 0

        if winner:
            if location.object_type_id == MINION:
                rewards = loot_tables.minion_battle_rewards(self.rng)
            else:
                rewards = loot_tables.general_battle_rewards(self.rng)
            player.add_all_inventory_items(rewards.items)
            freed_leaders = player.get_quantity(FREED_LEADERS)
            if has_won_the_game(freed_leaders, self.freed_leaders_to_win):
                summary.won_the_game = True
        else:
            # The -1 is reported whether or not a key was actually held.
            player.remove_quantity(GOLD_KEY, 1)
            rewards = RewardsData(items=[Item(GOLD_KEY, -1)])

        rewards.id = location_id
        summary.rewards = rewards
        self.player_repo.set(player_id, player)

        if opponent.respawn_duration is not None:
            self.respawn.begin_recovery(location.object_type_id, player_id, location_id, world)
        elif winner and not location.respawns:
            self.respawn.retire(player_id, location_id, world)

        logger.info(
            "Battle resolved",
            extra={
                "player_id": player_id,
                "location_id": location_id,
                "opponent": location.object_type_id,
                "player_won": bool(winner),
            },
        )
        self._publish(
            BattleResolved(
                player_id=player_id,
                location_id=location_id,
                opponent_type_id=location.object_type_id,
                player_won=bool(winner),
            )
        )
        if summary.won_the_game:
            logger.info("Game won", extra={"player_id": player_id, "freed_leaders": freed_leaders})
            self._publish(GameWon(player_id=player_id, freed_leaders=freed_leaders))
        return summary

    def resolve_chest(self, player_id: str, location_id: str) -> RewardsData:
        world, location = self._load_location(player_id, location_id)
        if location.object_type_id != CHEST:
            raise WrongLocationType(location_id, expected=CHEST, actual=location.object_type_id)
        self.respawn.ensure_available(player_id, location_id, world)
        self.references.require(GOLD_KEY)
        self.references.require(CHEST)
        player = self._load_player(player_id)

        required = location.number_of_keys_to_activate
        held = player.get_quantity(GOLD_KEY)
        if held < required:
            raise InsufficientResources(GOLD_KEY, required=required, available=held)

        rewards = loot_tables.chest_rewards(self.rng)
        rewards.id = location_id

        player.remove_quantity(GOLD_KEY, required)
        self.respawn.begin_recovery(CHEST, player_id, location_id, world)
        player.add_all_inventory_items(rewards.items)
        self.player_repo.set(player_id, player)
        logger.info(
            "Chest opened",
            extra={"player_id": player_id, "location_id": location_id, "keys_spent": required},
        )
        return rewards

    def resolve_energy_station(self, player_id: str, location_id: str) -> EnergyData:
        world, location = self._load_location(player_id, location_id)
        if location.object_type_id != ENERGY_STATION:
            raise WrongLocationType(location_id, expected=ENERGY_STATION, actual=location.object_type_id)
        self.respawn.ensure_available(player_id, location_id, world)
        self.references.require(ENERGY_STATION)
        player = self._load_player(player_id)

        restored = max(0, player.max_energy_level - player.energy_level)
        player.energy_level = player.max_energy_level
        self.player_repo.set(player_id, player)
        self.respawn.begin_recovery(ENERGY_STATION, player_id, location_id, world)
        logger.info(
            "Energy restored",
            extra={"player_id": player_id, "location_id": location_id, "amount": restored},
        )
        return EnergyData(id=location_id, amount_restored=restored)
