from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from zoinkies.application.services.event_bus import EventBus
from zoinkies.application.services.reference_service import ReferenceService
from zoinkies.domain.errors import (
    InvalidRespawnState,
    LocationNotFound,
    LocationUnavailable,
    StillRecovering,
)
from zoinkies.domain.events import LocationRecovered, LocationRecoveryStarted
from zoinkies.domain.models.location import SpawnLocation, WorldState
from zoinkies.domain.repositories import WorldStateRepository


logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RespawnService:
    """Availability lifecycle of world locations.

    Recovery is evaluated lazily when a location is accessed; nothing runs on
    a timer.
    """

    def __init__(
        self,
        world_repo: WorldStateRepository,
        references: ReferenceService,
        *,
        clock: Callable[[], datetime] | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.world_repo = world_repo
        self.references = references
        self.clock = clock or utc_now
        self.event_bus = event_bus

    @staticmethod
    def _locate(world: WorldState, location_id: str) -> SpawnLocation:
        location = world.get(location_id)
        if location is None:
            raise LocationNotFound(location_id)
        return location

    def ensure_available(
        self,
        player_id: str,
        location_id: str,
        world: Optional[WorldState] = None,
    ) -> SpawnLocation:
        """Return the location if it can be interacted with now.

        An inactive location whose respawn time has passed is reactivated and
        the world is written back before returning. ``world`` lets callers
        share the snapshot they already loaded.
        """
        if world is None:
            world = self.world_repo.get(player_id)
        location = self._locate(world, location_id)
        if location.active:
            return location
        if not location.respawns:
            raise LocationUnavailable(location_id)
        if location.respawn_time is None:
            raise InvalidRespawnState(location_id)
        if location.respawn_time > self.clock():
            raise StillRecovering(location_id, location.respawn_time)

        location.active = True
        location.respawn_time = None
        self.world_repo.set(player_id, world)
        logger.info("Location recovered", extra={"player_id": player_id, "location_id": location_id})
        if self.event_bus is not None:
            self.event_bus.publish(LocationRecovered(player_id=player_id, location_id=location_id))
        return location

    def begin_recovery(
        self,
        object_type_id: str,
        player_id: str,
        location_id: str,
        world: WorldState,
    ) -> Optional[datetime]:
        """Start the respawn countdown for a consumed location.

        Returns the respawn time, or ``None`` when the object type defines no
        respawn duration or the location never respawns. In both cases the
        location is left untouched.
        """
        reference = self.references.require(object_type_id)
        location = self._locate(world, location_id)
        if reference.respawn_duration is None:
            logger.debug("No respawn duration for %s; %s left as is", object_type_id, location_id)
            return None
        if not location.respawns:
            logger.debug("%s never respawns; left as is", location_id)
            return None

        respawn_time = self.clock() + reference.respawn_duration
        location.active = False
        location.respawn_time = respawn_time
        self.world_repo.set(player_id, world)
        logger.info(
            "Location recovery started",
            extra={"player_id": player_id, "location_id": location_id, "respawn_time": respawn_time.isoformat()},
        )
        if self.event_bus is not None:
            self.event_bus.publish(
                LocationRecoveryStarted(
                    player_id=player_id,
                    location_id=location_id,
                    object_type_id=object_type_id,
                    respawn_time=respawn_time,
                )
            )
        return respawn_time

    def retire(self, player_id: str, location_id: str, world: WorldState) -> None:
        """Deactivate a location that never respawns."""
        location = self._locate(world, location_id)
        location.active = False
        location.respawn_time = None
        self.world_repo.set(player_id, world)
        logger.info("Location retired", extra={"player_id": player_id, "location_id": location_id})
