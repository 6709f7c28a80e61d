import os
import random
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from zoinkies.application.services.balance_tables import FREED_LEADERS_TO_WIN
from zoinkies.application.services.event_bus import EventBus
from zoinkies.application.services.game_service import GameService
from zoinkies.application.services.reference_service import ReferenceService
from zoinkies.application.services.resolution_service import ResolutionService
from zoinkies.application.services.respawn_service import RespawnService
from zoinkies.application.services.spawn_generator import SpawnGenerator
from zoinkies.domain.models.reference import ReferenceCatalog
from zoinkies.domain.repositories import PlayerStateRepository, WorldStateRepository
from zoinkies.infrastructure.inmemory.inmemory_player_repo import InMemoryPlayerStateRepository
from zoinkies.infrastructure.inmemory.inmemory_world_repo import InMemoryWorldStateRepository
from zoinkies.infrastructure.reference_data_loader import CatalogHolder, JsonReferenceDataSource


@dataclass(frozen=True)
class RuntimeSettings:
    reference_data_path: Optional[str] = None
    rng_seed: Optional[int] = None
    freed_leaders_to_win: int = FREED_LEADERS_TO_WIN

    @classmethod
    def from_env(cls) -> "RuntimeSettings":
        seed_raw = os.getenv("ZOINKIES_RNG_SEED", "").strip()
        return cls(
            reference_data_path=os.getenv("ZOINKIES_REFERENCE_DATA_PATH") or None,
            rng_seed=int(seed_raw) if seed_raw else None,
            freed_leaders_to_win=int(os.getenv("ZOINKIES_FREED_LEADERS_TO_WIN", str(FREED_LEADERS_TO_WIN))),
        )


_catalog_holders: dict[Optional[str], CatalogHolder] = {}
_catalog_holders_lock = threading.Lock()


def catalog_holder(reference_data_path: Optional[str] = None) -> CatalogHolder:
    """Process-wide holder for the catalog read from ``reference_data_path``."""
    with _catalog_holders_lock:
        holder = _catalog_holders.get(reference_data_path)
        if holder is None:
            holder = CatalogHolder(JsonReferenceDataSource(reference_data_path))
            _catalog_holders[reference_data_path] = holder
        return holder


def load_reference_service(settings: RuntimeSettings) -> ReferenceService:
    holder = catalog_holder(settings.reference_data_path)
    return ReferenceService(holder.get(), source=holder.description)


def build_game_service(
    *,
    world_repo: WorldStateRepository,
    player_repo: PlayerStateRepository,
    catalog: Optional[ReferenceCatalog] = None,
    references: Optional[ReferenceService] = None,
    rng: Optional[random.Random] = None,
    clock: Optional[Callable[[], datetime]] = None,
    event_bus: Optional[EventBus] = None,
    freed_leaders_to_win: int = FREED_LEADERS_TO_WIN,
) -> GameService:
    """Wire the services around the given collaborators."""
    if references is None:
        references = ReferenceService(catalog)
    rng = rng or random.Random()
    event_bus = event_bus or EventBus()
    respawn = RespawnService(world_repo, references, clock=clock, event_bus=event_bus)
    resolver = ResolutionService(
        world_repo,
        player_repo,
        references,
        respawn,
        rng=rng,
        event_bus=event_bus,
        freed_leaders_to_win=freed_leaders_to_win,
    )
    return GameService(
        world_repo,
        player_repo,
        references,
        resolver,
        SpawnGenerator(rng),
    )


def create_game_service(settings: Optional[RuntimeSettings] = None) -> GameService:
    settings = settings or RuntimeSettings.from_env()
    rng = random.Random(settings.rng_seed) if settings.rng_seed is not None else random.Random()
    return build_game_service(
        world_repo=InMemoryWorldStateRepository(),
        player_repo=InMemoryPlayerStateRepository(),
        references=load_reference_service(settings),
        rng=rng,
        freed_leaders_to_win=settings.freed_leaders_to_win,
    )
