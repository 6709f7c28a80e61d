import logging
import os

from dotenv import load_dotenv
from rich.console import Console

from zoinkies.bootstrap import create_game_service
from zoinkies.domain.models.location import LatLng, RawLocation
from zoinkies.domain.models.object_types import ObjectType
from zoinkies.presentation.console import event_table, inventory_table, print_result, reference_table, world_table


_PLAYTEST_PLAYER = "playtest"
_PLAYTEST_LOCATIONS = (
    RawLocation(name="plus/8FVC9G8F+5W", center_point=LatLng(47.3770, 8.5417)),
    RawLocation(name="plus/8FVC9G8G+6X", snapped_point=LatLng(47.3771, 8.5419)),
    RawLocation(name="plus/8FVC9G8H+7Q", center_point=LatLng(47.3772, 8.5421)),
    RawLocation(name="plus/8FVC9G8J+8R", center_point=LatLng(47.3773, 8.5423)),
    RawLocation(name="plus/8FVC9G8M+9V", snapped_point=LatLng(47.3774, 8.5425)),
    RawLocation(name="plus/8FVC9G8P+2C", center_point=LatLng(47.3775, 8.5427)),
)


def _play_location(service, console: Console, location) -> None:
    label = f"{location.object_type_id} @ {location.id}"
    if location.object_type_id in (ObjectType.MINION.value, ObjectType.TOWER.value):
        prepared = service.prepare_battle_intent(_PLAYTEST_PLAYER, location.id)
        print_result(console, f"Battle setup {label}", prepared)
        if prepared.ok:
            outcome = service.resolve_battle_intent(_PLAYTEST_PLAYER, location.id, service.resolver.rng.random() < 0.7)
            print_result(console, f"Battle outcome {label}", outcome)
    elif location.object_type_id == ObjectType.CHEST.value:
        print_result(console, f"Chest {label}", service.open_chest_intent(_PLAYTEST_PLAYER, location.id))
    elif location.object_type_id == ObjectType.ENERGY_STATION.value:
        print_result(console, f"Energy {label}", service.use_energy_station_intent(_PLAYTEST_PLAYER, location.id))


def main() -> None:
    load_dotenv()
    logging.basicConfig(level=os.getenv("ZOINKIES_LOG_LEVEL", "WARNING").upper())
    console = Console()

    service = create_game_service()
    events: list[object] = []
    service.resolver.event_bus.subscribe(object, events.append)
    catalog_result = service.reference_data_intent()
    if not catalog_result.ok:
        print_result(console, "Reference data", catalog_result)
        return
    console.print(reference_table(service.references.catalog()))

    service.create_new_player(_PLAYTEST_PLAYER)
    print_result(console, "Ingest", service.ingest_locations_intent(_PLAYTEST_PLAYER, _PLAYTEST_LOCATIONS))

    for location in list(service.get_world(_PLAYTEST_PLAYER).locations.values()):
        _play_location(service, console, location)

    console.print(world_table(service.get_world(_PLAYTEST_PLAYER), service.resolver.respawn.clock()))
    console.print(inventory_table(service.get_player(_PLAYTEST_PLAYER)))
    console.print(event_table(events))


if __name__ == "__main__":
    main()
