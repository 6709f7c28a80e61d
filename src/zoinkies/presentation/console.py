from __future__ import annotations

from datetime import datetime
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from zoinkies.application.dtos import ResolutionResult
from zoinkies.domain.models.location import WorldState
from zoinkies.domain.models.player import PlayerState
from zoinkies.domain.models.reference import ReferenceCatalog, format_duration


def reference_table(catalog: ReferenceCatalog) -> Table:
    table = Table(title="Reference data", header_style="bold cyan")
    table.add_column("Item")
    table.add_column("Name")
    table.add_column("Respawn")
    table.add_column("Cooldown")
    table.add_column("ATK", justify="right")
    table.add_column("DEF", justify="right")
    for item in catalog.items:
        table.add_row(
            item.item_id,
            item.name,
            format_duration(item.respawn_duration) or "-",
            format_duration(item.cooldown) or "-",
            str(item.attack_score_bonus or ""),
            str(item.defense_score_bonus or ""),
        )
    return table


def inventory_table(player: PlayerState) -> Table:
    table = Table(
        title=f"{player.name} - energy {player.energy_level}/{player.max_energy_level}",
        header_style="bold green",
    )
    table.add_column("Item")
    table.add_column("Qty", justify="right")
    for entry in player.inventory:
        table.add_row(entry.item_id, str(entry.quantity))
    return table


def world_table(world: WorldState, now: datetime | None = None) -> Table:
    table = Table(title="World", header_style="bold magenta")
    table.add_column("Location")
    table.add_column("Object")
    table.add_column("State")
    table.add_column("Keys", justify="right")
    for location in world.locations.values():
        if location.active:
            state = "[green]available[/green]"
        elif location.respawn_time is None:
            state = "[red]gone[/red]"
        else:
            remaining = ""
            if now is not None:
                remaining = f" ({max(0, int((location.respawn_time - now).total_seconds()))}s)"
            state = f"[yellow]recovering{remaining}[/yellow]"
        keys = f"{location.number_of_keys_to_activate} {location.key_type_id}" if location.key_type_id else "-"
        table.add_row(location.id, location.object_type_id, state, keys)
    return table


def _describe(value: Any) -> str:
    to_payload = getattr(value, "to_payload", None)
    if callable(to_payload):
        value = to_payload()
    if isinstance(value, dict):
        return "\n".join(f"{key}: {row}" for key, row in value.items())
    return str(value)


def print_result(console: Console, title: str, result: ResolutionResult[Any]) -> None:
    if result.ok:
        console.print(Panel.fit(_describe(result.value), title=f"[bold green]{title}[/bold green]", border_style="green"))
        return
    kind = result.error_kind.value if result.error_kind else "error"
    console.print(
        Panel.fit(result.message, title=f"[bold red]{title}: {kind}[/bold red]", border_style="red")
    )


def event_table(events: list[object]) -> Table:
    table = Table(title="Events", header_style="bold blue")
    table.add_column("#", justify="right")
    table.add_column("Event")
    table.add_column("Details")
    for index, event in enumerate(events, start=1):
        details = ", ".join(f"{key}={value}" for key, value in vars(event).items() if key != "player_id")
        table.add_row(str(index), type(event).__name__, details)
    return table
