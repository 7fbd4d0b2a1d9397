import json
import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

console = Console()


@click.group()
def inventory() -> None:
    """Hardware inventory records for management switches."""
    pass


@inventory.command("switches")
@click.argument("reservations_yaml", type=click.Path(path_type=str, dir_okay=False))
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=str, dir_okay=False),
    default=None,
    help="Seed configuration YAML (SNMP user, credential template).",
)
@click.option(
    "--export",
    type=click.Path(path_type=str, dir_okay=False),
    default=None,
    help="Write the inventory records as JSON.",
)
def switches(reservations_yaml: str, config_path: Optional[str], export: Optional[str]) -> None:
    """Classify switch reservations and convert them to inventory records."""
    try:
        from pydantic import TypeAdapter
        from sitegen_core.data.loader import load_config, load_yaml_typed
        from sitegen_core.inventory.switches import convert_management_switches
        from sitegen_core.models.config import SeedConfig
        from sitegen_core.models.network import IPReservation
        from sitegen_core.models.switch import ManagementSwitchType
        from sitegen_core.naming.roles import extract_switches
        from sitegen_core.validation.switches import validate_switches

        console.print("\n[bold cyan]Switch Inventory[/bold cyan]")
        config = load_config(config_path, SeedConfig)
        reservations = load_yaml_typed(reservations_yaml, adapter=TypeAdapter(list[IPReservation]))
        found = [s for s in extract_switches(reservations) if s.switch_type is not ManagementSwitchType.EDGE]
        console.print(f"[green]✓[/green] {len(found)} switches among {len(reservations)} reservations")

        validate_switches(found)
        records = convert_management_switches(found, config=config)

        table = Table(title="Inventory records")
        for column in ("Xname", "Parent", "TypeString", "Class", "Declared"):
            table.add_column(column)
        for record in records:
            table.add_row(
                record.xname,
                record.parent,
                str(record.type_string),
                str(record.hardware_class),
                str(record.declared_type),
            )
        console.print(table)

        if export:
            with open(export, "w", encoding="utf-8") as f:
                json.dump([r.to_inventory() for r in records], f, indent=2)
            console.print(f"[green]✓[/green] Exported {len(records)} records to {export}")
    except Exception as e:
        console.print(f"[red]Error during switch inventory: {e}[/red]")
        sys.exit(1)
