import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _parse_prefix_subroles(values: tuple[str, ...]) -> dict[str, str]:
    table = {}
    for value in values:
        prefix, sep, subrole = value.partition("=")
        if not sep or not prefix.strip() or not subrole.strip():
            raise click.BadParameter(f"expected PREFIX=SUBROLE, got {value!r}", param_hint="--prefix-subrole")
        table[prefix.strip().lower()] = subrole.strip()
    return table


@click.group()
def shcd() -> None:
    """Validate SHCD exports and generate installer seed files from them."""
    pass


@shcd.command("validate")
@click.argument("shcd_json", type=click.Path(path_type=str, dir_okay=False))
@click.option(
    "--schema",
    type=click.Path(path_type=str, dir_okay=False),
    default=None,
    help="JSON schema to validate against (defaults to the packaged SHCD schema).",
)
def validate(shcd_json: str, schema: Optional[str]) -> None:
    """Check an SHCD JSON export against the schema and parse it."""
    try:
        from sitegen_core.data.loader import read_json_raw
        from sitegen_core.data.shcd import parse_document
        from sitegen_core.validation.schema import load_schema, schema_errors

        console.print("\n[bold cyan]SHCD Validation[/bold cyan]")
        document = read_json_raw(shcd_json)
        schema_doc = load_schema(schema)
        errors = schema_errors(document, schema_doc)
        if errors:
            for err in errors:
                console.print(f"[red]FAIL[/red] {err}")
            console.print(f"\n[red]✗[/red] {len(errors)} schema errors in {shcd_json}")
            sys.exit(1)

        topology = parse_document(document, schema_doc)
        table = Table(title="Devices by type")
        table.add_column("Type", style="cyan")
        table.add_column("Count", justify="right")
        for device_type in ("server", "switch", "pdu", "other"):
            table.add_row(device_type, str(len(topology.filter_by_type(device_type))))
        console.print(table)
        console.print(f"\n[green]✓[/green] {shcd_json} is a valid SHCD with {len(topology)} devices")
    except Exception as e:
        console.print(f"[red]Error during SHCD validation: {e}[/red]")
        sys.exit(1)


@shcd.command("generate")
@click.argument("shcd_json", type=click.Path(path_type=str, dir_okay=False))
@click.option("--schema", type=click.Path(path_type=str, dir_okay=False), default=None, help="Alternate JSON schema.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=str, dir_okay=False),
    default=None,
    help="Seed configuration YAML (prefix subroles, SNMP user, file names).",
)
@click.option(
    "--out-dir",
    type=click.Path(path_type=str, file_okay=False),
    default=".",
    show_default=True,
    help="Directory the seed files are written to.",
)
@click.option(
    "--reservations",
    type=click.Path(path_type=str, dir_okay=False),
    default=None,
    help="YAML list of IP reservations ({ip_address, name, comment}) for switch management IPs.",
)
@click.option(
    "--prefix-subrole",
    "prefix_subrole",
    multiple=True,
    help="Application node prefix and HSM subrole, e.g. gateway=Gateway. Repeatable.",
)
@click.option("-S", "--switch-metadata", is_flag=True, help="Write switch_metadata.csv.")
@click.option("-H", "--hmn-connections", is_flag=True, help="Write hmn_connections.json.")
@click.option("-A", "--application-node-config", is_flag=True, help="Write application_node_config.yaml.")
@click.option("-N", "--ncn-metadata", is_flag=True, help="Write ncn_metadata.csv.")
def generate(
    shcd_json: str,
    schema: Optional[str],
    config_path: Optional[str],
    out_dir: str,
    reservations: Optional[str],
    prefix_subrole: tuple[str, ...],
    switch_metadata: bool,
    hmn_connections: bool,
    application_node_config: bool,
    ncn_metadata: bool,
) -> None:
    """Generate seed files from an SHCD export. Without -S/-H/-A/-N all four are written."""
    try:
        from pydantic import TypeAdapter
        from sitegen_core.data.loader import load_config, load_yaml_typed
        from sitegen_core.data.shcd import load_shcd
        from sitegen_core.models.config import SeedConfig
        from sitegen_core.models.network import IPReservation
        from sitegen_core.validation.schema import load_schema
        from sitegen_tools.seeds import ALL_ARTIFACTS, build_seeds, print_summary, write_seeds

        console.print("\n[bold cyan]SHCD Seed Generation[/bold cyan]")
        config = load_config(config_path, SeedConfig)
        extra = _parse_prefix_subroles(prefix_subrole)
        if extra:
            config = config.model_copy(update={"prefix_subroles": {**config.prefix_subroles, **extra}})

        reservation_list = None
        if reservations:
            reservation_list = load_yaml_typed(reservations, adapter=TypeAdapter(list[IPReservation]))

        topology = load_shcd(shcd_json, load_schema(schema))
        console.print(f"[green]✓[/green] Loaded SHCD: {len(topology)} devices")

        flags = {
            "switch_metadata": switch_metadata,
            "hmn_connections": hmn_connections,
            "application_node_config": application_node_config,
            "ncn_metadata": ncn_metadata,
        }
        selected = [name for name in ALL_ARTIFACTS if flags[name]] or list(ALL_ARTIFACTS)

        bundle = build_seeds(topology, config=config, reservations=reservation_list)
        write_seeds(bundle, out_dir, config=config, artifacts=selected)
        print_summary(bundle)
    except click.BadParameter:
        raise
    except Exception as e:
        console.print(f"[red]Error during seed generation: {e}[/red]")
        sys.exit(1)
