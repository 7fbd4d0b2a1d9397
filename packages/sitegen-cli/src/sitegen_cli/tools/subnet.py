import sys

import click
from rich.console import Console

console = Console()


@click.group()
def subnet() -> None:
    """Address-space helpers."""
    pass


@subnet.command("carve")
@click.argument("parent_cidr")
@click.option("--hosts", type=click.IntRange(min=1), required=True, help="Hosts the new subnet must hold.")
@click.option("--taken", multiple=True, help="CIDR already carved from the parent. Repeatable.")
def carve(parent_cidr: str, hosts: int, taken: tuple[str, ...]) -> None:
    """Print the smallest free subnet of PARENT_CIDR holding --hosts hosts."""
    try:
        from sitegen_core.network.subnets import carve_subnet, usable_host_addresses

        block = carve_subnet(parent_cidr, hosts, taken)
        console.print(f"{block} [dim]({usable_host_addresses(block)} usable hosts)[/dim]")
    except Exception as e:
        console.print(f"[red]Error during subnet carve: {e}[/red]")
        sys.exit(1)
