import click

from .inventory import inventory
from .shcd import shcd
from .subnet import subnet


@click.group()
def tools() -> None:
    """Utility commands for SHCD seeds, switch inventory, and subnets."""
    pass


tools.add_command(shcd)
tools.add_command(inventory)
tools.add_command(subnet)
