import logging
import os

import click
from sitegen_cli.tools.tools import tools

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level_name: str) -> None:
    """
    Give the root logger a handler unless the host application already did.
    Safe to call multiple times.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level_name.upper(), logging.WARNING))


@click.group()
@click.option(
    "--log-level",
    default=lambda: os.getenv("SITEGEN_LOG_LEVEL", "WARNING"),
    show_default="SITEGEN_LOG_LEVEL or WARNING",
    help="Python log level for diagnostic output.",
)
def cli(log_level: str) -> None:
    """Derive xnames and installer seed files from cabling diagrams."""
    configure_logging(log_level)


# add cli groups here

cli.add_command(tools)
