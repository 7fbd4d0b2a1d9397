"""Seed artifact emitters."""

from .application_node_config import (
    build_application_node_config,
    render_application_node_config,
    validate_application_node_config,
)
from .classify import ClassifiedDevice, ClassifiedTopology, classify_topology
from .consistency import cross_check
from .generate import ALL_ARTIFACTS, SeedBundle, build_seeds, print_summary, write_seeds
from .hmn_connections import build_hmn_connections
from .ncn_metadata import build_ncn_metadata
from .switch_metadata import build_switch_metadata, management_switches, switch_inventory

__all__ = [
    "ALL_ARTIFACTS",
    "ClassifiedDevice",
    "ClassifiedTopology",
    "SeedBundle",
    "build_application_node_config",
    "build_hmn_connections",
    "build_ncn_metadata",
    "build_seeds",
    "build_switch_metadata",
    "classify_topology",
    "cross_check",
    "management_switches",
    "print_summary",
    "render_application_node_config",
    "switch_inventory",
    "validate_application_node_config",
    "write_seeds",
]
