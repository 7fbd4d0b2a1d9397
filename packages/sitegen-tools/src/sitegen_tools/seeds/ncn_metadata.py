"""ncn_metadata.csv: management and compute nodes with their roles."""

from __future__ import annotations

import logging
from typing import Mapping

from sitegen_core.models.seeds import NcnMetadataRow
from sitegen_core.naming.roles import merged_subroles, node_role

from .classify import ClassifiedTopology

logger = logging.getLogger(__name__)

NCN_METADATA_HEADER = ["Xname", "Hostname", "Role", "Subrole"]
NCN_ROLES = ("Management", "Compute")


def build_ncn_metadata(
    classified: ClassifiedTopology, prefix_subroles: Mapping[str, str] | None = None
) -> list[NcnMetadataRow]:
    subroles = merged_subroles(prefix_subroles)
    rows = []
    for device in classified.servers():
        role = node_role(device.name, subroles)
        if role is None:
            logger.warning("No node role for %s (%s); not listed in ncn metadata", device.name, device.xname)
            continue
        if role.role not in NCN_ROLES:
            continue
        rows.append(NcnMetadataRow(xname=device.xname, hostname=device.name, role=role.role, subrole=role.subrole))
    return rows
