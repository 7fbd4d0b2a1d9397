"""Cross-artifact reference checks over one generated seed bundle."""

from __future__ import annotations

from sitegen_core.errors import CrossReferenceError
from sitegen_core.models.seeds import ApplicationNodeConfig, HMNConnection, NcnMetadataRow, SwitchMetadataRow
from sitegen_core.naming import xname as xn

from .classify import ClassifiedTopology


def cross_check(
    classified: ClassifiedTopology,
    switch_rows: list[SwitchMetadataRow],
    ncn_rows: list[NcnMetadataRow],
    connections: list[HMNConnection],
    application_config: ApplicationNodeConfig,
) -> None:
    """Raise CrossReferenceError listing every identifier one artifact uses and another lacks."""
    switches = {row.xname for row in switch_rows}
    nodes = {d.xname for d in classified.servers()}
    problems: list[str] = []

    for conn in connections:
        if not conn.destination_xname:
            continue
        if conn.destination_xname not in switches:
            problems.append(
                f"hmn_connections: {conn.source} points at {conn.destination_xname}, which is not in switch_metadata"
            )
        if conn.destination_connector and xn.parent(conn.destination_connector) != conn.destination_xname:
            problems.append(
                f"hmn_connections: connector {conn.destination_connector} does not belong to {conn.destination_xname}"
            )

    for row in ncn_rows:
        if row.xname not in nodes:
            problems.append(f"ncn_metadata: {row.hostname} has xname {row.xname}, which is not a classified node")

    for xname in application_config.aliases:
        if xname not in nodes:
            problems.append(f"application_node_config: alias key {xname} is not a classified node")

    if problems:
        raise CrossReferenceError(f"{len(problems)} cross-reference problems:\n" + "\n".join(f"  - {p}" for p in problems))
