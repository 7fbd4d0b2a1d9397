import csv
import json
import logging
from pathlib import Path
from typing import Iterable, Literal

from pydantic import BaseModel, Field
from rich.table import Table

from sitegen_core.codebase.debug import spy_trace
from sitegen_core.models.config import SeedConfig
from sitegen_core.models.network import IPReservation
from sitegen_core.models.seeds import ApplicationNodeConfig, HMNConnection, NcnMetadataRow, SwitchMetadataRow
from sitegen_core.models.topology import Topology

from .application_node_config import build_application_node_config, render_application_node_config
from .classify import ClassifiedTopology, classify_topology, console
from .consistency import cross_check
from .hmn_connections import build_hmn_connections
from .ncn_metadata import NCN_METADATA_HEADER, build_ncn_metadata
from .switch_metadata import SWITCH_METADATA_HEADER, build_switch_metadata

logger = logging.getLogger(__name__)

Artifact = Literal["switch_metadata", "ncn_metadata", "hmn_connections", "application_node_config"]
ALL_ARTIFACTS: tuple[Artifact, ...] = (
    "switch_metadata",
    "ncn_metadata",
    "hmn_connections",
    "application_node_config",
)


class SeedBundle(BaseModel):
    """All four artifacts for one topology, plus the files actually written."""

    classified: ClassifiedTopology
    switch_metadata: list[SwitchMetadataRow]
    ncn_metadata: list[NcnMetadataRow]
    hmn_connections: list[HMNConnection]
    application_node_config: ApplicationNodeConfig
    written: dict[str, Path] = Field(default_factory=dict)


@spy_trace
def build_seeds(
    topology: Topology,
    *,
    config: SeedConfig | None = None,
    reservations: Iterable[IPReservation] | None = None,
) -> SeedBundle:
    """Classify once, project into all four artifacts, and cross-check them."""
    config = config or SeedConfig()
    classified = classify_topology(topology, reservations=reservations)
    bundle = SeedBundle(
        classified=classified,
        switch_metadata=build_switch_metadata(classified, config),
        ncn_metadata=build_ncn_metadata(classified, config.prefix_subroles),
        hmn_connections=build_hmn_connections(classified),
        application_node_config=build_application_node_config(classified, config.prefix_subroles),
    )
    cross_check(
        classified,
        bundle.switch_metadata,
        bundle.ncn_metadata,
        bundle.hmn_connections,
        bundle.application_node_config,
    )
    return bundle


def _write_csv(path: Path, header: list[str], rows: list[BaseModel]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(header)
        for row in rows:
            dumped = row.model_dump(mode="json", by_alias=True)
            writer.writerow([dumped[column] for column in header])


def write_seeds(
    bundle: SeedBundle,
    out_dir: Path | str,
    *,
    config: SeedConfig | None = None,
    artifacts: Iterable[Artifact] = ALL_ARTIFACTS,
) -> dict[str, Path]:
    config = config or SeedConfig()
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    selected = set(artifacts)

    if "switch_metadata" in selected:
        path = out / config.switch_metadata_file
        _write_csv(path, SWITCH_METADATA_HEADER, bundle.switch_metadata)
        bundle.written["switch_metadata"] = path
    if "ncn_metadata" in selected:
        path = out / config.ncn_metadata_file
        _write_csv(path, NCN_METADATA_HEADER, bundle.ncn_metadata)
        bundle.written["ncn_metadata"] = path
    if "hmn_connections" in selected:
        path = out / config.hmn_connections_file
        rows = [c.model_dump(mode="json", by_alias=True) for c in bundle.hmn_connections]
        path.write_text(json.dumps(rows, indent=2) + "\n", encoding="utf-8")
        bundle.written["hmn_connections"] = path
    if "application_node_config" in selected:
        path = out / config.application_node_config_file
        path.write_text(render_application_node_config(bundle.application_node_config), encoding="utf-8")
        bundle.written["application_node_config"] = path

    for name, path in bundle.written.items():
        logger.info("Wrote %s to %s", name, path)
    return bundle.written


def print_summary(bundle: SeedBundle) -> None:
    table = Table(title="Management switches")
    for column in ("Xname", "Name", "Type", "HMS Type", "Parent", "IP"):
        table.add_column(column)
    for row in bundle.switch_metadata:
        table.add_row(row.xname, row.name, row.type, str(row.hms_type), row.parent, row.management_ip or "-")
    console.print(table)

    cabled = sum(1 for c in bundle.hmn_connections if c.destination_xname)
    console.print(f"[green]✓[/green] {len(bundle.switch_metadata)} switches")
    console.print(f"[green]✓[/green] {len(bundle.ncn_metadata)} management/compute nodes")
    console.print(f"[green]✓[/green] {len(bundle.hmn_connections)} HMN entries ({cabled} cabled to a BMC leaf)")
    console.print(f"[green]✓[/green] {len(bundle.application_node_config.aliases)} application nodes")
    if bundle.classified.skipped:
        console.print(f"[yellow]⚠[/yellow]  skipped without an xname rule: {', '.join(bundle.classified.skipped)}")
    for name, path in bundle.written.items():
        console.print(f"[green]✓[/green] Exported {name} to {path}")
