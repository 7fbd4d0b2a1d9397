"""
Cabling-diagram (SHCD) parsing.

    raw text --json--> document --schema--> ShcdDocument --checks--> Topology

Each stage fails with its own error class: ShcdSyntaxError, ShcdSchemaError,
ShcdDecodeError, then DuplicateNameError / UnresolvedPeerError.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from sitegen_core.codebase.debug import spy_trace
from sitegen_core.data.loader import parse_json_text, read_json_raw
from sitegen_core.errors import DuplicateNameError, ShcdDecodeError, UnresolvedPeerError
from sitegen_core.models.topology import DeviceType, ShcdDocument, Topology, TopologyNode
from sitegen_core.validation.schema import validate_document

logger = logging.getLogger(__name__)


def _decode(document: Any) -> ShcdDocument:
    try:
        return ShcdDocument.model_validate(document)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(p) for p in first["loc"]) or "(root)"
        raise ShcdDecodeError(f"cannot decode SHCD field {where}: {first['msg']}") from e


def _check_graph(nodes: list[TopologyNode]) -> None:
    dup_names = sorted(n for n, c in Counter(x.common_name for x in nodes).items() if c > 1)
    if dup_names:
        raise DuplicateNameError(f"duplicate common names in SHCD: {', '.join(dup_names)}")
    dup_ids = sorted(i for i, c in Counter(x.id for x in nodes).items() if c > 1)
    if dup_ids:
        raise DuplicateNameError(f"duplicate ids in SHCD: {', '.join(map(str, dup_ids))}")

    known = {n.id for n in nodes}
    dangling = [
        f"{node.common_name} port {port.port} -> id {port.destination_node_id}"
        for node in nodes
        for port in node.ports
        if port.destination_node_id not in known
    ]
    if dangling:
        raise UnresolvedPeerError("unresolved port destinations: " + "; ".join(dangling))


@spy_trace
def parse_document(document: Any, schema: dict | None = None) -> Topology:
    """Validate and parse an already-decoded JSON document."""
    validate_document(document, schema)
    shcd = _decode(document)
    _check_graph(shcd.topology)
    topology = Topology(nodes=shcd.topology)
    logger.debug("Parsed %d SHCD devices", len(topology))
    return topology


def parse_shcd(text: str | bytes, schema: dict | None = None, source: str = "<input>") -> Topology:
    """Parse SHCD JSON text into a Topology."""
    return parse_document(parse_json_text(text, source), schema)


def load_shcd(path: Path | str, schema: dict | None = None) -> Topology:
    """Read and parse an SHCD JSON file."""
    return parse_document(read_json_raw(path), schema)


def filter_by_device_type(topology: Topology, device_type: DeviceType) -> list[TopologyNode]:
    """Nodes of ``device_type`` in input order; empty when there are none."""
    return topology.filter_by_type(device_type)
