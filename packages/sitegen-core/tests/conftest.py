import copy
import json

import pytest


def _node(node_id, name, node_type, architecture, rack, elevation, ports=(), vendor="aruba", model="", **location):
    return {
        "id": node_id,
        "common_name": name,
        "type": node_type,
        "architecture": architecture,
        "vendor": vendor,
        "model": model,
        "location": {"rack": rack, "elevation": elevation, **location},
        "ports": [
            {"port": p, "slot": "bmc", "destination_node_id": dest, "destination_port": dest_port}
            for p, dest, dest_port in ports
        ],
    }


_DOCUMENT = {
    "canu_version": "1.6.0",
    "architecture": "full",
    "shcd_file": "site.xlsx",
    "topology": [
        _node(1, "sw-spine-001", "switch", "spine", "x3000", "u40", model="8325"),
        _node(2, "sw-leaf-bmc-001", "switch", "river_bmc_leaf", "x3000", "u14", model="6300M"),
        _node(3, "ncn-m001", "server", "river_ncn_node_4_port", "x3000", "u01", ports=[(1, 2, 1)], vendor="hpe"),
        _node(4, "sw-cdu-001", "switch", "mountain_compute_leaf", "x3000", "u38", model="8360"),
        _node(5, "cn001", "server", "river_compute_node", "x3000", "u17", vendor="gigabyte"),
        _node(6, "sw-cdu-002", "switch", "mountain_compute_leaf", "d0", "u1", model="8360"),
        _node(7, "pdu-x3000-001", "pdu", "pdu", "x3000", "p0", ports=[(1, 2, 47)], vendor="servertech"),
    ],
}


@pytest.fixture
def shcd_document():
    """A small but complete SHCD export as a decoded JSON document."""
    return copy.deepcopy(_DOCUMENT)


@pytest.fixture
def shcd_file(tmp_path, shcd_document):
    path = tmp_path / "shcd.json"
    path.write_text(json.dumps(shcd_document))
    return path


@pytest.fixture
def make_node():
    return _node
