import copy

import pytest
from sitegen_core.data.shcd import parse_document
from sitegen_core.models.network import IPReservation
from sitegen_tools.seeds.classify import classify_topology


def _node(node_id, name, node_type, architecture, rack, elevation, ports=(), **location):
    return {
        "id": node_id,
        "common_name": name,
        "type": node_type,
        "architecture": architecture,
        "vendor": "aruba" if node_type == "switch" else "hpe",
        "model": "8325" if node_type == "switch" else "",
        "location": {"rack": rack, "elevation": elevation, **location},
        "ports": [
            {"port": port, "slot": "bmc", "destination_node_id": dest, "destination_port": dest_port}
            for port, dest, dest_port in ports
        ],
    }


# one River cabinet, one CDU cabinet; everything BMC-cabled goes to node 3
_SITE = {
    "canu_version": "1.6.0",
    "architecture": "full",
    "topology": [
        _node(1, "sw-spine-001", "switch", "spine", "x3000", "u40"),
        _node(2, "sw-spine-002", "switch", "spine", "x3000", "u40", sub_location="R"),
        _node(3, "sw-leaf-bmc-001", "switch", "river_bmc_leaf", "x3000", "u14"),
        _node(4, "sw-cdu-001", "switch", "mountain_compute_leaf", "x3000", "u38"),
        _node(5, "sw-cdu-002", "switch", "mountain_compute_leaf", "d0", "u1"),
        _node(6, "sw-edge-001", "switch", "customer_edge_router", "x3000", "u42"),
        _node(7, "ncn-m001", "server", "river_ncn_node_4_port", "x3000", "u01", ports=[(1, 3, 1)]),
        _node(8, "ncn-w001", "server", "river_ncn_node_4_port", "x3000", "u04", ports=[(1, 3, 4)]),
        _node(9, "ncn-s001", "server", "river_ncn_node_4_port", "x3000", "u07", ports=[(1, 3, 7)]),
        _node(10, "cn001", "server", "river_compute_node", "x3000", "u17"),
        _node(11, "uan001", "server", "river_application_node", "x3000", "u27", ports=[(1, 3, 27)]),
        _node(12, "gateway01", "server", "river_application_node", "x3000", "u29"),
        _node(13, "pdu-x3000-001", "pdu", "pdu", "x3000", "p0", ports=[(1, 3, 47)]),
        _node(14, "kvm-001", "other", "river_kvm", "x3000", "u20"),
    ],
}


@pytest.fixture
def make_node():
    return _node


@pytest.fixture
def site_document():
    return copy.deepcopy(_SITE)


@pytest.fixture
def topology(site_document):
    return parse_document(site_document)


@pytest.fixture
def reservations():
    return [
        IPReservation(ip_address="10.254.0.2", name="sw-spine-001", comment="x3000c0h40s1"),
        IPReservation(ip_address="10.254.0.3", name="sw-spine-002", comment="x3000c0h40s2"),
        IPReservation(ip_address="10.254.0.4", name="sw-leaf-bmc-001", comment="x3000c0w14"),
    ]


@pytest.fixture
def classified(topology, reservations):
    return classify_topology(topology, reservations=reservations)
