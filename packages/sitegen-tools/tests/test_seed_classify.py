"""
Tests for topology classification shared by every seed emitter.
"""

import pytest
from sitegen_core.data.shcd import parse_document
from sitegen_core.errors import BatchValidationError
from sitegen_core.models.hardware import HMSType
from sitegen_core.models.switch import ManagementSwitchType
from sitegen_tools.seeds.classify import classify_topology


class TestClassifyTopology:
    def test_every_device_gets_one_identity(self, classified):
        assert classified.device("sw-leaf-bmc-001").xname == "x3000c0w14"
        assert classified.device("sw-spine-002").xname == "x3000c0h40s2"
        assert classified.device("sw-cdu-001").identity.hms_type == HMSType.MGMT_HL_SWITCH
        assert classified.device("sw-cdu-002").xname == "d0w1"
        assert classified.device("ncn-m001").xname == "x3000c0s1b0n0"
        assert classified.device("pdu-x3000-001").xname == "x3000m1"

    def test_declared_roles_are_kept(self, classified):
        assert classified.device("sw-cdu-001").role is ManagementSwitchType.CDU
        assert classified.device("sw-edge-001").role is ManagementSwitchType.EDGE
        assert classified.device("ncn-m001").role is None

    def test_other_devices_without_rule_are_skipped(self, classified):
        assert classified.skipped == ["kvm-001"]
        assert classified.device("kvm-001") is None

    def test_management_ips_from_reservations(self, classified):
        assert classified.device("sw-spine-001").management_ip == "10.254.0.2"
        assert classified.device("sw-cdu-001").management_ip == ""

    def test_views(self, classified):
        assert len(classified.switches()) == 6
        assert [d.name for d in classified.servers()] == [
            "ncn-m001",
            "ncn-w001",
            "ncn-s001",
            "cn001",
            "uan001",
            "gateway01",
        ]
        assert "pdu-x3000-001" in [d.name for d in classified.non_switches()]

    def test_peer_switch(self, classified):
        port, peer_port, switch = classified.peer_switch(classified.device("ncn-w001"), HMSType.MGMT_SWITCH)
        assert (port, peer_port, switch.name) == (1, 4, "sw-leaf-bmc-001")
        assert classified.peer_switch(classified.device("cn001"), HMSType.MGMT_SWITCH) is None

    def test_all_failures_reported_together(self, site_document, make_node):
        site_document["topology"].extend(
            [
                make_node(20, "ncn-w002", "server", "river_ncn_node_4_port", "x3000", "u04"),
                make_node(21, "cn002", "server", "river_mystery_node", "x3000", "u18"),
                make_node(22, "cn003", "server", "river_compute_node", "x3000", "shelf"),
            ]
        )
        topology = parse_document(site_document)

        with pytest.raises(BatchValidationError) as exc_info:
            classify_topology(topology)

        err = exc_info.value
        assert [f.code for f in err.findings] == ["XNAME_DUPLICATE", "ARCHITECTURE_UNKNOWN", "IDENTITY"]
        assert "ncn-w002: xname x3000c0s4b0n0 already derived for ncn-w001" in str(err)
        assert err.total == 17

    def test_bmc_leaf_port_zero_is_a_finding(self, site_document, make_node):
        site_document["topology"].append(
            make_node(20, "cn002", "server", "river_compute_node", "x3000", "u18", ports=[(1, 3, 0)])
        )
        topology = parse_document(site_document)

        with pytest.raises(BatchValidationError) as exc_info:
            classify_topology(topology)

        findings = exc_info.value.findings
        assert [(f.code, f.subject) for f in findings] == [("CONNECTOR_INVALID", "cn002")]
        assert "sw-leaf-bmc-001 port 0" in findings[0].message
