"""
Tests for the four seed artifacts and their cross-references.
"""

import csv
import json

import pytest
import yaml
from sitegen_core.errors import BatchValidationError, CrossReferenceError, DuplicateAliasError
from sitegen_core.models.config import SeedConfig
from sitegen_core.models.hardware import HMSType
from sitegen_core.models.seeds import ApplicationNodeConfig, HMNConnection
from sitegen_tools.seeds.application_node_config import (
    build_application_node_config,
    render_application_node_config,
    validate_application_node_config,
)
from sitegen_tools.seeds.consistency import cross_check
from sitegen_tools.seeds.generate import build_seeds, write_seeds
from sitegen_tools.seeds.hmn_connections import build_hmn_connections
from sitegen_tools.seeds.ncn_metadata import build_ncn_metadata
from sitegen_tools.seeds.switch_metadata import build_switch_metadata, switch_inventory


class TestSwitchMetadata:
    def test_rows_in_diagram_order_without_edge(self, classified):
        rows = build_switch_metadata(classified)
        assert [r.name for r in rows] == [
            "sw-spine-001",
            "sw-spine-002",
            "sw-leaf-bmc-001",
            "sw-cdu-001",
            "sw-cdu-002",
        ]

    def test_row_fields(self, classified):
        rows = {r.name: r for r in build_switch_metadata(classified)}

        leaf = rows["sw-leaf-bmc-001"]
        assert (leaf.xname, leaf.parent, leaf.hms_type) == ("x3000c0w14", "x3000c0", HMSType.MGMT_SWITCH)
        assert (leaf.type, leaf.brand, leaf.management_ip) == ("LeafBMC", "Aruba", "10.254.0.4")

        cdu = rows["sw-cdu-001"]
        assert (cdu.type, cdu.hms_type, cdu.parent) == ("CDU", HMSType.MGMT_HL_SWITCH, "x3000c0h38")

        assert rows["sw-cdu-002"].hms_type == HMSType.CDU_MGMT_SWITCH
        assert rows["sw-cdu-002"].management_ip == ""

    def test_inventory_matches_rows(self, classified):
        rows = build_switch_metadata(classified)
        records = switch_inventory(classified)
        assert [(r.xname, r.hms_type) for r in rows] == [(r.xname, r.type_string) for r in records]


class TestNcnMetadata:
    def test_management_and_compute_only(self, classified):
        rows = build_ncn_metadata(classified)
        assert [(r.hostname, r.role, r.subrole) for r in rows] == [
            ("ncn-m001", "Management", "Master"),
            ("ncn-w001", "Management", "Worker"),
            ("ncn-s001", "Management", "Storage"),
            ("cn001", "Compute", ""),
        ]
        assert rows[0].xname == "x3000c0s1b0n0"


class TestHmnConnections:
    def test_one_entry_per_non_switch_device(self, classified):
        sources = [c.source for c in build_hmn_connections(classified)]
        assert sources == ["mn01", "wn01", "sn01", "cn01", "uan01", "gateway01", "x3000p1"]

    def test_cabled_device(self, classified):
        conn = build_hmn_connections(classified)[0]
        assert conn.model_dump(by_alias=True) == {
            "Source": "mn01",
            "SourceXname": "x3000c0s1b0n0",
            "SourcePort": 1,
            "SourceRack": "x3000",
            "SourceLocation": "u01",
            "SourceSubLocation": "",
            "SourceParent": "",
            "DestinationXname": "x3000c0w14",
            "DestinationConnector": "x3000c0w14j1",
            "DestinationRack": "x3000",
            "DestinationLocation": "u14",
            "DestinationPort": "j1",
        }

    def test_uncabled_device_keeps_empty_destination(self, classified):
        conn = {c.source: c for c in build_hmn_connections(classified)}["cn01"]
        assert conn.source_xname == "x3000c0s17b0n0"
        assert conn.source_port is None
        assert conn.destination_xname == ""

    def test_pdu_connector(self, classified):
        conn = {c.source: c for c in build_hmn_connections(classified)}["x3000p1"]
        assert conn.destination_connector == "x3000c0w14j47"


class TestApplicationNodeConfig:
    def test_builtin_prefixes_are_not_listed(self, classified):
        config = build_application_node_config(classified)
        assert config.prefixes == []
        assert config.prefix_hsm_subroles == {}
        assert config.aliases == {"x3000c0s27b0n0": ["uan001"]}

    def test_user_prefix_that_matched(self, classified):
        config = build_application_node_config(classified, {"gateway": "Gateway", "vn": "Visualization"})
        assert config.prefixes == ["gateway"]
        assert config.prefix_hsm_subroles == {"gateway": "Gateway"}
        assert config.aliases == {"x3000c0s27b0n0": ["uan001"], "x3000c0s29b0n0": ["gateway01"]}

    def test_placeholder_subrole_is_rejected(self, classified):
        with pytest.raises(BatchValidationError, match="replace ~fixme~"):
            build_application_node_config(classified, {"gateway": "~fixme~"})

    def test_duplicate_alias(self):
        config = ApplicationNodeConfig(aliases={"x3000c0s27b0n0": ["uan001"], "x3000c0s29b0n0": ["uan001"]})
        with pytest.raises(DuplicateAliasError, match="uan001"):
            validate_application_node_config(config)

    def test_alias_keys_must_be_nodes(self):
        config = ApplicationNodeConfig(aliases={"x3000c0w14": ["a"], "bogus": ["b"]})
        with pytest.raises(BatchValidationError) as exc_info:
            validate_application_node_config(config)
        assert len(exc_info.value.findings) == 2

    def test_rendered_yaml(self, classified):
        config = build_application_node_config(classified, {"gateway": "Gateway"})
        text = render_application_node_config(config)

        assert text.startswith("---\n# Additional application node prefixes")
        assert "# Additional HSM SubRoles" in text
        assert "# Application Node aliases" in text
        assert yaml.safe_load(text) == config.model_dump()


class TestCrossCheck:
    def test_generated_bundle_is_consistent(self, topology, reservations):
        bundle = build_seeds(topology, reservations=reservations)
        assert len(bundle.switch_metadata) == 5

    def test_dangling_switch_reference(self, classified):
        connection = HMNConnection(
            source="mn01",
            source_xname="x3000c0s1b0n0",
            destination_xname="x3000c0w20",
            destination_connector="x3000c0w14j1",
        )
        with pytest.raises(CrossReferenceError) as exc_info:
            cross_check(classified, [], [], [connection], ApplicationNodeConfig())
        message = str(exc_info.value)
        assert "2 cross-reference problems" in message
        assert "x3000c0w20, which is not in switch_metadata" in message
        assert "connector x3000c0w14j1 does not belong" in message

    def test_unknown_alias_key(self, classified):
        with pytest.raises(CrossReferenceError, match="alias key x3000c0s99b0n0"):
            cross_check(classified, [], [], [], ApplicationNodeConfig(aliases={"x3000c0s99b0n0": ["ghost"]}))


class TestWriteSeeds:
    def test_all_artifacts(self, tmp_path, topology, reservations):
        config = SeedConfig(prefix_subroles={"gateway": "Gateway"})
        bundle = build_seeds(topology, config=config, reservations=reservations)

        written = write_seeds(bundle, tmp_path, config=config)

        assert set(written) == {"switch_metadata", "ncn_metadata", "hmn_connections", "application_node_config"}
        with open(tmp_path / "switch_metadata.csv", newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == [
            "Switch Xname",
            "Type",
            "Brand",
            "Model",
            "Name",
            "Management IP",
            "Parent Xname",
            "HMS Type",
        ]
        assert rows[3] == ["x3000c0w14", "LeafBMC", "Aruba", "8325", "sw-leaf-bmc-001", "10.254.0.4", "x3000c0", "MgmtSwitch"]

        with open(tmp_path / "ncn_metadata.csv", newline="") as f:
            ncn = list(csv.DictReader(f))
        assert [r["Hostname"] for r in ncn] == ["ncn-m001", "ncn-w001", "ncn-s001", "cn001"]

        hmn = json.loads((tmp_path / "hmn_connections.json").read_text())
        assert len(hmn) == 7
        assert hmn[0]["DestinationConnector"] == "x3000c0w14j1"

        anc = yaml.safe_load((tmp_path / "application_node_config.yaml").read_text())
        assert anc["prefix_hsm_subroles"] == {"gateway": "Gateway"}

    def test_selected_artifacts_only(self, tmp_path, topology):
        bundle = build_seeds(topology)
        written = write_seeds(bundle, tmp_path / "out", artifacts=["ncn_metadata"])
        assert list(written) == ["ncn_metadata"]
        assert sorted(p.name for p in (tmp_path / "out").iterdir()) == ["ncn_metadata.csv"]

    def test_configured_file_names(self, tmp_path, topology):
        config = SeedConfig(hmn_connections_file="hmn.json")
        bundle = build_seeds(topology, config=config)
        written = write_seeds(bundle, tmp_path, config=config, artifacts=["hmn_connections"])
        assert written["hmn_connections"] == tmp_path / "hmn.json"
