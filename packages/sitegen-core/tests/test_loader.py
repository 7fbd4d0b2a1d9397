"""
Tests for the typed YAML loaders and seed configuration.
"""

import pytest
from pydantic import TypeAdapter
from sitegen_core.data.loader import load_config, load_yaml_list, load_yaml_typed
from sitegen_core.errors import ShcdSyntaxError
from sitegen_core.models.config import SeedConfig
from sitegen_core.models.network import IPReservation


class TestLoadYamlTyped:
    def test_list_of_reservations(self, tmp_path):
        path = tmp_path / "reservations.yaml"
        path.write_text(
            "- ip_address: 10.254.0.2\n"
            "  name: sw-spine-001\n"
            "  comment: x3000c0h33s1\n"
            "- ip_address: 10.254.0.3\n"
            "  name: ncn-m001\n"
        )
        reservations = load_yaml_list(path, IPReservation)
        assert [r.name for r in reservations] == ["sw-spine-001", "ncn-m001"]
        assert reservations[1].comment == ""

    def test_requires_exactly_one_target(self, tmp_path):
        path = tmp_path / "x.yaml"
        path.write_text("a: 1\n")
        with pytest.raises(ValueError, match="exactly one"):
            load_yaml_typed(path)
        with pytest.raises(ValueError, match="exactly one"):
            load_yaml_typed(path, model=SeedConfig, adapter=TypeAdapter(SeedConfig))

    def test_bad_structure_names_file(self, tmp_path):
        path = tmp_path / "reservations.yaml"
        path.write_text("- name: sw-spine-001\n")
        with pytest.raises(ValueError, match="Invalid structure in .*reservations.yaml"):
            load_yaml_list(path, IPReservation)

    def test_invalid_yaml_is_syntax_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("a: [1, 2\n")
        with pytest.raises(ShcdSyntaxError, match="Invalid YAML"):
            load_yaml_typed(path, model=SeedConfig)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ShcdSyntaxError, match="Empty YAML"):
            load_yaml_typed(path, model=SeedConfig)

    def test_non_utf8(self, tmp_path):
        path = tmp_path / "latin1.yaml"
        path.write_bytes("name: caf\xe9\n".encode("latin-1"))
        with pytest.raises(ShcdSyntaxError, match="UTF-8"):
            load_yaml_typed(path, model=SeedConfig)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml_typed(tmp_path / "nope.yaml", model=SeedConfig)


class TestSeedConfig:
    def test_no_path_means_defaults(self):
        config = load_config(None, SeedConfig)
        assert config.snmp_username == "testuser"
        assert config.prefix_subroles == {}
        assert config.switch_metadata_file == "switch_metadata.csv"

    def test_file_overrides(self, tmp_path):
        path = tmp_path / "seed.yaml"
        path.write_text(
            "prefix_subroles:\n"
            "  gateway: Gateway\n"
            "snmp_username: admin\n"
            "credential_template: 'secret://{xname}'\n"
        )
        config = load_config(path, SeedConfig)
        assert config.prefix_subroles == {"gateway": "Gateway"}
        assert config.snmp_username == "admin"
        assert config.credential_template == "secret://{xname}"

    def test_null_prefix_table(self, tmp_path):
        path = tmp_path / "seed.yaml"
        path.write_text("prefix_subroles:\n")
        assert load_config(path, SeedConfig).prefix_subroles == {}

    def test_template_needs_xname(self, tmp_path):
        path = tmp_path / "seed.yaml"
        path.write_text("credential_template: 'vault://static'\n")
        with pytest.raises(ValueError, match="xname"):
            load_config(path, SeedConfig)
