# sitegen_core/models/config.py
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SeedConfig(BaseModel):
    """Knobs for seed generation. Every field has a default; an absent file means defaults."""

    model_config = ConfigDict(extra="ignore")
    # user application-node prefixes -> HSM subrole, on top of the built-ins
    prefix_subroles: dict[str, str] = Field(default_factory=dict)
    snmp_username: str = "testuser"
    credential_template: str = "vault://hms-creds/{xname}"
    switch_metadata_file: str = "switch_metadata.csv"
    ncn_metadata_file: str = "ncn_metadata.csv"
    hmn_connections_file: str = "hmn_connections.json"
    application_node_config_file: str = "application_node_config.yaml"

    @field_validator("prefix_subroles", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return {} if v is None else v

    @field_validator("credential_template")
    @classmethod
    def _needs_xname(cls, v: str) -> str:
        if "{xname}" not in v:
            raise ValueError("credential_template must contain '{xname}'")
        return v
