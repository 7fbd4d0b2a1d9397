# sitegen_core/models/seeds.py
"""Row shapes of the four seed artifacts."""

from pydantic import BaseModel, ConfigDict, Field

from sitegen_core.models.hardware import HMSType


class SwitchMetadataRow(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    xname: str = Field(alias="Switch Xname")
    type: str = Field(alias="Type")
    brand: str = Field(alias="Brand")
    model: str = Field(alias="Model")
    name: str = Field(alias="Name")
    management_ip: str = Field(default="", alias="Management IP")
    parent: str = Field(alias="Parent Xname")
    hms_type: HMSType = Field(alias="HMS Type")


class NcnMetadataRow(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    xname: str = Field(alias="Xname")
    hostname: str = Field(alias="Hostname")
    role: str = Field(alias="Role")
    subrole: str = Field(default="", alias="Subrole")


class HMNConnection(BaseModel):
    """One device cabled (or not) to the hardware management network."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    source: str = Field(alias="Source")
    source_xname: str = Field(default="", alias="SourceXname")
    source_port: int | None = Field(default=None, alias="SourcePort")
    source_rack: str = Field(default="", alias="SourceRack")
    source_location: str = Field(default="", alias="SourceLocation")
    source_sub_location: str = Field(default="", alias="SourceSubLocation")
    source_parent: str = Field(default="", alias="SourceParent")
    destination_xname: str = Field(default="", alias="DestinationXname")
    destination_connector: str = Field(default="", alias="DestinationConnector")
    destination_rack: str = Field(default="", alias="DestinationRack")
    destination_location: str = Field(default="", alias="DestinationLocation")
    destination_port: str = Field(default="", alias="DestinationPort")


class ApplicationNodeConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    prefixes: list[str] = Field(default_factory=list)
    prefix_hsm_subroles: dict[str, str] = Field(default_factory=dict)
    aliases: dict[str, list[str]] = Field(default_factory=dict)
