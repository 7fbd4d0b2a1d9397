# sitegen_core/models/hardware.py
"""Installer-facing hardware inventory shapes.

The extra-properties payload is a tagged union: one variant per effective
switch class, discriminated by ``kind``. ``extra="forbid"`` keeps illegal
combinations (an IP address on a CDU payload) unrepresentable.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from sitegen_core.models.switch import ManagementSwitchType


class HMSType(str, Enum):
    CABINET = "Cabinet"
    CHASSIS = "Chassis"
    CDU = "CDU"
    CDU_MGMT_SWITCH = "CDUMgmtSwitch"
    CABINET_PDU_CONTROLLER = "CabinetPDUController"
    COMPUTE_MODULE = "ComputeModule"
    NODE_BMC = "NodeBMC"
    NODE = "Node"
    MGMT_SWITCH = "MgmtSwitch"
    MGMT_SWITCH_CONNECTOR = "MgmtSwitchConnector"
    MGMT_HL_SWITCH_ENCLOSURE = "MgmtHLSwitchEnclosure"
    MGMT_HL_SWITCH = "MgmtHLSwitch"

    def __str__(self) -> str:
        return self.value

    @property
    def type_code(self) -> str:
        return _TYPE_CODES[self]


_TYPE_CODES = {
    HMSType.CABINET: "comptype_cabinet",
    HMSType.CHASSIS: "comptype_chassis",
    HMSType.CDU: "comptype_cdu",
    HMSType.CDU_MGMT_SWITCH: "comptype_cdu_mgmt_switch",
    HMSType.CABINET_PDU_CONTROLLER: "comptype_cab_pdu_controller",
    HMSType.COMPUTE_MODULE: "comptype_compmod",
    HMSType.NODE_BMC: "comptype_ncard",
    HMSType.NODE: "comptype_node",
    HMSType.MGMT_SWITCH: "comptype_mgmt_switch",
    HMSType.MGMT_SWITCH_CONNECTOR: "comptype_mgmt_switch_connector",
    HMSType.MGMT_HL_SWITCH_ENCLOSURE: "comptype_hl_switch_enclosure",
    HMSType.MGMT_HL_SWITCH: "comptype_hl_switch",
}


class HardwareClass(str, Enum):
    RIVER = "River"
    MOUNTAIN = "Mountain"
    HILL = "Hill"

    def __str__(self) -> str:
        return self.value


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class MgmtSwitchProperties(_Payload):
    """LeafBMC switch payload (``comptype_mgmt_switch``)."""

    kind: Literal["MgmtSwitch"] = Field(default="MgmtSwitch", exclude=True)
    ip4_addr: str = Field(alias="IP4addr")
    brand: str = Field(alias="Brand")
    model: str = Field(alias="Model")
    snmp_auth_password: str = Field(alias="SNMPAuthPassword")
    snmp_auth_protocol: Literal["MD5"] = Field(default="MD5", alias="SNMPAuthProtocol")
    snmp_priv_password: str = Field(alias="SNMPPrivPassword")
    snmp_priv_protocol: Literal["DES"] = Field(default="DES", alias="SNMPPrivProtocol")
    snmp_username: str = Field(alias="SNMPUsername")
    aliases: list[str] = Field(alias="Aliases")


class MgmtHLSwitchProperties(_Payload):
    """Spine, Leaf, Edge and River-racked CDU payload (``comptype_hl_switch``)."""

    kind: Literal["MgmtHLSwitch"] = Field(default="MgmtHLSwitch", exclude=True)
    ip4_addr: str = Field(alias="IP4addr")
    brand: str = Field(alias="Brand")
    model: str = Field(alias="Model")
    aliases: list[str] = Field(alias="Aliases")


class CDUMgmtSwitchProperties(_Payload):
    """CDU cabinet switch payload (``comptype_cdu_mgmt_switch``); carries no IP."""

    kind: Literal["CDUMgmtSwitch"] = Field(default="CDUMgmtSwitch", exclude=True)
    brand: str = Field(alias="Brand")
    model: str = Field(alias="Model")
    aliases: list[str] = Field(alias="Aliases")


SwitchProperties = Annotated[
    Union[MgmtSwitchProperties, MgmtHLSwitchProperties, CDUMgmtSwitchProperties],
    Field(discriminator="kind"),
]


class HardwareInventoryRecord(BaseModel):
    """One classified device in the shape the inventory service expects."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)
    parent: str = Field(alias="Parent")
    xname: str = Field(alias="Xname")
    type: str = Field(alias="Type")
    type_string: HMSType = Field(alias="TypeString")
    hardware_class: HardwareClass = Field(alias="Class")
    extra_properties: SwitchProperties = Field(alias="ExtraProperties")
    # pre-reclassification role, kept next to the effective TypeString
    declared_type: ManagementSwitchType | None = Field(default=None, exclude=True)

    def to_inventory(self) -> dict:
        """Serialise with the inventory service's field names."""
        return self.model_dump(mode="json", by_alias=True)
