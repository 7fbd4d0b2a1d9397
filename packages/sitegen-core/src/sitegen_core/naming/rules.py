"""
Rule table for turning device placement into xnames.

Two tables drive everything here:

    SWITCH_RULES        (declared role, cabinet prefix) -> effective class
    ARCHITECTURE_RULES  architecture tag -> how a server/pdu xname is built

``effective_class`` and ``derive_identity`` are the only places that read
them, so every seed artifact gets the same answer for the same device.
"""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel, ConfigDict

from sitegen_core.codebase.debug import spy_trace
from sitegen_core.errors import (
    InvalidLocationError,
    UnknownArchitectureError,
    UnknownSwitchTypeError,
)
from sitegen_core.models.hardware import HardwareClass, HMSType
from sitegen_core.models.switch import ManagementSwitchType
from sitegen_core.models.topology import Location, Topology, TopologyNode
from sitegen_core.naming import xname as xn

logger = logging.getLogger(__name__)

RIVER_CABINET_PREFIX = "x"
CDU_CABINET_PREFIX = "d"


class XnameRule(BaseModel):
    """How one class of device is named and inventoried."""

    model_config = ConfigDict(frozen=True)
    template: str
    hms_type: HMSType
    hardware_class: HardwareClass


class EffectiveClass(BaseModel):
    model_config = ConfigDict(frozen=True)
    hms_type: HMSType
    parent: str
    hardware_class: HardwareClass


class DeviceIdentity(BaseModel):
    """Derived identifiers of one topology device."""

    model_config = ConfigDict(frozen=True)
    common_name: str
    xname: str
    parent: str
    hms_type: HMSType
    hardware_class: HardwareClass
    declared_type: ManagementSwitchType | None = None


_MGMT_SWITCH = XnameRule(
    template="{rack}c0w{u}", hms_type=HMSType.MGMT_SWITCH, hardware_class=HardwareClass.RIVER
)
_HL_SWITCH = XnameRule(
    template="{rack}c0h{u}s{slot}", hms_type=HMSType.MGMT_HL_SWITCH, hardware_class=HardwareClass.RIVER
)
_CDU_SWITCH = XnameRule(
    template="{rack}w{u}", hms_type=HMSType.CDU_MGMT_SWITCH, hardware_class=HardwareClass.MOUNTAIN
)
_NODE = XnameRule(
    template="{rack}c0s{u}b{bmc}n0", hms_type=HMSType.NODE, hardware_class=HardwareClass.RIVER
)
_PDU = XnameRule(
    template="{rack}m{index}", hms_type=HMSType.CABINET_PDU_CONTROLLER, hardware_class=HardwareClass.RIVER
)

SWITCH_RULES: dict[tuple[ManagementSwitchType, str], XnameRule] = {
    (ManagementSwitchType.LEAF_BMC, RIVER_CABINET_PREFIX): _MGMT_SWITCH,
    (ManagementSwitchType.LEAF, RIVER_CABINET_PREFIX): _HL_SWITCH,
    (ManagementSwitchType.SPINE, RIVER_CABINET_PREFIX): _HL_SWITCH,
    (ManagementSwitchType.EDGE, RIVER_CABINET_PREFIX): _HL_SWITCH,
    # CDU switch racked in a River cabinet: inventoried as a high-level switch
    (ManagementSwitchType.CDU, RIVER_CABINET_PREFIX): _HL_SWITCH,
    (ManagementSwitchType.CDU, CDU_CABINET_PREFIX): _CDU_SWITCH,
}

# switch architecture tags and the role they declare
SWITCH_ARCHITECTURES: dict[str, ManagementSwitchType] = {
    "spine": ManagementSwitchType.SPINE,
    "river_ncn_leaf": ManagementSwitchType.LEAF,
    "river_bmc_leaf": ManagementSwitchType.LEAF_BMC,
    "mountain_compute_leaf": ManagementSwitchType.CDU,
    "customer_edge_router": ManagementSwitchType.EDGE,
}

ARCHITECTURE_RULES: dict[str, XnameRule] = {
    "river_ncn_node_4_port": _NODE,
    "river_ncn_node_2_port": _NODE,
    "river_ncn_node_4_port_1g_ocp": _NODE,
    "river_compute_node": _NODE,
    "river_application_node": _NODE,
    "pdu": _PDU,
}

_ELEVATION = re.compile(r"^[a-zA-Z]*(\d+)([a-zA-Z]*)$")
_TRAILING_NUMBER = re.compile(r"(\d+)$")
_PDU_NAME = re.compile(r"(?:x\d+p|pdu(?:-x\d+)?-?)(\d+)$")
_RACK = re.compile(r"^([xd])(\d+)$")


def cabinet_prefix(location: str) -> str:
    """``x`` for River cabinets, ``d`` for CDU cabinets."""
    return location.strip()[:1].lower()


def switch_rule(declared_type: ManagementSwitchType | str | None, location: str) -> XnameRule:
    """Look up the rule for a declared switch role in the cabinet ``location`` starts with."""
    try:
        role = ManagementSwitchType(declared_type)
    except ValueError:
        raise UnknownSwitchTypeError(declared_type) from None
    prefix = cabinet_prefix(location)
    rule = SWITCH_RULES.get((role, prefix))
    if rule is None:
        raise InvalidLocationError(f"a {role} switch cannot be placed in cabinet {location!r}")
    return rule


@spy_trace
def effective_class(declared_type: ManagementSwitchType | str | None, switch_xname: str) -> EffectiveClass:
    """Effective inventory type, parent and physical class of a switch.

    The declared role is only half the answer: a CDU switch whose xname sits
    in a River cabinet comes back as ``MgmtHLSwitch``/River with the
    enclosure as parent, while one in a CDU cabinet stays
    ``CDUMgmtSwitch``/Mountain.
    """
    normalized = xn.normalize(switch_xname)
    rule = switch_rule(declared_type, normalized)
    return EffectiveClass(
        hms_type=rule.hms_type,
        parent=xn.parent(normalized),
        hardware_class=rule.hardware_class,
    )


def parse_elevation(location: Location) -> tuple[int, str | None]:
    """Split ``u14``/``U07R`` into the rack unit and an optional ``l``/``r`` side."""
    match = _ELEVATION.match(location.elevation)
    if match is None:
        raise InvalidLocationError(f"elevation {location.elevation!r} in rack {location.rack} has no rack unit")
    side = (location.sub_location or match.group(2) or "").lower() or None
    if side not in (None, "l", "r"):
        side = None
    return int(match.group(1)), side


def _rack(node: TopologyNode) -> str:
    if node.location is None:
        raise InvalidLocationError(f"{node.common_name} has no location")
    rack = xn.normalize(node.location.rack)
    if not _RACK.match(rack):
        raise InvalidLocationError(f"{node.common_name} is in rack {node.location.rack!r}, not an x/d cabinet")
    return rack


def _finish(node: TopologyNode, rule: XnameRule, declared: ManagementSwitchType | None, **fields) -> DeviceIdentity:
    xname = xn.normalize(rule.template.format(**fields))
    xn.require(xname, rule.hms_type)
    logger.debug("%s -> %s (%s)", node.common_name, xname, rule.hms_type)
    return DeviceIdentity(
        common_name=node.common_name,
        xname=xname,
        parent=xn.parent(xname),
        hms_type=rule.hms_type,
        hardware_class=rule.hardware_class,
        declared_type=declared,
    )


def _switch_identity(node: TopologyNode, role: ManagementSwitchType) -> DeviceIdentity:
    rack = _rack(node)
    u, side = parse_elevation(node.location)
    rule = switch_rule(role, rack)
    return _finish(node, rule, role, rack=rack, u=u, slot=2 if side == "r" else 1)


def _node_identity(node: TopologyNode, rule: XnameRule, topology: Topology | None) -> DeviceIdentity:
    rack = _rack(node)
    chassis_parent = node.location.parent
    if chassis_parent:
        # multi-node chassis: the enclosure's U, BMC from the node number
        enclosure = topology.by_name(chassis_parent) if topology is not None else None
        if enclosure is None or enclosure.location is None:
            raise InvalidLocationError(f"{node.common_name} names parent {chassis_parent!r}, which is not in the diagram")
        u, _ = parse_elevation(enclosure.location)
        number = _TRAILING_NUMBER.search(node.common_name)
        if number is None:
            raise InvalidLocationError(f"{node.common_name} is in chassis {chassis_parent} but has no node number")
        bmc = ((int(number.group(1)) - 1) % 4) + 1
    else:
        u, side = parse_elevation(node.location)
        bmc = {"l": 1, "r": 2}.get(side, 0)
    return _finish(node, rule, None, rack=rack, u=u, bmc=bmc)


def _pdu_identity(node: TopologyNode, rule: XnameRule) -> DeviceIdentity:
    rack = _rack(node)
    match = _PDU_NAME.search(node.common_name.lower())
    if match is None:
        raise InvalidLocationError(f"PDU {node.common_name} carries no PDU number")
    return _finish(node, rule, None, rack=rack, index=int(match.group(1)))


@spy_trace
def derive_identity(
    node: TopologyNode,
    topology: Topology | None = None,
    role: ManagementSwitchType | None = None,
) -> DeviceIdentity:
    """Derive xname, parent, HMS type and class for one diagram device.

    Switches go through ``SWITCH_RULES`` using ``role`` (or the role their
    architecture declares); servers and PDUs through ``ARCHITECTURE_RULES``.
    ``topology`` is needed to resolve multi-node chassis parents.

    Raises:
        UnknownArchitectureError: no rule for the device's architecture tag.
        InvalidLocationError: the location cannot be turned into an xname.
        InvalidXnameError: the built xname does not match its class.
    """
    if node.type == "switch":
        if role is None:
            role = SWITCH_ARCHITECTURES.get(node.architecture)
        if role is None:
            raise UnknownArchitectureError(node.architecture, node.rack)
        return _switch_identity(node, role)

    rule = ARCHITECTURE_RULES.get(node.architecture)
    if rule is None:
        raise UnknownArchitectureError(node.architecture, node.rack)
    if rule.hms_type == HMSType.CABINET_PDU_CONTROLLER:
        return _pdu_identity(node, rule)
    return _node_identity(node, rule, topology)


def connector_xname(switch_xname: str, port: int) -> str:
    """Xname of port ``port`` on a BMC leaf switch: ``x3000c0w14`` + 7 -> ``x3000c0w14j7``."""
    xn.require(switch_xname, HMSType.MGMT_SWITCH)
    connector = f"{switch_xname}j{port}"
    xn.require(connector, HMSType.MGMT_SWITCH_CONNECTOR)
    return connector
