"""
Role inference for switches and nodes.

Switch roles come from the architecture tag of a diagram device or, for
address reservations, from the ``sw-<role>[-bmc]-NNN`` naming convention.
Node roles come from the common name.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping

from pydantic import BaseModel, ConfigDict

from sitegen_core.models.network import IPReservation
from sitegen_core.models.switch import ManagementSwitch, ManagementSwitchType
from sitegen_core.models.topology import TopologyNode
from sitegen_core.naming import xname as xn
from sitegen_core.naming.rules import SWITCH_ARCHITECTURES

logger = logging.getLogger(__name__)

# checked in order: "leaf-bmc" must win over "leaf"
_NAME_ROLES: tuple[tuple[str, ManagementSwitchType], ...] = (
    ("leaf-bmc", ManagementSwitchType.LEAF_BMC),
    ("spine", ManagementSwitchType.SPINE),
    ("leaf", ManagementSwitchType.LEAF),
    ("cdu", ManagementSwitchType.CDU),
    ("edge", ManagementSwitchType.EDGE),
)

_SWITCH_NAME = re.compile(r"^(sw-|chn-switch-)")

DEFAULT_APPLICATION_SUBROLES: dict[str, str] = {
    "uan": "UAN",
    "ln": "UAN",
    "gn": "Gateway",
}

SUBROLE_PLACEHOLDER = "~fixme~"

_MANAGEMENT = re.compile(r"^(?:ncn-([mws])\d+|([mws])n\d+)$")
_MANAGEMENT_SUBROLES = {"m": "Master", "w": "Worker", "s": "Storage"}
_COMPUTE = re.compile(r"^(?:cn|nid)-?\d+$")


class NodeRole(BaseModel):
    model_config = ConfigDict(frozen=True)
    role: str
    subrole: str = ""


def role_from_name(name: str) -> ManagementSwitchType | None:
    """Switch role encoded in a name like ``sw-leaf-bmc-001``; None for non-switch names."""
    lowered = name.strip().lower()
    if not _SWITCH_NAME.match(lowered):
        return None
    if lowered.startswith("chn-switch-"):
        return ManagementSwitchType.EDGE
    for needle, role in _NAME_ROLES:
        if needle in lowered:
            return role
    return None


def switch_from_reservation(reservation: IPReservation) -> ManagementSwitch | None:
    """Build a ManagementSwitch from a reservation, or None if its name is not a switch name."""
    role = role_from_name(reservation.name)
    if role is None:
        return None
    return ManagementSwitch(
        xname=xn.normalize(reservation.comment),
        name=reservation.name,
        switch_type=role,
        management_interface=reservation.ip_address,
    )


def extract_switches(reservations: Iterable[IPReservation]) -> list[ManagementSwitch]:
    """Switches among a mixed reservation list, in input order."""
    switches = []
    for reservation in reservations:
        switch = switch_from_reservation(reservation)
        if switch is None:
            logger.debug("Skipping non-switch reservation %s", reservation.name)
            continue
        switches.append(switch)
    return switches


def role_for_node(node: TopologyNode) -> ManagementSwitchType | None:
    """Declared role of a diagram switch: architecture tag first, then its name."""
    if node.type != "switch":
        return None
    role = SWITCH_ARCHITECTURES.get(node.architecture)
    if role is None:
        role = role_from_name(node.common_name)
    return role


def switch_from_node(node: TopologyNode, xname: str, role: ManagementSwitchType | None = None) -> ManagementSwitch:
    return ManagementSwitch(
        xname=xname,
        name=node.common_name,
        brand=node.vendor or None,
        model=node.model,
        switch_type=role if role is not None else role_for_node(node),
    )


def merged_subroles(prefix_subroles: Mapping[str, str] | None = None) -> dict[str, str]:
    """Built-in application prefixes overlaid with user ones (user wins), keys lower-cased."""
    merged = dict(DEFAULT_APPLICATION_SUBROLES)
    for prefix, subrole in (prefix_subroles or {}).items():
        merged[prefix.strip().lower()] = subrole
    return merged


def application_prefix(common_name: str, subroles: Mapping[str, str]) -> str | None:
    """Longest application prefix ``common_name`` starts with."""
    lowered = common_name.strip().lower()
    matches = [p for p in subroles if lowered.startswith(p)]
    return max(matches, key=len) if matches else None


def node_role(common_name: str, subroles: Mapping[str, str]) -> NodeRole | None:
    """Role/subrole of a server by name; None when the name follows no known convention.

    ``subroles`` is the merged prefix table from ``merged_subroles``.
    """
    lowered = common_name.strip().lower()
    match = _MANAGEMENT.match(lowered)
    if match:
        letter = match.group(1) or match.group(2)
        return NodeRole(role="Management", subrole=_MANAGEMENT_SUBROLES[letter])
    if _COMPUTE.match(lowered):
        return NodeRole(role="Compute")
    prefix = application_prefix(lowered, subroles)
    if prefix is not None:
        return NodeRole(role="Application", subrole=subroles[prefix])
    return None
