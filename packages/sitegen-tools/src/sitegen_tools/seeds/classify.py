"""
Classify a parsed topology once, for all seed emitters.

Every emitter reads identities from the ClassifiedTopology built here, so a
device has exactly one xname across all artifacts.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from rich.console import Console

from sitegen_core.codebase.debug import spy_trace
from sitegen_core.errors import BatchValidationError, SemanticError, UnknownArchitectureError
from sitegen_core.models.hardware import HMSType
from sitegen_core.models.network import IPReservation
from sitegen_core.models.report import Finding, ValidationReport
from sitegen_core.models.switch import ManagementSwitchType
from sitegen_core.models.topology import Topology, TopologyNode
from sitegen_core.naming.roles import role_for_node
from sitegen_core.naming.rules import DeviceIdentity, connector_xname, derive_identity

logger = logging.getLogger(__name__)
console = Console()


class ClassifiedDevice(BaseModel):
    model_config = ConfigDict(frozen=True)
    node: TopologyNode
    identity: DeviceIdentity
    role: ManagementSwitchType | None = None
    management_ip: str = ""

    @property
    def name(self) -> str:
        return self.node.common_name

    @property
    def xname(self) -> str:
        return self.identity.xname


class ClassifiedTopology(BaseModel):
    """A topology plus the identity of every device that has one."""

    topology: Topology
    devices: list[ClassifiedDevice] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)

    _by_name: dict[str, ClassifiedDevice] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        self._by_name = {d.name: d for d in self.devices}

    def device(self, common_name: str) -> ClassifiedDevice | None:
        return self._by_name.get(common_name)

    def switches(self) -> list[ClassifiedDevice]:
        return [d for d in self.devices if d.node.type == "switch"]

    def servers(self) -> list[ClassifiedDevice]:
        return [d for d in self.devices if d.identity.hms_type == HMSType.NODE]

    def non_switches(self) -> list[ClassifiedDevice]:
        return [d for d in self.devices if d.node.type != "switch"]

    def peer_switch(self, device: ClassifiedDevice, hms_type: HMSType) -> tuple[int, int, ClassifiedDevice] | None:
        """First port of ``device`` cabled to a switch of ``hms_type``: (port, peer port, switch)."""
        for port in device.node.ports:
            peer = self.topology.by_id(port.destination_node_id)
            if peer is None:
                continue
            classified = self.device(peer.common_name)
            if classified is not None and classified.identity.hms_type == hms_type:
                return port.port, port.destination_port, classified
        return None


def _fail(node: TopologyNode, code: str, message: str) -> Finding:
    return Finding(
        severity="FAIL",
        code=code,
        message=f"{node.common_name}: {message}",
        subject=node.common_name,
        context={"id": node.id, "architecture": node.architecture},
    )


@spy_trace
def classify_topology(
    topology: Topology,
    *,
    reservations: Iterable[IPReservation] | None = None,
) -> ClassifiedTopology:
    """Derive identities for every device, collecting failures.

    ``other`` devices without an xname rule (KVMs, chassis controllers...)
    are skipped with a warning. Any other failure, or two devices deriving
    the same xname, is reported together in one BatchValidationError. So is
    a device cabled to a BMC leaf port that has no connector xname.
    """
    ips = {r.name: str(r.ip_address) for r in (reservations or [])}
    report = ValidationReport(subject="SHCD devices", checked=len(topology))
    devices: list[ClassifiedDevice] = []
    skipped: list[str] = []
    owners: dict[str, str] = {}

    for node in topology:
        role = role_for_node(node)
        try:
            identity = derive_identity(node, topology, role)
        except UnknownArchitectureError as e:
            if node.type == "other":
                logger.warning("Skipping %s: %s", node.common_name, e)
                skipped.append(node.common_name)
                continue
            report.findings.append(_fail(node, "ARCHITECTURE_UNKNOWN", str(e)))
            continue
        except SemanticError as e:
            report.findings.append(_fail(node, "IDENTITY", str(e)))
            continue

        if identity.xname in owners:
            report.findings.append(
                _fail(node, "XNAME_DUPLICATE", f"xname {identity.xname} already derived for {owners[identity.xname]}")
            )
            continue
        owners[identity.xname] = node.common_name
        devices.append(
            ClassifiedDevice(node=node, identity=identity, role=role, management_ip=ips.get(node.common_name, ""))
        )

    classified = ClassifiedTopology(topology=topology, devices=devices, skipped=skipped)
    for device in classified.non_switches():
        cabled = classified.peer_switch(device, HMSType.MGMT_SWITCH)
        if cabled is None:
            continue
        _, peer_port, switch = cabled
        try:
            connector_xname(switch.xname, peer_port)
        except SemanticError as e:
            report.findings.append(_fail(device.node, "CONNECTOR_INVALID", f"{switch.name} port {peer_port}: {e}"))

    if report.failures:
        raise BatchValidationError(report.subject, report.failures, report.checked)
    logger.debug("Classified %d devices, skipped %d", len(devices), len(skipped))
    return classified
