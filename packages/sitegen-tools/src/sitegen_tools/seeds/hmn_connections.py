"""
hmn_connections.json: one entry per non-switch device.

Devices cabled to a BMC leaf switch carry the switch xname, the connector
xname and the port; the rest keep empty destination fields.
"""

from __future__ import annotations

import logging

from sitegen_core.models.hardware import HMSType
from sitegen_core.models.seeds import HMNConnection
from sitegen_core.naming.alias import hmn_alias
from sitegen_core.naming.rules import connector_xname

from .classify import ClassifiedDevice, ClassifiedTopology

logger = logging.getLogger(__name__)


def _connection(classified: ClassifiedTopology, device: ClassifiedDevice) -> HMNConnection:
    location = device.node.location
    fields = {
        "source": hmn_alias(device.name),
        "source_xname": device.xname,
        "source_rack": location.rack if location else "",
        "source_location": location.elevation if location else "",
        "source_sub_location": (location.sub_location or "") if location else "",
        "source_parent": (location.parent or "") if location else "",
    }
    cabled = classified.peer_switch(device, HMSType.MGMT_SWITCH)
    if cabled is None:
        logger.debug("%s is not cabled to a BMC leaf switch", device.name)
        return HMNConnection(**fields)

    port, peer_port, switch = cabled
    peer_location = switch.node.location
    return HMNConnection(
        **fields,
        source_port=port,
        destination_xname=switch.xname,
        destination_connector=connector_xname(switch.xname, peer_port),
        destination_rack=peer_location.rack if peer_location else "",
        destination_location=peer_location.elevation if peer_location else "",
        destination_port=f"j{peer_port}",
    )


def build_hmn_connections(classified: ClassifiedTopology) -> list[HMNConnection]:
    return [_connection(classified, device) for device in classified.non_switches()]
