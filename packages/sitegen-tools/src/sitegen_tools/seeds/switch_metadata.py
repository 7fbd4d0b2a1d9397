"""switch_metadata.csv: one row per inventory-worthy management switch."""

from __future__ import annotations

import logging

from sitegen_core.inventory.switches import convert_management_switches
from sitegen_core.models.config import SeedConfig
from sitegen_core.models.hardware import HardwareInventoryRecord
from sitegen_core.models.seeds import SwitchMetadataRow
from sitegen_core.models.switch import ManagementSwitch, ManagementSwitchType
from sitegen_core.naming.roles import switch_from_node
from sitegen_core.validation.switches import validate_switches

from .classify import ClassifiedTopology

logger = logging.getLogger(__name__)

SWITCH_METADATA_HEADER = [
    "Switch Xname",
    "Type",
    "Brand",
    "Model",
    "Name",
    "Management IP",
    "Parent Xname",
    "HMS Type",
]


def management_switches(classified: ClassifiedTopology) -> list[ManagementSwitch]:
    """Switches that belong in the inventory, in diagram order. Edge routers are left out."""
    switches = []
    for device in classified.switches():
        if device.role is ManagementSwitchType.EDGE:
            logger.warning("Skipping edge switch %s from the switch inventory", device.name)
            continue
        switch = switch_from_node(device.node, device.xname, device.role)
        if device.management_ip:
            switch = ManagementSwitch.model_validate(
                {**switch.model_dump(), "management_interface": device.management_ip}
            )
        switches.append(switch)
    return switches


def _inventory(
    classified: ClassifiedTopology, config: SeedConfig | None
) -> tuple[list[ManagementSwitch], list[HardwareInventoryRecord]]:
    switches = management_switches(classified)
    validate_switches(switches)
    return switches, convert_management_switches(switches, config=config)


def switch_inventory(classified: ClassifiedTopology, config: SeedConfig | None = None) -> list[HardwareInventoryRecord]:
    """Validate the batch, then convert it to inventory records."""
    return _inventory(classified, config)[1]


def build_switch_metadata(
    classified: ClassifiedTopology, config: SeedConfig | None = None
) -> list[SwitchMetadataRow]:
    switches, records = _inventory(classified, config)
    return [
        SwitchMetadataRow(
            xname=record.xname,
            type=str(record.declared_type),
            brand=str(switch.brand or ""),
            model=switch.model,
            name=switch.name,
            management_ip=str(switch.management_interface or ""),
            parent=record.parent,
            hms_type=record.type_string,
        )
        for switch, record in zip(switches, records)
    ]
