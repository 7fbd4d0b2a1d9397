from .config import SeedConfig
from .hardware import HardwareClass, HardwareInventoryRecord, HMSType
from .network import IPNetwork, IPReservation, Subnet
from .report import Finding, ValidationReport
from .seeds import ApplicationNodeConfig, HMNConnection, NcnMetadataRow, SwitchMetadataRow
from .switch import ManagementSwitch, ManagementSwitchBrand, ManagementSwitchType
from .topology import Location, Port, ShcdDocument, Topology, TopologyNode

__all__ = [
    "ApplicationNodeConfig",
    "Finding",
    "HardwareClass",
    "HardwareInventoryRecord",
    "HMNConnection",
    "HMSType",
    "IPNetwork",
    "IPReservation",
    "Location",
    "ManagementSwitch",
    "ManagementSwitchBrand",
    "ManagementSwitchType",
    "NcnMetadataRow",
    "Port",
    "SeedConfig",
    "ShcdDocument",
    "Subnet",
    "SwitchMetadataRow",
    "Topology",
    "TopologyNode",
    "ValidationReport",
]
