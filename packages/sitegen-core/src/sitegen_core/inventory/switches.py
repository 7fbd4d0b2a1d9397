"""
Convert classified management switches into hardware inventory records.
"""

from __future__ import annotations

import logging
from typing import Iterable

from sitegen_core.codebase.debug import spy_trace
from sitegen_core.errors import DuplicateAliasError, UnknownSwitchTypeError
from sitegen_core.models.config import SeedConfig
from sitegen_core.models.hardware import (
    CDUMgmtSwitchProperties,
    HardwareInventoryRecord,
    HMSType,
    MgmtHLSwitchProperties,
    MgmtSwitchProperties,
)
from sitegen_core.models.switch import ManagementSwitch, ManagementSwitchType
from sitegen_core.naming import xname as xn
from sitegen_core.naming.rules import effective_class

logger = logging.getLogger(__name__)


def _declared(switch: ManagementSwitch) -> ManagementSwitchType:
    if not isinstance(switch.switch_type, ManagementSwitchType):
        raise UnknownSwitchTypeError(switch.switch_type)
    if switch.switch_type is ManagementSwitchType.EDGE:
        # edge routers have no inventory record shape
        raise UnknownSwitchTypeError(switch.switch_type)
    return switch.switch_type


def _ip(switch: ManagementSwitch) -> str:
    return str(switch.management_interface) if switch.management_interface is not None else ""


def _brand(switch: ManagementSwitch) -> str:
    return str(switch.brand) if switch.brand is not None else ""


@spy_trace
def convert_management_switch(
    switch: ManagementSwitch,
    *,
    assigned_aliases: set[str] | None = None,
    config: SeedConfig | None = None,
) -> HardwareInventoryRecord:
    """Build the inventory record for one switch.

    ``assigned_aliases`` is the caller's running set of aliases already handed
    out in this batch; the switch's name is added to it.

    Raises:
        UnknownSwitchTypeError: declared type empty or not a known role.
        DuplicateAliasError: the switch name was already assigned in this batch.
    """
    config = config or SeedConfig()
    declared = _declared(switch)
    xname = xn.normalize(switch.xname)
    effective = effective_class(declared, xname)

    if assigned_aliases is not None:
        if switch.name in assigned_aliases:
            raise DuplicateAliasError(f"alias {switch.name} is already assigned to another device")
        assigned_aliases.add(switch.name)
    aliases = [switch.name]

    if effective.hms_type == HMSType.MGMT_SWITCH:
        secret = config.credential_template.format(xname=xname)
        payload = MgmtSwitchProperties(
            ip4_addr=_ip(switch),
            brand=_brand(switch),
            model=switch.model,
            snmp_auth_password=secret,
            snmp_priv_password=secret,
            snmp_username=config.snmp_username,
            aliases=aliases,
        )
    elif effective.hms_type == HMSType.MGMT_HL_SWITCH:
        payload = MgmtHLSwitchProperties(
            ip4_addr=_ip(switch), brand=_brand(switch), model=switch.model, aliases=aliases
        )
    else:
        payload = CDUMgmtSwitchProperties(brand=_brand(switch), model=switch.model, aliases=aliases)

    if effective.hms_type == HMSType.MGMT_HL_SWITCH and declared is ManagementSwitchType.CDU:
        logger.debug("%s: CDU switch in River cabinet inventoried as %s", switch.name, effective.hms_type)

    return HardwareInventoryRecord(
        parent=effective.parent,
        xname=xname,
        type=effective.hms_type.type_code,
        type_string=effective.hms_type,
        hardware_class=effective.hardware_class,
        extra_properties=payload,
        declared_type=declared,
    )


def convert_management_switches(
    switches: Iterable[ManagementSwitch],
    *,
    config: SeedConfig | None = None,
) -> list[HardwareInventoryRecord]:
    """Convert a validated batch, sharing one alias set across it."""
    assigned: set[str] = set()
    return [convert_management_switch(s, assigned_aliases=assigned, config=config) for s in switches]
