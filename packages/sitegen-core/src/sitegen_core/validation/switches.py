"""
Batch validation of management switches.

Every switch is checked; failures are collected into a ValidationReport and
raised once as a BatchValidationError after the whole batch has been seen.
"""

from __future__ import annotations

import logging
from typing import Iterable

from sitegen_core.errors import BatchValidationError, SemanticError
from sitegen_core.models.report import Finding, ValidationReport
from sitegen_core.models.switch import ManagementSwitch, ManagementSwitchType
from sitegen_core.naming import xname as xn
from sitegen_core.naming.rules import effective_class

logger = logging.getLogger(__name__)


def _fail(switch: ManagementSwitch, code: str, message: str) -> Finding:
    return Finding(
        severity="FAIL",
        code=code,
        message=f"{switch.name} ({switch.xname or '<no xname>'}): {message}",
        subject=switch.name,
        context={"name": switch.name, "xname": switch.xname, "switch_type": str(switch.switch_type)},
    )


def check_switch(switch: ManagementSwitch) -> list[Finding]:
    """Findings for one switch; empty when it is valid."""
    if not isinstance(switch.switch_type, ManagementSwitchType):
        shown = switch.switch_type or "<empty>"
        return [_fail(switch, "SWITCH_TYPE_UNKNOWN", f"unknown management switch type: {shown}")]

    xname = xn.normalize(switch.xname)
    actual = xn.hms_type(xname)
    if actual is None:
        return [_fail(switch, "XNAME_INVALID", f"invalid xname {switch.xname!r}")]

    try:
        expected = effective_class(switch.switch_type, xname).hms_type
    except SemanticError as e:
        return [_fail(switch, "XNAME_CLASS", str(e))]

    if actual != expected:
        return [
            _fail(
                switch,
                "XNAME_CLASS",
                f"xname is a {actual} but a {switch.switch_type} switch here must be a {expected}",
            )
        ]
    return []


def validate_switches(switches: Iterable[ManagementSwitch], *, raise_on_failure: bool = True) -> ValidationReport:
    """Check every switch, then fail once with all findings.

    Raises:
        BatchValidationError: if any switch failed and ``raise_on_failure`` is set.
    """
    switches = list(switches)
    report = ValidationReport(subject="management switches", checked=len(switches))
    names: dict[str, str] = {}
    for switch in switches:
        report.findings.extend(check_switch(switch))
        if switch.name in names:
            report.findings.append(
                _fail(switch, "SWITCH_NAME_DUPLICATE", f"name already used by {names[switch.name]}")
            )
        names.setdefault(switch.name, switch.xname)

    failures = report.failures
    logger.debug("Validated %d switches: %d failures", len(switches), len(failures))
    if failures and raise_on_failure:
        raise BatchValidationError(report.subject, failures, report.checked)
    return report
