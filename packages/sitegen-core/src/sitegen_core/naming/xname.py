"""
Xname syntax: typing, normalisation and parent derivation.

An xname is a string of letter+number tokens (``x3000c0h12s1``). Every
supported component type has one anchored pattern; the type of an xname
is the pattern it matches.
"""

from __future__ import annotations

import re

from sitegen_core.errors import InvalidXnameError
from sitegen_core.models.hardware import HMSType

_CAB = r"x([0-9]{1,4})"
_CHASSIS = _CAB + r"c([0-7])"
_SLOT = _CHASSIS + r"s([0-9]+)"

XNAME_PATTERNS: dict[HMSType, re.Pattern[str]] = {
    HMSType.CDU: re.compile(r"^d([0-9]+)$"),
    HMSType.CDU_MGMT_SWITCH: re.compile(r"^d([0-9]+)w([0-9]+)$"),
    HMSType.CABINET: re.compile(rf"^{_CAB}$"),
    HMSType.CABINET_PDU_CONTROLLER: re.compile(rf"^{_CAB}m([0-3])$"),
    HMSType.CHASSIS: re.compile(rf"^{_CHASSIS}$"),
    HMSType.COMPUTE_MODULE: re.compile(rf"^{_SLOT}$"),
    HMSType.NODE_BMC: re.compile(rf"^{_SLOT}b([0-9]+)$"),
    HMSType.NODE: re.compile(rf"^{_SLOT}b([0-9]+)n([0-9]+)$"),
    HMSType.MGMT_SWITCH: re.compile(rf"^{_CHASSIS}w([1-9][0-9]*)$"),
    HMSType.MGMT_SWITCH_CONNECTOR: re.compile(rf"^{_CHASSIS}w([1-9][0-9]*)j([1-9][0-9]*)$"),
    HMSType.MGMT_HL_SWITCH_ENCLOSURE: re.compile(rf"^{_CHASSIS}h([1-9][0-9]*)$"),
    HMSType.MGMT_HL_SWITCH: re.compile(rf"^{_CHASSIS}h([1-9][0-9]*)s([1-9])$"),
}

_TOKEN = re.compile(r"([a-z]+)([0-9]+)")
_LAST_TOKEN = re.compile(r"[a-z]+[0-9]+$")


def normalize(xname: str) -> str:
    """Lower-case, trim and strip leading zeros from every numeric token.

    >>> normalize(" X03000c0w014 ")
    'x3000c0w14'
    """
    return _TOKEN.sub(lambda m: f"{m.group(1)}{int(m.group(2))}", xname.strip().lower())


def hms_type(xname: str) -> HMSType | None:
    """Component type of a (normalised) xname, or None if it matches no pattern."""
    for kind, pattern in XNAME_PATTERNS.items():
        if pattern.match(xname):
            return kind
    return None


def is_valid(xname: str) -> bool:
    return hms_type(xname) is not None


def parent(xname: str) -> str:
    """Drop the final token: ``x3000c0w14`` -> ``x3000c0``, ``d0w1`` -> ``d0``."""
    head = _LAST_TOKEN.sub("", xname)
    if not head:
        raise InvalidXnameError(f"xname {xname!r} has no parent")
    return head


def require(xname: str, *allowed: HMSType) -> HMSType:
    """Return the type of ``xname`` if it is one of ``allowed``; raise otherwise."""
    kind = hms_type(xname)
    if kind is None:
        raise InvalidXnameError(f"invalid xname: {xname!r}")
    if allowed and kind not in allowed:
        want = " or ".join(str(a) for a in allowed)
        raise InvalidXnameError(f"xname {xname} is a {kind}, expected {want}")
    return kind
