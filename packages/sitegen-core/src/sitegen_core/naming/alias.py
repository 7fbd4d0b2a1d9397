"""
Short HMN source names for diagram devices.

A closed, ordered table of (pattern, formatter) pairs. The first pattern
that matches wins; a name no pattern matches is its own alias. Numeric
suffixes lose their leading zeros down to two digits; wider numbers are
kept whole (cn1005 -> cn1005).

    ncn-m001       -> mn01
    cn005          -> cn05
    pdu-x3000-001  -> x3000p1
    sw-leaf-bmc-001 -> sw-leaf-bmc01
"""

import re
from typing import Callable

AliasRule = tuple[re.Pattern[str], Callable[[re.Match[str]], str]]

ALIAS_RULES: tuple[AliasRule, ...] = (
    (re.compile(r"^ncn-([mws])(\d+)$"), lambda m: f"{m.group(1)}n{int(m.group(2)):02d}"),
    (re.compile(r"^pdu-(x\d+)-(\d+)$"), lambda m: f"{m.group(1)}p{int(m.group(2))}"),
    (re.compile(r"^sw-([a-z0-9-]+?)-(\d+)$"), lambda m: f"sw-{m.group(1)}{int(m.group(2)):02d}"),
    (re.compile(r"^([a-z]+)(\d+)$"), lambda m: f"{m.group(1)}{int(m.group(2)):02d}"),
)


def hmn_alias(common_name: str) -> str:
    name = common_name.strip().lower()
    for pattern, render in ALIAS_RULES:
        match = pattern.match(name)
        if match:
            return render(match)
    return common_name
