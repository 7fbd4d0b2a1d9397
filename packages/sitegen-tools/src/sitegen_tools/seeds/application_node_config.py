"""
application_node_config.yaml: which name prefixes are application nodes,
their HSM subroles, and the aliases of every application node.
"""

from __future__ import annotations

import logging
from typing import Mapping

import yaml

from sitegen_core.errors import BatchValidationError, DuplicateAliasError
from sitegen_core.models.hardware import HMSType
from sitegen_core.models.report import Finding
from sitegen_core.models.seeds import ApplicationNodeConfig
from sitegen_core.naming import xname as xn
from sitegen_core.naming.roles import SUBROLE_PLACEHOLDER, application_prefix, merged_subroles, node_role

from .classify import ClassifiedTopology

logger = logging.getLogger(__name__)


def build_application_node_config(
    classified: ClassifiedTopology, prefix_subroles: Mapping[str, str] | None = None
) -> ApplicationNodeConfig:
    """Collect application nodes; only user prefixes that matched a node are listed."""
    user = {p.strip().lower(): s for p, s in (prefix_subroles or {}).items()}
    subroles = merged_subroles(user)
    used: set[str] = set()
    aliases: dict[str, list[str]] = {}

    for device in classified.servers():
        role = node_role(device.name, subroles)
        if role is None or role.role != "Application":
            continue
        prefix = application_prefix(device.name, subroles)
        if prefix in user:
            used.add(prefix)
        aliases[device.xname] = [device.name]

    prefixes = sorted(used)
    config = ApplicationNodeConfig(
        prefixes=prefixes,
        prefix_hsm_subroles={p: user[p] for p in prefixes},
        aliases=dict(sorted(aliases.items())),
    )
    validate_application_node_config(config)
    return config


def validate_application_node_config(config: ApplicationNodeConfig) -> None:
    """Check alias keys, alias uniqueness and unresolved subroles.

    Raises:
        DuplicateAliasError: two xnames share an alias.
        BatchValidationError: any other problem, all of them reported together.
    """
    findings: list[Finding] = []
    owners: dict[str, str] = {}
    for xname, names in config.aliases.items():
        kind = xn.hms_type(xname)
        if kind is None:
            findings.append(
                Finding(severity="FAIL", code="ALIAS_XNAME", message=f"invalid xname used as alias key: {xname}", subject=xname)
            )
        elif kind != HMSType.NODE:
            findings.append(
                Finding(
                    severity="FAIL", code="ALIAS_XNAME", message=f"alias key {xname} is a {kind}, not a Node", subject=xname
                )
            )
        for name in names:
            if name in owners:
                raise DuplicateAliasError(f"found duplicate application node alias: {name} for xnames {owners[name]} {xname}")
            owners[name] = xname

    placeholders = sorted(p for p, s in config.prefix_hsm_subroles.items() if s == SUBROLE_PLACEHOLDER)
    for prefix in placeholders:
        findings.append(
            Finding(
                severity="FAIL",
                code="SUBROLE_PLACEHOLDER",
                subject=prefix,
                message=f"prefix {prefix!r} has no subrole mapping; replace {SUBROLE_PLACEHOLDER} with a valid subrole",
            )
        )
    if findings:
        raise BatchValidationError("application node entries", findings, len(config.aliases) + len(config.prefixes))


def render_application_node_config(config: ApplicationNodeConfig) -> str:
    """YAML text with the explanatory comments installers expect."""

    def block(data) -> str:
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=True)

    parts = [
        "---",
        "# Additional application node prefixes to match in the hmn_connections.json file",
        block({"prefixes": config.prefixes}).rstrip(),
        "",
        "# Additional HSM SubRoles",
        block({"prefix_hsm_subroles": config.prefix_hsm_subroles}).rstrip(),
        "",
        "# Application Node aliases",
        block({"aliases": config.aliases}).rstrip(),
        "",
    ]
    return "\n".join(parts)
