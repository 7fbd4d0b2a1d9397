"""
Exception hierarchy for sitegen.

Every error derives from ``ValueError`` so loaders and callers can keep
catching ``ValueError`` the way the loaders always have. The subclasses split
failures by stage:

    syntax      -> ShcdSyntaxError      (input is not well-formed JSON/YAML/CSV)
    schema      -> ShcdSchemaError      (well-formed, wrong shape)
    decode      -> ShcdDecodeError      (schema-valid, but a field has the wrong type)
    semantic    -> SemanticError and subclasses
    allocation  -> SubnetAllocationError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sitegen_core.models.report import Finding


class SitegenError(ValueError):
    """Base class for all sitegen errors."""


class ShcdSyntaxError(SitegenError):
    """The document could not be decoded in its declared encoding."""


class ShcdSchemaError(SitegenError):
    """The document is well-formed but violates the fixed schema."""

    def __init__(self, path: str, message: str, expected: str | None = None, given: str | None = None):
        self.path = path
        self.expected = expected
        self.given = given
        super().__init__(f"SHCD schema error: {path}: {message}")


class ShcdDecodeError(SitegenError):
    """A schema-valid document holds a value of the wrong type for a field."""


class SemanticError(SitegenError):
    """Input is well-formed and shape-valid but violates a domain rule."""


class UnknownSwitchTypeError(SemanticError):
    def __init__(self, value: object):
        self.value = value
        shown = "<empty>" if value in (None, "") else str(value)
        super().__init__(f"unknown management switch type: {shown}")


class UnknownArchitectureError(SemanticError):
    def __init__(self, architecture: str, cabinet: str | None = None):
        self.architecture = architecture
        self.cabinet = cabinet
        where = f" in cabinet {cabinet}" if cabinet else ""
        super().__init__(f"no xname rule for architecture {architecture!r}{where}")


class InvalidXnameError(SemanticError):
    """An identifier does not match the pattern its effective class requires."""


class InvalidLocationError(SemanticError):
    """A device location cannot be turned into an identifier."""


class UnresolvedPeerError(SemanticError):
    """A port points at a device that is not part of the diagram."""


class DuplicateNameError(SemanticError):
    """Two devices in one diagram share a common name."""


class DuplicateAliasError(SemanticError):
    """An alias was handed out to more than one device."""


class CrossReferenceError(SemanticError):
    """An artifact references an identifier another artifact does not define."""


class BatchValidationError(SemanticError):
    """Aggregate failure raised once after every item of a batch was checked."""

    def __init__(self, subject: str, findings: list[Finding], total: int):
        self.subject = subject
        self.findings = findings
        self.total = total
        lines = [f"{len(findings)} of {total} {subject} failed validation:"]
        lines.extend(f"  - {f.message}" for f in findings)
        super().__init__("\n".join(lines))


class SubnetAllocationError(SitegenError):
    """No disjoint block of the requested size is left in the parent network."""
