from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["FAIL", "WARN", "INFO"]


class Finding(BaseModel):
    """One problem found while checking a device, switch or artifact entry."""

    model_config = ConfigDict(extra="ignore", frozen=True)
    severity: Severity
    code: str
    message: str
    # device name or xname the finding is about, when there is one
    subject: str = ""
    context: dict = Field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.severity}] {self.code}: {self.message}"


class ValidationReport(BaseModel):
    """Findings collected over a whole batch before anything is raised."""

    model_config = ConfigDict(extra="ignore")
    subject: str
    checked: int = 0
    findings: list[Finding] = Field(default_factory=list)

    @property
    def failures(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == "FAIL"]

    @property
    def summary(self) -> dict[str, int]:
        counts = {"fail": 0, "warn": 0, "info": 0, "checked": self.checked}
        for finding in self.findings:
            counts[finding.severity.lower()] += 1
        return counts
