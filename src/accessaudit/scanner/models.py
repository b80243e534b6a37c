"""Scanner data models — findings, evidence, and scan metrics."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class Severity(enum.Enum):
    """Finding severity level."""

    MINOR = "minor"
    MODERATE = "moderate"
    SERIOUS = "serious"
    CRITICAL = "critical"


@dataclass(frozen=True)
class Evidence:
    """One offending location inside the scanned markup."""

    snippet: str
    locator: str
    note: str

    def to_dict(self) -> dict[str, str]:
        return {"snippet": self.snippet, "locator": self.locator, "note": self.note}


@dataclass(frozen=True)
class Finding:
    """A single detected rule violation."""

    rule_id: str
    severity: Severity
    criterion_tags: tuple[str, ...]
    description: str
    remediation: str
    reference_url: str
    evidence: tuple[Evidence, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "criterion_tags": list(self.criterion_tags),
            "description": self.description,
            "remediation": self.remediation,
            "reference_url": self.reference_url,
            "evidence": [e.to_dict() for e in self.evidence],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Finding:
        return cls(
            rule_id=data["rule_id"],
            severity=Severity(data["severity"]),
            criterion_tags=tuple(data.get("criterion_tags", ())),
            description=data.get("description", ""),
            remediation=data.get("remediation", ""),
            reference_url=data.get("reference_url", ""),
            evidence=tuple(
                Evidence(
                    snippet=e.get("snippet", ""),
                    locator=e.get("locator", ""),
                    note=e.get("note", ""),
                )
                for e in data.get("evidence", ())
            ),
        )


@dataclass(frozen=True)
class ScanMetrics:
    """Heuristic scan metrics.

    ``compliance_score`` is an approximation derived from pattern matching,
    not a certified conformance percentage.
    """

    estimated_passed_checks: int
    elements_scanned: int
    compliance_score: int

    def to_dict(self) -> dict[str, int]:
        return {
            "estimated_passed_checks": self.estimated_passed_checks,
            "elements_scanned": self.elements_scanned,
            "compliance_score": self.compliance_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScanMetrics:
        return cls(
            estimated_passed_checks=int(data["estimated_passed_checks"]),
            elements_scanned=int(data["elements_scanned"]),
            compliance_score=int(data["compliance_score"]),
        )
