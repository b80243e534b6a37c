"""Exception taxonomy shared by the scan and audit managers."""

from __future__ import annotations


class AccessAuditError(Exception):
    """Base class for all AccessAudit errors."""


class InvalidInputError(AccessAuditError, ValueError):
    """A caller supplied an invalid target, level, or status."""


class NotFoundError(AccessAuditError, LookupError):
    """An operation addressed an identifier that does not exist."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class ScanNotReadyError(AccessAuditError):
    """An audit was requested for a scan that is not completed."""


class AcquisitionError(AccessAuditError):
    """Page markup could not be fetched (unreachable, timeout, non-text)."""
