"""AccessAudit — automated accessibility assessment with a manual audit overlay."""

__version__ = "0.1.0"
