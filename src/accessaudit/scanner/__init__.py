"""Markup rule evaluation and scan metrics."""
