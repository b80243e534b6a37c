"""Scan lifecycle: pending scans, background evaluation, terminal outcomes."""
