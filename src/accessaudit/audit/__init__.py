"""Audit sessions: per-criterion checklist seeded from scan findings."""
