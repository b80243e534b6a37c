"""SQLite persistence for scans and audit sessions."""
