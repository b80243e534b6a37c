"""FastAPI web API for scans and audit sessions."""
