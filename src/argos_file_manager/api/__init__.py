"""HTTP API for the file manager."""
