"""Service layer for archive handling and file management."""
