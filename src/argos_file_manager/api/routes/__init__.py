"""Route handlers for the API."""

from argos_file_manager.api.routes import files, health

__all__ = [
    "files",
    "health",
]
