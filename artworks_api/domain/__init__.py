"""
Domain package for the Artworks API.

Exports the artwork record, its column layout and the save commands used by
the repositories and handlers. Keep this package focused on data definitions.
"""

from artworks_api.domain.models import (
    COLUMNS,
    DESCRIPTIVE_FIELDS,
    TABLE,
    Artwork,
    Insert,
    SaveAction,
    SaveCommand,
    Update,
    save_command,
)

__all__ = [
    "Artwork",
    "COLUMNS",
    "DESCRIPTIVE_FIELDS",
    "Insert",
    "SaveAction",
    "SaveCommand",
    "TABLE",
    "Update",
    "save_command",
]
