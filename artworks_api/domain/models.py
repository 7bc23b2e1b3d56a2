"""
Domain models for the Artworks API.

Defines the artwork record aligned with the `artworks` table, the column
orderings shared by every statement, and the save commands that select
between INSERT and UPDATE semantics.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Sequence, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from artworks_api.errors import InvalidAction

TABLE = "artworks"

# Columns a save may write, in statement parameter order.
DESCRIPTIVE_FIELDS: Tuple[str, ...] = (
    "rei",
    "ubi",
    "pro",
    "adq",
    "reg",
    "nom",
    "tit",
    "aut",
    "fec",
    "lug",
    "ico",
    "icc",
    "tip",
    "tec",
    "sop",
    "mat",
    "tin",
    "dim",
    "hue",
    "ins",
    "des",
    "est",
)

# Physical column order of the table, used by every SELECT.
COLUMNS: Tuple[str, ...] = ("id", "rei", "created_at") + DESCRIPTIVE_FIELDS[1:]


class Artwork(BaseModel):
    """
    Representation of a single row in the `artworks` table.

    Example
    -------
        Artwork(id=1, rei="#elle", created_at=1489140631,
                pro="Ayuntamiento de Mahón", ubi="Desconocido")
    """

    id: int = Field(0, description="Primary key, assigned by the store on insert.")
    rei: str = Field("", description="Registry reference.")
    created_at: int = Field(0, description="Creation time, seconds since epoch.")
    ubi: str = ""
    pro: str = ""
    adq: str = ""
    reg: str = ""
    nom: str = ""
    tit: str = Field("", description="Title.")
    aut: str = Field("", description="Author.")
    fec: str = ""
    lug: str = ""
    ico: str = ""
    icc: str = ""
    tip: str = ""
    tec: str = ""
    sop: str = ""
    mat: str = ""
    tin: str = ""
    dim: str = ""
    hue: str = ""
    ins: str = ""
    des: str = ""
    est: str = ""

    model_config = {
        "validate_assignment": True,
        "extra": "ignore",
    }

    @field_validator(*DESCRIPTIVE_FIELDS, mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("id", "created_at", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "Artwork":
        """
        Build an artwork from a row laid out as `COLUMNS`.

        Raises
        ------
        ValueError
            If the row has the wrong number of columns or a value has the
            wrong type (pydantic's ValidationError is a ValueError).
        """
        if len(row) != len(COLUMNS):
            raise ValueError(f"expected {len(COLUMNS)} columns, got {len(row)}")
        return cls.model_validate(dict(zip(COLUMNS, row)))

    def descriptive_values(self) -> Tuple[str, ...]:
        """Values of the descriptive columns in `DESCRIPTIVE_FIELDS` order."""
        return tuple(getattr(self, name) for name in DESCRIPTIVE_FIELDS)


class SaveAction(str, enum.Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"


@dataclass(frozen=True)
class Insert:
    """Persist a new artwork; the store assigns its id."""

    artwork: Artwork


@dataclass(frozen=True)
class Update:
    """Overwrite the descriptive columns of the row matching `artwork.id`."""

    artwork: Artwork


SaveCommand = Union[Insert, Update]


def save_command(action: Union[str, SaveAction], artwork: Artwork) -> SaveCommand:
    """
    Turn an action discriminator into a save command.

    Raises
    ------
    InvalidAction
        If `action` is neither INSERT nor UPDATE.
    """
    try:
        kind = SaveAction(action)
    except ValueError:
        raise InvalidAction(action) from None
    if kind is SaveAction.INSERT:
        return Insert(artwork)
    return Update(artwork)


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
