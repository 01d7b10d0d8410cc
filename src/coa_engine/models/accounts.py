"""Account model."""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from coa_engine.models.charts import INTERNAL_FIELDS
from coa_engine.models.tags import Tags


class Account(BaseModel):
    """A node in a chart's account hierarchy.

    Attributes:
        id: Identifier assigned on first save ("" while unsaved)
        number: Account code; children extend their parent's number
        name: Human-readable name
        tags: Classification and structural-role tags
        parent: Id of the parent account in the same chart ("" for roots)
        user: Owner reference
        as_of: Timestamp of the last save
        created: Timestamp of the first save, never changed afterwards
        removed: Reserved; the engine never deletes accounts
    """

    id: str = ""
    number: str = ""
    name: str = ""
    tags: Tags = Field(default_factory=Tags)
    parent: str = ""
    user: str = ""
    as_of: datetime | None = Field(default=None, alias="timestamp")
    created: datetime | None = None
    removed: datetime | None = None

    model_config = {"populate_by_name": True}

    @property
    def is_new(self) -> bool:
        return not self.id

    @property
    def is_root(self) -> bool:
        return not self.parent

    def to_wire(self) -> dict[str, Any]:
        """Dump using the public field names, without internal timestamps."""
        return self.model_dump(mode="json", by_alias=True, exclude=set(INTERNAL_FIELDS))

    def __str__(self) -> str:
        return f"{self.number} {self.name} [{', '.join(self.tags)}]"


def format_accounts(accounts: Iterable[Account]) -> str:
    """Render accounts as a single comma-separated line."""
    return ", ".join(str(a) for a in accounts)
