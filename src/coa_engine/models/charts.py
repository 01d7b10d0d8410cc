"""Chart-of-accounts model."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# Internal bookkeeping fields kept in storage but not in the wire encoding.
INTERNAL_FIELDS = frozenset({"created", "removed"})


class ChartOfAccounts(BaseModel):
    """A named chart owning a tree of accounts.

    An empty id means the chart has not been saved yet.
    """

    id: str = ""
    name: str = ""
    retained_earnings_account: str = Field(default="", alias="retainedEarningsAccount")
    user: str = ""
    as_of: datetime | None = Field(default=None, alias="timestamp")
    created: datetime | None = None
    removed: datetime | None = None

    model_config = {"populate_by_name": True}

    @property
    def is_new(self) -> bool:
        return not self.id

    def to_wire(self) -> dict[str, Any]:
        """Dump using the public field names, without internal timestamps."""
        return self.model_dump(mode="json", by_alias=True, exclude=set(INTERNAL_FIELDS))
