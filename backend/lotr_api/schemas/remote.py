"""Remote Schemas — The One API response wrapper, validated at the upstream boundary.

Invariants:
    - docs entries are passed through untouched (the remote shape is the public shape)
    - total defaults to len(docs) when the remote omits it
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class RemotePage(BaseModel):
    """{docs, total, limit, offset?, page?, pages?} as returned by The One API."""
    model_config = ConfigDict(extra="ignore")

    docs: list[dict[str, Any]] = []
    total: int | None = None
    limit: int | None = None
    offset: int | None = None
    page: int | None = None
    pages: int | None = None

    @model_validator(mode="after")
    def default_total(self):
        if self.total is None:
            self.total = len(self.docs)
        return self
