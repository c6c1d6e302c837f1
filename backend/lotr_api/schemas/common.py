"""Common Schemas — success envelopes and pagination metadata shared by every resource.

Invariants:
    - Every success body carries success=True
    - PaginationMeta.pages == ceil(total / limit) unless the remote source says otherwise
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginationMeta(BaseModel):
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    pages: int = Field(ge=0)


class PaginatedResponse(BaseModel, Generic[T]):
    """{success, data[], pagination} envelope."""
    success: bool = True
    data: list[T]
    pagination: PaginationMeta


class DataResponse(BaseModel, Generic[T]):
    """{success, data} envelope."""
    success: bool = True
    data: T


class MessageResponse(BaseModel):
    success: bool = True
    message: str
