"""Review Schemas — Pydantic models with field-level validation for the review API.

Invariants:
    - ReviewCreate.user_name: 2-100 chars after stripping
    - ReviewCreate.rating / ReviewUpdate.rating: strict int in [1, 5] (no "5", no 4.5)
    - comment: <= 1000 chars after stripping (sanitized later, in the service)
    - ReviewUpdate requires rating or a non-empty comment
    - External casing is camelCase; Python attributes stay snake_case

Design Decisions:
    - StringConstraints(strip_whitespace=True) so length limits apply to the trimmed value
    - ReviewQuery is built by the route from Query(...) params and passed explicitly
"""

from typing import Annotated

from pydantic import (
    BaseModel, ConfigDict, Field, StringConstraints, model_validator,
)
from pydantic.alias_generators import to_camel

from lotr_api.core.domain_types import (
    MIN_RATING, MAX_RATING,
    USER_NAME_MIN_LENGTH, USER_NAME_MAX_LENGTH,
    COMMENT_MAX_LENGTH, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE,
)


class CamelModel(BaseModel):
    """Base model speaking camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


Rating = Annotated[int, Field(ge=MIN_RATING, le=MAX_RATING, strict=True)]
Comment = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=COMMENT_MAX_LENGTH),
]


class ReviewCreate(CamelModel):
    """Review creation payload."""
    movie_id: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    user_name: Annotated[
        str,
        StringConstraints(
            strip_whitespace=True,
            min_length=USER_NAME_MIN_LENGTH,
            max_length=USER_NAME_MAX_LENGTH,
        ),
    ]
    rating: Rating
    comment: Comment | None = None


class ReviewUpdate(CamelModel):
    """Partial update payload; at least one field must carry a value."""
    rating: Rating | None = None
    comment: Comment | None = None

    @property
    def has_changes(self) -> bool:
        return self.rating is not None or bool(self.comment)

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.has_changes:
            raise ValueError("At least one of rating or comment must be provided")
        return self


class ReviewQuery(CamelModel):
    """List filter + pagination."""
    movie_id: str | None = None
    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


class ReviewResponse(CamelModel):
    """Public-facing review; timestamps are ISO-8601 strings."""
    id: int
    movie_id: str
    user_name: str
    rating: int
    comment: str | None
    created_at: str
    updated_at: str
