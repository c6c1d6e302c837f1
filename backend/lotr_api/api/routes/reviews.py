"""Review Routes — CRUD endpoints for user reviews.

Invariants:
    - Bodies and query params are validated by Pydantic before the service is called
    - Validated values are passed explicitly into ReviewService (no request-state stash)
    - Mutating endpoints carry the strict rate limit on top of the general one
    - Non-integer ids are rejected with 400 by path-param validation
"""

from fastapi import APIRouter, Depends, Query, Request, status

from lotr_api.api.dependencies import get_review_service
from lotr_api.core.domain_types import (
    DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, ReviewId,
)
from lotr_api.core.errors import not_found_error
from lotr_api.infrastructure.rate_limit import STRICT_LIMIT, limiter
from lotr_api.schemas.common import (
    DataResponse, MessageResponse, PaginatedResponse,
)
from lotr_api.schemas.review import (
    ReviewCreate, ReviewQuery, ReviewResponse, ReviewUpdate,
)
from lotr_api.services.review_service import ReviewService

router = APIRouter(prefix="/api/v1/reviews", tags=["reviews"])


@router.post(
    "", response_model=DataResponse[ReviewResponse],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(STRICT_LIMIT, override_defaults=False)
async def create_review(
    request: Request,
    body: ReviewCreate,
    service: ReviewService = Depends(get_review_service),
):
    """Create a review. The comment is stripped of markup before storage."""
    review = await service.create_review(body)
    return DataResponse[ReviewResponse](data=review)


@router.get("", response_model=PaginatedResponse[ReviewResponse])
async def list_reviews(
    movie_id: str | None = Query(None, alias="movieId"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    service: ReviewService = Depends(get_review_service),
):
    """List reviews, newest first, optionally filtered by movie."""
    return await service.get_reviews(
        ReviewQuery(movie_id=movie_id, page=page, limit=limit),
    )


@router.get("/{review_id}", response_model=DataResponse[ReviewResponse])
async def get_review(
    review_id: int,
    service: ReviewService = Depends(get_review_service),
):
    review = await service.get_review_by_id(ReviewId(review_id))
    return DataResponse[ReviewResponse](data=review)


@router.patch("/{review_id}", response_model=DataResponse[ReviewResponse])
@limiter.limit(STRICT_LIMIT, override_defaults=False)
async def update_review(
    request: Request,
    review_id: int,
    body: ReviewUpdate,
    service: ReviewService = Depends(get_review_service),
):
    """Update rating and/or comment; at least one is required."""
    review = await service.update_review(
        ReviewId(review_id), rating=body.rating, comment=body.comment,
    )
    return DataResponse[ReviewResponse](data=review)


@router.delete("/{review_id}", response_model=MessageResponse)
@limiter.limit(STRICT_LIMIT, override_defaults=False)
async def delete_review(
    request: Request,
    review_id: int,
    service: ReviewService = Depends(get_review_service),
):
    removed = await service.delete_review(ReviewId(review_id))
    if not removed:
        raise not_found_error("Review", review_id)
    return MessageResponse(message="Review deleted successfully")
