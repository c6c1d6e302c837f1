"""Domain Types — rich types and bounds shared across the review domain.

Invariants:
    - ReviewId wraps int (store-assigned, never reused); MovieId wraps str (opaque)
    - Rating is bounded MIN_RATING..MAX_RATING inclusive
    - All valid states encoded as Enums, never raw strings

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ReviewId = NewType("ReviewId", int)
MovieId = NewType("MovieId", str)
CharacterId = NewType("CharacterId", str)

# Largest id the reviews.id column (INTEGER / int4) can hold
MAX_REVIEW_ID = 2**31 - 1


# ─── Bounds ──────────────────────────────────────────────────────

MIN_RATING = 1
MAX_RATING = 5
USER_NAME_MIN_LENGTH = 2
USER_NAME_MAX_LENGTH = 100
COMMENT_MAX_LENGTH = 1000
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


# ─── Enums ───────────────────────────────────────────────────────

class Environment(str, Enum):
    """Deployment environment; production switches logs to JSON."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


class RemoteResource(str, Enum):
    """Remote collections proxied from The One API. Value is the URL segment."""
    MOVIE = "movie"
    CHARACTER = "character"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def id_field(self) -> str:
        """Details key used when reporting a by-id lookup failure."""
        return f"{self.value}Id"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
