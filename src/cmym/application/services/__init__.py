"""Application services for review sessions."""

from .review_service import ReviewRequest, ReviewService, ReviewSummary
from .session import ReviewSession, SessionOutcome

__all__ = [
    "ReviewRequest",
    "ReviewService",
    "ReviewSession",
    "ReviewSummary",
    "SessionOutcome",
]
