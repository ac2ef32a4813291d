"""Entity package: BookReview."""

from .entity import RATING_CHOICES, BookReview
from .repository import BookReviewRepository
from .table import BookReviewTable

__all__ = ["BookReview", "BookReviewRepository", "BookReviewTable", "RATING_CHOICES"]
