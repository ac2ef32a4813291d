"""Entity: Book."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field, PrivateAttr

from src.bookshelf.entities.core._base import Entity
from src.bookshelf.entities.core.validation import PresenceValidator, Validator

if TYPE_CHECKING:
    from src.bookshelf.entities.service.book_review.entity import BookReview


class Book(Entity):
    """A book that owns its reviews.

    ``book_reviews`` is the in-memory side of the one-to-many association. It
    is maintained from the review side: assigning ``review.book`` (or calling
    ``add_review``) moves the review into this collection and out of any
    other book's.
    """

    title: Any = Field(default=None, description="Title")
    author: Any = Field(default=None, description="Author")

    _book_reviews: list[BookReview] = PrivateAttr(default_factory=list)

    def validators(self) -> list[Validator]:
        return [PresenceValidator("title"), PresenceValidator("author")]

    @property
    def book_reviews(self) -> list[BookReview]:
        return list(self._book_reviews)

    def add_review(self, review: BookReview) -> BookReview:
        """Attach ``review`` to this book and return it."""
        review.book = self
        return review

    def _adopt_review(self, review: BookReview) -> None:
        if not any(existing is review for existing in self._book_reviews):
            self._book_reviews.append(review)

    def _release_review(self, review: BookReview) -> None:
        self._book_reviews = [
            existing for existing in self._book_reviews if existing is not review
        ]

    def __eq__(self, other: Any) -> bool:
        """Compare books by business attributes, ignoring timestamps."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
        )

    def __hash__(self) -> int:
        """Hash on the identifier, which stays fixed while attributes change."""
        return hash(self.id)
