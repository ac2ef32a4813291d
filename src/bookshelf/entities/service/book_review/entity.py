"""Entity: BookReview."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field, PrivateAttr

from src.bookshelf.entities.core._base import Entity
from src.bookshelf.entities.core.validation import (
    AssociationValidator,
    InclusionValidator,
    PresenceValidator,
    Validator,
)
from src.bookshelf.runtime.context import get_config

if TYPE_CHECKING:
    from src.bookshelf.entities.service.book.entity import Book

RATING_CHOICES = (1, 2, 3, 4, 5)


class BookReview(Entity):
    """A review of a single book.

    Content and rating are only checked when ``is_valid()`` is called, so a
    review can be built or mutated into any state first. Whether a review
    without a book is valid is controlled by
    ``validation.require_review_book`` in the configuration.
    """

    # Left untyped so construction stores values as given and is_valid() judges them
    content: Any = Field(default=None, description="Review text")
    rating: Any = Field(default=None, description="Rating from 1 to 5")
    book_id: str | None = Field(default=None, description="Identifier of the reviewed book")

    _book: Book | None = PrivateAttr(default=None)

    def __init__(self, book: Book | None = None, **data: Any) -> None:
        super().__init__(**data)
        if book is not None:
            self.book = book

    def validators(self) -> list[Validator]:
        validators: list[Validator] = [
            PresenceValidator("content"),
            PresenceValidator("rating"),
            InclusionValidator("rating", RATING_CHOICES),
        ]
        if get_config().validation.require_review_book:
            validators.append(AssociationValidator("book"))
        return validators

    @property
    def book(self) -> Book | None:
        return self._book

    @book.setter
    def book(self, book: Book | None) -> None:
        previous = self._book
        if previous is book:
            return
        if previous is not None:
            previous._release_review(self)
        self._book = book
        self.book_id = book.id if book is not None else None
        if book is not None:
            book._adopt_review(self)

    def __eq__(self, other: Any) -> bool:
        """Compare reviews by business attributes, ignoring timestamps."""
        if not isinstance(other, BookReview):
            return False

        return (
            self.id == other.id
            and self.content == other.content
            and self.rating == other.rating
            and self.book_id == other.book_id
        )

    def __hash__(self) -> int:
        """Hash on the identifier, which stays fixed while attributes change."""
        return hash(self.id)
