"""Data access for book reviews."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from src.bookshelf.entities.service.book_review.entity import BookReview
from src.bookshelf.entities.service.book_review.table import BookReviewTable

_COLUMNS = {"id", "content", "rating", "book_id", "created_at", "updated_at"}


def review_from_row(row: BookReviewTable) -> BookReview:
    """Build a persisted ``BookReview`` entity from its table row."""
    review = BookReview.model_validate(row, from_attributes=True)
    review.mark_persisted()
    return review


class BookReviewRepository:
    """Data-access layer for book reviews."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def save(self, review: BookReview) -> bool:
        """Validate and write ``review``.

        Returns False without touching the database when the review, or the
        unsaved book it points to, is invalid. An unsaved book is written first.
        """
        if not review.is_valid():
            logger.info(
                "Book review {} not saved: {}", review.id, review.errors.full_messages()
            )
            return False

        book = review.book
        if book is not None and not book.is_persisted:
            from src.bookshelf.entities.service.book.repository import BookRepository

            if not BookRepository(self._session).save(book):
                review.errors.add("book", "is invalid")
                logger.info("Book review {} not saved: book is invalid", review.id)
                return False
            review.book_id = book.id

        row = self._session.get(BookReviewTable, review.id)
        with self._write():
            if row is None:
                row = BookReviewTable(**review.model_dump(include=_COLUMNS))
                self._session.add(row)
                action = "Created"
            else:
                review.updated_at = datetime.now(UTC)
                row.sqlmodel_update(
                    review.model_dump(
                        include={"content", "rating", "book_id", "updated_at"}
                    )
                )
                action = "Updated"

        review.mark_persisted()
        logger.debug("{} book review {} for book {}", action, review.id, review.book_id)
        return True

    def create(self, review: BookReview) -> BookReview:
        """Save ``review`` and return it; check ``is_persisted`` or ``errors``."""
        self.save(review)
        return review

    def get(self, review_id: str) -> BookReview | None:
        row = self._session.get(BookReviewTable, review_id)
        if row is None:
            return None
        return review_from_row(row)

    def update(self, review: BookReview) -> BookReview:
        if self._session.get(BookReviewTable, review.id) is None:
            raise ValueError(f"Book review with id {review.id} not found")
        self.save(review)
        return review

    def delete(self, review_id: str) -> bool:
        row = self._session.get(BookReviewTable, review_id)
        if row is None:
            return False
        with self._write():
            self._session.delete(row)
        logger.debug("Deleted book review {}", review_id)
        return True

    def destroy(self, review: BookReview) -> bool:
        """Delete ``review`` and detach it from its book."""
        deleted = self.delete(review.id)
        if deleted:
            review.mark_persisted(False)
            review.book = None
        return deleted

    def list_all(self) -> list[BookReview]:
        statement = select(BookReviewTable).order_by(BookReviewTable.created_at)
        return [review_from_row(row) for row in self._session.exec(statement)]

    def list_for_book(self, book_id: str) -> list[BookReview]:
        statement = (
            select(BookReviewTable)
            .where(BookReviewTable.book_id == book_id)
            .order_by(BookReviewTable.created_at)
        )
        return [review_from_row(row) for row in self._session.exec(statement)]

    def count(self) -> int:
        statement = select(func.count()).select_from(BookReviewTable)
        return self._session.exec(statement).one()

    @contextmanager
    def _write(self) -> Iterator[None]:
        """Flush the enclosed changes inside a savepoint.

        A failed write rolls back to the savepoint only, so earlier work in the
        caller's transaction stays intact.
        """
        try:
            with self._session.begin_nested():
                yield
                self._session.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Book review write failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise
