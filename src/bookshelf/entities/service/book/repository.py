"""Data access for books."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from src.bookshelf.entities.service.book.entity import Book
from src.bookshelf.entities.service.book.table import BookTable
from src.bookshelf.entities.service.book_review.repository import review_from_row
from src.bookshelf.entities.service.book_review.table import BookReviewTable

_COLUMNS = {"id", "title", "author", "created_at", "updated_at"}


class BookRepository:
    """Data-access layer for books.

    Books are returned with their reviews loaded, each review pointing back at
    the returned book. Deleting a book deletes its reviews.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def save(self, book: Book) -> bool:
        """Validate and write ``book``; returns False when it is invalid."""
        if not book.is_valid():
            logger.info("Book {} not saved: {}", book.id, book.errors.full_messages())
            return False

        row = self._session.get(BookTable, book.id)
        with self._write():
            if row is None:
                row = BookTable(**book.model_dump(include=_COLUMNS))
                self._session.add(row)
                action = "Created"
            else:
                book.updated_at = datetime.now(UTC)
                row.sqlmodel_update(
                    book.model_dump(include={"title", "author", "updated_at"})
                )
                action = "Updated"

        book.mark_persisted()
        logger.debug("{} book {} ({!r})", action, book.id, book.title)
        return True

    def create(self, book: Book) -> Book:
        """Save ``book`` and return it; check ``is_persisted`` or ``errors``."""
        self.save(book)
        return book

    def get(self, book_id: str) -> Book | None:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return None
        return self._to_entity(row)

    def update(self, book: Book) -> Book:
        if self._session.get(BookTable, book.id) is None:
            raise ValueError(f"Book with id {book.id} not found")
        self.save(book)
        return book

    def delete(self, book_id: str) -> bool:
        """Delete a book and, by cascade, all of its reviews."""
        row = self._session.get(BookTable, book_id)
        if row is None:
            return False
        with self._write():
            self._session.delete(row)
        logger.info("Deleted book {} and its reviews", book_id)
        return True

    def destroy(self, book: Book) -> bool:
        """Delete ``book`` and mark it and its in-memory reviews as no longer persisted."""
        deleted = self.delete(book.id)
        if deleted:
            book.mark_persisted(False)
            for review in book.book_reviews:
                review.mark_persisted(False)
        return deleted

    def list_all(self) -> list[Book]:
        statement = select(BookTable).order_by(BookTable.created_at)
        return [self._to_entity(row) for row in self._session.exec(statement)]

    def count(self) -> int:
        statement = select(func.count()).select_from(BookTable)
        return self._session.exec(statement).one()

    def _to_entity(self, row: BookTable) -> Book:
        book = Book.model_validate(row, from_attributes=True)
        book.mark_persisted()

        # Query rather than row.book_reviews so reviews flushed after the row
        # was first loaded are included.
        statement = (
            select(BookReviewTable)
            .where(BookReviewTable.book_id == row.id)
            .order_by(BookReviewTable.created_at)
        )
        for review_row in self._session.exec(statement):
            review_from_row(review_row).book = book
        return book

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
                "Book write failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise
