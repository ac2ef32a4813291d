"""Book review database table model."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Text
from sqlmodel import Field, Relationship

from src.bookshelf.entities.core._base import EntityTable

if TYPE_CHECKING:
    from src.bookshelf.entities.service.book.table import BookTable


class BookReviewTable(EntityTable, table=True):
    """Database persistence model for book reviews."""

    __tablename__ = "book_reviews"

    content: str | None = Field(default=None, sa_type=Text)
    rating: int | None = None
    book_id: str = Field(
        foreign_key="books.id", ondelete="CASCADE", nullable=False, index=True
    )

    book: Optional["BookTable"] = Relationship(back_populates="book_reviews")
