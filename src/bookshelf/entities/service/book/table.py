"""Book database table model."""

from typing import TYPE_CHECKING

from sqlmodel import Relationship

from src.bookshelf.entities.core._base import EntityTable

if TYPE_CHECKING:
    from src.bookshelf.entities.service.book_review.table import BookReviewTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books.

    Deleting a row removes its reviews, through the ORM cascade and through
    the foreign key's ``ON DELETE CASCADE``.
    """

    __tablename__ = "books"

    title: str
    author: str

    book_reviews: list["BookReviewTable"] = Relationship(
        back_populates="book",
        cascade_delete=True,
        sa_relationship_kwargs={"order_by": "BookReviewTable.created_at"},
    )
