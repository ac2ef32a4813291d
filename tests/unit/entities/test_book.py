"""Unit tests for the book entity package.

Covers the Book domain entity, its table model and the repository's
session interactions (mocked; the real database paths live in
tests/test_data_layer.py).
"""

from unittest.mock import MagicMock
from uuid import UUID

import pytest

from src.bookshelf.entities import Book, BookRepository, BookReview, BookTable


class TestBook:
    """Test the Book domain entity."""

    def test_book_creation_with_defaults(self):
        """Book should be created with auto-generated UUID and no reviews."""
        book = Book(title="1984", author="George Orwell")

        assert isinstance(book.id, str)
        UUID(book.id)
        assert book.title == "1984"
        assert book.author == "George Orwell"
        assert book.book_reviews == []
        assert book.is_persisted is False

    def test_is_valid_with_title_and_author(self):
        book = Book(title="Dune", author="Frank Herbert")

        assert book.is_valid() is True
        assert book.errors.is_empty()

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_is_invalid_without_title(self, title):
        book = Book(title=title, author="Frank Herbert")

        assert book.is_valid() is False
        assert book.errors["title"] == ["can't be blank"]
        assert "author" not in book.errors

    @pytest.mark.parametrize("author", [None, "", "\t"])
    def test_is_invalid_without_author(self, author):
        book = Book(title="Dune", author=author)

        assert book.is_invalid() is True
        assert book.errors["author"] == ["can't be blank"]

    def test_both_fields_reported_together(self):
        book = Book()

        assert book.is_valid() is False
        assert book.errors.to_dict() == {
            "title": ["can't be blank"],
            "author": ["can't be blank"],
        }
        assert book.errors.full_messages() == [
            "Title can't be blank",
            "Author can't be blank",
        ]

    def test_validity_is_recomputed_after_mutation(self):
        book = Book(title="", author="Unknown")
        assert book.is_valid() is False

        book.title = "Untitled"

        assert book.is_valid() is True
        assert book.errors["title"] == []

    def test_add_review_attaches_review(self):
        book = Book(title="Dune", author="Frank Herbert")
        review = BookReview(content="Epic!", rating=5)

        returned = book.add_review(review)

        assert returned is review
        assert review.book is book
        assert review.book_id == book.id
        assert book.book_reviews == [review]

    def test_add_review_twice_keeps_single_entry(self):
        book = Book(title="Dune", author="Frank Herbert")
        review = BookReview(content="Epic!", rating=5)

        book.add_review(review)
        book.add_review(review)

        assert len(book.book_reviews) == 1

    def test_add_review_moves_review_from_other_book(self):
        """A review belongs to at most one book."""
        book1 = Book(title="Book 1", author="Author A")
        book2 = Book(title="Book 2", author="Author B")
        review = BookReview(content="Interesting", rating=4)

        book1.add_review(review)
        book2.add_review(review)

        assert review.book is book2
        assert review.book_id == book2.id
        assert book1.book_reviews == []
        assert book2.book_reviews == [review]

    def test_book_reviews_returns_a_copy(self):
        book = Book(title="Dune", author="Frank Herbert")
        BookReview(content="Epic!", rating=5, book=book)

        book.book_reviews.clear()

        assert len(book.book_reviews) == 1

    def test_book_equality(self):
        """Should compare books by their business attributes, ignoring timestamps."""
        book1 = Book(id="1", title="Dune", author="Frank Herbert")
        book2 = Book(id="1", title="Dune", author="Frank Herbert")
        book3 = Book(id="2", title="Emma", author="Jane Austen")

        assert book1 == book2
        assert hash(book1) == hash(book2)
        assert book1 != book3

    def test_book_stays_in_set_after_rename(self):
        book = Book(title="Dune", author="Frank Herbert")
        books = {book}

        book.title = "Dune Messiah"

        assert book in books

    def test_construction_does_not_coerce_title(self):
        book = Book(title=1984, author="George Orwell")

        assert book.title == 1984
        assert book.is_valid() is True

    def test_book_representation(self):
        book = Book(id="1", title="Dune", author="Frank Herbert")

        book_str = str(book)
        assert "Dune" in book_str
        assert "Frank Herbert" in book_str


class TestBookTable:
    """Test the BookTable database model."""

    def test_table_model_from_entity(self):
        book = Book(title="Dune", author="Frank Herbert")

        table = BookTable.model_validate(book, from_attributes=True)

        assert table.id == book.id
        assert table.title == book.title
        assert table.author == book.author

    def test_entity_from_table_model(self):
        table = BookTable(id="test-id", title="Dune", author="Frank Herbert")

        book = Book.model_validate(table, from_attributes=True)

        assert book.id == "test-id"
        assert book.title == "Dune"
        assert book.author == "Frank Herbert"

    def test_table_name(self):
        assert BookTable.__tablename__ == "books"


class TestBookRepository:
    """Test the BookRepository data access layer against a mocked session."""

    def setup_method(self):
        self.mock_session = MagicMock()
        self.mock_session.exec.return_value = []
        self.repo = BookRepository(self.mock_session)

    def test_get_existing_book(self):
        self.mock_session.get.return_value = BookTable(
            id="test-id", title="Dune", author="Frank Herbert"
        )

        book = self.repo.get("test-id")

        self.mock_session.get.assert_called_once_with(BookTable, "test-id")
        assert book is not None
        assert book.title == "Dune"
        assert book.is_persisted is True
        assert book.book_reviews == []

    def test_get_nonexistent_book(self):
        self.mock_session.get.return_value = None

        assert self.repo.get("missing") is None

    def test_save_new_book_adds_row(self):
        self.mock_session.get.return_value = None
        book = Book(title="Dune", author="Frank Herbert")

        assert self.repo.save(book) is True

        self.mock_session.add.assert_called_once()
        added = self.mock_session.add.call_args[0][0]
        assert isinstance(added, BookTable)
        assert added.id == book.id
        assert added.title == "Dune"
        self.mock_session.begin_nested.assert_called_once()
        self.mock_session.flush.assert_called_once()
        assert book.is_persisted is True

    def test_save_invalid_book_does_not_touch_session(self):
        book = Book(title="", author="")

        assert self.repo.save(book) is False

        self.mock_session.add.assert_not_called()
        self.mock_session.flush.assert_not_called()
        assert book.is_persisted is False
        assert book.errors["title"] == ["can't be blank"]

    def test_create_returns_entity(self):
        self.mock_session.get.return_value = None
        book = Book(title="Dune", author="Frank Herbert")

        assert self.repo.create(book) is book

    def test_update_unknown_book_raises(self):
        self.mock_session.get.return_value = None

        with pytest.raises(ValueError, match="not found"):
            self.repo.update(Book(id="missing", title="Dune", author="Frank Herbert"))

    def test_delete_unknown_book_returns_false(self):
        self.mock_session.get.return_value = None

        assert self.repo.delete("missing") is False
        self.mock_session.delete.assert_not_called()
