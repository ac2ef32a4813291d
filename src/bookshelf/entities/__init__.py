"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model with validation rules
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .service.book import Book, BookRepository, BookTable
from .service.book_review import BookReview, BookReviewRepository, BookReviewTable

__all__ = [
    "Book",
    "BookTable",
    "BookRepository",
    "BookReview",
    "BookReviewTable",
    "BookReviewRepository",
]
