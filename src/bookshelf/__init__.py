"""Books and their reviews: validated entities backed by SQLModel tables."""

__version__ = "0.1.0"
