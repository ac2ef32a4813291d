"""Database initialization script."""

from src.bookshelf.core.services.database.db_manage import DbManageService
from src.bookshelf.runtime.logging_setup import configure_logging


def init_db() -> None:
    """Create all database tables."""
    DbManageService().create_all()


if __name__ == "__main__":
    configure_logging()
    init_db()
