"""Schema management for the application's tables."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from src.bookshelf.core.services.database.db_session import build_engine
from src.bookshelf.runtime.context import get_config


def register_tables() -> None:
    """Import every table model so it is attached to ``SQLModel.metadata``."""
    from src.bookshelf.entities.service.book import BookTable  # noqa: F401
    from src.bookshelf.entities.service.book_review import BookReviewTable  # noqa: F401


class DbManageService:
    def __init__(self, engine: Engine | None = None):
        self._engine = engine or build_engine(get_config().database)

    def create_all(self) -> None:
        """Create all database tables."""
        register_tables()
        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop all database tables."""
        register_tables()
        SQLModel.metadata.drop_all(self._engine)
        logger.info("Database tables dropped.")

    def table_names(self) -> list[str]:
        register_tables()
        return sorted(SQLModel.metadata.tables)
