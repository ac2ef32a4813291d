import uuid
from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel, PrivateAttr
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from src.bookshelf.entities.core.validation import (
    ValidationErrors,
    Validator,
    run_validators,
)


class Entity(BaseModel):
    """Base entity class with auto-generated UUID identifier.

    Entities validate on demand: ``is_valid()`` runs the validators returned by
    ``validators()`` and records any failures in ``errors``. Construction and
    field assignment never raise for values the validators would reject.
    """

    id: str = PydanticField(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for the entity",
    )

    created_at: datetime = PydanticField(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = PydanticField(default_factory=lambda: datetime.now(UTC))

    _errors: ValidationErrors = PrivateAttr(default_factory=ValidationErrors)
    _persisted: bool = PrivateAttr(default=False)

    def validators(self) -> list[Validator]:
        """Validators applied by ``is_valid``; subclasses extend this."""
        return []

    @property
    def errors(self) -> ValidationErrors:
        return self._errors

    def is_valid(self) -> bool:
        return run_validators(self, self.validators(), self._errors)

    def is_invalid(self) -> bool:
        return not self.is_valid()

    @property
    def is_persisted(self) -> bool:
        return self._persisted

    def mark_persisted(self, persisted: bool = True) -> None:
        self._persisted = persisted


class EntityTable(SQLModel, table=False):
    """Base entity class with auto-generated UUID identifier."""

    id: str = Field(
        primary_key=True,
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique identifier for the entity",
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": sa.func.now(),
        },
    )
