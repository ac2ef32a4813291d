"""Declarative field validation.

Validators inspect a single attribute of an entity and record messages into a
``ValidationErrors`` collection. They never raise: an entity is valid when the
collection is empty after every validator has run.
"""

from __future__ import annotations

from collections.abc import Collection, Iterator
from typing import Any

BLANK_MESSAGE = "can't be blank"
INCLUSION_MESSAGE = "is not included in the list"
MISSING_ASSOCIATION_MESSAGE = "must exist"


def is_blank(value: Any) -> bool:
    """Return True for None, empty or whitespace-only strings and empty collections."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


class ValidationErrors:
    """Field name to messages mapping populated by validators."""

    def __init__(self) -> None:
        self._messages: dict[str, list[str]] = {}

    def add(self, field: str, message: str) -> None:
        messages = self._messages.setdefault(field, [])
        if message not in messages:
            messages.append(message)

    def __getitem__(self, field: str) -> list[str]:
        # Untouched fields read as an empty list so callers can assert on them directly.
        return list(self._messages.get(field, []))

    def __contains__(self, field: object) -> bool:
        return bool(self._messages.get(field))  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return f"ValidationErrors({self._messages!r})"

    def is_empty(self) -> bool:
        return len(self) == 0

    def clear(self) -> None:
        self._messages.clear()

    def fields(self) -> list[str]:
        return [field for field, messages in self._messages.items() if messages]

    def full_messages(self) -> list[str]:
        """Render messages prefixed with a humanized field name."""
        return [
            f"{field.replace('_', ' ').capitalize()} {message}"
            for field, messages in self._messages.items()
            for message in messages
        ]

    def to_dict(self) -> dict[str, list[str]]:
        return {field: list(messages) for field, messages in self._messages.items() if messages}


class Validator:
    """Base class for a check against one attribute."""

    default_message: str = ""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        self.message = message or self.default_message

    def __call__(self, entity: Any, errors: ValidationErrors) -> None:
        value = getattr(entity, self.field, None)
        if not self.check(value):
            errors.add(self.field, self.message)

    def check(self, value: Any) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.field!r})"


class PresenceValidator(Validator):
    default_message = BLANK_MESSAGE

    def check(self, value: Any) -> bool:
        return not is_blank(value)


class InclusionValidator(Validator):
    """Value must be a member of ``choices``.

    Booleans never match integer choices even though ``True == 1``.
    """

    default_message = INCLUSION_MESSAGE

    def __init__(
        self, field: str, choices: Collection[Any], message: str | None = None
    ) -> None:
        super().__init__(field, message)
        self.choices = choices

    def check(self, value: Any) -> bool:
        if value is None or isinstance(value, bool):
            return False
        try:
            return value in self.choices
        except TypeError:
            return False


class AssociationValidator(Validator):
    """The associated object, or at least its foreign key, must be set."""

    default_message = MISSING_ASSOCIATION_MESSAGE

    def __init__(
        self, field: str, foreign_key: str | None = None, message: str | None = None
    ) -> None:
        super().__init__(field, message)
        self.foreign_key = foreign_key or f"{field}_id"

    def __call__(self, entity: Any, errors: ValidationErrors) -> None:
        if self.check(getattr(entity, self.field, None)):
            return
        if not is_blank(getattr(entity, self.foreign_key, None)):
            return
        errors.add(self.field, self.message)

    def check(self, value: Any) -> bool:
        return value is not None


def run_validators(
    entity: Any, validators: list[Validator], errors: ValidationErrors
) -> bool:
    """Run every validator against ``entity`` and report whether no errors were recorded."""
    errors.clear()
    for validator in validators:
        validator(entity, errors)
    return errors.is_empty()
