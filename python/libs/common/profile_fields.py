"""Helpers that resolve and validate discriminated profile fields."""

from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import Any, Iterable, Sequence

from common.models import (
    GenderProfileField,
    NumberProfileField,
    TextProfileField,
    User,
)

logger = logging.getLogger(__name__)


class ProfileFieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    GENDER = "gender"


class UnknownVariantError(ValueError):
    """Raised when a profile field does not hold any known variant."""

    def __init__(self, field_type: Any = None):
        self.field_type = field_type
        super().__init__(f"unknown profile field type: {field_type!r}")


def resolve_field(field: Any) -> tuple[ProfileFieldType, str]:
    """Return the variant kind and the name of a profile field.

    Raises:
        UnknownVariantError: if the field is not a text, number or gender field.
    """
    if isinstance(field, TextProfileField):
        return ProfileFieldType.TEXT, field.name
    if isinstance(field, NumberProfileField):
        return ProfileFieldType.NUMBER, field.name
    if isinstance(field, GenderProfileField):
        return ProfileFieldType.GENDER, field.name
    raise UnknownVariantError(getattr(field, "field_type", None))


def normalize_name(name: str) -> str:
    return name.strip().casefold()


def validate_field_names(fields: Iterable[Any]) -> list[str]:
    """Check that every field has a non-empty name that is unique in the list.

    Names are compared after stripping whitespace and case-folding. All fields
    are checked; one message is returned per offending field, in field order.
    """
    errors: list[str] = []
    seen: set[str] = set()
    for i, field in enumerate(fields):
        try:
            _, name = resolve_field(field)
        except UnknownVariantError as e:
            errors.append(f"field[{i}]: {e}")
            continue

        normalized = normalize_name(name)
        if not normalized:
            errors.append(f"field[{i}]: name is empty")
            continue
        if normalized in seen:
            errors.append(f"field[{i}]: name '{name}' is duplicated")
            continue
        seen.add(normalized)
    return errors


def filter_fields_by_name(fields: Iterable[Any], target_name: str) -> list[Any]:
    filtered = []
    for field in fields:
        try:
            _, name = resolve_field(field)
        except UnknownVariantError:
            continue
        if name == target_name:
            filtered.append(field)
    return filtered


def count_field_names(users: Iterable[User]) -> dict[str, int]:
    stats: Counter[str] = Counter()
    for user in users:
        for field in user.profile_fields or []:
            try:
                _, name = resolve_field(field)
            except UnknownVariantError:
                continue
            stats[name] += 1
    return dict(stats)


def log_field_names(fields: Sequence[Any]) -> None:
    for i, field in enumerate(fields):
        try:
            field_type, name = resolve_field(field)
        except UnknownVariantError as e:
            logger.warning(f"field[{i}]: error - {e}")
            continue
        logger.info(f"field[{i}]: type={field_type.value}, name={name}")
