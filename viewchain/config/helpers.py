"""Utility helpers shared by the settings loader."""

from __future__ import annotations

import typing as typ

from babel import Locale, UnknownLocaleError

from .models import ViewSettingsError


def _string_tuple(value: object, *, field: str) -> tuple[str, ...]:
    """Normalize a scalar or list entry into a tuple of non-empty strings."""
    match value:
        case str() as text:
            items = [text]
        case list() | tuple():
            items = [str(item) for item in value]
        case _:
            msg = f"'{field}' must be a string or a list of strings."
            raise ViewSettingsError(msg)
    normalized = tuple(item.strip() for item in items if item and item.strip())
    if not normalized:
        msg = f"'{field}' must not be empty."
        raise ViewSettingsError(msg)
    return normalized


def _validate_extensions(extensions: tuple[str, ...]) -> tuple[str, ...]:
    """Ensure every extension starts with a dot."""
    for extension in extensions:
        if not extension.startswith(".") or len(extension) < 2:
            msg = f"View extension '{extension}' must start with '.'."
            raise ViewSettingsError(msg)
    return extensions


def _validate_locale(identifier: str) -> str:
    """Return ``identifier`` when Babel knows the locale."""
    try:
        Locale.parse(identifier)
    except (UnknownLocaleError, ValueError) as exc:
        msg = f"Unknown default_locale '{identifier}'."
        raise ViewSettingsError(msg) from exc
    return identifier


def _non_negative_int(value: object, *, field: str) -> int:
    """Coerce ``value`` into an int that is zero or greater."""
    try:
        number = int(typ.cast("typ.SupportsInt", value))
    except (TypeError, ValueError) as exc:
        msg = f"'{field}' must be an integer."
        raise ViewSettingsError(msg) from exc
    if number < 0:
        msg = f"'{field}' must not be negative."
        raise ViewSettingsError(msg)
    return number


__all__ = [
    "_non_negative_int",
    "_string_tuple",
    "_validate_extensions",
    "_validate_locale",
]
