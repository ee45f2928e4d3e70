"""Exception hierarchy raised by the view engine."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class ViewEngineError(Exception):
    """Base class for every error raised by viewchain."""


class ViewNotFoundError(ViewEngineError, LookupError):
    """Raised when no candidate template exists for a requested view name."""

    def __init__(
        self, message: str, searched_locations: cabc.Iterable[str] = ()
    ) -> None:
        super().__init__(message)
        self.searched_locations = list(searched_locations)


class MasterNotFoundError(ViewNotFoundError):
    """Raised when an explicitly requested master layout cannot be resolved."""


class AmbiguousViewError(ViewEngineError):
    """Raised when one folder holds a view under several template extensions."""

    def __init__(self, message: str, candidates: cabc.Iterable[str] = ()) -> None:
        super().__init__(message)
        self.candidates = list(candidates)


class ModelTypeError(ViewEngineError, TypeError):
    """Raised when a model is bound to a view compiled for another type."""


class ViewSourceError(ViewEngineError, OSError):
    """Raised when a view folder cannot read a template entry."""


class ViewCompilationError(ViewEngineError):
    """Raised when a template source cannot be compiled."""


__all__ = [
    "AmbiguousViewError",
    "MasterNotFoundError",
    "ModelTypeError",
    "ViewCompilationError",
    "ViewEngineError",
    "ViewNotFoundError",
    "ViewSourceError",
]
