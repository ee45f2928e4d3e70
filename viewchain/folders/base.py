"""The view folder capability and virtual path helpers."""

from __future__ import annotations

import typing as typ

from viewchain._constants import PATH_SEPARATOR


@typ.runtime_checkable
class ViewFolder(typ.Protocol):
    """Read-only access to template sources addressed by virtual paths.

    Virtual paths are ``/``-delimited, relative to the folder root, and are
    normalized with :func:`normalize_path` before lookup.
    """

    def has_view(self, path: str) -> bool:
        """Return ``True`` when an entry exists at ``path``."""
        ...

    def get_view_source(self, path: str) -> str:
        """Return the template source stored at ``path``.

        Raises
        ------
        ViewSourceError
            If the entry is missing or cannot be read.
        """
        ...

    def list_views(self, path: str) -> list[str]:
        """Return the virtual paths of the entries directly under ``path``."""
        ...


def normalize_path(path: str) -> str:
    """Return ``path`` with ``/`` separators and no empty segments.

    >>> normalize_path("Stub\\\\baz.view")
    'Stub/baz.view'
    >>> normalize_path("/Shared//Application.view/")
    'Shared/Application.view'
    """
    segments = path.replace("\\", PATH_SEPARATOR).split(PATH_SEPARATOR)
    return PATH_SEPARATOR.join(segment for segment in segments if segment)


def join_path(*parts: str) -> str:
    """Join virtual path fragments and normalize the result."""
    return normalize_path(PATH_SEPARATOR.join(part for part in parts if part))


def first_segment(path: str) -> str:
    """Return the leading folder of a virtual path (``""`` for a bare name)."""
    normalized = normalize_path(path)
    head, sep, _tail = normalized.partition(PATH_SEPARATOR)
    return head if sep else ""


__all__ = ["ViewFolder", "first_segment", "join_path", "normalize_path"]
