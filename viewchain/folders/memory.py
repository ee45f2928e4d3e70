"""In-memory view folder backed by a mapping of virtual paths to sources."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from viewchain._constants import PATH_SEPARATOR
from viewchain.errors import ViewSourceError

from .base import normalize_path


class InMemoryViewFolder(cabc.MutableMapping[str, str]):
    """Keep template sources in a dictionary keyed by normalized paths.

    Keys may use either separator; ``"Stub\\\\baz.view"`` and
    ``"Stub/baz.view"`` refer to the same entry.
    """

    def __init__(self, views: cabc.Mapping[str, str] | None = None) -> None:
        self._views: dict[str, str] = {}
        if views:
            self.update(views)

    def __getitem__(self, path: str) -> str:
        return self._views[normalize_path(path)]

    def __setitem__(self, path: str, source: str) -> None:
        self._views[normalize_path(path)] = source

    def __delitem__(self, path: str) -> None:
        del self._views[normalize_path(path)]

    def __iter__(self) -> typ.Iterator[str]:
        return iter(self._views)

    def __len__(self) -> int:
        return len(self._views)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self._views)!r})"

    def has_view(self, path: str) -> bool:
        return normalize_path(path) in self._views

    def get_view_source(self, path: str) -> str:
        try:
            return self[path]
        except KeyError:
            msg = f"View source '{normalize_path(path)}' not found in memory."
            raise ViewSourceError(msg) from None

    def list_views(self, path: str) -> list[str]:
        prefix = normalize_path(path)
        if prefix:
            prefix += PATH_SEPARATOR
        return sorted(
            key
            for key in self._views
            if key.startswith(prefix) and PATH_SEPARATOR not in key[len(prefix) :]
        )


__all__ = ["InMemoryViewFolder"]
