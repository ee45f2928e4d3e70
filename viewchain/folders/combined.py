"""Layered view folder that prefers entries from a first folder."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from .base import ViewFolder


class CombinedViewFolder:
    """Look up views in ``first`` and fall back to ``second``.

    Typical use layers application templates over a packaged set of default
    layouts; a view present in both folders is served from ``first``.
    """

    def __init__(self, first: ViewFolder, second: ViewFolder) -> None:
        self.first = first
        self.second = second

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.first!r}, {self.second!r})"

    def has_view(self, path: str) -> bool:
        return self.first.has_view(path) or self.second.has_view(path)

    def get_view_source(self, path: str) -> str:
        if self.first.has_view(path):
            return self.first.get_view_source(path)
        return self.second.get_view_source(path)

    def list_views(self, path: str) -> list[str]:
        return sorted(set(self.first.list_views(path)) | set(self.second.list_views(path)))


__all__ = ["CombinedViewFolder"]
