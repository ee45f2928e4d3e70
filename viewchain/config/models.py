"""Typed dataclasses describing view engine settings."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from viewchain._constants import (
    DEFAULT_EXTENSIONS,
    DEFAULT_LOCALE,
    DEFAULT_MASTER,
    DEFAULT_MASTER_DEPTH,
    SHARED_FOLDERS,
)


class ViewSettingsError(ValueError):
    """Raised when view settings are invalid or incomplete."""


@dc.dataclass(slots=True)
class ViewSettings:
    """Conventions the engine uses to locate, compile and format views.

    Attributes
    ----------
    views_dir : Path
        Directory used by :class:`~viewchain.folders.FileSystemViewFolder`
        when no other folder is supplied.
    extensions : tuple[str, ...]
        Suffixes that count as view templates, probed in order.
    shared_folders : tuple[str, ...]
        Fallback folders searched after the module folder.
    default_master : str
        Conventional master layout name probed under the shared folders.
    max_master_depth : int
        Number of layouts that may be stacked above the first master.
    autoescape : bool
        Whether Jinja autoescaping is enabled for compiled views.
    default_locale : str
        Locale used by formatting helpers when a render supplies none.
    globals : dict[str, Any]
        Values exposed to every template.
    """

    views_dir: Path = dc.field(default_factory=lambda: Path("views"))
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    shared_folders: tuple[str, ...] = SHARED_FOLDERS
    default_master: str = DEFAULT_MASTER
    max_master_depth: int = DEFAULT_MASTER_DEPTH
    autoescape: bool = True
    default_locale: str = DEFAULT_LOCALE
    globals: dict[str, typ.Any] = dc.field(default_factory=dict)

    def has_view_extension(self, name: str) -> bool:
        """Return ``True`` when ``name`` already ends with a view extension."""
        return any(name.endswith(extension) for extension in self.extensions)


__all__ = ["ViewSettings", "ViewSettingsError"]
