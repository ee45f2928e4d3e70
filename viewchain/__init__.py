"""Resolve, compose and render layered views.

viewchain turns a logical view name into an ordered chain of templates (the
view followed by its master layouts), compiles the chain with Jinja2 and
renders it into one output stream. Partials and named content areas share a
per-render :class:`RenderingContext`, views can be bound to typed models, and
formatting helpers follow the locale chosen for each render.

Exports
-------
- ``ViewFactory``: resolve and compile views for an ``ActionContext``.
- ``ViewSettings``: conventions for extensions, shared folders and masters.
- ``InMemoryViewFolder`` / ``FileSystemViewFolder``: template providers.
- ``main``: entry point of the ``viewchain`` console script.

Examples
--------
>>> from viewchain import ActionContext, InMemoryViewFolder, ViewFactory
>>> folder = InMemoryViewFolder({"Stub/index.view": "<div>index</div>"})
>>> factory = ViewFactory(view_folder=folder)
>>> factory.create_descriptor(ActionContext("Stub"), "index").templates
('Stub/index.view',)
"""

from __future__ import annotations

from .cli import app, main
from .config import ViewSettings, ViewSettingsError, load_view_settings
from .engine import (
    ActionContext,
    CompiledView,
    RenderingContext,
    ViewDescriptor,
    ViewEngineResult,
    ViewFactory,
)
from .errors import (
    AmbiguousViewError,
    MasterNotFoundError,
    ModelTypeError,
    ViewCompilationError,
    ViewEngineError,
    ViewNotFoundError,
    ViewSourceError,
)
from .folders import (
    CombinedViewFolder,
    FileSystemViewFolder,
    InMemoryViewFolder,
    ViewFolder,
)

__all__ = [
    "ActionContext",
    "AmbiguousViewError",
    "CombinedViewFolder",
    "CompiledView",
    "FileSystemViewFolder",
    "InMemoryViewFolder",
    "MasterNotFoundError",
    "ModelTypeError",
    "RenderingContext",
    "ViewCompilationError",
    "ViewDescriptor",
    "ViewEngineError",
    "ViewEngineResult",
    "ViewFactory",
    "ViewFolder",
    "ViewNotFoundError",
    "ViewSettings",
    "ViewSettingsError",
    "ViewSourceError",
    "app",
    "load_view_settings",
    "main",
]
