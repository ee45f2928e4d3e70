"""Top-level entry point that finds, compiles and returns views.

:class:`ViewFactory` translates an :class:`ActionContext` into the module
name the descriptor builder needs, resolves the template chain, and hands
back a :class:`ViewEngineResult` carrying either a fresh
:class:`~viewchain.engine.view.CompiledView` or the reason no view was found.

Example
-------
>>> from viewchain.engine import ActionContext, ViewFactory
>>> from viewchain.folders import InMemoryViewFolder
>>> factory = ViewFactory(view_folder=InMemoryViewFolder({"Stub/index.view": "<div>index</div>"}))
>>> result = factory.find_view(ActionContext("Stub"), "index")
>>> result.view.render_to_string()
'<div>index</div>'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import structlog

from viewchain.config import ViewSettings
from viewchain.errors import (
    AmbiguousViewError,
    ViewEngineError,
    ViewNotFoundError,
)
from viewchain.folders import FileSystemViewFolder
from viewchain.folders.base import first_segment

from .binding import ViewBinding
from .descriptors import ViewDescriptor
from .view import CompiledView

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from viewchain.folders import ViewFolder

log = structlog.get_logger(__name__)


@dc.dataclass(slots=True)
class ActionContext:
    """Routing information for the request a view is rendered for.

    Attributes
    ----------
    module_name : str
        Module (controller) name; selects the folder probed before the shared
        folders.
    path : str
        Request path, kept for templates and logging.
    items : dict[str, Any]
        Free-form per-request values.
    """

    module_name: str
    path: str = "/"
    items: dict[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class ViewEngineResult:
    """Outcome of :meth:`ViewFactory.find_view`.

    Exactly one of ``view`` and ``error`` is set.
    """

    view: CompiledView | None = None
    descriptor: ViewDescriptor | None = None
    searched_locations: list[str] = dc.field(default_factory=list)
    error: ViewEngineError | None = None

    @property
    def found(self) -> bool:
        return self.view is not None

    def raise_for_error(self) -> CompiledView:
        """Return the view, raising the stored error when resolution failed."""
        if self.error is not None:
            raise self.error
        if self.view is None:  # pragma: no cover - guarded by construction
            msg = "View engine result carries neither a view nor an error."
            raise ViewEngineError(msg)
        return self.view


class ViewFactory:
    """Resolve view names into compiled, renderable views.

    Parameters
    ----------
    settings : ViewSettings, optional
        Engine conventions; defaults to :class:`ViewSettings` defaults.
    view_folder : ViewFolder, optional
        Template provider. Defaults to a filesystem folder rooted at
        ``settings.views_dir``.

    Notes
    -----
    Assigning :attr:`view_folder` swaps the provider for every resolution that
    starts afterwards. Views already returned keep rendering from the folder
    they were resolved against.
    """

    def __init__(
        self,
        settings: ViewSettings | None = None,
        *,
        view_folder: ViewFolder | None = None,
    ) -> None:
        self.settings = settings or ViewSettings()
        self._globals: dict[str, typ.Any] = dict(self.settings.globals)
        self._models: dict[str, type] = {}
        folder = view_folder or FileSystemViewFolder(self.settings.views_dir)
        self._binding = self._bind(folder)

    @property
    def view_folder(self) -> ViewFolder:
        return self._binding.folder

    @view_folder.setter
    def view_folder(self, folder: ViewFolder) -> None:
        self._binding = self._bind(folder)
        log.info("view_folder_swapped", folder=repr(folder))

    @property
    def globals(self) -> dict[str, typ.Any]:
        """Return a copy of the values exposed to every template."""
        return dict(self._globals)

    def add_global(self, name: str, value: object) -> None:
        self._globals[name] = value

    def add_globals(self, values: cabc.Mapping[str, object]) -> None:
        self._globals.update(values)

    def register_model(self, name: str, model_type: type) -> None:
        """Make ``model_type`` available to ``use model`` directives as ``name``."""
        self._models[name] = model_type

    def create_descriptor(
        self,
        context: ActionContext,
        view_name: str,
        master_name: str | None = None,
        find_default_master: bool = True,
        searched_locations: list[str] | None = None,
    ) -> ViewDescriptor:
        """Resolve the template chain for ``view_name`` without compiling it.

        Raises
        ------
        ViewNotFoundError
            If the view (or an explicit master, as ``MasterNotFoundError``)
            cannot be found.
        AmbiguousViewError
            If one folder holds the view under several extensions.
        """
        return self._binding.describe(
            context.module_name,
            view_name,
            master_name,
            use_conventional_master=find_default_master,
            searched_locations=searched_locations,
        )

    def find_view(
        self,
        context: ActionContext,
        view_name: str,
        master_name: str | None = None,
    ) -> ViewEngineResult:
        """Find and compile ``view_name`` for the module in ``context``.

        Parameters
        ----------
        context : ActionContext
            Routing context; its ``module_name`` selects the module folder.
        view_name : str
            Logical view name or relative template path.
        master_name : str, optional
            Explicit master layout. Without it the view's declared master or
            the conventional ``Application`` layout applies.

        Returns
        -------
        ViewEngineResult
            The compiled view, or the lookup error and every searched path.

        Raises
        ------
        ViewSourceError
            If the folder fails to read a located template.
        ViewCompilationError
            If a template in the chain cannot be compiled.
        """
        binding = self._binding
        searched: list[str] = []
        try:
            descriptor = binding.describe(
                context.module_name,
                view_name,
                master_name,
                searched_locations=searched,
            )
        except (ViewNotFoundError, AmbiguousViewError) as exc:
            log.info(
                "view_not_found",
                view=view_name,
                module=context.module_name,
                master=master_name,
                reason=str(exc),
            )
            return ViewEngineResult(searched_locations=searched, error=exc)
        chain = binding.compile_chain(descriptor)
        return ViewEngineResult(
            view=CompiledView(chain, binding),
            descriptor=descriptor,
            searched_locations=searched,
        )

    def find_partial(self, context: ActionContext, partial_name: str) -> ViewEngineResult:
        """Find a partial template and compile it as a stand-alone view.

        The result never has a master: a ``use master`` directive declared by
        the partial is ignored.
        """
        binding = self._binding
        searched: list[str] = []
        target = binding.locate_partial(context.module_name, partial_name, searched)
        if target is None:
            msg = f"Partial '{partial_name}' was not found for module '{context.module_name}'."
            return ViewEngineResult(
                searched_locations=searched, error=ViewNotFoundError(msg, searched)
            )
        descriptor = ViewDescriptor(
            templates=(target.path,), target_namespace=first_segment(target.path)
        )
        chain = binding.compile_chain(descriptor)
        return ViewEngineResult(
            view=CompiledView(chain, binding),
            descriptor=descriptor,
            searched_locations=searched,
        )

    def _bind(self, folder: ViewFolder) -> ViewBinding:
        return ViewBinding(
            folder, self.settings, globals=self._globals, models=self._models
        )


__all__ = ["ActionContext", "ViewEngineResult", "ViewFactory"]
