"""Compile templates from one view folder snapshot.

A :class:`ViewBinding` ties a :class:`~viewchain.folders.ViewFolder` to the
Jinja environment and the compile caches built from it. The view factory
replaces its binding as a whole when the folder is swapped, so a resolution
and every partial it renders only ever see one provider.
"""

from __future__ import annotations

import builtins
import dataclasses as dc
import importlib
import typing as typ

import structlog
from jinja2 import BaseLoader, Environment, TemplateNotFound, TemplateSyntaxError

from viewchain.errors import ViewCompilationError, ViewSourceError
from viewchain.folders.base import normalize_path

from .descriptors import DescriptorBuilder, PartialTarget, ViewDescriptor
from .directives import ViewDirectives, parse_directives

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from types import ModuleType

    from jinja2 import Template

    from viewchain.config import ViewSettings
    from viewchain.folders import ViewFolder

log = structlog.get_logger(__name__)


class ViewFolderLoader(BaseLoader):
    """Jinja loader reading template sources through a view folder.

    Lets templates ``{% import %}`` macro files by virtual path, using the
    same provider as the view that imports them.
    """

    def __init__(self, folder: ViewFolder) -> None:
        self.folder = folder

    def get_source(
        self, environment: Environment, template: str
    ) -> tuple[str, str | None, cabc.Callable[[], bool] | None]:
        path = normalize_path(template)
        if not self.folder.has_view(path):
            raise TemplateNotFound(template)
        return self.folder.get_view_source(path), path, lambda: True

    def list_templates(self) -> list[str]:
        return []


@dc.dataclass(frozen=True, slots=True)
class CompiledTemplate:
    """One compiled template plus the metadata read from its directives."""

    path: str
    template: Template
    directives: ViewDirectives
    namespaces: dict[str, ModuleType]


@dc.dataclass(frozen=True, slots=True)
class CompiledChain:
    """Compiled templates for a descriptor, child first."""

    descriptor: ViewDescriptor
    templates: tuple[CompiledTemplate, ...]
    model_type: type | None


class ViewBinding:
    """Compile and cache templates read from a single view folder."""

    def __init__(
        self,
        folder: ViewFolder,
        settings: ViewSettings,
        *,
        globals: dict[str, typ.Any],
        models: dict[str, type],
    ) -> None:
        self.folder = folder
        self.settings = settings
        self.globals = globals
        self.models = models
        self.builder = DescriptorBuilder(settings)
        self.environment = Environment(
            loader=ViewFolderLoader(folder),
            autoescape=settings.autoescape,
            trim_blocks=True,
            lstrip_blocks=True,
            extensions=["jinja2.ext.do", "jinja2.ext.loopcontrols"],
        )
        self._templates: dict[str, CompiledTemplate] = {}
        self._chains: dict[ViewDescriptor, CompiledChain] = {}

    def describe(
        self,
        module_name: str,
        view_name: str,
        master_name: str | None = None,
        *,
        use_conventional_master: bool = True,
        searched_locations: list[str] | None = None,
    ) -> ViewDescriptor:
        return self.builder.build(
            self.folder,
            module_name,
            view_name,
            master_name,
            use_conventional_master=use_conventional_master,
            searched_locations=searched_locations,
        )

    def locate_partial(
        self, namespace: str, name: str, searched_locations: list[str] | None = None
    ) -> PartialTarget | None:
        return self.builder.locate_partial(self.folder, namespace, name, searched_locations)

    def compile_chain(self, descriptor: ViewDescriptor) -> CompiledChain:
        """Return the compiled chain for ``descriptor``, compiling on first use.

        Two threads may compile the same descriptor concurrently; only a
        complete chain is ever stored and the first stored one wins.
        """
        cached = self._chains.get(descriptor)
        if cached is not None:
            return cached
        templates = tuple(self.compile_template(path) for path in descriptor.templates)
        chain = CompiledChain(
            descriptor=descriptor,
            templates=templates,
            model_type=self.resolve_model(templates[0].directives.model),
        )
        log.info(
            "view_compiled",
            templates=list(descriptor.templates),
            model_type=getattr(chain.model_type, "__qualname__", None),
        )
        return self._chains.setdefault(descriptor, chain)

    def compile_template(self, path: str) -> CompiledTemplate:
        """Compile the template at ``path``.

        Raises
        ------
        ViewSourceError
            If the folder cannot provide the template source.
        ViewCompilationError
            If the source is not a valid template or a declared namespace
            cannot be imported.
        """
        cached = self._templates.get(path)
        if cached is not None:
            return cached
        try:
            template = self.environment.get_template(path)
        except TemplateNotFound as exc:
            msg = f"Template '{path}' is missing from {self.folder!r}."
            raise ViewSourceError(msg) from exc
        except TemplateSyntaxError as exc:
            msg = f"{path}:{exc.lineno}: {exc.message}"
            raise ViewCompilationError(msg) from exc
        directives = parse_directives(self.folder.get_view_source(path))
        compiled = CompiledTemplate(
            path=path,
            template=template,
            directives=directives,
            namespaces=self._import_namespaces(path, directives.namespaces),
        )
        return self._templates.setdefault(path, compiled)

    def resolve_model(self, reference: str | None) -> type | None:
        """Resolve a ``use model`` reference into a type.

        Registered short names win, then builtins, then ``module:QualName``
        or ``module.Name`` import paths.
        """
        if not reference:
            return None
        if reference in self.models:
            return self.models[reference]
        builtin = getattr(builtins, reference, None)
        if isinstance(builtin, type):
            return builtin
        module_name, sep, qualname = reference.partition(":")
        if not sep:
            module_name, _, qualname = reference.rpartition(".")
        if not module_name or not qualname:
            msg = f"Unknown model type '{reference}'."
            raise ViewCompilationError(msg)
        try:
            target: object = importlib.import_module(module_name)
            for attribute in qualname.split("."):
                target = getattr(target, attribute)
        except (ImportError, AttributeError) as exc:
            msg = f"Unable to import model type '{reference}': {exc}"
            raise ViewCompilationError(msg) from exc
        if not isinstance(target, type):
            msg = f"Model reference '{reference}' is not a type."
            raise ViewCompilationError(msg)
        return target

    @staticmethod
    def _import_namespaces(
        path: str, namespaces: tuple[str, ...]
    ) -> dict[str, ModuleType]:
        imported: dict[str, ModuleType] = {}
        for name in namespaces:
            try:
                imported[name.rpartition(".")[2]] = importlib.import_module(name)
            except ImportError as exc:
                msg = f"{path}: unable to import namespace '{name}': {exc}"
                raise ViewCompilationError(msg) from exc
        return imported


__all__ = [
    "CompiledChain",
    "CompiledTemplate",
    "ViewBinding",
    "ViewFolderLoader",
]
