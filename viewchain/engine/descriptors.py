"""Resolve view names into ordered template chains.

A :class:`ViewDescriptor` lists the templates that make up one rendered
view: the child view first, followed by each enclosing master layout. The
:class:`DescriptorBuilder` probes a :class:`~viewchain.folders.ViewFolder`
in a fixed order (module folder, then shared folders) so the same provider
state always yields the same chain.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

import structlog

from viewchain._constants import PARTIAL_PREFIX, PATH_SEPARATOR
from viewchain.errors import (
    AmbiguousViewError,
    MasterNotFoundError,
    ViewNotFoundError,
)
from viewchain.folders.base import first_segment, join_path, normalize_path

from .directives import parse_directives

if typ.TYPE_CHECKING:
    from viewchain.config import ViewSettings
    from viewchain.folders import ViewFolder

log = structlog.get_logger(__name__)

_PLURAL_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"([^aeiou])ies$"), r"\1y"),
    (re.compile(r"(ss|sh|ch|x|z)es$"), r"\1"),
    (re.compile(r"([^su])s$"), r"\1"),
)


def singularize(name: str) -> str:
    """Return a naive singular form of an English plural noun.

    >>> singularize("animals")
    'animal'
    >>> singularize("categories")
    'category'
    >>> singularize("boxes")
    'box'
    >>> singularize("glass")
    'glass'
    >>> singularize("status")
    'status'
    """
    for pattern, replacement in _PLURAL_RULES:
        if pattern.search(name):
            return pattern.sub(replacement, name)
    return name


@dc.dataclass(frozen=True, slots=True)
class ViewDescriptor:
    """Ordered template chain resolved for one view request.

    Attributes
    ----------
    templates : tuple[str, ...]
        Virtual template paths; index 0 is the child view and later entries
        are successive enclosing layouts.
    target_namespace : str
        First path segment of the child view (the module folder).
    """

    templates: tuple[str, ...]
    target_namespace: str

    def __post_init__(self) -> None:
        if not self.templates:
            msg = "A view descriptor needs at least one template."
            raise ValueError(msg)

    @property
    def view_path(self) -> str:
        """Return the path of the child view."""
        return self.templates[0]

    @property
    def masters(self) -> tuple[str, ...]:
        """Return the enclosing layouts, innermost first."""
        return self.templates[1:]


@dc.dataclass(frozen=True, slots=True)
class PartialTarget:
    """A located partial template and the name its items are bound to."""

    path: str
    variable: str


class DescriptorBuilder:
    """Build :class:`ViewDescriptor` instances from view and master names."""

    def __init__(self, settings: ViewSettings) -> None:
        self.settings = settings

    def build(
        self,
        folder: ViewFolder,
        module_name: str,
        view_name: str,
        master_name: str | None = None,
        *,
        use_conventional_master: bool = True,
        searched_locations: list[str] | None = None,
    ) -> ViewDescriptor:
        """Resolve the template chain for ``view_name``.

        Parameters
        ----------
        folder : ViewFolder
            Provider snapshot to probe; every lookup of this call uses it.
        module_name : str
            Module folder derived from the caller's routing context.
        view_name : str
            Logical view name. Names containing a separator are used as
            relative paths and skip the module probe.
        master_name : str, optional
            Explicit master layout. When empty, the child's ``use master``
            directive and then the conventional master apply.
        use_conventional_master : bool, optional
            Probe the conventional master (``Application``) when no master
            was requested or declared. Defaults to ``True``.
        searched_locations : list[str], optional
            Receives every probed path, in probe order.

        Returns
        -------
        ViewDescriptor
            Template chain with the child view first.

        Raises
        ------
        ViewNotFoundError
            If no candidate path exists for ``view_name``.
        MasterNotFoundError
            If an explicitly requested or declared master cannot be found.
        AmbiguousViewError
            If one folder holds the view under several extensions.
        """
        searched = searched_locations if searched_locations is not None else []
        view_path = self._locate(folder, module_name, view_name, searched)
        if view_path is None:
            msg = f"View '{view_name}' was not found for module '{module_name}'."
            raise ViewNotFoundError(msg, searched)

        templates = [view_path]
        declared = parse_directives(folder.get_view_source(view_path)).master
        master_path: str | None = None
        if master_name:
            master_path = self._require_master(folder, module_name, master_name, searched)
        elif declared:
            master_path = self._require_master(folder, module_name, declared, searched)
        elif declared is None and use_conventional_master:
            master_path = self._conventional_master(folder, searched)

        if master_path is not None and master_path != view_path:
            templates.append(master_path)
            self._extend_chain(folder, module_name, templates, searched)

        descriptor = ViewDescriptor(
            templates=tuple(templates), target_namespace=first_segment(view_path)
        )
        log.debug(
            "descriptor_resolved",
            view=view_name,
            module=module_name,
            templates=list(descriptor.templates),
            target_namespace=descriptor.target_namespace,
        )
        return descriptor

    def locate_partial(
        self,
        folder: ViewFolder,
        namespace: str,
        partial_name: str,
        searched_locations: list[str] | None = None,
    ) -> PartialTarget | None:
        """Find a partial template near ``namespace``.

        ``name`` and ``_name`` are probed in the namespace folder and then in
        each shared folder. When nothing matches and the name looks plural,
        the singular form is tried, so ``animals`` finds ``_animal``.
        """
        searched = searched_locations if searched_locations is not None else []
        names = [partial_name]
        singular = singularize(partial_name)
        if singular != partial_name:
            names.append(singular)
        for name in names:
            normalized = normalize_path(name)
            if PATH_SEPARATOR in normalized:
                roots = [""]
            else:
                roots = list(dict.fromkeys([namespace, *self.settings.shared_folders]))
            for root in roots:
                for candidate in self._partial_names(normalized):
                    path = self._probe_folder(folder, root, candidate, searched)
                    if path is not None:
                        return PartialTarget(path=path, variable=_variable_name(name))
        return None

    def _extend_chain(
        self,
        folder: ViewFolder,
        module_name: str,
        templates: list[str],
        searched: list[str],
    ) -> None:
        """Follow ``use master`` directives declared by the layouts themselves."""
        for _level in range(self.settings.max_master_depth):
            declared = parse_directives(folder.get_view_source(templates[-1])).master
            if not declared:
                return
            next_path = self._require_master(folder, module_name, declared, searched)
            if next_path in templates:
                log.warning("master_cycle_detected", chain=templates, master=next_path)
                return
            templates.append(next_path)

    def _require_master(
        self,
        folder: ViewFolder,
        module_name: str,
        master_name: str,
        searched: list[str],
    ) -> str:
        path = self._locate(folder, module_name, master_name, searched)
        if path is None:
            msg = f"Master layout '{master_name}' was not found for module '{module_name}'."
            raise MasterNotFoundError(msg, searched)
        return path

    def _conventional_master(self, folder: ViewFolder, searched: list[str]) -> str | None:
        name = self.settings.default_master
        if not name:
            return None
        for shared in self.settings.shared_folders:
            path = self._probe_folder(folder, shared, name, searched)
            if path is not None:
                return path
        return None

    def _locate(
        self,
        folder: ViewFolder,
        module_name: str,
        name: str,
        searched: list[str],
    ) -> str | None:
        normalized = normalize_path(name)
        if PATH_SEPARATOR in normalized:
            return self._probe_folder(folder, "", normalized, searched)
        roots = [module_name, *self.settings.shared_folders] if module_name else list(
            self.settings.shared_folders
        )
        for root in dict.fromkeys(roots):
            path = self._probe_folder(folder, root, normalized, searched)
            if path is not None:
                return path
        return None

    def _probe_folder(
        self,
        folder: ViewFolder,
        root: str,
        name: str,
        searched: list[str],
    ) -> str | None:
        """Return the single match for ``name`` under ``root``, if any."""
        hits: list[str] = []
        for candidate in self._candidates(root, name):
            searched.append(candidate)
            if folder.has_view(candidate):
                hits.append(candidate)
        if len(hits) > 1:
            msg = f"View '{name}' is ambiguous under '{root or '.'}': {', '.join(hits)}."
            raise AmbiguousViewError(msg, hits)
        return hits[0] if hits else None

    def _candidates(self, root: str, name: str) -> list[str]:
        if self.settings.has_view_extension(name):
            return [join_path(root, name)]
        return [join_path(root, f"{name}{extension}") for extension in self.settings.extensions]

    @staticmethod
    def _partial_names(name: str) -> list[str]:
        normalized = normalize_path(name)
        head, sep, base = normalized.rpartition(PATH_SEPARATOR)
        if base.startswith(PARTIAL_PREFIX):
            return [normalized]
        return [normalized, f"{head}{sep}{PARTIAL_PREFIX}{base}"]


def _variable_name(partial_name: str) -> str:
    """Return the template variable an iterated partial binds each item to."""
    base = normalize_path(partial_name).rpartition(PATH_SEPARATOR)[2]
    base = base.split(".", 1)[0]
    return base.removeprefix(PARTIAL_PREFIX) or base


__all__ = [
    "DescriptorBuilder",
    "PartialTarget",
    "ViewDescriptor",
    "singularize",
]
