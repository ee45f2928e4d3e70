"""Read ``{# use key="value" #}`` directives from template sources.

Directives are ordinary Jinja comments, so the compiler ignores them; the
engine reads them before compilation to learn a view's declared master
layout, model type and imported namespaces.
"""

from __future__ import annotations

import dataclasses as dc
import re

DIRECTIVE_PATTERN = re.compile(
    r"\{#-?\s*use\s+(master|model|namespace)\s*=\s*([\"'])(.*?)\2\s*-?#\}"
)


@dc.dataclass(frozen=True, slots=True)
class ViewDirectives:
    """Metadata declared by a single template.

    Attributes
    ----------
    master : str or None
        Declared master layout name. ``None`` means nothing was declared and
        an empty string is the explicit "no master" terminator.
    model : str or None
        Declared model type reference (``package.module:QualName`` or a short
        registered name).
    namespaces : tuple[str, ...]
        Dotted module names imported into the template.
    """

    master: str | None = None
    model: str | None = None
    namespaces: tuple[str, ...] = ()


def parse_directives(source: str) -> ViewDirectives:
    """Collect the directives declared in ``source``.

    The first ``master`` and ``model`` directives win; every ``namespace``
    directive is kept in declaration order.

    >>> parse_directives('{# use master="Layout" #}<p>hi</p>').master
    'Layout'
    >>> parse_directives('{# use master="" #}').master
    ''
    >>> parse_directives('<p>plain</p>').master is None
    True
    """
    master: str | None = None
    model: str | None = None
    namespaces: list[str] = []
    for match in DIRECTIVE_PATTERN.finditer(source):
        key, value = match.group(1), match.group(3).strip()
        if key == "master" and master is None:
            master = value
        elif key == "model" and model is None:
            model = value or None
        elif key == "namespace" and value:
            namespaces.append(value)
    return ViewDirectives(master=master, model=model, namespaces=tuple(namespaces))


__all__ = ["DIRECTIVE_PATTERN", "ViewDirectives", "parse_directives"]
