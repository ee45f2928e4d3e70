"""Helper functions exposed to templates during a render.

Each render builds one :class:`ViewHelpers` bound to the compiled view and
its :class:`~viewchain.engine.context.RenderingContext`. The helpers cover
HTML escaping, locale-aware formatting through Babel, partial invocation and
named content capture/placement.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

import structlog
from babel import dates as babel_dates
from babel import numbers as babel_numbers
from markupsafe import Markup, escape

from viewchain._constants import DEFAULT_SECTION
from viewchain.errors import ViewEngineError, ViewNotFoundError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from .context import RenderingContext
    from .view import CompiledView

log = structlog.get_logger(__name__)


class PartialMode(enum.Enum):
    """How a partial is invoked from a template."""

    SINGLE = "single"
    EACH = "each"


@dc.dataclass(frozen=True, slots=True)
class PartialCall:
    """A partial invocation resolved at the call site.

    ``items`` is only set in :attr:`PartialMode.EACH`, where the partial is
    rendered once per item.
    """

    name: str
    mode: PartialMode
    locals: dict[str, typ.Any]
    items: tuple[typ.Any, ...] = ()

    @classmethod
    def create(
        cls,
        name: str,
        each: cabc.Iterable[typ.Any] | None,
        local_values: dict[str, typ.Any],
    ) -> PartialCall:
        if each is None:
            return cls(name=name, mode=PartialMode.SINGLE, locals=local_values)
        return cls(
            name=name,
            mode=PartialMode.EACH,
            locals=local_values,
            items=tuple(each),
        )


def item_scope(variable: str, item: object, index: int, count: int) -> dict[str, typ.Any]:
    """Return the loop variables bound for one item of an iterated partial.

    >>> scope = item_scope("animal", "lion", 0, 5)
    >>> scope["animal"], scope["animal_number"], scope["animal_parity"]
    ('lion', 1, 'odd')
    """
    number = index + 1
    return {
        variable: item,
        f"{variable}_index": index,
        f"{variable}_number": number,
        f"{variable}_count": count,
        f"{variable}_is_first": index == 0,
        f"{variable}_is_last": number == count,
        f"{variable}_parity": "odd" if number % 2 else "even",
    }


class ViewHelpers:
    """Template helper surface for one render of a compiled view."""

    def __init__(self, view: CompiledView, context: RenderingContext) -> None:
        self.view = view
        self.context = context

    def exports(self) -> dict[str, typ.Any]:
        """Return the names templates see for these helpers."""
        return {
            "h": self.h,
            "format_number": self.format_number,
            "format_decimal": self.format_number,
            "format_currency": self.format_currency,
            "format_percent": self.format_percent,
            "format_date": self.format_date,
            "format_datetime": self.format_datetime,
            "partial": self.partial,
            "content": self.content,
            "use": self.use,
            "has_section": self.context.has_section,
        }

    @staticmethod
    def h(value: object) -> Markup:
        """HTML-escape ``value``, including text that is already markup."""
        if value is None:
            return Markup("")
        return escape(str(value))

    def format_number(self, value: float | int | str, format: str | None = None) -> str:
        return babel_numbers.format_decimal(value, format=format, locale=self.context.locale)

    def format_currency(
        self, value: float | int | str, currency: str, format: str | None = None
    ) -> str:
        return babel_numbers.format_currency(
            value, currency, format=format, locale=self.context.locale
        )

    def format_percent(self, value: float | int | str, format: str | None = None) -> str:
        return babel_numbers.format_percent(value, format=format, locale=self.context.locale)

    def format_date(self, value: dt.date | None = None, format: str = "medium") -> str:
        return babel_dates.format_date(value, format=format, locale=self.context.locale)

    def format_datetime(
        self,
        value: dt.datetime | None = None,
        format: str = "medium",
        tzinfo: dt.tzinfo | None = None,
    ) -> str:
        return babel_dates.format_datetime(
            value, format=format, tzinfo=tzinfo, locale=self.context.locale
        )

    def partial(
        self,
        name: str,
        each: cabc.Iterable[typ.Any] | None = None,
        **local_values: typ.Any,
    ) -> Markup:
        """Render the partial ``name`` inside the current rendering context.

        Parameters
        ----------
        name : str
            Partial name; ``name`` and ``_name`` are probed next to the view
            and then in the shared folders. Plural names fall back to the
            singular partial (``animals`` renders ``_animal`` per item).
        each : iterable, optional
            Render the partial once per item. Each item is bound to the
            singular partial name together with ``<name>_index``,
            ``<name>_number``, ``<name>_is_first``, ``<name>_is_last``,
            ``<name>_count`` and ``<name>_parity``.
        **local_values
            Extra variables passed through to the partial.

        Raises
        ------
        ViewNotFoundError
            If no partial template matches ``name``.
        """
        call = PartialCall.create(name, each, local_values)
        searched: list[str] = []
        target = self.view.locate_partial(call.name, searched)
        if target is None:
            msg = f"Partial '{call.name}' was not found."
            raise ViewNotFoundError(msg, searched)
        compiled = self.view.compile_partial(target.path)

        match call.mode:
            case PartialMode.EACH:
                count = len(call.items)
                fragments = [
                    self.view.render_template(
                        compiled,
                        self.context,
                        {**call.locals, **item_scope(target.variable, item, index, count)},
                    )
                    for index, item in enumerate(call.items)
                ]
                html = "".join(fragments)
            case _:
                html = self.view.render_template(compiled, self.context, call.locals)

        log.debug(
            "partial_rendered",
            partial=target.path,
            mode=call.mode.value,
            items=len(call.items),
        )
        return Markup(html)

    def content(
        self,
        name: str,
        value: object = None,
        caller: cabc.Callable[[], str] | None = None,
    ) -> Markup:
        """Append to the named section.

        Used as a call block, ``{% call content("header") %}...{% endcall %}``
        captures the block body; ``{{ content("title", "Home") }}`` appends a
        plain value. Nothing is emitted at the call site.

        Raises
        ------
        ViewEngineError
            If ``name`` is the reserved ``view`` section, which only ever holds
            the child view's main output.
        """
        if name == DEFAULT_SECTION:
            msg = f"Section '{name}' is reserved for the child view content."
            raise ViewEngineError(msg)
        with self.context.capture(name):
            if caller is not None:
                self.context.write(caller())
            elif value is not None:
                self.context.write(self._coerce(value))
        return Markup("")

    def use(
        self,
        name: str,
        default: object = None,
        caller: cabc.Callable[[], str] | None = None,
    ) -> Markup:
        """Place the named section here, or the fallback when it is empty.

        ``{% call use("header") %}fallback{% endcall %}`` renders the block
        body only when nothing was written to ``header``; ``use("view")``
        places the child view's main content inside a layout.
        """
        fallback: cabc.Callable[[], object] | None
        if caller is not None:
            fallback = caller
        elif default is not None:
            fallback = lambda: self._coerce(default)  # noqa: E731
        else:
            fallback = None
        return Markup(self.context.render_section(name, fallback))

    def _coerce(self, value: object) -> str:
        if self.view.autoescape:
            return str(escape(value))
        return str(value)


__all__ = ["PartialCall", "PartialMode", "ViewHelpers", "item_scope"]
