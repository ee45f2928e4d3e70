"""Per-render state shared by a layout chain and its partials.

A :class:`RenderingContext` owns the default output buffer, the named content
sections and a free-form ``state`` mapping. One instance is created for each
top-level render and passed by reference to every template and partial that
takes part in it, so content written by a partial is visible to the layout
that later places it.
"""

from __future__ import annotations

import contextlib
import typing as typ

from viewchain._constants import DEFAULT_LOCALE, DEFAULT_SECTION

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class RenderingContext:
    """Buffers and shared state for one logical render.

    Parameters
    ----------
    locale : str, optional
        Locale identifier read by the formatting helpers during this render.
        Defaults to ``"en_US"``.
    state : dict, optional
        Initial shared state; templates and partials mutate it in place.

    Notes
    -----
    The context is not thread-safe. Independent renders must each use their
    own instance.
    """

    def __init__(
        self,
        *,
        locale: str | None = None,
        state: dict[str, typ.Any] | None = None,
    ) -> None:
        self.locale = locale or DEFAULT_LOCALE
        self.state: dict[str, typ.Any] = state if state is not None else {}
        self.output: list[str] = []
        self.sections: dict[str, list[str]] = {}
        self._targets: list[list[str]] = [self.output]

    @classmethod
    def create_default(cls, locale: str | None = None) -> RenderingContext:
        """Return a fresh context with empty buffers."""
        return cls(locale=locale)

    @property
    def capturing(self) -> bool:
        """Return ``True`` while a named capture is open."""
        return len(self._targets) > 1

    def write(self, text: object) -> None:
        """Append ``text`` to the active buffer."""
        if text is None:
            return
        self._targets[-1].append(str(text))

    @contextlib.contextmanager
    def capture(self, name: str) -> cabc.Iterator[list[str]]:
        """Redirect :meth:`write` into the named section while the block runs.

        Captures nest; the previous target is restored on exit, including when
        the block raises.
        """
        buffer = self.sections.setdefault(name, [])
        self._targets.append(buffer)
        try:
            yield buffer
        finally:
            self._targets.pop()

    def has_section(self, name: str) -> bool:
        """Return ``True`` when the named section holds any content."""
        return any(self.sections.get(name, ()))

    def render_section(
        self, name: str, default: cabc.Callable[[], object] | None = None
    ) -> str:
        """Return the named section's content, or the fallback output.

        The section is read, not consumed: placing the same name twice yields
        the same accumulated text both times. Fragments appended after this
        call are only seen by later references.
        """
        if self.has_section(name):
            return "".join(self.sections[name])
        if default is None:
            return ""
        fallback = default()
        return "" if fallback is None else str(fallback)

    def promote_output(self) -> None:
        """Move the default buffer into the reserved child content section.

        Called between two levels of a layout chain so the enclosing layout can
        place the child's main content with ``use("view")``.
        """
        self.sections[DEFAULT_SECTION] = list(self.output)
        self.output.clear()

    def flush(self, writer: typ.TextIO) -> None:
        """Write the default buffer to ``writer`` and clear it."""
        writer.write("".join(self.output))
        self.output.clear()


__all__ = ["RenderingContext"]
