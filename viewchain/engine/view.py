"""Render-callable views built from a compiled template chain."""

from __future__ import annotations

import io
import typing as typ

from viewchain.errors import ModelTypeError

from .context import RenderingContext
from .helpers import ViewHelpers

if typ.TYPE_CHECKING:
    from jinja2 import Template

    from .binding import CompiledChain, CompiledTemplate, ViewBinding
    from .descriptors import PartialTarget, ViewDescriptor


class CompiledView:
    """A compiled view chain bound to at most one model.

    Instances are cheap; the factory returns a fresh one for every
    :meth:`~viewchain.engine.factory.ViewFactory.find_view` call while the
    compiled templates themselves are cached and shared.

    Attributes
    ----------
    context : RenderingContext or None
        Context of the most recent :meth:`render` call.
    """

    def __init__(self, chain: CompiledChain, binding: ViewBinding) -> None:
        self.chain = chain
        self.binding = binding
        self.context: RenderingContext | None = None
        self._model: object = None
        self._model_bound = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.chain.descriptor.templates)!r})"

    @property
    def descriptor(self) -> ViewDescriptor:
        return self.chain.descriptor

    @property
    def templates(self) -> tuple[Template, ...]:
        """Return the compiled Jinja templates, child first."""
        return tuple(compiled.template for compiled in self.chain.templates)

    @property
    def model_type(self) -> type | None:
        """Return the model type declared by the child view, if any."""
        return self.chain.model_type

    @property
    def model(self) -> object:
        return self._model

    @property
    def autoescape(self) -> bool:
        return self.binding.settings.autoescape

    def set_model(self, model: object) -> None:
        """Bind ``model`` to the view before rendering.

        Binding ``None`` is always accepted and leaves the view model-less.

        Raises
        ------
        ModelTypeError
            If ``model`` is not an instance of the declared model type, if the
            view declares no model type, or if a model was already bound.
        """
        if self._model_bound:
            msg = f"A model is already bound to view '{self.descriptor.view_path}'."
            raise ModelTypeError(msg)
        if model is not None:
            expected = self.model_type
            if expected is None:
                msg = (
                    f"View '{self.descriptor.view_path}' declares no model type; "
                    f"cannot bind {type(model).__qualname__}."
                )
                raise ModelTypeError(msg)
            if not isinstance(model, expected):
                msg = (
                    f"View '{self.descriptor.view_path}' expects "
                    f"{expected.__qualname__}, got {type(model).__qualname__}."
                )
                raise ModelTypeError(msg)
        self._model = model
        self._model_bound = True

    def render(
        self,
        writer: typ.TextIO,
        *,
        context: RenderingContext | None = None,
        locale: str | None = None,
    ) -> None:
        """Render the chain and write the composed output to ``writer``.

        The child view renders first. Between levels its main output moves into
        the ``view`` section, which the enclosing layout places with
        ``use("view")``; named sections written anywhere in the chain stay
        available to every later level.

        Parameters
        ----------
        writer : TextIO
            Destination for the final output.
        context : RenderingContext, optional
            Context to render into. Rendering twice into one context appends
            to its sections again, so use one context per logical render.
        locale : str, optional
            Locale for the formatting helpers when a new context is created.
            Defaults to the configured ``default_locale``.
        """
        rendering = context or RenderingContext(
            locale=locale or self.binding.settings.default_locale
        )
        self.context = rendering
        templates = self.chain.templates
        last = len(templates) - 1
        for level, compiled in enumerate(templates):
            rendering.write(self.render_template(compiled, rendering, {}))
            if level < last:
                rendering.promote_output()
        rendering.flush(writer)

    def render_to_string(
        self,
        *,
        context: RenderingContext | None = None,
        locale: str | None = None,
    ) -> str:
        buffer = io.StringIO()
        self.render(buffer, context=context, locale=locale)
        return buffer.getvalue()

    def render_template(
        self,
        compiled: CompiledTemplate,
        context: RenderingContext,
        scope: dict[str, typ.Any],
    ) -> str:
        """Render one template of the chain (or a partial) into a string."""
        variables: dict[str, typ.Any] = dict(self.binding.globals)
        variables.update(compiled.namespaces)
        variables.update(ViewHelpers(self, context).exports())
        variables.update(
            model=self._model,
            view=self,
            state=context.state,
            target_namespace=self.descriptor.target_namespace,
        )
        variables.update(scope)
        return compiled.template.render(variables)

    def locate_partial(
        self, name: str, searched_locations: list[str] | None = None
    ) -> PartialTarget | None:
        return self.binding.locate_partial(
            self.descriptor.target_namespace, name, searched_locations
        )

    def compile_partial(self, path: str) -> CompiledTemplate:
        return self.binding.compile_template(path)


__all__ = ["CompiledView"]
