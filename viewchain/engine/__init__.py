"""View resolution, composition and rendering.

The engine turns a view name into a :class:`ViewDescriptor` (the ordered
template chain), compiles that chain with Jinja2 into a
:class:`CompiledView`, and renders it through a shared
:class:`RenderingContext` so partials and named content areas compose into a
single output stream.
"""

from .binding import CompiledChain, CompiledTemplate, ViewBinding, ViewFolderLoader
from .context import RenderingContext
from .descriptors import DescriptorBuilder, PartialTarget, ViewDescriptor, singularize
from .directives import ViewDirectives, parse_directives
from .factory import ActionContext, ViewEngineResult, ViewFactory
from .helpers import PartialCall, PartialMode, ViewHelpers
from .view import CompiledView

__all__ = [
    "ActionContext",
    "CompiledChain",
    "CompiledTemplate",
    "CompiledView",
    "DescriptorBuilder",
    "PartialCall",
    "PartialMode",
    "PartialTarget",
    "RenderingContext",
    "ViewBinding",
    "ViewDescriptor",
    "ViewDirectives",
    "ViewEngineResult",
    "ViewFactory",
    "ViewFolderLoader",
    "ViewHelpers",
    "parse_directives",
    "singularize",
]
