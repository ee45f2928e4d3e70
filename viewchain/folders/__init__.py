"""View source providers used to locate and read template entries.

The engine only depends on the narrow :class:`ViewFolder` capability. Two
implementations ship with the package: :class:`FileSystemViewFolder` reads
templates below a directory and :class:`InMemoryViewFolder` keeps them in a
mapping, which is convenient for tests and generated views.
:class:`CombinedViewFolder` layers two folders so application views can
override packaged defaults.

Examples
--------
>>> from viewchain.folders import InMemoryViewFolder
>>> folder = InMemoryViewFolder({"Stub\\\\index.view": "<div>index</div>"})
>>> folder.has_view("Stub/index.view")
True
>>> folder.list_views("Stub")
['Stub/index.view']
"""

from .base import ViewFolder, join_path, normalize_path
from .combined import CombinedViewFolder
from .filesystem import FileSystemViewFolder
from .memory import InMemoryViewFolder

__all__ = [
    "CombinedViewFolder",
    "FileSystemViewFolder",
    "InMemoryViewFolder",
    "ViewFolder",
    "join_path",
    "normalize_path",
]
