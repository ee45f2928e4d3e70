"""Common literal values used across viewchain.

These constants keep folder names, extensions and reserved section names
centralized so the descriptor builder, the rendering context and the tests
import the same values without drifting.

Examples
--------
>>> from viewchain import _constants
>>> _constants.DEFAULT_SECTION
'view'
>>> _constants.DEFAULT_EXTENSIONS
('.view',)
"""

PATH_SEPARATOR = "/"
DEFAULT_EXTENSIONS = (".view",)
SHARED_FOLDERS = ("Shared", "Layouts")
DEFAULT_MASTER = "Application"
DEFAULT_MASTER_DEPTH = 4
DEFAULT_LOCALE = "en_US"
DEFAULT_SECTION = "view"
PARTIAL_PREFIX = "_"
