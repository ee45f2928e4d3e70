"""Load and validate view engine settings.

This subpackage parses the optional ``viewchain.yaml`` file, applies the
default conventions (``.view`` templates, ``Shared``/``Layouts`` fallback
folders, an ``Application`` master layout) and produces the typed
:class:`ViewSettings` dataclass consumed by the descriptor builder and the
view factory. The primary entry point is :func:`load_view_settings`.

Examples
--------
>>> from viewchain.config import ViewSettings
>>> ViewSettings().shared_folders
('Shared', 'Layouts')
"""

from .loader import build_view_settings, load_view_settings
from .models import ViewSettings, ViewSettingsError

__all__ = [
    "ViewSettings",
    "ViewSettingsError",
    "build_view_settings",
    "load_view_settings",
]
