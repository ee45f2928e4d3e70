"""Load view engine settings YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _non_negative_int,
    _string_tuple,
    _validate_extensions,
    _validate_locale,
)
from .models import ViewSettings, ViewSettingsError


def load_view_settings(path: Path) -> ViewSettings:
    """Load the YAML file describing view conventions.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML settings file (for example,
        ``viewchain.yaml``). Relative ``views_dir`` entries are resolved
        against the file's directory.

    Returns
    -------
    ViewSettings
        Parsed settings with defaults applied for omitted keys.

    Raises
    ------
    FileNotFoundError
        If the settings file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ViewSettingsError
        If a value is invalid (empty extension list, unknown locale, negative
        master depth, non-mapping globals).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> settings = load_view_settings(Path("viewchain.yaml"))  # doctest: +SKIP
    >>> settings.default_master  # doctest: +SKIP
    'Application'
    """
    if not path.exists():
        msg = f"Settings file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_view_settings(loaded, base_dir=path.parent)


def build_view_settings(
    raw: typ.Mapping[str, typ.Any], *, base_dir: Path | None = None
) -> ViewSettings:
    """Build :class:`ViewSettings` from a mapping, applying defaults."""
    defaults = ViewSettings()

    views_dir = Path(raw.get("views_dir", defaults.views_dir))
    if base_dir is not None and not views_dir.is_absolute():
        views_dir = base_dir / views_dir

    extensions = defaults.extensions
    if "extensions" in raw:
        extensions = _validate_extensions(
            _string_tuple(raw["extensions"], field="extensions")
        )

    shared_folders = defaults.shared_folders
    if "shared_folders" in raw:
        shared_folders = _string_tuple(raw["shared_folders"], field="shared_folders")

    default_master = str(raw.get("default_master") or defaults.default_master)
    max_master_depth = _non_negative_int(
        raw.get("max_master_depth", defaults.max_master_depth),
        field="max_master_depth",
    )
    default_locale = _validate_locale(
        str(raw.get("default_locale") or defaults.default_locale)
    )

    globals_raw = raw.get("globals") or {}
    if not isinstance(globals_raw, dict):
        msg = "'globals' must be a mapping."
        raise ViewSettingsError(msg)

    return ViewSettings(
        views_dir=views_dir,
        extensions=extensions,
        shared_folders=shared_folders,
        default_master=default_master,
        max_master_depth=max_master_depth,
        autoescape=bool(raw.get("autoescape", defaults.autoescape)),
        default_locale=default_locale,
        globals=dict(globals_raw),
    )


__all__ = ["build_view_settings", "load_view_settings"]
