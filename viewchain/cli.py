"""Cyclopts CLI entrypoint for inspecting and rendering views.

The ``viewchain`` console script resolves view chains against a views
directory, which is handy when debugging which layouts a view picks up, and
renders a view to stdout for quick previews.

Examples
--------
Show the template chain of ``Home/index``:

>>> from viewchain.cli import app
>>> app.run(["describe", "index", "--module", "Home"])  # doctest: +SKIP

Render a view with a JSON model in German formatting:

>>> app.run(
...     ["render", "report", "--module", "Sales", "--model-json", "model.json",
...      "--locale", "de_DE"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import json
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import ViewSettings, load_view_settings
from .engine import ActionContext, ViewFactory
from .errors import ViewEngineError
from .logging_setup import configure_logging

app = App(name="viewchain", config=cyclopts.config.Env("VIEWCHAIN_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path | None,
    Parameter(help="Path to viewchain.yaml settings", env_var="VIEWCHAIN_CONFIG"),
]
ViewsDirOption = typ.Annotated[
    Path | None,
    Parameter(help="Override the views directory", env_var="VIEWCHAIN_VIEWS_DIR"),
]
LogLevelOption = typ.Annotated[
    str, Parameter(help="Log level (debug, info, warning, error)")
]


def _build_factory(config: Path | None, views_dir: Path | None) -> ViewFactory:
    """Return a factory for the settings file and views directory override."""
    settings = load_view_settings(config) if config else ViewSettings()
    if views_dir is not None:
        settings.views_dir = views_dir
    return ViewFactory(settings)


def _fail(error: ViewEngineError, searched: list[str] | None = None) -> typ.NoReturn:
    print(f"error: {error}", file=sys.stderr)
    for location in searched or getattr(error, "searched_locations", []):
        print(f"  searched {location}", file=sys.stderr)
    raise SystemExit(1)


@app.command(help="Print the template chain a view resolves to.")
def describe(
    view: str,
    *,
    module: typ.Annotated[str, Parameter(help="Module folder of the view")],
    master: typ.Annotated[
        str | None, Parameter(help="Explicit master layout name")
    ] = None,
    default_master: typ.Annotated[
        bool, Parameter(help="Probe the conventional master layout")
    ] = True,
    config: ConfigOption = None,
    views_dir: ViewsDirOption = None,
    log_level: LogLevelOption = "warning",
) -> None:
    """Resolve ``view`` and print its target namespace and template chain.

    Parameters
    ----------
    view : str
        Logical view name or relative template path.
    module : str
        Module folder probed before the shared folders.
    master : str or None, optional
        Explicit master layout; a missing master is reported as an error.
    default_master : bool, optional
        Whether the conventional ``Application`` layout is probed when no
        master is requested.
    config : Path or None, optional
        Settings file (``VIEWCHAIN_CONFIG``).
    views_dir : Path or None, optional
        Views directory overriding the settings value.
    log_level : str, optional
        structlog level for diagnostics written to stderr.
    """
    configure_logging(log_level)
    factory = _build_factory(config, views_dir)
    searched: list[str] = []
    try:
        descriptor = factory.create_descriptor(
            ActionContext(module), view, master, default_master, searched
        )
    except ViewEngineError as exc:
        _fail(exc, searched)
    print(f"namespace: {descriptor.target_namespace}")
    for index, path in enumerate(descriptor.templates):
        print(f"{index}: {path}")


@app.command(help="Render a view to stdout.")
def render(
    view: str,
    *,
    module: typ.Annotated[str, Parameter(help="Module folder of the view")],
    master: typ.Annotated[
        str | None, Parameter(help="Explicit master layout name")
    ] = None,
    model_json: typ.Annotated[
        Path | None,
        Parameter(help="JSON file bound as the model (views declaring model=\"dict\")"),
    ] = None,
    locale: typ.Annotated[
        str | None, Parameter(help="Locale used by formatting helpers")
    ] = None,
    config: ConfigOption = None,
    views_dir: ViewsDirOption = None,
    log_level: LogLevelOption = "warning",
) -> None:
    """Render ``view`` with an optional JSON model and print the output.

    Raises
    ------
    SystemExit
        With status 1 when the view cannot be found or the model is rejected.
    """
    configure_logging(log_level)
    factory = _build_factory(config, views_dir)
    result = factory.find_view(ActionContext(module), view, master)
    if result.error is not None:
        _fail(result.error, result.searched_locations)
    compiled = result.raise_for_error()
    if model_json is not None:
        model = json.loads(model_json.read_text(encoding="utf-8"))
        try:
            compiled.set_model(model)
        except ViewEngineError as exc:
            _fail(exc)
    compiled.render(sys.stdout, locale=locale)
    sys.stdout.write("\n")


@app.command(name="list", help="List the view entries of a folder.")
def list_views(
    folder: str = "",
    *,
    config: ConfigOption = None,
    views_dir: ViewsDirOption = None,
    log_level: LogLevelOption = "warning",
) -> None:
    """Print the entries directly below ``folder`` of the view folder."""
    configure_logging(log_level)
    factory = _build_factory(config, views_dir)
    for path in factory.view_folder.list_views(folder):
        print(path)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``viewchain`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
