"""Shared fixtures for the viewchain test suite.

The ``views_dir`` fixture points at ``tests/fixtures/views``, a small view
tree with a ``Stub`` module folder and a ``Shared`` folder holding layouts and
partials. ``factory`` builds a :class:`~viewchain.ViewFactory` over that
tree with the ``FakeViewModel`` type registered for ``use model`` directives.
"""

from __future__ import annotations

import dataclasses as dc
import io
import typing as typ
from pathlib import Path

import pytest

from viewchain import ActionContext, FileSystemViewFolder, ViewFactory, ViewSettings

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@dc.dataclass(slots=True)
class FakeViewModel:
    """Model type bound to the strongly typed fixture views."""

    text: str = ""


@pytest.fixture
def views_dir() -> Path:
    """Return the directory holding the fixture view tree."""
    return FIXTURES_DIR / "views"


@pytest.fixture
def view_model_type() -> type[FakeViewModel]:
    """Return the model type registered as ``FakeViewModel``."""
    return FakeViewModel


@pytest.fixture
def factory(views_dir: Path) -> ViewFactory:
    """Build a factory reading the fixture views from disk."""
    settings = ViewSettings(views_dir=views_dir)
    view_factory = ViewFactory(settings, view_folder=FileSystemViewFolder(views_dir))
    view_factory.register_model("FakeViewModel", FakeViewModel)
    return view_factory


@pytest.fixture
def action_context() -> ActionContext:
    """Return the routing context of the ``Stub`` module."""
    return ActionContext("Stub")


@pytest.fixture
def output() -> io.StringIO:
    """Return an in-memory writer collecting rendered output."""
    return io.StringIO()


def _assert_contains_in_order(text: str, *fragments: str) -> None:
    """Assert that ``fragments`` occur in ``text`` in the given order."""
    position = 0
    for fragment in fragments:
        found = text.find(fragment, position)
        assert found >= 0, f"expected {fragment!r} after offset {position} in {text!r}"
        position = found + len(fragment)


@pytest.fixture
def contains_in_order() -> typ.Callable[..., None]:
    """Return an assertion helper checking fragment order in rendered text."""
    return _assert_contains_in_order
