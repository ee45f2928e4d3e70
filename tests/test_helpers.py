"""Tests for template directives and the helper surface."""

from __future__ import annotations

import datetime as dt

import pytest
from markupsafe import Markup

from viewchain import ActionContext, InMemoryViewFolder, ViewFactory, ViewSettings
from viewchain.engine import (
    PartialCall,
    PartialMode,
    ViewHelpers,
    parse_directives,
    singularize,
)
from viewchain.engine.helpers import item_scope


def test_parse_directives_reads_master_model_and_namespaces() -> None:
    source = (
        '{# use master="Layout" #}\n'
        "{#- use model='shop.models:Cart' -#}\n"
        '{# use namespace="posixpath" #}{# use namespace="string" #}\n'
        '{# use master="Ignored" #}'
    )

    directives = parse_directives(source)

    assert directives.master == "Layout"
    assert directives.model == "shop.models:Cart"
    assert directives.namespaces == ("posixpath", "string")


def test_parse_directives_without_directives() -> None:
    directives = parse_directives("<p>{# a plain comment #}</p>")

    assert directives.master is None
    assert directives.model is None
    assert directives.namespaces == ()


@pytest.mark.parametrize(
    ("plural", "singular"),
    [
        ("animals", "animal"),
        ("categories", "category"),
        ("boxes", "box"),
        ("dishes", "dish"),
        ("glass", "glass"),
        ("status", "status"),
        ("bus", "bus"),
        ("days", "day"),
        ("item", "item"),
    ],
)
def test_singularize(plural: str, singular: str) -> None:
    assert singularize(plural) == singular


def test_partial_call_modes() -> None:
    single = PartialCall.create("row", None, {"x": 1})
    each = PartialCall.create("row", iter([1, 2]), {})

    assert single.mode is PartialMode.SINGLE
    assert single.items == ()
    assert each.mode is PartialMode.EACH
    assert each.items == (1, 2)


def test_item_scope_exposes_position_markers() -> None:
    scopes = [item_scope("row", value, index, 3) for index, value in enumerate("abc")]

    assert [scope["row_parity"] for scope in scopes] == ["odd", "even", "odd"]
    assert scopes[0]["row_is_first"]
    assert not scopes[0]["row_is_last"]
    assert scopes[2]["row_is_last"]
    assert scopes[1]["row_index"] == 1
    assert scopes[1]["row_number"] == 2
    assert scopes[1]["row_count"] == 3


def test_h_escapes_markup_and_quotes() -> None:
    escaped = ViewHelpers.h("<a href=\"x\">Tom & 'Jerry'</a>")

    assert isinstance(escaped, Markup)
    assert "<" not in escaped
    assert "&amp;" in escaped
    assert "&#34;" in escaped
    assert "&#39;" in escaped
    assert ViewHelpers.h(Markup("<b>")) == "&lt;b&gt;"
    assert ViewHelpers.h(None) == ""


@pytest.fixture
def formatting_factory() -> ViewFactory:
    return ViewFactory(
        view_folder=InMemoryViewFolder(
            {
                "Shop/price.view": (
                    "{{ format_currency(amount, 'EUR') }}|{{ format_percent(0.25) }}"
                    "|{{ format_datetime(stamp, 'yyyy-MM-dd HH:mm') }}"
                ),
            }
        )
    )


def test_formatting_helpers_follow_the_context_locale(
    formatting_factory: ViewFactory,
) -> None:
    view = formatting_factory.find_view(ActionContext("Shop"), "price").raise_for_error()
    formatting_factory.add_globals(
        {"amount": 1234.5, "stamp": dt.datetime(2010, 12, 11, 9, 30)}
    )

    english = view.render_to_string(locale="en_US")
    german = view.render_to_string(locale="de_DE")

    assert english == "€1,234.50|25%|2010-12-11 09:30"
    assert german.startswith("1.234,50")
    assert "2010-12-11 09:30" in german


def test_default_locale_comes_from_settings() -> None:
    factory = ViewFactory(
        ViewSettings(default_locale="de_DE"),
        view_folder=InMemoryViewFolder({"Stub/n.view": "{{ format_number(1234.5) }}"}),
    )

    view = factory.find_view(ActionContext("Stub"), "n").raise_for_error()

    assert view.render_to_string() == "1.234,5"


def test_use_renders_plain_default_escaped() -> None:
    factory = ViewFactory(
        view_folder=InMemoryViewFolder({"Stub/d.view": '{{ use("missing", "<none>") }}'})
    )

    view = factory.find_view(ActionContext("Stub"), "d").raise_for_error()

    assert view.render_to_string() == "&lt;none&gt;"


def test_autoescape_can_be_disabled() -> None:
    factory = ViewFactory(
        ViewSettings(autoescape=False),
        view_folder=InMemoryViewFolder(
            {"Stub/raw.view": '{{ html }}{{ content("x", "<i>") }}{{ use("x") }}'}
        ),
    )
    factory.add_global("html", "<b>")

    view = factory.find_view(ActionContext("Stub"), "raw").raise_for_error()

    assert view.render_to_string() == "<b><i>"
