"""Tests for the ``viewchain`` command line."""

from __future__ import annotations

import json
import logging
import typing as typ

import pytest
import structlog

from viewchain import cli

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


@pytest.fixture(autouse=True)
def _reset_logging() -> cabc.Iterator[None]:
    """Drop the handler each command installs so later tests log normally."""
    yield
    logging.getLogger("viewchain").handlers.clear()
    structlog.reset_defaults()


def test_describe_prints_the_template_chain(
    views_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.describe(
        "ChildViewThatExpectsALayout", module="Stub", master="Layout", views_dir=views_dir
    )

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "namespace: Stub",
        "0: Stub/ChildViewThatExpectsALayout.view",
        "1: Shared/Layout.view",
    ]


def test_describe_reports_a_missing_master(
    views_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.describe("index", module="Stub", master="Ghost", views_dir=views_dir)

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "error:" in err
    assert "searched Shared/Ghost.view" in err


def test_render_writes_the_view(
    views_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.render("index", module="Stub", views_dir=views_dir)

    assert capsys.readouterr().out == "<div>index</div>\n"


def test_render_binds_a_json_model(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    views = tmp_path / "views" / "Sales"
    views.mkdir(parents=True)
    (views / "report.view").write_text(
        '{# use model="dict" #}{{ model.region }}: {{ format_number(model.total) }}',
        encoding="utf-8",
    )
    model_path = tmp_path / "model.json"
    model_path.write_text(json.dumps({"region": "Nord", "total": 1234.5}), encoding="utf-8")

    cli.render(
        "report",
        module="Sales",
        model_json=model_path,
        locale="de_DE",
        views_dir=tmp_path / "views",
    )

    assert capsys.readouterr().out == "Nord: 1.234,5\n"


def test_render_rejects_a_model_for_an_untyped_view(
    views_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    model_path = tmp_path / "model.json"
    model_path.write_text("{}", encoding="utf-8")

    with pytest.raises(SystemExit):
        cli.render("index", module="Stub", model_json=model_path, views_dir=views_dir)

    assert "declares no model type" in capsys.readouterr().err


def test_render_reports_a_missing_view(
    views_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit):
        cli.render("Ghost", module="Stub", views_dir=views_dir)

    err = capsys.readouterr().err
    assert "searched Stub/Ghost.view" in err
    assert "searched Layouts/Ghost.view" in err


def test_list_prints_folder_entries(
    views_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.list_views("Shared", views_dir=views_dir)

    assert capsys.readouterr().out.splitlines() == [
        "Shared/Layout.view",
        "Shared/Reversed.view",
        "Shared/_Partial.view",
        "Shared/_letter.view",
    ]


def test_settings_file_supplies_the_views_dir(
    views_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = tmp_path / "viewchain.yaml"
    config.write_text(f"views_dir: {views_dir}\n", encoding="utf-8")

    cli.describe("index", module="Stub", config=config)

    assert "0: Stub/index.view" in capsys.readouterr().out
