from __future__ import annotations

import html
import json

import pytest

from sqlconsole.domain.models import Failure, OperationKind, RejectionReason, Success
from sqlconsole.domain.strings import load_messages
from sqlconsole.viewmodels.result_vm import (
    DumpView,
    ErrorView,
    LoadingView,
    ResultPresenter,
    TableView,
    cell_text,
)


def test_tabular_success_renders_table_with_string_cells() -> None:
    presenter = ResultPresenter()

    view = presenter.present(
        Success(payload={"rows": [{"id": 1, "name": "Sara"}]}, operation=OperationKind.QUERY)
    )

    assert view == TableView(
        title="Query Results",
        banner="Query executed successfully.",
        headers=("id", "name"),
        rows=(("1", "Sara"),),
    )


def test_header_follows_first_row_key_order() -> None:
    presenter = ResultPresenter()
    payload = {"rows": [{"z": 1, "a": None}, {"a": True, "z": 2.5}]}

    view = presenter.present(Success(payload=payload, operation=OperationKind.QUERY))

    assert isinstance(view, TableView)
    assert view.headers == ("z", "a")
    assert view.rows == (("1", "null"), ("2.5", "true"))


def test_empty_rows_render_dump_not_table() -> None:
    presenter = ResultPresenter()

    view = presenter.present(Success(payload={"rows": []}, operation=OperationKind.QUERY))

    assert isinstance(view, DumpView)
    assert json.loads(html.unescape(view.text)) == {"rows": []}


def test_non_uniform_rows_degrade_to_dump() -> None:
    presenter = ResultPresenter()

    view = presenter.present(
        Success(payload={"rows": [{"id": 1}, {"name": "x"}]}, operation=OperationKind.QUERY)
    )

    assert isinstance(view, DumpView)


def test_insert_acknowledgement_uses_insert_label() -> None:
    presenter = ResultPresenter()

    view = presenter.present(Success(payload={"affectedRows": 4}, operation=OperationKind.INSERT))

    assert isinstance(view, DumpView)
    assert view.title == "Insert Results"
    assert view.banner == "Insert executed successfully."


def test_cell_and_header_markup_is_escaped() -> None:
    presenter = ResultPresenter()
    payload = {"rows": [{"<b>col</b>": "<script>alert('x')</script>"}]}

    view = presenter.present(Success(payload=payload, operation=OperationKind.QUERY))

    assert isinstance(view, TableView)
    assert view.headers == ("&lt;b&gt;col&lt;/b&gt;",)
    assert view.rows == (("&lt;script&gt;alert(&#x27;x&#x27;)&lt;/script&gt;",),)


def test_dump_text_is_escaped() -> None:
    presenter = ResultPresenter()

    view = presenter.present(Success(payload={"note": "<i>"}, operation=OperationKind.QUERY))

    assert isinstance(view, DumpView)
    assert "<i>" not in view.text
    assert "&lt;i&gt;" in view.text


def test_failure_renders_escaped_error() -> None:
    presenter = ResultPresenter()

    view = presenter.present(Failure("bad <input>"))

    assert view == ErrorView(title="Error", message="bad &lt;input&gt;")


@pytest.mark.parametrize(
    "reason, message",
    [
        (RejectionReason.EMPTY, "Please enter a SQL query"),
        (RejectionReason.DISALLOWED, "Only SELECT or INSERT queries are allowed"),
    ],
)
def test_rejections_use_fixed_messages(reason: RejectionReason, message: str) -> None:
    assert ResultPresenter().rejection(reason) == ErrorView(title="Error", message=message)


def test_loading_view_carries_no_data() -> None:
    view = ResultPresenter().loading()

    assert view == LoadingView(
        title="Executing Query...",
        message="Please wait while your query is being processed.",
    )


def test_injected_messages_drive_labels() -> None:
    messages = load_messages(overrides={"labelQuery": "Abfrage", "msgEmptyQuery": "Leer"})
    presenter = ResultPresenter(messages)

    view = presenter.present(Success(payload={"rows": [{"a": 1}]}, operation=OperationKind.QUERY))

    assert isinstance(view, TableView)
    assert view.title == "Abfrage Results"
    assert presenter.rejection(RejectionReason.EMPTY).message == "Leer"


def test_unknown_outcome_type_is_rejected() -> None:
    with pytest.raises(TypeError):
        ResultPresenter().present("not an outcome")  # type: ignore[arg-type]


def test_cell_text_serializes_nested_values() -> None:
    assert cell_text({"a": [1, 2]}) == '{"a": [1, 2]}'
    assert cell_text(False) == "false"
    assert cell_text("plain") == "plain"
