from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional, Tuple

import pytest

from sqlconsole.domain.models import (
    Failure,
    OperationKind,
    OperationOutcome,
    RejectionReason,
    Success,
    ViewPhase,
)
from sqlconsole.domain.query import QueryValidator
from sqlconsole.usecases.dispatch_query import SAMPLE_INSERT_STATEMENT, DispatchQuery
from sqlconsole.viewmodels.console_vm import ControlVM, QueryInputVM
from sqlconsole.viewmodels.result_vm import (
    DumpView,
    ErrorView,
    LoadingView,
    ResultPresenter,
    TableView,
)


class _TransportStub:
    def __init__(
        self,
        read: Optional[OperationOutcome] = None,
        write: Optional[OperationOutcome] = None,
        raises: Optional[Exception] = None,
    ) -> None:
        self.read = read or Success(payload={"rows": []}, operation=OperationKind.QUERY)
        self.write = write or Success(payload={"affectedRows": 1}, operation=OperationKind.INSERT)
        self.raises = raises
        self.calls: List[Tuple[str, str]] = []

    def execute_read(self, query: str) -> OperationOutcome:
        self.calls.append(("read", query))
        if self.raises:
            raise self.raises
        return self.read

    def execute_write(self, query: str) -> OperationOutcome:
        self.calls.append(("write", query))
        if self.raises:
            raise self.raises
        return self.write


class _RenderRecorder:
    def __init__(self) -> None:
        self.views: List[object] = []

    def render(self, view: object) -> None:
        self.views.append(view)


class _Harness:
    def __init__(self, transport: _TransportStub, runner: Optional[Callable[..., Any]] = None) -> None:
        self.transport = transport
        self.query_input = QueryInputVM()
        self.target = _RenderRecorder()
        self.submit = ControlVM(idle_caption="Submit Query", busy_caption="Executing...")
        self.insert = ControlVM(idle_caption="Insert", busy_caption="Inserting...")
        self.dispatcher = DispatchQuery(
            validator=QueryValidator(),
            transport=transport,
            presenter=ResultPresenter(),
            query_input=self.query_input,
            render_target=self.target,
            submit_control=self.submit,
            insert_control=self.insert,
            runner=runner,
        )

    def submit_text(self, text: str):
        self.query_input.text = text
        return asyncio.run(self.dispatcher.submit_query())


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_empty_input_is_rejected_without_network(text: str) -> None:
    harness = _Harness(_TransportStub())

    state = harness.submit_text(text)

    assert harness.transport.calls == []
    assert state.phase is ViewPhase.RENDERED
    assert state.rejection is RejectionReason.EMPTY
    assert harness.target.views == [ErrorView(title="Error", message="Please enter a SQL query")]
    assert harness.submit.enabled


def test_disallowed_statement_is_rejected_without_network() -> None:
    harness = _Harness(_TransportStub())

    state = harness.submit_text("DELETE FROM patient")

    assert harness.transport.calls == []
    assert state.rejection is RejectionReason.DISALLOWED
    assert harness.target.views == [
        ErrorView(title="Error", message="Only SELECT or INSERT queries are allowed")
    ]


def test_select_routes_to_read_and_renders_table() -> None:
    transport = _TransportStub(
        read=Success(payload={"rows": [{"id": 1, "name": "Sara"}]}, operation=OperationKind.QUERY)
    )
    harness = _Harness(transport)

    state = harness.submit_text("  select * from patient  ")

    assert transport.calls == [("read", "select * from patient")]
    assert state.phase is ViewPhase.RENDERED
    loading, final = harness.target.views
    assert isinstance(loading, LoadingView)
    assert isinstance(final, TableView)
    assert final.headers == ("id", "name")
    assert final.rows == (("1", "Sara"),)


def test_insert_routes_to_write() -> None:
    transport = _TransportStub()
    harness = _Harness(transport)

    harness.submit_text("insert into patient (firstName) values ('Ann')")

    assert transport.calls == [("write", "insert into patient (firstName) values ('Ann')")]
    assert isinstance(harness.target.views[-1], DumpView)


def test_failure_outcome_renders_error_and_reenables_control() -> None:
    transport = _TransportStub(read=Failure("syntax error"))
    harness = _Harness(transport)

    state = harness.submit_text("select nope")

    assert state.outcome == Failure("syntax error")
    assert harness.target.views[-1] == ErrorView(title="Error", message="syntax error")
    assert harness.submit.enabled
    assert harness.submit.caption == "Submit Query"


def test_transport_exception_is_contained_and_control_reenabled() -> None:
    harness = _Harness(_TransportStub(raises=RuntimeError("socket closed")))

    state = harness.submit_text("select 1")

    assert state.outcome == Failure("socket closed")
    assert harness.target.views[-1] == ErrorView(title="Error", message="socket closed")
    assert harness.submit.enabled
    assert not harness.submit.busy


def test_non_outcome_result_falls_back_to_generic_failure() -> None:
    async def runner(call, query):
        return None

    harness = _Harness(_TransportStub(), runner=runner)

    state = harness.submit_text("select 1")

    assert state.outcome == Failure("Query execution failed")


def test_sample_insert_ignores_text_input() -> None:
    transport = _TransportStub()
    harness = _Harness(transport)
    harness.query_input.text = "DROP TABLE patient"

    asyncio.run(harness.dispatcher.insert_sample_data())

    assert transport.calls == [("write", SAMPLE_INSERT_STATEMENT)]
    assert harness.insert.enabled
    assert harness.submit.enabled


def test_sample_insert_reenables_control_after_fault() -> None:
    harness = _Harness(_TransportStub(raises=ConnectionError("unreachable")))

    state = asyncio.run(harness.dispatcher.insert_sample_data())

    assert state.outcome == Failure("unreachable")
    assert harness.insert.enabled


def test_control_is_disabled_while_loading_and_retrigger_is_ignored() -> None:
    transport = _TransportStub()

    async def scenario() -> None:
        gate = asyncio.Event()

        async def runner(call, query):
            await gate.wait()
            return call(query)

        harness = _Harness(transport, runner=runner)
        first = asyncio.create_task(harness.dispatcher.insert_sample_data())
        await asyncio.sleep(0)

        assert not harness.insert.enabled
        assert harness.insert.caption == "Inserting..."
        assert harness.dispatcher.state.phase is ViewPhase.LOADING
        assert harness.submit.enabled

        await harness.dispatcher.insert_sample_data()
        gate.set()
        await first

        assert harness.insert.enabled
        assert harness.dispatcher.state.phase is ViewPhase.RENDERED

    asyncio.run(scenario())

    assert transport.calls == [("write", SAMPLE_INSERT_STATEMENT)]


def test_last_completion_owns_render_target() -> None:
    transport = _TransportStub(
        read=Success(payload={"rows": [{"n": 1}]}, operation=OperationKind.QUERY),
    )

    async def scenario() -> _Harness:
        gates = {"read": asyncio.Event(), "write": asyncio.Event()}

        async def runner(call, query):
            key = "read" if call == transport.execute_read else "write"
            await gates[key].wait()
            return call(query)

        harness = _Harness(transport, runner=runner)
        harness.query_input.text = "select n from t"
        submit = asyncio.create_task(harness.dispatcher.submit_query())
        insert = asyncio.create_task(harness.dispatcher.insert_sample_data())
        await asyncio.sleep(0)
        gates["read"].set()
        await submit
        gates["write"].set()
        await insert
        return harness

    harness = asyncio.run(scenario())

    assert isinstance(harness.target.views[-1], DumpView)
    assert harness.dispatcher.state.outcome == transport.write


def test_initial_state_is_idle() -> None:
    harness = _Harness(_TransportStub())

    assert harness.dispatcher.state.phase is ViewPhase.IDLE


def test_control_is_re_enabled_when_change_callback_raises() -> None:
    harness = _Harness(_TransportStub())
    seen: List[Tuple[bool, bool]] = []

    def broken_callback(control: ControlVM) -> None:
        seen.append((control.enabled, control.busy))
        raise RuntimeError("widget gone")

    harness.submit.on_change = broken_callback

    with pytest.raises(RuntimeError):
        harness.submit_text("select 1")

    assert harness.submit.enabled is True
    assert harness.submit.busy is False
    assert harness.transport.calls == []
    assert seen[-1] == (True, False)
