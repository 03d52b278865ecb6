"""Dispatch cycle for the two console triggers.

Call context:
    The NiceGUI page awaits :meth:`DispatchQuery.submit_query` and
    :meth:`DispatchQuery.insert_sample_data` from button click handlers.

Concurrency:
    Both triggers are coroutines on a single event loop. The blocking port
    call is handed to ``runner`` (``asyncio.to_thread`` by default) and the
    coroutine suspends until it returns. A control is disabled for the whole
    cycle, so a second click on the same control is ignored. The two controls
    are independent: their requests may overlap and whichever finishes last
    owns the render target. No ordering is enforced between them.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from sqlconsole.domain.models import (
    Failure,
    OperationOutcome,
    QueryClassification,
    RejectionReason,
    Success,
    ViewState,
)
from sqlconsole.domain.ports import (
    ControlPort,
    PresenterPort,
    QueryInputPort,
    QueryPort,
    RenderTarget,
    ValidatorPort,
)
from sqlconsole.domain.strings import MessageKey, Messages, load_messages
from sqlconsole.usecases.error_mapping import map_transport_error

LOGGER = logging.getLogger(__name__)

Runner = Callable[..., Awaitable[Any]]

SAMPLE_INSERT_STATEMENT = (
    "INSERT INTO patient (firstName,lastName,healthNum,age,notes) VALUES "
    "('Sara','Brown','H10001','30','abc'), "
    "('John','Smith','H10001','30','abc'), "
    "('Jack','Ma','H10001','30','abc'), "
    "('Elon','Musk','H10001','30','abc')"
)


class DispatchQuery:
    """Run Validator -> QueryPort -> Presenter for each trigger and own the view state."""

    def __init__(
        self,
        *,
        validator: ValidatorPort,
        transport: QueryPort,
        presenter: PresenterPort,
        query_input: QueryInputPort,
        render_target: RenderTarget,
        submit_control: ControlPort,
        insert_control: ControlPort,
        messages: Optional[Messages] = None,
        sample_statement: str = SAMPLE_INSERT_STATEMENT,
        runner: Optional[Runner] = None,
    ) -> None:
        self.validator = validator
        self.transport = transport
        self.presenter = presenter
        self.query_input = query_input
        self.render_target = render_target
        self.submit_control = submit_control
        self.insert_control = insert_control
        self.messages = messages or load_messages()
        self.sample_statement = sample_statement
        self._runner: Runner = runner or asyncio.to_thread
        self._state = ViewState.idle()

    @property
    def state(self) -> ViewState:
        return self._state

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------
    async def submit_query(self) -> ViewState:
        """Validate the current input and execute it as a read or write."""
        if not self.submit_control.enabled:
            LOGGER.debug("Submit ignored: control busy")
            return self._state

        query = (self.query_input.read_query() or "").strip()
        if not self.validator.is_non_empty(query):
            return self._reject(RejectionReason.EMPTY)
        if not self.validator.is_allowed(query):
            return self._reject(RejectionReason.DISALLOWED)

        if self.validator.classify(query) is QueryClassification.SELECT:
            call = self.transport.execute_read
            fallback = self.messages[MessageKey.GENERIC_QUERY_FAILURE]
        else:
            call = self.transport.execute_write
            fallback = self.messages[MessageKey.GENERIC_INSERT_FAILURE]
        return await self._dispatch(self.submit_control, call, query, fallback)

    async def insert_sample_data(self) -> ViewState:
        """Execute the fixed sample INSERT, ignoring the text input."""
        if not self.insert_control.enabled:
            LOGGER.debug("Sample insert ignored: control busy")
            return self._state
        return await self._dispatch(
            self.insert_control,
            self.transport.execute_write,
            self.sample_statement,
            self.messages[MessageKey.GENERIC_INSERT_FAILURE],
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    async def _dispatch(
        self,
        control: ControlPort,
        call: Callable[[str], OperationOutcome],
        query: str,
        fallback: str,
    ) -> ViewState:
        try:
            control.set_enabled(False)
            control.set_busy(True)
            self._set_state(ViewState.loading(), self.presenter.loading())
            try:
                outcome = await self._runner(call, query)
            except Exception as exc:
                LOGGER.exception("Transport call raised instead of returning an outcome")
                outcome = map_transport_error(exc, fallback=fallback)
            if not isinstance(outcome, (Success, Failure)):
                LOGGER.error("Transport returned %r instead of an outcome", type(outcome).__name__)
                outcome = Failure(fallback)
            self._log_outcome(outcome)
            self._set_state(ViewState.rendered(outcome), self.presenter.present(outcome))
        finally:
            try:
                control.set_enabled(True)
            finally:
                control.set_busy(False)
        return self._state

    def _reject(self, reason: RejectionReason) -> ViewState:
        LOGGER.debug("Query rejected before dispatch: %s", reason.value)
        self._set_state(ViewState.rejected(reason), self.presenter.rejection(reason))
        return self._state

    def _set_state(self, state: ViewState, view: object) -> None:
        self._state = state
        self.render_target.render(view)

    @staticmethod
    def _log_outcome(outcome: OperationOutcome) -> None:
        if isinstance(outcome, Success):
            LOGGER.info("%s succeeded", outcome.operation.value.capitalize())
        else:
            LOGGER.info("Operation failed: %s", outcome.message)


__all__ = ["DispatchQuery", "SAMPLE_INSERT_STATEMENT"]
