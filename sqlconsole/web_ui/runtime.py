"""NiceGUI runtime composition for the SQL console.

This module wires settings, storage, the query adapter, and the dispatcher
for the web page. It holds no widget code.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from sqlconsole.adapters.query_mock import QueryRestMock
from sqlconsole.adapters.query_rest import QueryRestAdapter
from sqlconsole.adapters.storage_local import StorageLocal
from sqlconsole.domain.ports import (
    ControlPort,
    QueryInputPort,
    QueryPort,
    RenderTarget,
    StoragePort,
    UseCaseError,
)
from sqlconsole.domain.query import QueryValidator
from sqlconsole.domain.strings import Messages, load_messages
from sqlconsole.usecases.dispatch_query import DispatchQuery, Runner
from sqlconsole.utils.logging import apply_ui_preferences
from sqlconsole.viewmodels.result_vm import ResultPresenter
from sqlconsole.viewmodels.settings_vm import SettingsVM


LOGGER = logging.getLogger(__name__)


class ConsoleRuntime:
    """Own settings state and build per-page dispatchers from it."""

    def __init__(
        self,
        *,
        settings_dir: str = ".",
        base_url: Optional[str] = None,
        use_mock: bool = False,
        storage: Optional[StoragePort] = None,
    ) -> None:
        self.storage = storage or StorageLocal(settings_dir)
        self.settings_vm = SettingsVM(on_save=self.storage.save_user_prefs)
        self._load_persisted_settings()
        if base_url:
            self.settings_vm.api_base_url = base_url
        self.mock: Optional[QueryRestMock] = QueryRestMock() if use_mock else None
        apply_ui_preferences(self.settings_vm.debug_logging)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def settings_payload(self) -> Dict[str, Any]:
        return self.settings_vm.to_dict()

    def apply_settings_payload(self, payload: Mapping[str, Any]) -> None:
        self.settings_vm.apply_dict(payload)
        if not self.settings_vm.is_valid():
            raise ValueError("Settings invalid: check the endpoint URL and timeout.")
        apply_ui_preferences(self.settings_vm.debug_logging)

    def save_settings(self) -> None:
        self.settings_vm.cmd_save()
        LOGGER.info("Settings saved")

    def messages(self) -> Messages:
        return load_messages(self.settings_vm.language)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------
    def build_transport(self, messages: Optional[Messages] = None) -> QueryPort:
        if self.mock is not None:
            return self.mock
        base_url = self.settings_vm.api_base_url
        if not base_url:
            raise UseCaseError("CONFIG_MISSING", "Set the query endpoint URL in settings first.")
        return QueryRestAdapter(
            base_url,
            request_timeout_s=self.settings_vm.request_timeout_s,
            messages=messages or self.messages(),
        )

    def build_dispatcher(
        self,
        *,
        query_input: QueryInputPort,
        render_target: RenderTarget,
        submit_control: ControlPort,
        insert_control: ControlPort,
        runner: Optional[Runner] = None,
    ) -> DispatchQuery:
        """Create a dispatcher bound to one page's collaborators.

        Raises:
            UseCaseError: If no endpoint URL is configured and mock mode is off.
        """
        messages = self.messages()
        return DispatchQuery(
            validator=QueryValidator(),
            transport=self.build_transport(messages),
            presenter=ResultPresenter(messages),
            query_input=query_input,
            render_target=render_target,
            submit_control=submit_control,
            insert_control=insert_control,
            messages=messages,
            runner=runner,
        )

    def _load_persisted_settings(self) -> None:
        try:
            prefs = self.storage.load_user_prefs()
        except (OSError, ValueError) as exc:
            LOGGER.warning("Could not read saved settings: %s", exc)
            return
        if not prefs:
            return
        try:
            self.settings_vm.apply_dict(prefs)
        except ValueError as exc:
            LOGGER.warning("Ignoring saved settings: %s", exc)


__all__ = ["ConsoleRuntime"]
