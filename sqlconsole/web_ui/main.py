"""NiceGUI entrypoint for the SQL console web runtime."""

from __future__ import annotations

import argparse
import json
from typing import Any, Dict, Optional

from nicegui import run, ui

from sqlconsole.domain.ports import UseCaseError
from sqlconsole.domain.strings import MessageKey, available_languages
from sqlconsole.usecases.dispatch_query import DispatchQuery
from sqlconsole.utils.logging import configure_root
from sqlconsole.viewmodels.console_vm import ControlVM, QueryInputVM, ResultPanelVM
from sqlconsole.viewmodels.result_vm import (
    DumpView,
    ErrorView,
    LoadingView,
    ResultPresenter,
    TableView,
)
from sqlconsole.web_ui.runtime import ConsoleRuntime
from sqlconsole.web_ui.viewmodels import (
    BROWSER_SETTINGS_KEY,
    WebSettingsVM,
    parse_settings_json,
)


def _install_theme() -> None:
    """Install global CSS for the results panel."""
    ui.add_head_html(
        """
<style>
.sqlc-page { max-width: 1100px; margin: 0 auto; padding: 14px; }
.sqlc-results table { border-collapse: collapse; width: 100%; }
.sqlc-results th, .sqlc-results td { border: 1px solid #c9d7e9; padding: 4px 8px; text-align: left; }
.sqlc-results th { background: #edf4ff; }
.sqlc-results pre { background: #f6f8fa; padding: 8px; border-radius: 6px; overflow-x: auto; }
.sqlc-success { color: #0b6b3a; }
.sqlc-error { color: #b42318; }
</style>
        """
    )


def _notify_error(exc: Exception) -> None:
    """Render exceptions as concise NiceGUI toasts."""
    ui.notify(str(exc), color="negative", close_button="OK")


def _table_html(view: TableView) -> str:
    """Build table markup from already-escaped header and cell text."""
    head = "".join(f"<th>{header}</th>" for header in view.headers)
    body = "".join(
        "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in view.rows
    )
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


def _sync_button(button: Any, control: ControlVM) -> None:
    button.set_text(control.caption)
    if control.enabled:
        button.enable()
    else:
        button.disable()


def _build_ui(runtime: ConsoleRuntime) -> None:
    """Register the NiceGUI pages for the runtime."""

    @ui.page("/")
    async def index() -> None:
        messages = runtime.messages()
        settings_vm = WebSettingsVM.from_settings_vm(runtime.settings_vm)
        query_vm = QueryInputVM()
        panel = ResultPanelVM()
        dispatcher: Dict[str, Optional[DispatchQuery]] = {"current": None}
        success_label = messages[MessageKey.SUCCESS_LABEL]
        error_prefix = messages[MessageKey.ERROR_PREFIX]

        @ui.refreshable
        def render_results() -> None:
            view = panel.current
            if view is None:
                return
            with ui.card().classes("w-full sqlc-results"):
                # View text is pre-escaped by ResultPresenter.
                if isinstance(view, LoadingView):
                    ui.html(f"<h2>{view.title}</h2>", sanitize=False).classes("text-h6")
                    ui.html(f"<p>{view.message}</p>", sanitize=False)
                    ui.spinner()
                elif isinstance(view, ErrorView):
                    ui.html(f"<h2>{view.title}</h2>", sanitize=False).classes("text-h6")
                    ui.html(
                        f'<div class="sqlc-error"><strong>{error_prefix}</strong> {view.message}</div>',
                        sanitize=False,
                    )
                elif isinstance(view, (TableView, DumpView)):
                    ui.html(f"<h2>{view.title}</h2>", sanitize=False).classes("text-h6")
                    ui.html(
                        f'<div class="sqlc-success"><strong>{success_label}</strong> {view.banner}</div>',
                        sanitize=False,
                    )
                    if isinstance(view, TableView):
                        ui.html(_table_html(view), sanitize=False).classes("w-full")
                    else:
                        ui.html(f"<pre>{view.text}</pre>", sanitize=False).classes("w-full")

        panel.on_render = lambda _view: render_results.refresh()

        def ensure_dispatcher() -> Optional[DispatchQuery]:
            if dispatcher["current"] is not None:
                return dispatcher["current"]
            try:
                dispatcher["current"] = runtime.build_dispatcher(
                    query_input=query_vm,
                    render_target=panel,
                    submit_control=submit_ctrl,
                    insert_control=insert_ctrl,
                    runner=run.io_bound,
                )
            except UseCaseError as exc:
                panel.render(ResultPresenter(messages).error(exc.message))
            return dispatcher["current"]

        async def on_submit() -> None:
            current = ensure_dispatcher()
            if current is not None:
                await current.submit_query()

        async def on_insert() -> None:
            current = ensure_dispatcher()
            if current is not None:
                await current.insert_sample_data()

        def on_timeout_change(event: Any) -> None:
            try:
                settings_vm.set_request_timeout(event.value)
            except ValueError as exc:
                _notify_error(exc)

        async def save_settings() -> None:
            try:
                payload = settings_vm.to_payload()
                runtime.apply_settings_payload(payload)
                runtime.save_settings()
                dumped = json.dumps(payload, ensure_ascii=False)
                await ui.run_javascript(
                    f"localStorage.setItem({json.dumps(BROWSER_SETTINGS_KEY)}, {json.dumps(dumped)});"
                )
                dispatcher["current"] = None
                ui.notify("Settings saved.", color="positive")
            except Exception as exc:
                _notify_error(exc)

        async def load_settings_from_browser() -> None:
            nonlocal settings_vm
            try:
                raw = await ui.run_javascript(
                    f"return localStorage.getItem({json.dumps(BROWSER_SETTINGS_KEY)}) || '';"
                )
                text = str(raw or "").strip()
                if not text:
                    return
                runtime.apply_settings_payload(parse_settings_json(text))
                settings_vm = WebSettingsVM.from_settings_vm(runtime.settings_vm)
                base_url_input.value = settings_vm.api_base_url
                timeout_input.value = settings_vm.request_timeout_s
                dispatcher["current"] = None
            except Exception as exc:
                _notify_error(exc)

        with ui.column().classes("sqlc-page w-full"):
            ui.label(messages[MessageKey.PAGE_TITLE]).classes("text-h4")
            ui.textarea(
                messages[MessageKey.INPUT_LABEL],
                placeholder=messages[MessageKey.INPUT_PLACEHOLDER],
                on_change=lambda e: setattr(query_vm, "text", str(e.value or "")),
            ).props("outlined autogrow").classes("w-full")
            with ui.row().classes("q-gutter-sm"):
                submit_btn = ui.button(messages[MessageKey.BTN_SUBMIT], on_click=on_submit, color="primary")
                insert_btn = ui.button(messages[MessageKey.BTN_INSERT], on_click=on_insert)
            with ui.expansion("Settings").classes("w-full"):
                base_url_input = ui.input(
                    "Query endpoint URL",
                    value=settings_vm.api_base_url,
                    on_change=lambda e: setattr(settings_vm, "api_base_url", str(e.value or "")),
                ).classes("w-full")
                timeout_input = ui.number(
                    "Request timeout (s)",
                    value=settings_vm.request_timeout_s,
                    on_change=on_timeout_change,
                )
                ui.select(
                    list(available_languages()),
                    value=settings_vm.language,
                    label="Language",
                    on_change=lambda e: setattr(settings_vm, "language", str(e.value)),
                ).props("dense outlined")
                ui.checkbox(
                    "Debug logging",
                    value=settings_vm.debug_logging,
                    on_change=lambda e: setattr(settings_vm, "debug_logging", bool(e.value)),
                )
                ui.button("Save Settings", on_click=save_settings)
            render_results()

        submit_ctrl = ControlVM(
            idle_caption=messages[MessageKey.BTN_SUBMIT],
            busy_caption=messages[MessageKey.BTN_EXECUTING],
            on_change=lambda ctrl: _sync_button(submit_btn, ctrl),
        )
        insert_ctrl = ControlVM(
            idle_caption=messages[MessageKey.BTN_INSERT],
            busy_caption=messages[MessageKey.BTN_INSERTING],
            on_change=lambda ctrl: _sync_button(insert_btn, ctrl),
        )

        await ui.context.client.connected()
        await load_settings_from_browser()


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the SQL console NiceGUI web UI.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--base-url", default=None, help="Query endpoint base URL.")
    parser.add_argument("--settings-dir", default=".", help="Directory holding user_prefs.json.")
    parser.add_argument("--mock", action="store_true", help="Use the in-memory endpoint.")
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args()


def main() -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args()
    configure_root()
    runtime = ConsoleRuntime(
        settings_dir=args.settings_dir,
        base_url=args.base_url,
        use_mock=args.mock,
    )
    if args.smoke_test:
        payload = runtime.settings_payload()
        print("web-smoke-ok", payload.get("api_base_url") or "<unset>")
        return
    _install_theme()
    _build_ui(runtime)
    ui.run(
        host=args.host,
        port=args.port,
        title=runtime.messages()[MessageKey.PAGE_TITLE],
        reload=args.reload,
        show=False,
    )


if __name__ == "__main__":
    main()
