"""Thin web-facing viewmodels for NiceGUI bindings.

These viewmodels hold browser form state and translate to/from the core
settings viewmodel without adding I/O or orchestration logic.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any, Dict, Mapping

from sqlconsole.domain.strings import DEFAULT_LANGUAGE
from sqlconsole.viewmodels.settings_vm import SettingsVM


BROWSER_SETTINGS_KEY = "sqlconsole.web.settings.v1"


def _as_int(value: Any, default: int) -> int:
    """Convert mixed values to int with deterministic fallback."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


@dataclass
class WebSettingsVM:
    """Browser-editable settings projection for NiceGUI forms."""

    api_base_url: str = ""
    request_timeout_s: int = 10
    language: str = DEFAULT_LANGUAGE
    debug_logging: bool = False

    @classmethod
    def from_settings_vm(cls, settings_vm: SettingsVM) -> "WebSettingsVM":
        """Build browser form state from the core ``SettingsVM`` snapshot."""
        return cls.from_payload(settings_vm.to_dict())

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "WebSettingsVM":
        """Build browser form state from a ``SettingsVM.to_dict`` shaped mapping."""
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping.")
        return cls(
            api_base_url=str(payload.get("api_base_url") or ""),
            request_timeout_s=_as_int(payload.get("request_timeout_s"), 10),
            language=str(payload.get("language") or DEFAULT_LANGUAGE),
            debug_logging=bool(payload.get("debug_logging")),
        )

    def set_request_timeout(self, value: Any) -> None:
        """Store a timeout typed into the form; reject blank, fractional or non-positive values."""
        if value is None or isinstance(value, bool) or str(value).strip() == "":
            raise ValueError("Request timeout is required.")
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Request timeout must be a number, got {value!r}.") from exc
        if not number.is_integer() or number <= 0:
            raise ValueError("Request timeout must be a whole number of seconds greater than 0.")
        self.request_timeout_s = int(number)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize browser form state using ``SettingsVM`` payload shape."""
        return {
            "api_base_url": str(self.api_base_url or "").strip(),
            "request_timeout_s": _as_int(self.request_timeout_s, 10),
            "language": str(self.language or DEFAULT_LANGUAGE),
            "debug_logging": bool(self.debug_logging),
        }

    def apply_to_settings_vm(self, settings_vm: SettingsVM) -> None:
        """Push browser form values into the core settings viewmodel."""
        settings_vm.apply_dict(self.to_payload())


def parse_settings_json(text: str) -> Dict[str, Any]:
    """Parse imported settings JSON into a mapping payload."""
    raw = json.loads(text)
    if not isinstance(raw, dict):
        raise ValueError("Imported settings must be a JSON object.")
    return dict(raw)
