"""ViewModel package for UI state and presentation values.

Call context:
    ``sqlconsole/web_ui`` imports concrete viewmodels from this package to
    bind widgets to dispatcher state and to paint result views.

Dependencies:
    Modules in this package depend on domain types and lightweight formatting
    helpers only. I/O adapters and use-case orchestration remain outside.

Responsibilities:
    - Expose mutable UI state (input text, button flags, result panel).
    - Transform operation outcomes into view-facing value objects.
    - Keep MVVM boundaries explicit by avoiding transport or persistence logic.
"""
