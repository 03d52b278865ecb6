"""Browser SQL console: validate, dispatch and render SELECT/INSERT queries."""

__version__ = "0.1.0"
