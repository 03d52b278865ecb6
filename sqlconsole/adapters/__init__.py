"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP query endpoint,
    local preference storage, and an offline test double).

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by the web runtime composition and by tests (for the mock and
    transport-level behavior verification).
"""
