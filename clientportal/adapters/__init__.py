"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (portal HTTP API,
    local session file, and in-memory test doubles) used by use cases.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by ``clientportal/app/main.py`` for runtime wiring and by tests
    for stubs and transport-level behavior verification.
"""
