"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP auth service,
    token persistence, and the offline auth mock).

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by ``evote.app.controller`` for runtime wiring and by tests for
    fakes and transport-level behavior verification.
"""
