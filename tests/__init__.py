"""
CMA SDK Test Suite.

This package contains:
- unit/: Unit tests (mock dispatchers, no I/O)
- integration/: Integration tests (CmaClient over the in-memory dispatcher)
"""
