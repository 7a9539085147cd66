"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or pick up worker settings from the shell
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("WORKERS_ENABLED", "false")
