"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach the docker-compose PostgreSQL by accident
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
