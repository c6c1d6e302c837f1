"""Root conftest — shared test configuration."""

import os

# Ensure tests never talk to a real database or The One API with real keys
os.environ.setdefault("ONE_API_KEY", "test-one-api-key")
os.environ.setdefault("ONE_API_BASE_URL", "https://the-one-api.test/v2")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("LOG_FORMAT", "text")
