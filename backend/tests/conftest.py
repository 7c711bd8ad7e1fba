"""Root conftest — shared test configuration."""

import os

# Settings are cached on first import; pin them before any waitlist module loads
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("LOG_FORMAT", "text")
