"""Global pytest configuration."""

import os

# Set env for tests before any imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("GRPC_ENABLED", "false")
