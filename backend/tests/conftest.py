import os

# Set env vars BEFORE any imports from the project happen
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("ADMIN_SECRET", "test-secret")
os.environ.setdefault("FOOTBALL_API_KEY", "test-football-key")
