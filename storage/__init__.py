"""SQLite connection helpers and schema migrations."""
