"""Database-facing building blocks: connection handling and schema work."""
