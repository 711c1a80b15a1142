"""pg-typegen: TypeScript declarations from PostgreSQL schema dumps."""

__version__ = "0.1.0"
