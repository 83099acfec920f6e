"""Resource Lists — in-memory normalized entity store with async CRUD orchestration."""

__version__ = "0.1.0"
