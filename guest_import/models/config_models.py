from __future__ import annotations

from dataclasses import dataclass, field

from .vocabulary import DEFAULT_VOCABULARIES, VocabularySet

"""Config dataclasses for the guest import tool.

These are the domain models the loader in guest_import/config/loader.py
produces. Every field has a default so that ``ImportConfig()`` is the
behaviour of the tool without any config file.
"""

__all__ = [
    "PARENT_MATCH_NORMALIZED",
    "PARENT_MATCH_EXACT",
    "DatabaseConfig",
    "ImportConfig",
]

# ParentKey comparison policies
PARENT_MATCH_NORMALIZED = "normalized"  # case-insensitive, whitespace collapsed
PARENT_MATCH_EXACT = "exact"  # direct string equality with "FirstName LastName"


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection fallback.

    Environment variables (DATABASE_URL / PGDSN / PGHOST ...) take
    precedence over these values.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration of a guest import run."""
    vocabularies: VocabularySet = DEFAULT_VOCABULARIES
    parent_match: str = PARENT_MATCH_NORMALIZED
    phone_min_digits: int = 7
    phone_max_digits: int = 15
    sheet_name: str | None = None  # None -> first sheet of the workbook
    null_sentinels: frozenset[str] | None = None  # reader-level cell -> None (upper-cased)
    guests_table: str = "guests"
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
