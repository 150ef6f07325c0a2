"""Domain models for the guest import tool.

Row, item and result types of the import pipeline plus its configuration
and vocabulary tables.
"""

from .config_models import PARENT_MATCH_EXACT, PARENT_MATCH_NORMALIZED, DatabaseConfig, ImportConfig
from .guest_item import ItemKind, NormalizedImportItem
from .import_result import FileOutcome, FileStatus, ImportResult
from .import_row import ImportRow
from .validation_issue import ValidationIssue
from .vocabulary import DEFAULT_VOCABULARIES, NO_DATA, Vocabulary, VocabularySet

__all__ = [
    # Configuration models
    "DatabaseConfig",
    "ImportConfig",
    "PARENT_MATCH_EXACT",
    "PARENT_MATCH_NORMALIZED",
    "Vocabulary",
    "VocabularySet",
    "DEFAULT_VOCABULARIES",
    "NO_DATA",
    # Processing models
    "ImportRow",
    "ItemKind",
    "NormalizedImportItem",
    "ValidationIssue",
    "ImportResult",
    "FileOutcome",
    "FileStatus",
]
