"""
FormCraft Core Package

Shared data models, schemas and utilities used by the stores and the
questionnaire assembly layer.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Frozen dataclasses, new instances created for any change
   - Sequences are tuples so snapshots can be shared freely

2. **Dense Ordering**
   - `order` is a 1-based rank among siblings
   - Reorder and copy always renumber to `1..N`

3. **Versioned Persistence**
   - Store blobs carry `schema_version`
   - Mismatched or malformed blobs are discarded, never migrated
"""

from .models import (
    Question,
    QuestionType,
    Section,
    QuestionLibrary,
    HeaderFooter,
    HeaderFooterKind,
    Questionnaire,
    QuestionnaireStatus,
)

__all__ = [
    "Question",
    "QuestionType",
    "Section",
    "QuestionLibrary",
    "HeaderFooter",
    "HeaderFooterKind",
    "Questionnaire",
    "QuestionnaireStatus",
]
