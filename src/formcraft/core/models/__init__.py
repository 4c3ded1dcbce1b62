"""
Core Models Package

Immutable data models that serve as the single source of truth.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. Copy-on-write mutation: every store operation builds new instances
2. Readers holding an old snapshot never observe a partial update
3. Deep equality for persistence round-trips comes for free

| Model | Owned by | Ordered by |
|-------|----------|------------|
| `Question` | `Section` | `order` within section |
| `Section` | `QuestionLibrary` or `Questionnaire` | `order` within owner |
| `QuestionLibrary` | `LibraryStore` | `updated_at` (display) |
| `HeaderFooter` | `HeaderFooterStore` | none |
| `Questionnaire` | `QuestionnaireCollection` | `updated_at` (display) |
"""

from .questions import (
    Question,
    QuestionType,
    QuestionValidation,
    QUESTION_TYPE_LABELS,
    question_type_label,
)
from .sections import Section
from .libraries import QuestionLibrary
from .header_footer import HeaderFooter, HeaderFooterKind
from .questionnaires import Questionnaire, QuestionnaireStatus
from .edit_target import (
    EditTarget,
    EditingQuestion,
    EditingSection,
    NoEditTarget,
    NO_EDIT_TARGET,
)

__all__ = [
    "Question",
    "QuestionType",
    "QuestionValidation",
    "QUESTION_TYPE_LABELS",
    "question_type_label",
    "Section",
    "QuestionLibrary",
    "HeaderFooter",
    "HeaderFooterKind",
    "Questionnaire",
    "QuestionnaireStatus",
    "EditTarget",
    "EditingQuestion",
    "EditingSection",
    "NoEditTarget",
    "NO_EDIT_TARGET",
]
