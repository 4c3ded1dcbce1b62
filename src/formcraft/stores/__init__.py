"""
Stores Package

Persisted, copy-on-write stores and the session that owns them.

- LibraryStore: question libraries, sections, questions
- HeaderFooterStore: header and footer snippets
- StoreSession: one instance of each per session
"""

from .persistence import PersistenceSlot, PersistenceError, PersistedStore
from .library_store import LibraryStore
from .header_footer_store import HeaderFooterStore
from .editing import QuestionForm, submit_question_form, submit_section_form
from .session import StoreSession

__all__ = [
    "PersistenceSlot",
    "PersistenceError",
    "PersistedStore",
    "LibraryStore",
    "HeaderFooterStore",
    "QuestionForm",
    "submit_question_form",
    "submit_section_form",
    "StoreSession",
]
