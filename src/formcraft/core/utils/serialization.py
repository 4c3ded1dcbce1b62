"""
Serialization Utilities

Builds and parses the persisted store envelopes.

- `serialize_*` functions return plain dicts ready for `json.dumps`
- `deserialize_*` functions validate first (see core.schemas.validator),
  then rebuild immutable models
- Datetimes are stored as ISO-8601 strings with their UTC offset
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Tuple

from ..models.header_footer import HeaderFooter
from ..models.libraries import QuestionLibrary
from ..models.questionnaires import Questionnaire
from ..schemas.validator import (
    STORE_SCHEMA_VERSION,
    validate_header_footer_store,
    validate_library_store,
)


# ─────────────────────────────────────────────────────────────────────────────
# Library Store
# ─────────────────────────────────────────────────────────────────────────────

def serialize_library_state(
    libraries: Iterable[QuestionLibrary],
    current_library_id: Optional[str] = None,
) -> dict[str, Any]:
    """
    Serialize the library collection to a versioned envelope.

    Args:
        libraries: Libraries in storage order
        current_library_id: Active-selection pointer (may be None)

    Returns:
        {"schema_version": ..., "state": {"libraries": [...], "current_library_id": ...}}
    """
    return {
        "schema_version": STORE_SCHEMA_VERSION,
        "state": {
            "libraries": [library.to_dict() for library in libraries],
            "current_library_id": current_library_id,
        },
    }


def deserialize_library_state(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Tuple[Tuple[QuestionLibrary, ...], Optional[str]]:
    """
    Rebuild the library collection from an envelope.

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_library_store(data, strict=strict)
    state = data["state"]
    libraries = tuple(QuestionLibrary.from_dict(lib) for lib in state["libraries"])
    return libraries, state.get("current_library_id")


# ─────────────────────────────────────────────────────────────────────────────
# Header/Footer Store
# ─────────────────────────────────────────────────────────────────────────────

def serialize_header_footer_state(
    headers: Iterable[HeaderFooter],
    footers: Iterable[HeaderFooter],
) -> dict[str, Any]:
    return {
        "schema_version": STORE_SCHEMA_VERSION,
        "state": {
            "headers": [h.to_dict() for h in headers],
            "footers": [f.to_dict() for f in footers],
        },
    }


def deserialize_header_footer_state(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Tuple[Tuple[HeaderFooter, ...], Tuple[HeaderFooter, ...]]:
    """
    Rebuild the header and footer collections from an envelope.

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_header_footer_store(data, strict=strict)
    state = data["state"]
    headers = tuple(HeaderFooter.from_dict(h) for h in state["headers"])
    footers = tuple(HeaderFooter.from_dict(f) for f in state["footers"])
    return headers, footers


# ─────────────────────────────────────────────────────────────────────────────
# Questionnaires (export only; questionnaires are not persisted)
# ─────────────────────────────────────────────────────────────────────────────

def serialize_questionnaire(questionnaire: Questionnaire) -> dict[str, Any]:
    return questionnaire.to_dict()


def deserialize_questionnaire(data: dict[str, Any]) -> Questionnaire:
    return Questionnaire.from_dict(data)
