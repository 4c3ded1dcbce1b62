"""
Schema Validation Utilities

Validates persisted store blobs before they are rehydrated.

Every blob is an envelope:

    {"schema_version": <int>, "state": {...}}

- `validate_library_store()` checks the question-library blob
- `validate_header_footer_store()` checks the header/footer blob
- Basic structural checks always run; `strict=True` additionally runs
  jsonschema against the bundled `*.schema.json` files

There is no migration path: a blob with a different `schema_version` is
rejected and the store starts empty.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

import jsonschema

from ..models.questions import QuestionType
from ..models.header_footer import HeaderFooterKind


# Schema version constants
STORE_SCHEMA_VERSION = 1

_QUESTION_TYPES = {t.value for t in QuestionType}
_STRING_LIST_FIELDS = ("options", "bullet_points", "table_columns", "table_row_headers")
_HEADER_FOOTER_KINDS = {k.value for k in HeaderFooterKind}

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


# ─────────────────────────────────────────────────────────────────────────────
# Public entry points
# ─────────────────────────────────────────────────────────────────────────────

def validate_library_store(data: Any, *, strict: bool = False) -> None:
    """
    Validate a persisted question-library blob.

    Args:
        data: Decoded JSON envelope
        strict: If True, also run jsonschema

    Raises:
        ValidationError: If data is invalid
    """
    state = _validate_envelope(data)
    libraries = state.get("libraries")
    if not isinstance(libraries, list):
        raise ValidationError("libraries must be a list", path="state.libraries")

    current = state.get("current_library_id")
    if current is not None and not isinstance(current, str):
        raise ValidationError(
            f"Invalid current_library_id: {current!r}",
            path="state.current_library_id",
        )

    for i, library in enumerate(libraries):
        _validate_library(library, f"state.libraries[{i}]")
    _check_unique((lib.get("id") for lib in libraries), "state.libraries")

    if strict:
        _run_jsonschema(data, "library_store")


def validate_header_footer_store(data: Any, *, strict: bool = False) -> None:
    """
    Validate a persisted header/footer blob.

    Args:
        data: Decoded JSON envelope
        strict: If True, also run jsonschema

    Raises:
        ValidationError: If data is invalid
    """
    state = _validate_envelope(data)
    for key, kind in (("headers", "header"), ("footers", "footer")):
        items = state.get(key)
        if not isinstance(items, list):
            raise ValidationError(f"{key} must be a list", path=f"state.{key}")
        for i, item in enumerate(items):
            path = f"state.{key}[{i}]"
            _require(item, ["id", "name", "content", "type", "created_at", "updated_at"], path)
            if item["type"] not in _HEADER_FOOTER_KINDS:
                raise ValidationError(f"Invalid type: {item['type']!r}", path=f"{path}.type")
            if item["type"] != kind:
                raise ValidationError(
                    f"{kind} collection holds a {item['type']!r} entry",
                    path=f"{path}.type",
                )
            _validate_timestamps(item, path)
        _check_unique((item.get("id") for item in items), f"state.{key}")

    if strict:
        _run_jsonschema(data, "header_footer_store")


# ─────────────────────────────────────────────────────────────────────────────
# Structural checks
# ─────────────────────────────────────────────────────────────────────────────

def _validate_envelope(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValidationError("Store blob must be a JSON object")

    missing = [f for f in ("schema_version", "state") if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            errors=[f"Missing field: {f}" for f in missing],
        )

    version = data.get("schema_version")
    if version != STORE_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported store schema version: {version} (expected {STORE_SCHEMA_VERSION})",
            path="schema_version",
        )

    state = data["state"]
    if not isinstance(state, dict):
        raise ValidationError("state must be an object", path="state")
    return state


def _validate_library(data: Any, path: str) -> None:
    _require(data, ["id", "name", "sections", "created_at", "updated_at"], path)
    _validate_timestamps(data, path)
    sections = data["sections"]
    if not isinstance(sections, list):
        raise ValidationError("sections must be a list", path=f"{path}.sections")
    for i, section in enumerate(sections):
        _validate_section(section, f"{path}.sections[{i}]")
    _check_unique((s.get("id") for s in sections), f"{path}.sections")


def _validate_section(data: Any, path: str) -> None:
    _require(data, ["id", "title", "questions", "order", "hidden"], path)
    _validate_order(data["order"], f"{path}.order")
    questions = data["questions"]
    if not isinstance(questions, list):
        raise ValidationError("questions must be a list", path=f"{path}.questions")
    for i, question in enumerate(questions):
        _validate_question(question, f"{path}.questions[{i}]")
    _check_unique((q.get("id") for q in questions), f"{path}.questions")


def _validate_question(data: Any, path: str) -> None:
    _require(data, ["id", "title", "type", "required", "order", "hidden"], path)
    if data["type"] not in _QUESTION_TYPES:
        raise ValidationError(f"Invalid question type: {data['type']!r}", path=f"{path}.type")
    _validate_order(data["order"], f"{path}.order")

    for key in _STRING_LIST_FIELDS:
        value = data.get(key)
        if value is not None and not _is_string_list(value):
            raise ValidationError(f"{key} must be a list of strings", path=f"{path}.{key}")

    validation = data.get("validation")
    if validation is not None and not isinstance(validation, dict):
        raise ValidationError("validation must be an object", path=f"{path}.validation")

    rows = data.get("table_rows")
    if rows is not None:
        if not isinstance(rows, list) or not all(_is_string_list(row) for row in rows):
            raise ValidationError("table_rows must be a list of lists", path=f"{path}.table_rows")


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _validate_order(order: Any, path: str) -> None:
    # bool is an int subclass; reject it explicitly
    if not isinstance(order, int) or isinstance(order, bool):
        raise ValidationError(f"Invalid order: {order!r} (must be an integer)", path=path)


def _validate_timestamps(data: dict, path: str) -> None:
    for key in ("created_at", "updated_at"):
        value = data.get(key)
        try:
            datetime.fromisoformat(str(value))
        except ValueError:
            raise ValidationError(
                f"Invalid timestamp: {value!r}",
                path=f"{path}.{key}",
            ) from None


def _require(data: Any, required: list[str], path: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError("Expected an object", path=path)
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )


def _check_unique(ids: Iterable[Any], path: str) -> None:
    seen: set = set()
    for item_id in ids:
        if item_id in seen:
            raise ValidationError(f"Duplicate id: {item_id!r}", path=path)
        seen.add(item_id)


def _run_jsonschema(data: dict, schema_name: str) -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e
