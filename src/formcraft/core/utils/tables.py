"""
Table Question Editing

Helpers for the inline table editor of `table` questions. Each helper takes
the current Question and returns an updates mapping for
`LibraryStore.update_question`, keeping `table_rows` aligned with the
column and row headers.

Blank names are ignored (an empty mapping is returned); callers can pass
the result straight to `update_question`, which treats an empty mapping as
a plain touch of the library.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..models.questions import Question


def _rows(question: Question) -> List[List[str]]:
    return [list(row) for row in (question.table_rows or ())]


def add_column(question: Question, name: str) -> Dict[str, Any]:
    """Append a column; every existing row gets a blank cell."""
    name = name.strip()
    if not name:
        return {}
    columns = list(question.table_columns or ()) + [name]
    rows = [row + [""] for row in _rows(question)]
    if not rows:
        rows = [[""] * len(columns)]
    return {"table_columns": columns, "table_rows": rows}


def rename_column(question: Question, index: int, name: str) -> Dict[str, Any]:
    columns = list(question.table_columns or ())
    if not 0 <= index < len(columns):
        return {}
    columns[index] = name
    return {"table_columns": columns}


def delete_column(question: Question, index: int) -> Dict[str, Any]:
    """Remove a column and the matching cell from every row."""
    columns = list(question.table_columns or ())
    if not 0 <= index < len(columns):
        return {}
    del columns[index]
    rows = [[cell for i, cell in enumerate(row) if i != index] for row in _rows(question)]
    return {"table_columns": columns, "table_rows": rows}


def add_row_header(question: Question, name: str) -> Dict[str, Any]:
    """Append a row header, adding a blank row when rows run short."""
    name = name.strip()
    if not name:
        return {}
    headers = list(question.table_row_headers or ()) + [name]
    rows = _rows(question)
    if len(rows) < len(headers):
        width = len(question.table_columns or ()) or 1
        rows.append([""] * width)
    return {"table_row_headers": headers, "table_rows": rows}


def rename_row_header(question: Question, index: int, name: str) -> Dict[str, Any]:
    headers = list(question.table_row_headers or ())
    if not 0 <= index < len(headers):
        return {}
    headers[index] = name
    return {"table_row_headers": headers}


def delete_row_header(question: Question, index: int) -> Dict[str, Any]:
    """Remove a row header and the row at the same index."""
    headers = list(question.table_row_headers or ())
    if not 0 <= index < len(headers):
        return {}
    del headers[index]
    rows = [row for i, row in enumerate(_rows(question)) if i != index]
    return {"table_row_headers": headers, "table_rows": rows}


def set_cell(question: Question, row: int, column: int, value: str) -> Dict[str, Any]:
    rows = _rows(question)
    if not 0 <= row < len(rows) or not 0 <= column < len(rows[row]):
        return {}
    rows[row][column] = value
    return {"table_rows": rows}
