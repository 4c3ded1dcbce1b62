"""
Demo library seeding.

Creates "All Question Types Demo": one section holding one example question
for each of the 18 question types, in QuestionType declaration order.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from formcraft.core.models import QuestionLibrary, QuestionType
from formcraft.stores.library_store import LibraryStore

logger = logging.getLogger(__name__)

DEMO_LIBRARY_NAME = "All Question Types Demo"
DEMO_LIBRARY_DESCRIPTION = (
    "A comprehensive collection of all available question types for reference and testing"
)
DEMO_SECTION_TITLE = "Complete Question Type Collection"
DEMO_SECTION_DESCRIPTION = "Examples of every available question type in FormCraft"

DEMO_TABLE_COLUMNS = ["Product", "Quantity", "Unit Price", "Total"]
DEMO_TABLE_ROW_HEADERS = ["Item 1", "Item 2", "Item 3"]

DEMO_QUESTIONS: List[Dict[str, Any]] = [
    {"type": QuestionType.TEXT, "title": "Single Line Text", "required": True,
     "description": "For short text responses like names, titles, etc.",
     "placeholder": "Enter your full name"},
    {"type": QuestionType.TEXTAREA, "title": "Multiple Line Text",
     "description": "For longer text responses like comments or descriptions",
     "placeholder": "Enter your detailed feedback..."},
    {"type": QuestionType.EMAIL, "title": "Email Address", "required": True,
     "description": "Validates email format automatically",
     "placeholder": "your.email@example.com"},
    {"type": QuestionType.URL, "title": "Website URL",
     "description": "For website addresses and links",
     "placeholder": "https://www.example.com"},
    {"type": QuestionType.PHONE, "title": "Phone Number",
     "description": "For telephone numbers with validation",
     "placeholder": "+1 (555) 123-4567"},
    {"type": QuestionType.RICHTEXT, "title": "Rich Text Editor",
     "description": "Allows formatted text with bold, italic, links, etc.",
     "placeholder": "Enter formatted content..."},
    {"type": QuestionType.CHOICE, "title": "Single Choice (Radio)", "required": True,
     "description": "Choose exactly one option from the list",
     "options": ["Option A", "Option B", "Option C", "Other"]},
    {"type": QuestionType.CHOICES, "title": "Multiple Choice (Checkboxes)",
     "description": "Select one or more options from the list",
     "options": ["Feature A", "Feature B", "Feature C", "Feature D"]},
    {"type": QuestionType.NUMBER, "title": "Whole Number",
     "description": "For integers only (no decimals)", "placeholder": "42"},
    {"type": QuestionType.DECIMAL, "title": "Decimal Number",
     "description": "For numbers with decimal places", "placeholder": "3.14159"},
    {"type": QuestionType.CURRENCY, "title": "Currency Amount",
     "description": "For monetary values with proper formatting", "placeholder": "1,234.56"},
    {"type": QuestionType.DATE, "title": "Date Only",
     "description": "Select a specific date"},
    {"type": QuestionType.DATETIME, "title": "Date and Time",
     "description": "Select both date and specific time"},
    {"type": QuestionType.BOOLEAN, "title": "Yes/No Question",
     "description": "Simple true/false or yes/no response"},
    {"type": QuestionType.FILE, "title": "File Upload",
     "description": "Allow users to upload any type of file",
     "bullet_points": ["PDF documents", "Word files", "Spreadsheets", "Any file type"]},
    {"type": QuestionType.IMAGE, "title": "Image Upload",
     "description": "Specifically for image file uploads",
     "bullet_points": ["JPG, PNG, GIF formats", "Automatic image preview", "Size validation"]},
    {"type": QuestionType.TICKER, "title": "Stock Ticker Symbol",
     "description": "For financial stock symbols and codes", "placeholder": "AAPL"},
    {"type": QuestionType.TABLE, "title": "Data Table",
     "description": "Structured data entry with customizable rows and columns",
     "table_columns": DEMO_TABLE_COLUMNS,
     "table_row_headers": DEMO_TABLE_ROW_HEADERS,
     "table_rows": [[""] * len(DEMO_TABLE_COLUMNS) for _ in DEMO_TABLE_ROW_HEADERS]},
]


def create_demo_library(store: LibraryStore) -> Optional[QuestionLibrary]:
    """
    Seed the demo library into `store`.

    Returns:
        The finished library, or None if a step failed
    """
    library = store.create_library(DEMO_LIBRARY_NAME, DEMO_LIBRARY_DESCRIPTION)
    section = store.add_section(library.id, DEMO_SECTION_TITLE, DEMO_SECTION_DESCRIPTION)
    if section is None:
        logger.error("Failed to create demo section")
        return None

    for entry in DEMO_QUESTIONS:
        fields = dict(entry)
        store.add_question(library.id, section.id, fields.pop("title"), fields.pop("type"), **fields)

    logger.info(f"Demo library created with all {len(DEMO_QUESTIONS)} question types")
    return store.get_library(library.id)
