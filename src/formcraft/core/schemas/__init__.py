"""
Schemas Package

JSON schema definitions and validation utilities for persisted store blobs.
"""

from .validator import (
    validate_library_store,
    validate_header_footer_store,
    ValidationError,
    STORE_SCHEMA_VERSION,
)

__all__ = [
    "validate_library_store",
    "validate_header_footer_store",
    "ValidationError",
    "STORE_SCHEMA_VERSION",
]
