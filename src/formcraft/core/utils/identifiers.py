"""Identifier and clock helpers shared by the stores and assembly layer."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable

IdFactory = Callable[[], str]
Clock = Callable[[], datetime]


def new_id() -> str:
    """Generate a unique entity identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
