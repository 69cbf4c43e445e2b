"""Identifier generation for stored entities."""

from uuid import uuid4

USER_ID_PREFIX = "usr"
ORGANIZATION_ID_PREFIX = "org"


def new_id(prefix: str) -> str:
    """Return a short prefixed id such as ``usr_3F9A0C1B``."""
    return f"{prefix}_{uuid4().hex[:8].upper()}"
