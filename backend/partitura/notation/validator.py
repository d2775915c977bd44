"""ABC notation input checks, run before anything reaches the renderer."""

from __future__ import annotations

import re

from partitura.errors import ValidationError

_UNSAFE_PATTERNS = [
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"on\w+=", re.IGNORECASE),
    re.compile(r"<iframe", re.IGNORECASE),
    re.compile(r"<object", re.IGNORECASE),
    re.compile(r"<embed", re.IGNORECASE),
]


def validate_notation(notation: object) -> bool:
    """Return True for usable notation, raise ValidationError otherwise."""
    if not notation or not isinstance(notation, str):
        raise ValidationError("ABC notation must be a non-empty string")

    if not notation.strip():
        raise ValidationError("ABC notation cannot be empty")

    for pattern in _UNSAFE_PATTERNS:
        if pattern.search(notation):
            raise ValidationError("ABC notation contains potentially unsafe content")

    return True
