from __future__ import annotations

import math
from typing import Any


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """Duplicate unique key (e.g., username already registered)."""


class NotFoundError(LookupError):
    """404-level: referenced record is absent."""


class ForbiddenError(PermissionError):
    """403-level: caller identity does not own the record."""


class UpstreamError(RuntimeError):
    """External provider failure; message is the provider's when it sent one."""


def coerce_int(field: str, value: Any) -> int:
    """
    Strict integer coercion for form and JSON input.

    Accepts ints and plain digit strings (optional leading minus). Rejects
    bools, floats, decimals and scientific notation.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{field} must be an integer")
        if "e" in stripped.lower():
            raise ValidationError(f"{field} must be a plain integer (scientific notation not allowed)")
        if "." in stripped:
            raise ValidationError(f"{field} must be an integer (no decimals)")
        try:
            return int(stripped)
        except ValueError:
            raise ValidationError(f"{field} must be an integer")
    if isinstance(value, float):
        raise ValidationError(f"{field} must be an integer, not a decimal")
    raise ValidationError(f"{field} must be an integer")


def coerce_number(field: str, value: Any) -> float:
    """Numeric coercion for line-item amounts (ints, floats, numeric strings)."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError(f"{field} must be a number")
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"{field} must be a number")
    return value
