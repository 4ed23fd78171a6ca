from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} must not be empty")
    return str(value).strip()


def require_choice(value, choices, field_name: str):
    """Coerce ``value`` into the enum ``choices`` or raise ValidationError."""
    try:
        return choices(value)
    except ValueError:
        allowed = ", ".join(c.value for c in choices)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from None
