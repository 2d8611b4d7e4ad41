"""Payload validation against DRF serializer schemas."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from social.errors import InvalidArgument


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of `validate`: either cleaned `data` or serializer `errors`."""
    ok: bool
    data: Optional[dict] = None
    errors: Optional[Mapping[str, Any]] = None


def validate(schema, data) -> ValidationResult:
    """Run `schema` (a Serializer class) over `data` without raising."""
    serializer = schema(data=data if data is not None else {})
    if serializer.is_valid():
        return ValidationResult(ok=True, data=dict(serializer.validated_data))
    return ValidationResult(ok=False, errors=serializer.errors)


def validate_or_raise(schema, data) -> dict:
    """Return cleaned data or raise `InvalidArgument("VALIDATION_FAILED")`."""
    result = validate(schema, data)
    if not result.ok:
        raise InvalidArgument("VALIDATION_FAILED", details=result.errors)
    return result.data
