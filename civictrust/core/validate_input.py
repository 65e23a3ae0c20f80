"""Input Validation — pure checks applied before any registry state is touched.

Invariants:
    - All functions are PURE: no IO, no state, raise InvalidInputError on violation
    - Returned values are the normalized form callers must store
"""

from civictrust.core.domain_types import Address, normalize_address
from civictrust.core.errors import InvalidInputError


def require_text(value: object, field: str) -> str:
    """Non-blank string, surrounding whitespace stripped."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field} must be a non-empty string", field)
    return value.strip()


def require_address(value: object, field: str) -> Address:
    """Non-blank identity string, normalized for comparison."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field} must be a non-empty identity", field)
    return normalize_address(value)


def require_non_negative_int(value: object, field: str) -> int:
    # bool is an int subclass; True must not pass as 1
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError(f"{field} must be a non-negative integer", field)
    return value


def optional_text(value: object, field: str) -> str:
    """Free text that may be empty (descriptions, external references)."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInputError(f"{field} must be a string", field)
    return value
