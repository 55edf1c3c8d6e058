"""Declaration errors – misuse of the cache-map builder."""

from __future__ import annotations

from typing import Any

from cache_map.kernel.errors.base import BaseError


class DeclarationError(BaseError):
    """Raised when a cache-map declaration is malformed."""

    default_code = "declaration_error"


class ScopeViolationError(DeclarationError):
    """A declaration operation was called at the wrong nesting level.

    ``resource`` is only legal at the root, ``collection`` inside a resource
    body and ``member`` inside a collection body.
    """

    default_code = "scope_violation"

    def __init__(
        self,
        expected: Any,
        actual: Any,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        expected_name = getattr(expected, "value", expected)
        actual_name = getattr(actual, "value", actual)
        super().__init__(
            message
            or f"'{expected_name}' declaration can not be called in '{actual_name}' scope",
            detail={"expected": expected_name, "actual": actual_name},
            **kwargs,
        )
        self.expected = expected
        self.actual = actual


class InvalidOptionError(DeclarationError):
    """A declaration option has an unusable value."""

    default_code = "invalid_option"

    def __init__(self, option: str, value: object, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Option '{option}' has invalid value {value!r}: {reason}",
            detail={"option": option, "value": repr(value)},
            **kwargs,
        )
        self.option = option
        self.value = value
        self.reason = reason


__all__ = ["DeclarationError", "InvalidOptionError", "ScopeViolationError"]
