# src/hederafmt/errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class FormatError(ValueError):
    """Canonical error type for coercion and validation failures.

    `check_key` / `check_value` are attached by Formatter.check when a field
    coercer fails, so callers can see which field of a record was rejected.
    """

    code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    check_key: Optional[str] = None
    check_value: Any = None

    def __str__(self) -> str:
        s = f"{self.code}:{self.message}"
        if self.check_key is not None:
            s += f" (key={self.check_key!r}, value={self.check_value!r})"
        if self.details:
            s += f":{self.details}"
        return s

    def annotate(self, key: str, value: Any) -> "FormatError":
        self.check_key = key
        self.check_value = value
        return self

    @staticmethod
    def argument(code: str, message: str, *, argument: str = "value", value: Any = None) -> "FormatError":
        return FormatError(code, message, {"argument": argument, "value": value})


@dataclass(eq=False)
class FormatTypeError(FormatError, TypeError):
    """Raised when a value has the wrong shape (not an array, not an object)."""

    @staticmethod
    def not_an_array(value: Any) -> "FormatTypeError":
        return FormatTypeError("not_an_array", "not an array", {"type": type(value).__name__})

    @staticmethod
    def not_an_object(value: Any) -> "FormatTypeError":
        return FormatTypeError("not_an_object", "not an object", {"type": type(value).__name__})
