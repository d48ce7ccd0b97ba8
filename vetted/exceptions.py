"""
Exceptions raised by vetted.

Data that fails validation is never an exception; these cover programmer
misuse and the opt-in `assert_valid` entry point.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Fail


class VettedError(Exception):
    """Base class for all vetted exceptions."""


class SchemaError(VettedError, TypeError):
    """A validator was constructed or composed incorrectly."""


class AssertValidError(VettedError, ValueError):
    """Raised by assert_valid() and parse() when validation fails."""

    def __init__(self, message: str, result: Fail):
        super().__init__(message)
        self.result = result

    @property
    def errors(self):
        return self.result.errors
