#!/usr/bin/env python3
"""
Error taxonomy for finboard.

Every error is raised synchronously before any state changes, so callers can
report the failure and carry on with the collection untouched.
"""


class FinanceError(Exception):
    """Base class for errors raised by the finance core."""


class NotFoundError(FinanceError, LookupError):
    """A goal or category id is not present in the collection."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


class InvalidAmountError(FinanceError, ValueError):
    """A target or contribution is non-numeric or not positive."""


class InvalidInputError(FinanceError, ValueError):
    """A required field is missing or a field value is not allowed."""
