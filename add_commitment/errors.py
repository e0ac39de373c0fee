"""
Error taxonomy for the add-commitment function.

Each failure is raised where it is detected and mapped to a response status
only at the handler boundary:

- MalformedBodyError, ValidationError -> 400
- AmountFormatError, StorageError     -> 500
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class CommitmentError(Exception):
    """Base class for all errors raised while recording a commitment."""


class MalformedBodyError(CommitmentError):
    """The request body could not be decoded as JSON."""


class ValidationError(CommitmentError):
    """
    One or more field constraints were violated.

    `errors` holds one entry per violation with the offending field name
    (`field`) and a human-readable `message`.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.errors: List[Dict[str, Any]] = errors or []


class AmountFormatError(CommitmentError):
    """The amount string is not a valid decimal numeral."""


class StorageError(CommitmentError):
    """The store write failed; `code` carries the AWS error code when known."""

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code


__all__ = [
    "CommitmentError",
    "MalformedBodyError",
    "ValidationError",
    "AmountFormatError",
    "StorageError",
]
