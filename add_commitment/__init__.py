"""
Add-commitment function - records payment commitments in DynamoDB.

This package provides a single serverless request handler that:

- Parses and validates a payment-commitment JSON body
- Converts the amount to an exact decimal (never binary floating point)
- Writes one item keyed by `paymentId` to a DynamoDB table
- Returns a structured API Gateway proxy response (200 / 400 / 500)
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from add_commitment.config import Settings, get_settings
from add_commitment.domain.models import CommitmentRecord, WriteResult
from add_commitment.errors import (
    AmountFormatError,
    CommitmentError,
    MalformedBodyError,
    StorageError,
    ValidationError,
)
from add_commitment.handler import handle_request, handler
from add_commitment.utils.logging import configure_logging, get_logger
from add_commitment.validator import extract_body, parse_body, validate_commitment
from add_commitment.writer import CommitmentWriter, format_amount, parse_amount

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "CommitmentRecord",
    "WriteResult",
    # Errors
    "CommitmentError",
    "MalformedBodyError",
    "ValidationError",
    "AmountFormatError",
    "StorageError",
    # Pipeline
    "parse_body",
    "extract_body",
    "validate_commitment",
    "CommitmentWriter",
    "parse_amount",
    "format_amount",
    "handle_request",
    "handler",
    # Logging
    "configure_logging",
    "get_logger",
]
