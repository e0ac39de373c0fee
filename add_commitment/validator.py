"""
Request body parsing and commitment validation.

Turns the raw body of an API Gateway proxy event into a validated
`CommitmentRecord`. Validation is all-or-nothing: every violated constraint is
reported in a single `ValidationError`, and nothing is written on failure.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError as PydanticValidationError

from add_commitment.domain.models import CommitmentRecord
from add_commitment.errors import MalformedBodyError, ValidationError
from add_commitment.utils.logging import get_logger

log = get_logger(__name__)


def parse_body(raw: Any, lenient: bool = False) -> Any:
    """
    Decode a request body into a JSON-like object.

    Parameters
    ----------
    raw : Any
        `None`, text, bytes, or an already-structured object.
    lenient : bool
        When True, a body that is not valid JSON is treated as an empty
        object instead of raising.

    Raises
    ------
    MalformedBodyError
        If the body is not valid JSON and `lenient` is False.
    """
    if raw is None:
        return {}
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            if lenient:
                log.warning("Body is not UTF-8; treating as empty object")
                return {}
            raise MalformedBodyError(f"Malformed request body: {exc}") from exc
    if not isinstance(raw, str):
        return raw
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        if lenient:
            log.warning("Body is not valid JSON; treating as empty object", extra={"error": str(exc)})
            return {}
        raise MalformedBodyError(f"Malformed request body: {exc.msg}") from exc


def extract_body(event: Mapping[str, Any], lenient: bool = False) -> Any:
    """Pull and decode the body of an API Gateway proxy event."""
    raw = event.get("body")
    if event.get("isBase64Encoded") and isinstance(raw, str):
        try:
            raw = base64.b64decode(raw, validate=True)
        except binascii.Error as exc:
            if lenient:
                return {}
            raise MalformedBodyError(f"Malformed request body: {exc}") from exc
    return parse_body(raw, lenient=lenient)


def _describe_errors(exc: PydanticValidationError) -> List[Dict[str, Any]]:
    described = []
    for error in exc.errors(include_url=False, include_input=False):
        field = ".".join(str(part) for part in error["loc"])
        described.append({"field": field, "message": error["msg"]})
    return described


def validate_commitment(payload: Any) -> CommitmentRecord:
    """
    Validate a decoded body against the commitment schema.

    Raises
    ------
    ValidationError
        If any field is missing or violates its constraint. The message lists
        every violation as `<field>: <reason>`.
    """
    try:
        return CommitmentRecord.model_validate(payload)
    except PydanticValidationError as exc:
        errors = _describe_errors(exc)
        reasons = "; ".join(
            f"{error['field']}: {error['message']}" if error["field"] else error["message"]
            for error in errors
        )
        raise ValidationError(f"Invalid commitment: {reasons}", errors=errors) from exc


__all__ = ["parse_body", "extract_body", "validate_commitment"]
