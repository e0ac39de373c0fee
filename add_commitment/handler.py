"""
Lambda entry point for recording payment commitments.

Composes the validator and the writer and maps every outcome to an API Gateway
proxy response:

- 200: commitment stored; body echoes `paymentId`, `amount` and `currency`.
- 400: malformed body or validation failure; body carries `message` and the
  per-field `errors`.
- 500: anything else (bad amount, store failure, unexpected error).

Nothing raised below this module escapes `handler`.

Usage (Lambda configuration):
    handler: add_commitment.handler.handler
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

from add_commitment.config import Settings, get_settings
from add_commitment.errors import MalformedBodyError, ValidationError
from add_commitment.infrastructure.dynamodb import get_dynamodb_client
from add_commitment.utils.logging import configure_logging, get_logger
from add_commitment.validator import extract_body, validate_commitment
from add_commitment.writer import CommitmentWriter

log = get_logger(__name__)

SUCCESS_MESSAGE = "Payment commitment recorded successfully"
UNKNOWN_ERROR_MESSAGE = "Unknown error processing payment."

_RESPONSE_HEADERS = {"Content-Type": "application/json"}
_logging_configured = False


def _response(status_code: int, payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(_RESPONSE_HEADERS),
        "body": json.dumps(payload),
    }


def _default_writer(settings: Settings) -> CommitmentWriter:
    return CommitmentWriter(get_dynamodb_client(), settings.commitments_table)


def handle_request(
    event: Mapping[str, Any],
    writer: Optional[CommitmentWriter] = None,
    settings: Optional[Settings] = None,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Validate and store the commitment carried by `event`.

    Parameters
    ----------
    event : Mapping
        API Gateway proxy event; only `body` and `isBase64Encoded` are read.
    writer : CommitmentWriter, optional
        Writer to use. Defaults to one bound to the process-wide DynamoDB
        client and the configured table.
    settings : Settings, optional
        Overrides the cached settings.
    request_id : str, optional
        Correlation id attached to log records.

    Returns
    -------
    dict
        API Gateway proxy result (`statusCode`, `headers`, `body`).
    """
    log_extra = {"request_id": request_id}

    try:
        settings = settings or get_settings()
        try:
            body = extract_body(event, lenient=settings.lenient_body_parsing)
            record = validate_commitment(body)
        except (MalformedBodyError, ValidationError) as exc:
            log.warning(f"Rejected commitment: {exc}", extra=log_extra)
            payload: Dict[str, Any] = {"message": str(exc) or "Bad Request: Invalid input data"}
            if settings.include_error_details:
                payload["errors"] = getattr(exc, "errors", [])
            return _response(400, payload)

        log.debug(
            "Validated input",
            extra={**log_extra, "commitment": record.model_dump(by_alias=True)},
        )

        writer = writer or _default_writer(settings)
        result = writer.write(record)
    except Exception as exc:  # noqa: BLE001 - every failure becomes a 500 response
        log.exception("Failed to record commitment", extra=log_extra)
        return _response(500, {"message": str(exc) or UNKNOWN_ERROR_MESSAGE})

    log.info(
        "Commitment recorded",
        extra={**log_extra, "paymentId": result["paymentId"]},
    )
    return _response(
        200,
        {
            "message": SUCCESS_MESSAGE,
            "paymentId": result["paymentId"],
            "amount": result["amount"],
            "currency": result["currency"],
        },
    )


def handler(event: Mapping[str, Any], context: Any = None) -> Dict[str, Any]:
    """AWS Lambda handler."""
    global _logging_configured
    request_id = getattr(context, "aws_request_id", None)
    try:
        settings = get_settings()
    except Exception as exc:  # noqa: BLE001
        log.exception("Invalid configuration", extra={"request_id": request_id})
        return _response(500, {"message": str(exc) or UNKNOWN_ERROR_MESSAGE})

    if not _logging_configured:
        configure_logging(level=settings.log_level, json_logs=settings.json_logs)
        _logging_configured = True

    log.info("Received commitment request", extra={"request_id": request_id})
    return handle_request(event, settings=settings, request_id=request_id)


__all__ = ["handler", "handle_request", "SUCCESS_MESSAGE", "UNKNOWN_ERROR_MESSAGE"]
