"""
Commitment writer: exact-decimal amount handling and the DynamoDB put.

Amounts never pass through binary floating point. The text supplied by the
caller is parsed into a `Decimal`, rendered back in fixed-point form, and
stored twice: as a string attribute (`amountString`) and as a number attribute
(`amount`) so downstream consumers can range-query and sort.
"""

from __future__ import annotations

import re
from decimal import Decimal, DecimalException
from typing import Any, Dict, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from add_commitment.domain.models import CommitmentRecord, WriteResult
from add_commitment.errors import AmountFormatError, StorageError
from add_commitment.utils.logging import get_logger

log = get_logger(__name__)

# DynamoDB numbers carry at most 38 significant digits, with magnitudes
# between 1E-130 and 9.99...E+125.
MAX_SIGNIFICANT_DIGITS = 38
MIN_ADJUSTED_EXPONENT = -130
MAX_ADJUSTED_EXPONENT = 125

_DECIMAL_NUMERAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _significant(value: Decimal) -> Tuple[Tuple[int, ...], int]:
    """Digits and exponent with trailing zeros dropped, computed without a decimal context."""
    _, digits, exponent = value.as_tuple()
    end = len(digits)
    while end > 1 and digits[end - 1] == 0:
        end -= 1
    return tuple(digits[:end]), exponent + (len(digits) - end)


def parse_amount(text: str) -> Decimal:
    """
    Parse a decimal numeral into an exact `Decimal`.

    Raises
    ------
    AmountFormatError
        If `text` is not a finite decimal numeral, or falls outside the
        store's numeric precision or range.
    """
    if not isinstance(text, str) or not _DECIMAL_NUMERAL.fullmatch(text):
        raise AmountFormatError(f"Invalid amount {text!r}: not a decimal number")
    try:
        value = Decimal(text)
    except DecimalException as exc:
        raise AmountFormatError(f"Invalid amount {text!r}: not a decimal number") from exc

    digits, exponent = _significant(value)
    if len(digits) > MAX_SIGNIFICANT_DIGITS:
        raise AmountFormatError(
            f"Invalid amount {text!r}: more than {MAX_SIGNIFICANT_DIGITS} significant digits"
        )
    # Zero has no magnitude; its exponent only sets the rendered scale.
    adjusted = value.as_tuple().exponent if digits == (0,) else exponent + len(digits) - 1
    if not MIN_ADJUSTED_EXPONENT <= adjusted <= MAX_ADJUSTED_EXPONENT:
        raise AmountFormatError(
            f"Invalid amount {text!r}: magnitude outside "
            f"1E{MIN_ADJUSTED_EXPONENT}..1E+{MAX_ADJUSTED_EXPONENT + 1}"
        )
    return value


def format_amount(value: Decimal) -> str:
    """Render an amount in fixed-point notation, keeping its scale ("1500.00" stays "1500.00")."""
    return format(value, "f")


def build_item(record: CommitmentRecord, amount: Decimal) -> Dict[str, Dict[str, str]]:
    """Build the typed DynamoDB attribute map for a commitment."""
    amount_text = format_amount(amount)
    return {
        "id": {"S": record.payment_id},
        "paymentId": {"S": record.payment_id},
        "userId": {"S": record.user_id},
        "paymentTimestamp": {"S": record.payment_timestamp},
        "description": {"S": record.description},
        "currency": {"S": record.currency},
        "amountString": {"S": amount_text},
        "amount": {"N": amount_text},
    }


class CommitmentWriter:
    """
    Persist validated commitments with a single insert-or-replace put.

    Writing the same `paymentId` twice overwrites the earlier item. There is no
    retry and no compensating action; failures surface as `StorageError`.
    """

    def __init__(self, client: Any, table_name: str) -> None:
        self._client = client
        self.table_name = table_name

    def write(self, record: CommitmentRecord) -> WriteResult:
        amount = parse_amount(record.amount)
        amount_text = format_amount(amount)
        log.info(
            "Parsed amount",
            extra={"paymentId": record.payment_id, "amount": amount_text},
        )

        item = build_item(record, amount)
        log.debug("Writing to DynamoDB", extra={"table": self.table_name, "item": item})
        try:
            self._client.put_item(TableName=self.table_name, Item=item)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            raise StorageError(str(exc), code=code) from exc
        except BotoCoreError as exc:
            raise StorageError(str(exc)) from exc

        log.info(
            "Stored commitment",
            extra={"paymentId": record.payment_id, "table": self.table_name},
        )
        return WriteResult(
            paymentId=record.payment_id,
            amount=amount_text,
            currency=record.currency,
        )


__all__ = [
    "MAX_SIGNIFICANT_DIGITS",
    "MIN_ADJUSTED_EXPONENT",
    "MAX_ADJUSTED_EXPONENT",
    "parse_amount",
    "format_amount",
    "build_item",
    "CommitmentWriter",
]
