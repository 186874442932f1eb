"""Aggregate raw transactions into display values and highlight cards."""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any, Iterable, Optional, Sequence

from .errors import InvalidRecordError
from .locales import (
    DEFAULT_LOCALE,
    LocaleConfig,
    format_currency,
    format_long_date,
    format_short_date,
)
from .models import (
    Highlight,
    HighlightSummary,
    NormalizedTransaction,
    RawTransaction,
    TransactionType,
)

# Accepted amounts span at most 27 digits, so sums of them stay exact.
MAX_AMOUNT = Decimal("1e15")
SMALLEST_UNIT = Decimal("1e-12")
SUM_PRECISION = 60


def parse_amount(value: Any, index: Optional[int] = None) -> Decimal:
    """Parse a stored amount into a non-negative Decimal.

    Args:
        value: Amount as stored (string or number)
        index: Record position, used in error messages

    Returns:
        Exact Decimal value

    Raises:
        InvalidRecordError: If the amount is missing, not numeric, not finite
            or negative, or does not fit the supported range
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float, Decimal)):
        raise InvalidRecordError(f"invalid amount {value!r}", index, "amount")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidRecordError(f"invalid amount {value!r}", index, "amount") from None
    if not amount.is_finite() or amount < 0:
        raise InvalidRecordError(f"invalid amount {value!r}", index, "amount")
    if amount >= MAX_AMOUNT:
        raise InvalidRecordError(f"amount too large {value!r}", index, "amount")
    if amount.quantize(SMALLEST_UNIT) != amount:
        raise InvalidRecordError(
            f"amount has too many decimal places {value!r}", index, "amount"
        )
    return amount


def parse_date(value: str, index: Optional[int] = None) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime (naive means UTC)."""
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        raise InvalidRecordError(f"invalid date {value!r}", index, "date") from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_transaction(
    record: Any, index: Optional[int] = None, transaction_id: Optional[str] = None
) -> RawTransaction:
    """Parse a stored record dict into a RawTransaction.

    Args:
        record: Dict with name, amount, type, category and optional date/id
        index: Record position, used in error messages
        transaction_id: Identifier to use when the record carries none

    Returns:
        RawTransaction object

    Raises:
        InvalidRecordError: If any field is missing or invalid
    """
    if not isinstance(record, dict):
        raise InvalidRecordError("record is not an object", index)

    name = record.get("name")
    if not isinstance(name, str):
        raise InvalidRecordError(f"invalid name {name!r}", index, "name")

    try:
        tx_type = TransactionType(record.get("type"))
    except ValueError:
        raise InvalidRecordError(
            f"invalid type {record.get('type')!r}", index, "type"
        ) from None

    date = record.get("date") or None
    if date is not None:
        parse_date(date, index)

    tx_id = record.get("id") or transaction_id
    if not tx_id:
        raise InvalidRecordError("missing id", index, "id")

    return RawTransaction(
        id=str(tx_id),
        name=name,
        amount=parse_amount(record.get("amount"), index),
        type=tx_type,
        category=str(record.get("category") or ""),
        date=date,
    )


def _normalize(tx: RawTransaction, locale: LocaleConfig) -> NormalizedTransaction:
    date = format_short_date(parse_date(tx.date), locale) if tx.date else None
    return NormalizedTransaction(
        id=tx.id,
        name=tx.name,
        type=tx.type,
        category=tx.category,
        value=tx.amount,
        amount=format_currency(tx.amount, locale),
        date=date,
    )


def last_transaction_date(
    transactions: Iterable[RawTransaction], tx_type: TransactionType
) -> Optional[datetime]:
    """Get the most recent date among transactions of a type.

    Dates are compared as instants, so offsets are honored. Records
    without a date are ignored. Returns None when nothing qualifies.
    """
    dates = [
        parse_date(tx.date) for tx in transactions if tx.type == tx_type and tx.date
    ]
    return max(dates) if dates else None


def _describe_last(dt: Optional[datetime], locale: LocaleConfig) -> str:
    if dt is None:
        return locale.no_transactions
    return format_long_date(dt, locale)


def aggregate(
    raw_transactions: Sequence[RawTransaction],
    locale: LocaleConfig = DEFAULT_LOCALE,
) -> tuple[list[NormalizedTransaction], HighlightSummary]:
    """Normalize transactions and compute the entries/expenses/total cards.

    Args:
        raw_transactions: Transactions in any order; may be empty
        locale: Formatting conventions

    Returns:
        Tuple of (normalized transactions in input order, highlight summary)
    """
    normalized = []
    entries_sum = Decimal(0)
    expenses_sum = Decimal(0)

    with localcontext() as ctx:
        ctx.prec = SUM_PRECISION
        for tx in raw_transactions:
            normalized.append(_normalize(tx, locale))
            if tx.type == TransactionType.positive:
                entries_sum += tx.amount
            else:
                expenses_sum += tx.amount

        total_sum = entries_sum - expenses_sum

    last_entry = last_transaction_date(raw_transactions, TransactionType.positive)
    last_expense = last_transaction_date(raw_transactions, TransactionType.negative)

    entries_last = _describe_last(last_entry, locale)
    expenses_last = _describe_last(last_expense, locale)
    # The total card's interval only follows the expense side.
    if last_expense is None:
        total_last = locale.no_transactions
    else:
        total_last = f"{locale.interval_prefix} {expenses_last}"

    summary = HighlightSummary(
        entries=Highlight(
            sum=entries_sum,
            amount=format_currency(entries_sum, locale),
            last_transaction=entries_last,
        ),
        expenses=Highlight(
            sum=expenses_sum,
            amount=format_currency(expenses_sum, locale),
            last_transaction=expenses_last,
        ),
        total=Highlight(
            sum=total_sum,
            amount=format_currency(total_sum, locale),
            last_transaction=total_last,
        ),
    )
    return normalized, summary
