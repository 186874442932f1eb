"""Data models for gofinances transactions and highlights."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction."""

    positive = "positive"  # entry / income
    negative = "negative"  # expense


@dataclass(frozen=True)
class RawTransaction:
    """A transaction record as read from the store."""

    id: str
    name: str
    amount: Decimal
    type: TransactionType
    category: str = ""
    date: Optional[str] = None  # ISO-8601


@dataclass(frozen=True)
class NormalizedTransaction:
    """Container for a transaction ready for display."""

    id: str
    name: str
    type: TransactionType
    category: str
    value: Decimal
    amount: str  # currency formatted
    date: Optional[str] = None  # short date


@dataclass(frozen=True)
class Highlight:
    """One summary card: entries, expenses or total."""

    sum: Decimal
    amount: str
    last_transaction: str


@dataclass(frozen=True)
class HighlightSummary:
    """Container for the three highlight cards."""

    entries: Highlight
    expenses: Highlight
    total: Highlight


@dataclass(frozen=True)
class UserSession:
    """Signed-in user context."""

    id: str
    name: str
    photo: Optional[str] = None
