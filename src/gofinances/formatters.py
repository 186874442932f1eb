"""Output formatters for different data formats."""

import csv
import json
from io import StringIO
from typing import Protocol, Sequence

from .models import (
    Highlight,
    HighlightSummary,
    NormalizedTransaction,
    TransactionType,
)

HIGHLIGHT_TITLES = (
    ("entries", "Entries"),
    ("expenses", "Expenses"),
    ("total", "Total"),
)


def _transaction_dict(tx: NormalizedTransaction) -> dict:
    return {
        "id": tx.id,
        "name": tx.name,
        "type": tx.type.value,
        "category": tx.category,
        "value": str(tx.value),
        "amount": tx.amount,
        "date": tx.date,
    }


def _highlight_dict(highlight: Highlight) -> dict:
    return {
        "sum": str(highlight.sum),
        "amount": highlight.amount,
        "last_transaction": highlight.last_transaction,
    }


class FormatterProtocol(Protocol):
    """Protocol for data formatters."""

    def format_transactions(
        self, transactions: Sequence[NormalizedTransaction]
    ) -> str:
        """Format transaction data."""
        ...

    def format_highlights(self, summary: HighlightSummary) -> str:
        """Format highlight cards."""
        ...


class TableFormatter:
    """Format data as aligned ASCII tables."""

    @staticmethod
    def _format_transaction_row(tx: NormalizedTransaction) -> str:
        """Format a single transaction as a table row.

        Args:
            tx: Normalized transaction

        Returns:
            Formatted row string
        """
        sign = "+" if tx.type == TransactionType.positive else "-"
        return (
            f"{tx.date or 'N/A':<10} {tx.name[:30]:<30} {tx.category[:16]:<16} "
            f"{sign}{tx.amount:>19}"
        )

    def format_transactions(
        self, transactions: Sequence[NormalizedTransaction]
    ) -> str:
        """Format transactions as table."""
        if not transactions:
            return "No transactions found."

        lines = []
        lines.append("\n" + "=" * 80)
        lines.append(f"{'Date':<10} {'Name':<30} {'Category':<16} {'Amount':>20}")
        lines.append("-" * 80)

        for tx in transactions:
            lines.append(self._format_transaction_row(tx))

        lines.append("=" * 80)
        return "\n".join(lines)

    def format_highlights(self, summary: HighlightSummary) -> str:
        """Format the three highlight cards as table."""
        lines = []
        lines.append("\n" + "=" * 80)
        lines.append(f"{'Highlight':<12} {'Amount':>20}   {'Last transaction':<44}")
        lines.append("-" * 80)

        for attr, title in HIGHLIGHT_TITLES:
            highlight = getattr(summary, attr)
            lines.append(
                f"{title:<12} {highlight.amount:>20}   {highlight.last_transaction:<44}"
            )

        lines.append("=" * 80)
        return "\n".join(lines)


class JsonFormatter:
    """Format data as JSON."""

    def format_transactions(
        self, transactions: Sequence[NormalizedTransaction]
    ) -> str:
        """Format transactions as JSON array."""
        return json.dumps(
            [_transaction_dict(tx) for tx in transactions],
            indent=2,
            ensure_ascii=False,
        )

    def format_highlights(self, summary: HighlightSummary) -> str:
        """Format highlight cards as JSON object."""
        data = {
            attr: _highlight_dict(getattr(summary, attr))
            for attr, _ in HIGHLIGHT_TITLES
        }
        return json.dumps(data, indent=2, ensure_ascii=False)


class CsvFormatter:
    """Format data as CSV."""

    def format_transactions(
        self, transactions: Sequence[NormalizedTransaction]
    ) -> str:
        """Format transactions as CSV."""
        if not transactions:
            return ""

        output = StringIO()
        writer = csv.writer(output)

        # Write header
        writer.writerow(["id", "name", "type", "category", "value", "amount", "date"])

        # Write data
        for tx in transactions:
            writer.writerow(
                [
                    tx.id,
                    tx.name,
                    tx.type.value,
                    tx.category,
                    tx.value,
                    tx.amount,
                    tx.date or "",
                ]
            )

        return output.getvalue()

    def format_highlights(self, summary: HighlightSummary) -> str:
        """Format highlight cards as CSV."""
        output = StringIO()
        writer = csv.writer(output)

        writer.writerow(["highlight", "sum", "amount", "last_transaction"])
        for attr, _ in HIGHLIGHT_TITLES:
            highlight = getattr(summary, attr)
            writer.writerow(
                [attr, highlight.sum, highlight.amount, highlight.last_transaction]
            )

        return output.getvalue()


def get_formatter(format_type: str) -> FormatterProtocol:
    """Get formatter instance by type.

    Args:
        format_type: One of 'table', 'json', or 'csv'

    Returns:
        Formatter instance. Defaults to TableFormatter for unknown types.
    """
    formatters = {
        "table": TableFormatter(),
        "json": JsonFormatter(),
        "csv": CsvFormatter(),
    }
    return formatters.get(format_type.lower(), TableFormatter())
