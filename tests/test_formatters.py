import csv
import json
from decimal import Decimal
from io import StringIO

import pytest

from gofinances.aggregator import aggregate
from gofinances.formatters import (
    CsvFormatter,
    JsonFormatter,
    TableFormatter,
    get_formatter,
)
from gofinances.models import RawTransaction, TransactionType


@pytest.fixture
def aggregated():
    raw = [
        RawTransaction(
            id="tx-1",
            name="Salary",
            amount=Decimal("5000"),
            type=TransactionType.positive,
            category="salary",
            date="2024-01-05",
        ),
        RawTransaction(
            id="tx-2",
            name="Rent",
            amount=Decimal("1200.5"),
            type=TransactionType.negative,
            category="house",
            date="2024-01-10",
        ),
    ]
    return aggregate(raw)


def test_get_formatter():
    """Test formatter lookup and default."""
    assert isinstance(get_formatter("json"), JsonFormatter)
    assert isinstance(get_formatter("CSV"), CsvFormatter)
    assert isinstance(get_formatter("table"), TableFormatter)
    assert isinstance(get_formatter("unknown"), TableFormatter)


def test_table_format_transactions(aggregated):
    """Test table rows for transactions."""
    transactions, _ = aggregated
    output = TableFormatter().format_transactions(transactions)

    assert "Salary" in output
    assert "R$ 5.000,00" in output
    assert "05/01/24" in output
    assert "-" + " " * 8 + "R$ 1.200,50" in output


def test_table_format_transactions_empty():
    """Test empty transaction table."""
    assert TableFormatter().format_transactions([]) == "No transactions found."


def test_table_format_highlights(aggregated):
    """Test table rows for the highlight cards."""
    _, summary = aggregated
    output = TableFormatter().format_highlights(summary)

    assert "Entries" in output
    assert "Expenses" in output
    assert "R$ 3.799,50" in output
    assert "01 a 10 de janeiro" in output


def test_json_format_transactions(aggregated):
    """Test transactions as JSON."""
    transactions, _ = aggregated
    data = json.loads(JsonFormatter().format_transactions(transactions))

    assert data[1] == {
        "id": "tx-2",
        "name": "Rent",
        "type": "negative",
        "category": "house",
        "value": "1200.5",
        "amount": "R$ 1.200,50",
        "date": "10/01/24",
    }


def test_json_format_highlights(aggregated):
    """Test highlight cards as JSON."""
    _, summary = aggregated
    output = JsonFormatter().format_highlights(summary)
    data = json.loads(output)

    assert set(data) == {"entries", "expenses", "total"}
    assert data["total"]["sum"] == "3799.5"
    assert data["entries"]["last_transaction"] == "5 de janeiro"


def test_json_format_highlights_keeps_accents():
    """Test non-ASCII text is written as-is."""
    _, summary = aggregate([])
    output = JsonFormatter().format_highlights(summary)
    assert "Não há transações" in output


def test_csv_format_transactions(aggregated):
    """Test transactions as CSV."""
    transactions, _ = aggregated
    rows = list(csv.reader(StringIO(CsvFormatter().format_transactions(transactions))))

    assert rows[0] == ["id", "name", "type", "category", "value", "amount", "date"]
    assert rows[1][:3] == ["tx-1", "Salary", "positive"]
    assert len(rows) == 3


def test_csv_format_transactions_empty():
    """Test empty CSV output."""
    assert CsvFormatter().format_transactions([]) == ""


def test_csv_format_highlights(aggregated):
    """Test highlight cards as CSV."""
    _, summary = aggregated
    rows = list(csv.reader(StringIO(CsvFormatter().format_highlights(summary))))

    assert rows[0] == ["highlight", "sum", "amount", "last_transaction"]
    assert [row[0] for row in rows[1:]] == ["entries", "expenses", "total"]
    assert rows[3][2] == "R$ 3.799,50"
