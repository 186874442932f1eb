"""Transaction stores: the OS keyring and plain JSON files."""

import json
import uuid
from pathlib import Path
from typing import Any, Optional, Protocol, Union

import keyring
import keyring.errors

from .aggregator import parse_transaction
from .errors import InvalidRecordError, MalformedRecordError, StoreUnavailableError
from .models import RawTransaction

# Constants
KEYRING_SERVICE = "gofinances"
TRANSACTIONS_KEY_PREFIX = "@gofinances:transactions_user:"

_ID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "gofinances:transactions")


def transactions_key(user_id: str) -> str:
    """Get the store key holding a user's transactions."""
    return f"{TRANSACTIONS_KEY_PREFIX}{user_id}"


def _assign_id(user_id: str, position: int, record: Any) -> str:
    """Derive a stable id for a record that was persisted without one."""
    name = record.get("name", "") if isinstance(record, dict) else ""
    return str(uuid.uuid5(_ID_NAMESPACE, f"{user_id}:{position}:{name}"))


def parse_payload(payload: Optional[Any], user_id: str) -> list[RawTransaction]:
    """Turn a stored payload into RawTransaction objects.

    Args:
        payload: Serialized JSON (str/bytes), an already decoded list, or None
        user_id: Owner of the records, used for id assignment

    Returns:
        List of RawTransaction objects in stored order

    Raises:
        MalformedRecordError: If the payload or any record cannot be parsed,
            or two records share an id
    """
    if payload is None:
        return []

    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except (ValueError, UnicodeDecodeError) as e:
            raise MalformedRecordError(f"stored transactions are not valid JSON: {e}")

    if payload is None:
        return []
    if not isinstance(payload, list):
        raise MalformedRecordError("stored transactions are not a list")

    transactions = []
    seen_ids = set()
    for index, record in enumerate(payload):
        tx = parse_transaction(record, index, _assign_id(user_id, index, record))
        if tx.id in seen_ids:
            raise InvalidRecordError(f"duplicate id {tx.id!r}", index, "id")
        seen_ids.add(tx.id)
        transactions.append(tx)
    return transactions


class TransactionStore(Protocol):
    """Protocol for transaction stores."""

    def get(self, user_id: str) -> list[RawTransaction]:
        """Get all transactions stored for a user."""
        ...


class KeyringTransactionStore:
    """Read transactions saved in the OS keyring."""

    def __init__(self, service: str = KEYRING_SERVICE):
        self.service = service

    def get(self, user_id: str) -> list[RawTransaction]:
        """Get all transactions stored for a user.

        Raises:
            StoreUnavailableError: If the keyring backend fails
            MalformedRecordError: If the stored data cannot be parsed
        """
        try:
            payload = keyring.get_password(self.service, transactions_key(user_id))
        except keyring.errors.KeyringError as e:
            raise StoreUnavailableError(f"Could not read keyring: {e}") from e
        return parse_payload(payload, user_id)


class JsonFileTransactionStore:
    """Read transactions from a JSON file.

    The file holds either the transaction list itself or an object mapping
    store keys (or bare user ids) to transaction lists.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def get(self, user_id: str) -> list[RawTransaction]:
        """Get all transactions stored for a user.

        Raises:
            StoreUnavailableError: If the file cannot be read
            MalformedRecordError: If the file contents cannot be parsed
        """
        if not self.path.exists():
            return []
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreUnavailableError(f"Could not read {self.path}: {e}") from e

        try:
            data = json.loads(text)
        except ValueError as e:
            raise MalformedRecordError(f"{self.path} is not valid JSON: {e}")

        if isinstance(data, dict):
            data = data.get(transactions_key(user_id), data.get(user_id))
        return parse_payload(data, user_id)
