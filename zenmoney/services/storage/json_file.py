"""
JSON File Storage Implementation

DESIGN DECISION: A single local JSON file is the storage backend because:
1. The app is single-user, single-device
2. No database setup required
3. The file is human-readable and trivially backed up

TRADEOFFS:
- Whole-list rewrite on every change (fine at personal-finance volumes)
- No cross-process locking; concurrent instances are unsupported
- Last write wins

Writes go to a temp file and are swapped in with os.replace, so a crash
mid-write leaves the previous list intact.
"""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from zenmoney.config import get_settings
from zenmoney.events import EventLogger
from zenmoney.models.events import EventBuilder
from zenmoney.models.transaction import Transaction
from zenmoney.services.storage.interface import (
    NotFoundError,
    StorageError,
    StorageUnavailableError,
    TransactionStorageInterface,
)
from zenmoney.services.storage.sample_data import build_sample_transactions


_TRANSACTION_LIST = TypeAdapter(list[Transaction])


class JsonFileClient:
    """
    Low-level file wrapper.

    Converts filesystem errors into storage errors and retries
    transient write failures.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_text(self) -> str:
        """Read the whole payload."""
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise NotFoundError(f"No stored transactions at {self._path}")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailableError(f"Failed to read {self._path}: {e}")

    def write_text(self, text: str) -> None:
        """Atomically replace the payload."""
        try:
            self._write_with_retry(text)
        except OSError as e:
            raise StorageUnavailableError(f"Failed to write {self._path}: {e}")

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_fixed(0.1),
        reraise=True,
    )
    def _write_with_retry(self, text: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, self._path)


class JsonFileTransactionStorage(TransactionStorageInterface):
    """
    JSON file implementation of transaction storage.

    The file holds a JSON array of transaction records:
    {id, amount, description, category, date: "YYYY-MM-DD", type: "INCOME"|"EXPENSE"}
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        seed_sample_data: Optional[bool] = None,
        event_logger: Optional[EventLogger] = None,
    ):
        if path is None or seed_sample_data is None:
            settings = get_settings().storage
            path = path or settings.storage_path
            if seed_sample_data is None:
                seed_sample_data = settings.seed_sample_data

        self._client = JsonFileClient(path)
        self._seed_sample_data = seed_sample_data
        self._events = event_logger or EventLogger()

    @property
    def storage_key(self) -> str:
        return self._client.path.stem

    @property
    def path(self) -> Path:
        return self._client.path

    def load(self) -> list[Transaction]:
        """Load the stored list, seeding samples on first run."""
        try:
            raw = self._client.read_text()
        except NotFoundError:
            return self._seed()
        except StorageError as e:
            self._events.log(EventBuilder.storage_load_failed(self.storage_key, str(e)))
            return []

        # A blank file counts as never written
        if not raw.strip():
            return self._seed()

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            self._events.log(EventBuilder.storage_load_failed(self.storage_key, str(e)))
            return []

        if not isinstance(payload, list):
            self._events.log(EventBuilder.storage_load_failed(
                self.storage_key,
                f"Expected a JSON array, got {type(payload).__name__}",
            ))
            return []

        transactions = []
        for index, record in enumerate(payload):
            try:
                transactions.append(Transaction.model_validate(record))
            except ValidationError as e:
                # Skip malformed records rather than losing the whole list
                self._events.log(EventBuilder.storage_record_skipped(
                    self.storage_key, index, str(e),
                ))

        self._events.log(EventBuilder.storage_loaded(self.storage_key, len(transactions)))
        return transactions

    def save(self, transactions: list[Transaction]) -> None:
        """Replace the stored list. Failures are logged, never raised."""
        try:
            text = _TRANSACTION_LIST.dump_json(list(transactions), indent=2).decode("utf-8")
            self._client.write_text(text)
        except StorageError as e:
            self._events.log(EventBuilder.storage_save_failed(self.storage_key, str(e)))

    def _seed(self) -> list[Transaction]:
        if not self._seed_sample_data:
            return []
        samples = build_sample_transactions()
        self.save(samples)
        self._events.log(EventBuilder.storage_seeded(self.storage_key, len(samples)))
        return samples
