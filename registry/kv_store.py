"""
Key-value stores for persisted session state.

Every public operation runs inside `transaction()`: writes are buffered and
only reach the backend when the outermost transaction exits normally. Any
exception discards them, so a failed call leaves no partial state behind.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional, Union


logger = logging.getLogger(__name__)

# Pending deletes are stored as None
_Changes = Dict[str, Optional[bytes]]


class KeyValueStore(ABC):
    """
    Base class for string-keyed byte stores.

    Subclasses provide `_load(key)`, `_items()` and `_commit(changes)`.
    """

    def __init__(self):
        self._pending: Optional[_Changes] = None
        self._depth = 0

    # ==================== BACKEND HOOKS ====================

    @abstractmethod
    def _load(self, key: str) -> Optional[bytes]:
        ...

    @abstractmethod
    def _items(self) -> Iterator:
        """Committed (key, value) pairs."""

    @abstractmethod
    def _commit(self, changes: _Changes):
        ...

    # ==================== PUBLIC API ====================

    def get(self, key: str) -> Optional[bytes]:
        if self._pending is not None and key in self._pending:
            return self._pending[key]
        return self._load(key)

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    def put(self, key: str, value: bytes):
        self._write(key, value)

    def delete(self, key: str):
        self._write(key, None)

    def _write(self, key: str, value: Optional[bytes]):
        if self._pending is not None:
            self._pending[key] = value
        else:
            self._commit({key: value})

    @contextmanager
    def transaction(self):
        """
        Group writes into one all-or-nothing unit.

        Nested transactions join the outer one.
        """
        if self._depth == 0:
            self._pending = {}
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                logger.debug("Rolling back %d pending writes", len(self._pending))
                self._pending = None
            raise
        self._depth -= 1
        if self._depth == 0:
            changes, self._pending = self._pending, None
            if changes:
                self._commit(changes)

    def storage_usage(self) -> int:
        """
        Bytes of keys plus values currently stored, pending writes included.
        """
        view = {key: value for key, value in self._items()}
        if self._pending:
            view.update(self._pending)
        return sum(
            len(key.encode("utf-8")) + len(value)
            for key, value in view.items()
            if value is not None
        )


class MemoryStore(KeyValueStore):
    """Dict-backed store. State lives as long as the object does."""

    def __init__(self):
        super().__init__()
        self._data: Dict[str, bytes] = {}

    def _load(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def _items(self):
        return iter(self._data.items())

    def _commit(self, changes: _Changes):
        for key, value in changes.items():
            if value is None:
                self._data.pop(key, None)
            else:
                self._data[key] = value


class JsonFileStore(MemoryStore):
    """
    Store persisted to a single JSON file.

    The file is read once on construction and rewritten (atomically, via a
    temporary file in the same directory) on every commit.
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            self._data = {key: value.encode("utf-8") for key, value in raw.items()}
            logger.debug("Loaded %d records from %s", len(self._data), self.path)

    def _commit(self, changes: _Changes):
        # Memory only changes once the file has been replaced
        data = dict(self._data)
        for key, value in changes.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
        self._flush(data)
        self._data = data

    def _flush(self, data: Dict[str, bytes]):
        payload = {key: value.decode("utf-8") for key, value in data.items()}
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=self.path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise
