"""
Client-local key/value storage

Small localStorage-like stores and the scoped slot used to read and write
them. Every persistence failure is translated into StorageError inside
storage_slot, so callers handle a single exception type.
"""

import json
import logging
import os
import re
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from ..errors import QuotaExceededError, StorageError

logger = logging.getLogger(__name__)

DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def _check_quota(key: str, value: str, quota_bytes: int) -> None:
    size = len(value.encode("utf-8"))
    if size > quota_bytes:
        raise QuotaExceededError(
            f"Value for '{key}' is {size} bytes, quota is {quota_bytes} bytes"
        )


class MemoryStorage:
    """In-process storage, lost when the process exits"""

    def __init__(self, quota_bytes: int = DEFAULT_QUOTA_BYTES):
        self.quota_bytes = quota_bytes
        self.items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        _check_quota(key, value, self.quota_bytes)
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileStorage:
    """
    Storage persisted as one JSON document per key.

    Files are replaced atomically and readable only by the owner.
    """

    def __init__(
        self,
        directory: Union[str, Path, None] = None,
        quota_bytes: int = DEFAULT_QUOTA_BYTES,
    ) -> None:
        """
        Initialize file storage.

        Args:
            directory: Storage directory (default: ~/.storefront)
            quota_bytes: Largest value accepted by set_item
        """
        if directory is None:
            directory = Path.home() / ".storefront"
        self.directory = Path(directory).expanduser()
        self.quota_bytes = quota_bytes

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        value = data.get("value") if isinstance(data, dict) else None
        if not isinstance(value, str):
            raise ValueError(f"Malformed storage file: {path}")
        return value

    def set_item(self, key: str, value: str) -> None:
        _check_quota(key, value, self.quota_bytes)
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({"value": value}, f)
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug(f"Stored '{key}' in {path}")

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            os.remove(path)


Storage = Union[MemoryStorage, FileStorage]


class StorageSlot:
    """Handle on one key of a storage, valid inside storage_slot()"""

    def __init__(self, storage: Storage, key: str):
        self._storage = storage
        self.key = key
        self.released = False

    def _ensure_open(self) -> None:
        if self.released:
            raise StorageError(f"Storage slot '{self.key}' already released")

    def read(self) -> Optional[str]:
        self._ensure_open()
        return self._storage.get_item(self.key)

    def write(self, value: str) -> None:
        self._ensure_open()
        self._storage.set_item(self.key, value)

    def clear(self) -> None:
        self._ensure_open()
        self._storage.remove_item(self.key)


@contextmanager
def storage_slot(storage: Storage, key: str) -> Iterator[StorageSlot]:
    """
    Acquire a slot on `key`, release it on exit.

    OS, encoding, decoding and quota failures raised inside the block
    (including by the caller's own parsing) surface as StorageError.
    """
    slot = StorageSlot(storage, key)
    try:
        yield slot
    except StorageError:
        raise
    except (OSError, ValueError) as e:
        raise StorageError(f"Storage '{key}' failed: {e}") from e
    finally:
        slot.released = True
