"""
Repository - Single-document JSON store
All reads and writes of the application state go through JsonStore
"""
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union
import json
import logging
import os
import tempfile
import threading

import pydantic

from habitdesk.core.exceptions import StorageError
from habitdesk.models import AppData

logger = logging.getLogger(__name__)


class JsonStore:
    """
    Loads and saves the whole AppData document as pretty-printed JSON.

    One lock guards every load and save, so concurrent requests never
    interleave reads and writes of the file. Saves go to a temporary file
    that replaces the target in one step; a failed save leaves the previous
    document intact.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()

    def load(self) -> AppData:
        """
        Read the document from disk

        Returns:
            The stored AppData, or a fresh empty one if the file does not exist yet

        Raises:
            StorageError: If the file cannot be read or decoded
        """
        with self._lock:
            try:
                raw = self.path.read_text(encoding="utf-8")
            except FileNotFoundError:
                logger.info(f"No data file at {self.path}, starting fresh")
                return AppData()
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Storage error reading {self.path}: {e}")
                raise StorageError(f"Failed to read data file: {e}")

            try:
                return AppData.model_validate_json(raw)
            except pydantic.ValidationError as e:
                logger.error(f"Storage error decoding {self.path}: {e}")
                raise StorageError(f"Data file is corrupt: {e}")

    def save(self, data: AppData) -> None:
        """
        Replace the document on disk with data

        Raises:
            StorageError: If the file cannot be written
        """
        with self._lock:
            payload = json.dumps(data.model_dump(mode="json"), indent=2) + "\n"
            directory = self.path.parent
            temp_path = None
            try:
                directory.mkdir(parents=True, exist_ok=True)
                fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".tmp_", suffix=".json")
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(temp_path, self.path)
            except OSError as e:
                logger.error(f"Storage error writing {self.path}: {e}")
                if temp_path is not None and os.path.exists(temp_path):
                    os.unlink(temp_path)
                raise StorageError(f"Failed to write data file: {e}")

    @contextmanager
    def transaction(self) -> Iterator[AppData]:
        """
        Hold the lock across load, mutate and save.

        The document is saved only if the block finishes without raising,
        so a failed operation never writes partial changes.
        """
        with self._lock:
            data = self.load()
            yield data
            self.save(data)
