"""Whole-collection persistence over a file-backed key-value store."""

import json
import os
import tempfile
from pathlib import Path
from typing import Generic, List, Optional, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, TypeAdapter

T = TypeVar("T", bound=BaseModel)


class LocalStorage:
    """String key-value store, one file per key under ``data_dir``."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class CollectionStore(Generic[T]):
    """Reads and writes the full list of works as one blob under a fixed key.

    Neither operation raises: a failed load yields an empty collection and a
    failed save leaves the previous blob in place. In the latter case the
    caller's in-memory collection is ahead of what is on disk.
    """

    def __init__(self, storage: LocalStorage, key: str, model: Type[T]):
        self.storage = storage
        self.key = key
        self.model = model
        self._adapter = TypeAdapter(List[model])

    def load(self) -> List[T]:
        try:
            raw = self.storage.get_item(self.key)
            if not raw:
                return []
            return self._adapter.validate_json(raw)
        except Exception as e:
            logger.error(f"Error reading '{self.key}' from storage: {e}")
            return []

    def save(self, items: List[T]) -> None:
        try:
            payload = json.dumps(
                [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in items],
                ensure_ascii=False,
            )
            self.storage.set_item(self.key, payload)
            logger.debug(f"Saved {len(items)} item(s) under '{self.key}'")
        except Exception as e:
            logger.error(f"Error saving '{self.key}' to storage: {e}")
