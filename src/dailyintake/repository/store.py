# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from dailyintake import configuration

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the backing store cannot be read or written."""

    pass


class KeyValueStore:
    """
    String-keyed, string-valued store persisted as a single YAML file.

    Writes only touch the in-memory copy and mark their keys dirty; `flush`
    rereads the file and writes back just the dirty and deleted keys, so
    several processes sharing the file only overwrite the keys they changed.
    Every tracker shares one store, each within its own key namespace.
    """

    def __init__(self) -> None:
        self._items: Optional[dict[str, str]] = None
        self.is_dirty = False
        self._dirty_keys: set[str] = set()
        self._deleted_keys: set[str] = set()

    @property
    def items(self) -> dict[str, str]:
        if self._items is None:
            self.__load_data()
        if self._items is None:
            raise ValueError()
        return self._items

    def __read_file(self) -> dict[str, str]:
        path = configuration.DATA_STORE_PATH
        if not path.is_file():
            return {}

        try:
            raw_items: Any = load(path.read_text(), Loader=Loader)
        except (OSError, YAMLError) as e:
            raise StorageError(f"Cannot read store at {path}: {e}") from e

        if raw_items is None:
            raw_items = {}
        if not isinstance(raw_items, dict):
            raise StorageError(f"Store at {path} is not a mapping")

        return {str(key): str(value) for key, value in raw_items.items()}

    def __merge_pending(self, items: dict[str, str]) -> dict[str, str]:
        # Local changes not yet flushed win over what is on disk
        for key in self._dirty_keys:
            items[key] = self.items[key]
        for key in self._deleted_keys:
            items.pop(key, None)
        return items

    def __load_data(self) -> None:
        self._items = self.__read_file()
        logger.debug(
            "Loaded %d keys from %s", len(self._items), configuration.DATA_STORE_PATH
        )

    def __save_data(self) -> None:
        path = configuration.DATA_STORE_PATH
        merged_items = self.__merge_pending(self.__read_file())
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dump(merged_items, Dumper=Dumper))
        except OSError as e:
            raise StorageError(f"Cannot write store at {path}: {e}") from e

        self._items = merged_items
        self._dirty_keys.clear()
        self._deleted_keys.clear()
        logger.debug("Wrote %d keys to %s", len(merged_items), path)

    def flush(self) -> bool:
        if self._items is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def refresh(self) -> None:
        """Reread the file, keeping any changes that have not been flushed."""
        if self._items is None:
            self.__load_data()
            return
        self._items = self.__merge_pending(self.__read_file())

    def reset(self) -> None:
        """Drop the in-memory copy so the next access rereads the file."""
        self._items = None
        self.is_dirty = False
        self._dirty_keys.clear()
        self._deleted_keys.clear()

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.is_dirty = True
        self.items[key] = value
        self._dirty_keys.add(key)
        self._deleted_keys.discard(key)

    def remove_item(self, key: str) -> None:
        if key in self.items:
            self.is_dirty = True
            del self.items[key]
            self._deleted_keys.add(key)
            self._dirty_keys.discard(key)

    def keys(self) -> list[str]:
        return list(self.items.keys())


STORE = KeyValueStore()
