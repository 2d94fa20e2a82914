# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Callable, Optional, Protocol

from growsteps import configuration

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """A durable slot per key, each holding one text blob."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class FileKeyValueStorage:
    """
    Stores each key as ``<data path>/<key>.yaml``.

    The data path is resolved on every call so a path configured after
    import (see ``configuration.load_data_path_configuration``) is honoured.
    """

    def __init__(self, data_path: Optional[Callable[[], Path]] = None) -> None:
        self._data_path = data_path or (lambda: configuration.DATA_PATH)

    def path_for(self, key: str) -> Path:
        return self._data_path() / f"{key}.yaml"

    def get_item(self, key: str) -> Optional[str]:
        file_path = self.path_for(key)
        if not file_path.is_file():
            return None
        return file_path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        file_path = self.path_for(key)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        # Write then rename so the slot never holds a half-written blob
        tmp_path = file_path.with_suffix(".yaml.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(file_path)
        logger.debug("wrote %d characters to %s", len(value), file_path)


class InMemoryKeyValueStorage:
    def __init__(self, items: Optional[dict[str, str]] = None) -> None:
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
