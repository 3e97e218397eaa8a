"""
In-memory item source: folders of catalog items and the demo GTIN sequence.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..constants import DEMO_GTINS
from ..errors import InvalidInputError, NothingSelectedError
from ..models import Folder, Item


logger = logging.getLogger(__name__)


class DemoSequence:
    """Round-robin over a fixed list of demo GTINs."""

    def __init__(self, values: Sequence[str] = DEMO_GTINS):
        if not values:
            raise InvalidInputError("Demo sequence needs at least one value")
        self._values: Tuple[str, ...] = tuple(values)
        self._index = 0

    def next_value(self) -> str:
        value = self._values[self._index]
        self._index = (self._index + 1) % len(self._values)
        return value

    def peek(self) -> str:
        return self._values[self._index]

    def reset(self) -> None:
        self._index = 0

    def __len__(self) -> int:
        return len(self._values)


class Catalog:
    """
    Folders of items for one tab.

    Only get_active_items is read by the rotation engine; everything else is
    folder housekeeping for the host.
    """

    def __init__(self, folders: Optional[Iterable[Folder]] = None):
        self.folders: List[Folder] = list(folders or [])
        self.selected_folder_id: Optional[str] = None

    def get(self, folder_id: Optional[str]) -> Optional[Folder]:
        if folder_id is None:
            return None
        for folder in self.folders:
            if folder.id == folder_id:
                return folder
        return None

    def find_by_name(self, name: str) -> Optional[Folder]:
        wanted = name.strip().lower()
        for folder in self.folders:
            if folder.name.lower() == wanted:
                return folder
        return None

    def find_or_create(self, name: str) -> Folder:
        """Case-insensitive lookup, creating the folder when missing."""
        name = name.strip()
        if not name:
            raise InvalidInputError("Folder name is required")
        folder = self.find_by_name(name)
        if folder is None:
            folder = Folder(name=name)
            self.folders.append(folder)
        return folder

    def add_items(self, folder_id: str, items: Iterable[Item]) -> Folder:
        folder = self._require(folder_id)
        folder.items.extend(items)
        self.selected_folder_id = folder.id
        return folder

    def get_active_items(self, folder_id: Optional[str] = None) -> Tuple[Item, ...]:
        """
        Ordered active items of a folder (the selected one by default).

        Raises:
            NothingSelectedError: no such folder
        """
        folder = self.get(folder_id or self.selected_folder_id)
        if folder is None:
            raise NothingSelectedError("Select a folder first")
        return tuple(folder.active_items)

    def select_all(self, folder_id: str) -> None:
        for item in self._require(folder_id).items:
            item.active = True

    def deselect_all(self, folder_id: str) -> None:
        for item in self._require(folder_id).items:
            item.active = False

    def set_active(self, folder_id: str, item_id: str, active: bool) -> bool:
        for item in self._require(folder_id).items:
            if item.id == item_id:
                item.active = active
                return True
        return False

    def clear_selected(self, folder_id: str) -> int:
        """Delete the active items of a folder; returns how many went."""
        folder = self._require(folder_id)
        before = len(folder.items)
        folder.items = [item for item in folder.items if not item.active]
        return before - len(folder.items)

    def rename(self, folder_id: str, name: str) -> Folder:
        folder = self._require(folder_id)
        if not name or not name.strip():
            raise InvalidInputError("Folder name is required")
        folder.name = name.strip()
        return folder

    def delete(self, folder_id: str) -> bool:
        folder = self.get(folder_id)
        if folder is None:
            return False
        self.folders = [f for f in self.folders if f.id != folder_id]
        if self.selected_folder_id == folder_id:
            self.selected_folder_id = None
        logger.info("Deleted folder %r with %d items", folder.name, len(folder.items))
        return True

    def _require(self, folder_id: str) -> Folder:
        folder = self.get(folder_id)
        if folder is None:
            raise NothingSelectedError(f"Unknown folder: {folder_id}")
        return folder
