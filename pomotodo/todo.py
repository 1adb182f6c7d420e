"""Ordered to-do list model."""

import uuid
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from loguru import logger


@dataclass
class TodoItem:
    """A single to-do entry."""
    title: str
    is_completed: bool = False
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


class TodoList:
    """To-do items in insertion order."""

    def __init__(self) -> None:
        self._items: List[TodoItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TodoItem]:
        return iter(list(self._items))

    @property
    def items(self) -> List[TodoItem]:
        return list(self._items)

    def get(self, item_id: str) -> Optional[TodoItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def add_item(self, title: str) -> Optional[TodoItem]:
        """Append a new open item.

        Blank titles are ignored and return None.
        """
        title = (title or "").strip()
        if not title:
            return None
        item = TodoItem(title=title)
        self._items.append(item)
        logger.debug(f"[TODO] added {item.id}: {title!r}")
        return item

    def toggle_completion(self, item_id: str) -> bool:
        """Flip the completion flag of an item.

        Returns:
            False if no item has that id.
        """
        item = self.get(item_id)
        if item is None:
            logger.debug(f"[TODO] toggle: no item {item_id}")
            return False
        item.is_completed = not item.is_completed
        return True

    def delete_items(self, item_ids: Iterable[str]) -> int:
        """Remove the items with the given ids; unknown ids are skipped.

        Returns:
            Number of items removed.
        """
        doomed = set(item_ids)
        before = len(self._items)
        self._items = [item for item in self._items if item.id not in doomed]
        removed = before - len(self._items)
        if removed:
            logger.debug(f"[TODO] deleted {removed} item(s)")
        return removed

    def delete_at(self, offsets: Iterable[int]) -> int:
        """Remove the items at the given positions; out of range ones are skipped."""
        positions = {i for i in offsets if 0 <= i < len(self._items)}
        return self.delete_items(self._items[i].id for i in positions)
