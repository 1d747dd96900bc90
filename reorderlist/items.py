"""Authoritative ordered collection of list items.

:class:`OrderedItemSet` keeps the domain items in insertion order, independent
of where they are drawn. Subscribers (normally the list container) are told
about additions and removals so the visual side can follow.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List

from .errors import DuplicateItemError, ItemNotFoundError
from .signals import Signal

logger = logging.getLogger(__name__)


class OrderedItemSet:
    """Ordered sequence of items without duplicates"""

    def __init__(self, items: Iterable[Any] = ()):
        self._items: List[Any] = []
        self._members: Dict[Any, None] = {}

        self.items_added = Signal()
        self.items_removed = Signal()
        self.items_reordered = Signal()
        self.cleared = Signal()

        for item in items:
            self._check_absent(item)
            self._append(item)

    def _check_absent(self, item):
        if item in self._members:
            raise DuplicateItemError(item)

    def _append(self, item):
        self._items.append(item)
        self._members[item] = None

    def add(self, item):
        """Append an item to the tail of the sequence"""
        self.add_range([item])

    def add_range(self, items: Iterable[Any]):
        """Append several items and notify subscribers once.

        The batch is rejected as a whole if any item is already present or
        appears twice in ``items``.
        """
        batch = list(items)
        seen = set()
        for item in batch:
            if item in self._members or item in seen:
                raise DuplicateItemError(item)
            seen.add(item)

        if not batch:
            return

        for item in batch:
            self._append(item)

        logger.debug(f"Added {len(batch)} item(s), {len(self._items)} total")
        self.items_added.emit(batch)

    def remove(self, item):
        """Remove an item by identity"""
        if item not in self._members:
            raise ItemNotFoundError(item)

        del self._members[item]
        self._items.remove(item)

        logger.debug(f"Removed item {item!r}, {len(self._items)} remaining")
        self.items_removed.emit([item])

    def clear(self):
        """Remove every item"""
        self._items = []
        self._members = {}
        logger.debug("Cleared item set")
        self.cleared.emit()

    def reorder(self, sequence: Iterable[Any]):
        """Replace the order with ``sequence``, a permutation of the current items"""
        ordered = list(sequence)
        if len(ordered) != len(self._items) or set(ordered) != set(self._members):
            raise ValueError("Reordered sequence must contain exactly the current items")

        if ordered == self._items:
            return

        self._items = ordered
        self._members = dict.fromkeys(ordered)
        self.items_reordered.emit(list(ordered))

    def index(self, item) -> int:
        if item not in self._members:
            raise ItemNotFoundError(item)
        return self._items.index(item)

    def __contains__(self, item) -> bool:
        return item in self._members

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items))

    def __getitem__(self, index: int):
        return self._items[index]

    def __repr__(self) -> str:
        return f"OrderedItemSet({self._items!r})"
