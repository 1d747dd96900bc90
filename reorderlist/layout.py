"""Layout slot bookkeeping for rendered rows.

Every rendered row carries an integer layout slot that the flow container
sorts by. Plain insertion draws slots from a counter that only grows, so a
new row always sorts after the existing ones. A completed reorder renumbers
the whole list to ``0..n-1`` in its new order.
"""

import logging
from typing import Any, Dict, Iterable, List

from .errors import DuplicateItemError, ItemNotFoundError

logger = logging.getLogger(__name__)


class LayoutPositionIndex:
    """Maps rendered rows to their current layout slot"""

    def __init__(self):
        self._slots: Dict[Any, int] = {}
        self._counter = 0

    @property
    def next_slot(self) -> int:
        return self._counter

    def assign(self, row) -> int:
        """Give ``row`` the next slot from the counter"""
        if row in self._slots:
            raise DuplicateItemError(row)

        slot = self._counter
        self._counter += 1
        self._slots[row] = slot
        return slot

    def get(self, row) -> int:
        try:
            return self._slots[row]
        except KeyError:
            raise ItemNotFoundError(row) from None

    def discard(self, row):
        """Forget the slot of a removed row; unknown rows are ignored"""
        self._slots.pop(row, None)

    def renumber(self, rows: Iterable[Any]) -> Dict[Any, int]:
        """Assign slots ``0..n-1`` following the order of ``rows``.

        ``rows`` must be the full sequence of rendered rows. The counter is
        raised to at least ``n`` so later insertions never tie with a
        renumbered slot.
        """
        ordered = list(rows)
        if set(ordered) != set(self._slots) or len(ordered) != len(self._slots):
            raise ValueError("Renumbering requires the complete set of rendered rows")

        self._slots = {row: slot for slot, row in enumerate(ordered)}
        self._counter = max(self._counter, len(ordered))
        logger.debug(f"Renumbered {len(ordered)} layout slot(s)")
        return dict(self._slots)

    def reset(self):
        """Drop every slot and restart numbering at zero"""
        self._slots = {}
        self._counter = 0

    def ordered(self) -> List[Any]:
        """Return rows sorted by slot"""
        return sorted(self._slots, key=self._slots.__getitem__)

    def __contains__(self, row) -> bool:
        return row in self._slots

    def __len__(self) -> int:
        return len(self._slots)
