"""Exceptions raised by the rearrangeable list core."""


class ReorderListError(Exception):
    """Base class for list container errors."""


class DuplicateItemError(ReorderListError, ValueError):
    """An item with the same identity is already present."""

    def __init__(self, item):
        super().__init__(f"Item {item!r} is already in the list")
        self.item = item


class ItemNotFoundError(ReorderListError, LookupError):
    """The item is not part of the list."""

    def __init__(self, item):
        super().__init__(f"Item {item!r} is not in the list")
        self.item = item


class InvalidDragStateError(ReorderListError, RuntimeError):
    """A drag event arrived while no drag session was active.

    Public drag entry points absorb this error, since pointer events can be
    delivered after the session they belonged to has already ended.
    """
