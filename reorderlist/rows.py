"""Base class for rows that can be rearranged by their drag handle."""

from .signals import Signal

DEFAULT_ROW_HEIGHT = 50.0
DEFAULT_HANDLE_WIDTH = 25.0


class RearrangeableRow:
    """A rendered row exposing the capabilities the list container needs.

    The drag handle is a strip of ``handle_width`` along the left edge. A
    pointer-down inside it makes the row draggable until the pointer is
    released; a pointer-down anywhere else leaves the event to the scroll
    container.
    """

    def __init__(self, item=None, height: float = DEFAULT_ROW_HEIGHT, handle_width: float = DEFAULT_HANDLE_WIDTH):
        self.item = item if item is not None else self
        self.height = float(height)
        self.handle_width = float(handle_width)
        self.is_draggable = False
        self.request_removal = Signal()

    def handle_contains(self, local_x: float) -> bool:
        return 0.0 <= float(local_x) < self.handle_width

    def mouse_down(self, local_x: float) -> bool:
        """Record a pointer-down at ``local_x``; return whether a drag may start"""
        self.is_draggable = self.handle_contains(local_x)
        return self.is_draggable

    def mouse_up(self):
        self.is_draggable = False

    def request_remove(self):
        """Ask the owning list to remove this row's item"""
        self.request_removal.emit(self)

    def __repr__(self) -> str:
        if self.item is self:
            return f"{type(self).__name__}(height={self.height})"
        return f"{type(self).__name__}({self.item!r})"
