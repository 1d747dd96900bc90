"""Signal helper used for observable events across the list core.

The helper mirrors the ``connect``/``emit`` pattern of Qt and GObject signals
while staying free of any toolkit, so the ordering logic can run headless and
be driven by either a GTK front-end or tests.
"""

from __future__ import annotations

from typing import Any, Callable, List

Handler = Callable[..., Any]


class Signal:
    """Event source with an ordered list of handlers.

    A handler is connected at most once. Handlers run in connection order, and
    a handler may disconnect itself (or others) while the signal is emitting.
    """

    def __init__(self) -> None:
        self._handlers: List[Handler] = []

    def connect(self, handler: Handler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def disconnect(self, handler: Handler) -> None:
        """Detach ``handler``; unknown handlers are ignored."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        for handler in tuple(self._handlers):
            handler(*args, **kwargs)

    def __len__(self) -> int:
        return len(self._handlers)
