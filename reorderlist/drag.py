"""Drag lifecycle and live reordering for a rearrangeable list.

The controller is a two-state machine (idle and dragging). A drag is only
accepted when one of the rendered rows has been made draggable by a
pointer-down on its handle, so presses elsewhere fall through to the scroll
container. While dragging, every pointer move (and every frame, since the
list may scroll under a still pointer) recomputes the destination and
commits the reorder immediately, so rows shuffle live rather than on drop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from .dnd import hit_test_destination, move_item
from .errors import InvalidDragStateError
from .layout import LayoutPositionIndex
from .signals import Signal

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass
class DragSession:
    """State of one drag, alive from drag start until drag end or cancel"""

    row: Any
    pointer: Point
    order: List[Any]

    @property
    def source_index(self) -> int:
        return self.order.index(self.row)


class DragController:
    """Owns the drag session and applies reorders to the layout index"""

    def __init__(self, flow, layout: LayoutPositionIndex):
        self.flow = flow
        self.layout = layout
        self.session: Optional[DragSession] = None

        self.drag_started = Signal()
        self.drag_ended = Signal()
        self.order_changed = Signal()

    @property
    def state(self) -> DragState:
        return DragState.IDLE if self.session is None else DragState.DRAGGING

    @property
    def is_dragging(self) -> bool:
        return self.session is not None

    @property
    def dragged_row(self):
        return self.session.row if self.session is not None else None

    def _require_session(self) -> DragSession:
        if self.session is None:
            raise InvalidDragStateError("No drag in progress")
        return self.session

    def drag_start(self, position: Point) -> bool:
        """Try to begin a drag at ``position``; return whether the event was accepted"""
        if self.session is not None:
            logger.debug("Drag start while a drag is active; keeping current session")
            return True

        children = self.flow.flowing_children()
        row = next((child for child in children if getattr(child, "is_draggable", False)), None)
        if row is None:
            logger.debug("No draggable row, declining drag start")
            return False

        self.session = DragSession(row=row, pointer=tuple(position), order=list(children))
        logger.debug(f"Drag started on {row!r}")
        self.drag_started.emit(row)
        return True

    def drag(self, position: Point) -> bool:
        """Record a pointer move and reorder if the destination changed"""
        try:
            session = self._require_session()
        except InvalidDragStateError as e:
            logger.debug(f"Ignoring drag move: {e}")
            return False

        session.pointer = tuple(position)
        self._update_drag_position(session)
        return True

    def update(self) -> bool:
        """Per-frame recompute; return whether a reorder was applied"""
        try:
            session = self._require_session()
        except InvalidDragStateError:
            return False
        return self._update_drag_position(session)

    def drag_end(self, position: Optional[Point] = None) -> bool:
        try:
            session = self._require_session()
        except InvalidDragStateError as e:
            logger.debug(f"Ignoring drag end: {e}")
            return False

        if position is not None:
            session.pointer = tuple(position)
        self._end(session)
        return True

    def cancel(self) -> bool:
        """Abort the drag, e.g. on focus loss; the last applied order stays"""
        if self.session is None:
            return False
        self._end(self.session)
        return True

    def _end(self, session: DragSession):
        session.row.is_draggable = False
        self.session = None
        logger.debug(f"Drag ended on {session.row!r}")
        self.drag_ended.emit(session.row)

    def track(self, row):
        """Include a row added mid-drag in the session's order"""
        if self.session is not None and row not in self.session.order:
            self.session.order.append(row)

    def forget(self, row):
        """Drop a removed row from the session, cancelling it if ``row`` is being dragged"""
        session = self.session
        if session is None:
            return

        if session.row is row:
            self.cancel()
            return

        if row in session.order:
            session.order.remove(row)

    def compute_destination(self, position: Point, order: Optional[List[Any]] = None) -> Optional[int]:
        """Return the index in ``order`` under the screen-space ``position``"""
        if order is None:
            order = self.flow.flowing_children()

        _, local_y = self.flow.to_local_space(position)
        heights = [self.flow.bounding_box(row).height for row in order]
        return hit_test_destination(heights, local_y, self.flow.spacing)

    def _update_drag_position(self, session: DragSession) -> bool:
        destination = self.compute_destination(session.pointer, session.order)
        if destination is None:
            return False

        source = session.source_index
        if source == destination:
            return False

        session.order = move_item(session.order, source, destination)

        slots = self.layout.renumber(session.order)
        for row, slot in slots.items():
            self.flow.set_layout_position(row, slot)

        logger.debug(f"Moved {session.row!r} from {source} to {session.order.index(session.row)}")
        self.order_changed.emit(list(session.order))
        return True
