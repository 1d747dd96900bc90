"""Rearrangeable list container.

This module provides :class:`RearrangeableListContainer`, which ties the
ordered item set, the layout slot index, the drag controller and the edge
autoscroll together over a flow container and a viewport.
"""

import logging
import math
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .autoscroll import AutoscrollController, Viewport
from .config import Config
from .dnd import RowBounds, row_at
from .drag import DragController
from .errors import ItemNotFoundError
from .flow import FillFlowContainer
from .items import OrderedItemSet
from .layout import LayoutPositionIndex

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class RearrangeableListContainer:
    """Vertical list whose rows can be reordered by dragging their handle.

    ``row_factory`` turns an added item into its rendered row; by default an
    item is its own row. Rows must expose ``is_draggable`` and a
    ``request_removal`` signal (see :class:`reorderlist.rows.RearrangeableRow`).

    The drag threshold, layout duration and autoscroll tunables follow
    ``Config.set_setting`` immediately. Row size and spacing are read when
    rows and the default flow are created, so they only apply afterwards.
    """

    def __init__(
        self,
        row_factory: Optional[Callable[[Any], Any]] = None,
        flow=None,
        viewport: Optional[Viewport] = None,
        config: Optional[Config] = None,
    ):
        self.config = config or Config()
        self.settings = self.config.get_list_settings()
        self.row_factory = row_factory or (lambda item: item)

        if flow is None:
            flow = FillFlowContainer(
                spacing=self.settings.spacing,
                layout_duration_ms=self.settings.layout_duration_ms,
            )
        self.flow = flow

        if viewport is None:
            viewport = Viewport(
                height=float(self.config.get_setting('ui.window_height', 480)),
                padding=self.settings.padding,
            )
        self.viewport = viewport

        self.items = OrderedItemSet()
        self.layout = LayoutPositionIndex()
        self.drag = DragController(self.flow, self.layout)
        self.autoscroll = AutoscrollController(
            self.drag, self.viewport, self.config.get_autoscroll_settings()
        )

        self._rows: Dict[Any, Any] = {}  # item -> row
        self._items_by_row: Dict[Any, Any] = {}  # row -> item
        self._pressed_at: Optional[Point] = None
        self._pressed_row = None

        self.items.items_added.connect(self._on_items_added)
        self.items.items_removed.connect(self._on_items_removed)
        self.items.cleared.connect(self._on_cleared)
        self.drag.order_changed.connect(self._on_order_changed)
        self.viewport.scrolled.connect(self._on_scrolled)
        self.config.setting_changed.connect(self._on_setting_changed)
        self._sync_offset()

    # --- items ----------------------------------------------------------

    def add_item(self, item):
        self.items.add(item)

    def add_items(self, items: Iterable[Any]):
        self.items.add_range(items)

    def remove_item(self, item):
        self.items.remove(item)

    def clear_items(self):
        self.items.clear()

    @property
    def count(self) -> int:
        return len(self.flow)

    def __len__(self) -> int:
        return self.count

    @property
    def children(self) -> List[Any]:
        """Rendered rows in visual order"""
        return self.flow.flowing_children()

    def ordered_items(self) -> List[Any]:
        """Items in visual order"""
        return [self._items_by_row[row] for row in self.children]

    def row_for(self, item):
        try:
            return self._rows[item]
        except KeyError:
            raise ItemNotFoundError(item) from None

    def get_layout_position(self, item) -> int:
        return self.layout.get(self.row_for(item))

    @property
    def is_dragging(self) -> bool:
        return self.drag.is_dragging

    def _on_items_added(self, items):
        for item in items:
            row = self.row_factory(item)
            row.request_removal.connect(self._on_request_removal)
            self._rows[item] = row
            self._items_by_row[row] = item

            self.flow.add(row)
            self.flow.set_layout_position(row, self.layout.assign(row))
            self.drag.track(row)

        self._invalidate_content()

    def _on_items_removed(self, items):
        was_dragging = self.drag.is_dragging

        for item in items:
            row = self._rows.pop(item)
            del self._items_by_row[row]
            row.request_removal.disconnect(self._on_request_removal)

            if row is self._pressed_row:
                self._release_press()
            self.drag.forget(row)
            self.flow.remove(row)
            self.layout.discard(row)

        if was_dragging:
            self._apply_slots(self.layout.renumber(self.flow.flowing_children()))

        self._invalidate_content()

    def _on_cleared(self):
        self.drag.cancel()
        self._release_press()

        for row in self._rows.values():
            row.request_removal.disconnect(self._on_request_removal)
        self._rows = {}
        self._items_by_row = {}

        self.flow.clear()
        self.layout.reset()
        self._invalidate_content()

    def _on_request_removal(self, row):
        item = self._items_by_row.get(row)
        if item is None:
            logger.warning(f"Removal requested by unknown row {row!r}")
            return
        self.remove_item(item)

    def _on_order_changed(self, rows):
        self.items.reorder(self._items_by_row[row] for row in rows)

    def _on_setting_changed(self, key, _value):
        section = key.split(".", 1)[0]
        if section == "list":
            self.settings = self.config.get_list_settings()
            if hasattr(self.flow, "layout_duration_ms"):
                self.flow.layout_duration_ms = self.settings.layout_duration_ms
        elif section == "autoscroll":
            self.autoscroll.settings = self.config.get_autoscroll_settings()
        else:
            return
        logger.debug(f"Reloaded {section} settings after {key} changed")

    def _apply_slots(self, slots: Dict[Any, int]):
        for row, slot in slots.items():
            self.flow.set_layout_position(row, slot)

    # --- pointer input --------------------------------------------------

    def row_at(self, position: Point):
        """Return the row under the screen-space ``position``, if any"""
        _, local_y = self.flow.to_local_space(position)
        bounds = []
        for row in self.children:
            box = self.flow.bounding_box(row)
            bounds.append(RowBounds(key=row, top=box.y, height=box.height))
        return row_at(bounds, local_y)

    def mouse_down(self, position: Point) -> bool:
        """Handle a pointer press; return whether it landed on a drag handle"""
        # A press without a matching release ends whatever the last one started
        if self.drag.is_dragging:
            self.drag.cancel()
        self._release_press()

        row = self.row_at(position)
        self._pressed_at = tuple(position)
        self._pressed_row = row
        if row is None:
            return False

        local_x, _ = self.flow.to_local_space(position)
        return row.mouse_down(local_x - self.flow.bounding_box(row).x)

    def mouse_move(self, position: Point) -> bool:
        """Handle pointer motion; starts a drag once the threshold is crossed"""
        if self.drag.is_dragging:
            return self.drag.drag(position)

        if self._pressed_at is None:
            return False

        start_x, start_y = self._pressed_at
        distance = math.hypot(position[0] - start_x, position[1] - start_y)
        if distance < self.settings.drag_threshold:
            return False

        if not self.drag.drag_start(self._pressed_at):
            # Not on a handle; leave the gesture to the scroll container
            self._pressed_at = None
            return False
        return self.drag.drag(position)

    def mouse_up(self, position: Optional[Point] = None) -> bool:
        handled = self.drag.drag_end(position) if self.drag.is_dragging else False
        self._release_press()
        return handled

    def drag_start(self, position: Point) -> bool:
        return self.drag.drag_start(position)

    def drag_move(self, position: Point) -> bool:
        return self.drag.drag(position)

    def drag_end(self, position: Optional[Point] = None) -> bool:
        return self.drag.drag_end(position)

    def drag_cancel(self) -> bool:
        cancelled = self.drag.cancel()
        self._release_press()
        return cancelled

    def _release_press(self):
        if self._pressed_row is not None:
            self._pressed_row.mouse_up()
        self._pressed_row = None
        self._pressed_at = None

    # --- frame updates --------------------------------------------------

    def update(self, elapsed_ms: float = 0.0) -> float:
        """Run one frame; return the autoscroll delta that was applied"""
        delta = self.autoscroll.update()
        self.drag.update()

        advance = getattr(self.flow, 'update', None)
        if advance is not None:
            advance(elapsed_ms)
        return delta

    def _on_scrolled(self, _offset):
        self._sync_offset()

    def _sync_offset(self):
        # Flows positioned by their toolkit (e.g. inside a scrolled window) have no offset
        if hasattr(self.flow, "offset"):
            self.flow.offset = (0.0, self.viewport.content_origin())

    def _invalidate_content(self):
        self.viewport.content_height = self.flow.content_height
