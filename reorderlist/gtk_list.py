"""GTK 4 front-end for the rearrangeable list container."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

import gi
gi.require_version("Gtk", "4.0")
from gi.repository import Gdk, GLib, Gtk

from .config import Config
from .container import RearrangeableListContainer
from .errors import DuplicateItemError, ItemNotFoundError
from .flow import Bounds
from .playlist import PlaylistRow
from .signals import Signal

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


# ---------------------------------------------------------------------------
# Row widgets
# ---------------------------------------------------------------------------


class RowWidget(Gtk.Box):
    """Horizontal row: drag handle, content labels and a remove button."""

    def __init__(self, row):
        super().__init__(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        self.row = row
        self.set_size_request(-1, int(row.height))
        self.add_css_class("card")

        self.handle = Gtk.Image.new_from_icon_name("list-drag-handle-symbolic")
        self.handle.set_size_request(int(row.handle_width), -1)
        self.append(self.handle)

        content = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=2)
        content.set_hexpand(True)
        content.set_valign(Gtk.Align.CENTER)
        self._build_content(content)
        self.append(content)

        self.remove_button = Gtk.Button.new_from_icon_name("list-remove-symbolic")
        self.remove_button.add_css_class("flat")
        self.remove_button.set_valign(Gtk.Align.CENTER)
        self.remove_button.set_margin_end(12)
        self.remove_button.connect("clicked", lambda _button: self.row.request_remove())
        self.append(self.remove_button)

    def _build_content(self, content: Gtk.Box):
        label = Gtk.Label(label=str(self.row.item))
        label.set_xalign(0.0)
        content.append(label)

    def sync(self):
        """Reflect row state in the widget"""
        return None


class PlaylistRowWidget(RowWidget):
    """Row widget for :class:`PlaylistRow` with hover-revealed controls."""

    def __init__(self, row: PlaylistRow):
        super().__init__(row)
        motion = Gtk.EventControllerMotion()
        motion.connect("enter", self._on_enter)
        motion.connect("leave", self._on_leave)
        motion.connect("motion", self._on_motion)
        self.add_controller(motion)
        self.sync()

    def _build_content(self, content: Gtk.Box):
        row = self.row
        heading = Gtk.Label()
        heading.set_markup(
            f"<b>{GLib.markup_escape_text(row.artist_text)}</b> - "
            f"{GLib.markup_escape_text(row.title_text)}"
        )
        heading.set_xalign(0.0)
        content.append(heading)

        details = Gtk.Label()
        details.set_markup(
            f"<small>{GLib.markup_escape_text(row.version_text)}   "
            f"<i>{GLib.markup_escape_text(row.author_text)}</i></small>"
        )
        details.set_xalign(0.0)
        details.add_css_class("dim-label")
        content.append(details)

    @staticmethod
    def _button_pressed(controller: Gtk.EventController) -> bool:
        state = controller.get_current_event_state()
        return bool(state & Gdk.ModifierType.BUTTON1_MASK)

    def _on_enter(self, controller, _x, _y):
        self.row.hover(pressed=self._button_pressed(controller))
        self.sync()

    def _on_leave(self, _controller):
        self.row.hover_lost()
        self.sync()

    def _on_motion(self, controller, _x, _y):
        self.row.mouse_move(pressed=self._button_pressed(controller))
        self.sync()

    def sync(self):
        row = self.row
        self.handle.set_opacity(1.0 if row.handle_visible else 0.0)
        self.remove_button.set_opacity(1.0 if row.remove_visible else 0.0)
        self.remove_button.set_sensitive(row.remove_visible)
        if row.highlighted:
            self.add_css_class("activatable")
        else:
            self.remove_css_class("activatable")


def default_widget_factory(row) -> RowWidget:
    if isinstance(row, PlaylistRow):
        return PlaylistRowWidget(row)
    return RowWidget(row)


# ---------------------------------------------------------------------------
# Flow container and viewport
# ---------------------------------------------------------------------------


class GtkFlowContainer:
    """Flow container backed by a vertical :class:`Gtk.Box`.

    Coordinates handed to :meth:`to_local_space` are relative to the
    scrolled window that hosts the box.
    """

    def __init__(self, widget_factory: Callable[[Any], Gtk.Widget] = default_widget_factory,
                 spacing: float = 1.0, padding: float = 5.0):
        self.spacing = float(spacing)
        self.padding = float(padding)
        self.widget_factory = widget_factory
        self.vadjustment: Optional[Gtk.Adjustment] = None

        self.box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=int(round(self.spacing)))
        for setter in (self.box.set_margin_top, self.box.set_margin_bottom,
                       self.box.set_margin_start, self.box.set_margin_end):
            setter(int(round(self.padding)))

        self._widgets: Dict[Any, Gtk.Widget] = {}
        self._slots: Dict[Any, int] = {}
        self._insertion: List[Any] = []

    def add(self, row):
        if row in self._widgets:
            raise DuplicateItemError(row)

        widget = self.widget_factory(row)
        self._widgets[row] = widget
        self._slots[row] = max(self._slots.values(), default=-1) + 1
        self._insertion.append(row)
        self.box.append(widget)

    def remove(self, row):
        widget = self._widget(row)
        self.box.remove(widget)
        del self._widgets[row]
        del self._slots[row]
        self._insertion.remove(row)

    def clear(self):
        for widget in self._widgets.values():
            self.box.remove(widget)
        self._widgets = {}
        self._slots = {}
        self._insertion = []

    def set_layout_position(self, row, slot: int):
        self._widget(row)
        if self._slots[row] == slot:
            return
        self._slots[row] = slot
        self._restack()

    def get_layout_position(self, row) -> int:
        self._widget(row)
        return self._slots[row]

    def flowing_children(self) -> List[Any]:
        return sorted(self._insertion, key=self._slots.__getitem__)

    def widget_for(self, row) -> Gtk.Widget:
        return self._widget(row)

    def _widget(self, row) -> Gtk.Widget:
        try:
            return self._widgets[row]
        except KeyError:
            raise ItemNotFoundError(row) from None

    def _restack(self):
        previous = None
        for row in self.flowing_children():
            widget = self._widgets[row]
            self.box.reorder_child_after(widget, previous)
            previous = widget

    def _measured_height(self, row, widget: Gtk.Widget) -> float:
        height = widget.get_height()
        if height <= 0:
            # Not laid out yet
            return float(getattr(row, "height", 0.0))
        return float(height)

    def bounding_box(self, row) -> Bounds:
        widget = self._widget(row)
        allocation = widget.get_allocation()
        return Bounds(
            float(allocation.x),
            float(allocation.y),
            float(allocation.width),
            self._measured_height(row, widget),
        )

    def to_local_space(self, position: Point) -> Point:
        x, y = position
        offset = self.vadjustment.get_value() if self.vadjustment else 0.0
        return (float(x) - self.padding, float(y) + offset - self.padding)

    @property
    def content_height(self) -> float:
        children = self.flowing_children()
        if not children:
            return 0.0
        heights = sum(self._measured_height(row, self._widgets[row]) for row in children)
        return heights + self.spacing * (len(children) - 1)

    def sync_widgets(self):
        for widget in self._widgets.values():
            widget.sync()

    def __len__(self) -> int:
        return len(self._widgets)

    def __contains__(self, row) -> bool:
        return row in self._widgets


class GtkViewport:
    """Viewport over the vertical adjustment of a :class:`Gtk.ScrolledWindow`."""

    def __init__(self, scrolled_window: Gtk.ScrolledWindow, padding: float = 0.0):
        self.scrolled_window = scrolled_window
        self.adjustment = scrolled_window.get_vadjustment()
        self.padding = float(padding)
        self.origin_y = 0.0
        self.scrolled = Signal()
        self.adjustment.connect("value-changed", self._on_value_changed)

    def _on_value_changed(self, adjustment):
        self.scrolled.emit(adjustment.get_value())

    @property
    def height(self) -> float:
        return float(self.scrolled_window.get_height())

    @property
    def current(self) -> float:
        return self.adjustment.get_value()

    @property
    def content_height(self) -> float:
        return max(0.0, self.adjustment.get_upper() - 2 * self.padding)

    @content_height.setter
    def content_height(self, _value: float):
        # The adjustment tracks the allocated content size itself
        return

    @property
    def max_offset(self) -> float:
        lower = self.adjustment.get_lower()
        upper = self.adjustment.get_upper() - self.adjustment.get_page_size()
        return max(lower, upper)

    def scroll_to(self, offset: float) -> float:
        lower = self.adjustment.get_lower()
        new_value = max(lower, min(self.max_offset, float(offset)))
        if new_value != self.adjustment.get_value():
            self.adjustment.set_value(new_value)
        return self.adjustment.get_value()

    def scroll_by(self, delta: float) -> float:
        return self.scroll_to(self.current + float(delta))

    @property
    def is_scrolled_to_start(self) -> bool:
        return self.current <= self.adjustment.get_lower()

    @property
    def is_scrolled_to_end(self) -> bool:
        return self.current >= self.max_offset

    def to_local_space(self, position: Point) -> Point:
        x, y = position
        return (float(x), float(y) - self.origin_y)

    def content_origin(self) -> float:
        return self.origin_y + self.padding - self.current


# ---------------------------------------------------------------------------
# View
# ---------------------------------------------------------------------------


class RearrangeableListView(Gtk.ScrolledWindow):
    """Scrolled list wiring pointer gestures and a frame timer into a container."""

    def __init__(self, container_class=RearrangeableListContainer, config: Optional[Config] = None,
                 widget_factory: Callable[[Any], Gtk.Widget] = default_widget_factory):
        super().__init__()
        self.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)
        self.set_vexpand(True)

        self.config = config or Config()
        settings = self.config.get_list_settings()
        self._interval_ms = self.config.get_autoscroll_settings().interval_ms

        self.flow = GtkFlowContainer(widget_factory, spacing=settings.spacing, padding=settings.padding)
        self.set_child(self.flow.box)
        self.flow.vadjustment = self.get_vadjustment()
        self.viewport = GtkViewport(self, padding=settings.padding)

        self.container = container_class(flow=self.flow, viewport=self.viewport, config=self.config)
        self._frame_timeout_id = 0
        self._setup_drag_gesture()

    def _setup_drag_gesture(self):
        gesture = Gtk.GestureDrag.new()
        gesture.set_button(Gdk.BUTTON_PRIMARY)
        gesture.connect("drag-begin", self._on_drag_begin)
        gesture.connect("drag-update", self._on_drag_update)
        gesture.connect("drag-end", self._on_drag_end)
        gesture.connect("cancel", self._on_drag_cancel)
        self.add_controller(gesture)
        self._gesture = gesture

    def _pointer(self, gesture, offset_x: float, offset_y: float) -> Optional[Point]:
        ok, start_x, start_y = gesture.get_start_point()
        if not ok:
            return None
        return (start_x + offset_x, start_y + offset_y)

    def _on_drag_begin(self, gesture, x, y):
        try:
            self.container.mouse_down((x, y))
            self.flow.sync_widgets()
        except Exception as e:
            logger.error(f"Error handling press: {e}")

    def _on_drag_update(self, gesture, offset_x, offset_y):
        try:
            position = self._pointer(gesture, offset_x, offset_y)
            if position is None:
                return
            if self.container.mouse_move(position):
                gesture.set_state(Gtk.EventSequenceState.CLAIMED)
                self._start_frame_timer()
        except Exception as e:
            logger.error(f"Error handling drag motion: {e}")

    def _on_drag_end(self, gesture, offset_x, offset_y):
        try:
            self.container.mouse_up(self._pointer(gesture, offset_x, offset_y))
            self.flow.sync_widgets()
        except Exception as e:
            logger.error(f"Error handling release: {e}")
        finally:
            self._stop_frame_timer()

    def _on_drag_cancel(self, _gesture, _sequence):
        try:
            self.container.drag_cancel()
            self.flow.sync_widgets()
        except Exception as e:
            logger.error(f"Error handling drag cancel: {e}")
        finally:
            self._stop_frame_timer()

    def _start_frame_timer(self):
        """Ensure the per-frame update timer is running."""
        if self._frame_timeout_id:
            return
        interval = max(10, int(self._interval_ms))
        self._frame_timeout_id = GLib.timeout_add(interval, self._frame_step)

    def _stop_frame_timer(self):
        """Cancel the frame timer if it is active."""
        if self._frame_timeout_id:
            GLib.source_remove(self._frame_timeout_id)
        self._frame_timeout_id = 0

    def _frame_step(self):
        if not self.container.is_dragging:
            self._frame_timeout_id = 0
            return False

        try:
            self.container.update(self._interval_ms)
        except Exception as e:
            logger.error(f"Error during drag frame update: {e}")
        return True
