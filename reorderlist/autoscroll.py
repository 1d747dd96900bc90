"""Viewport scroll state and edge autoscroll during drags."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .config import AutoscrollSettings
from .dnd import AutoscrollParams, autoscroll_delta
from .signals import Signal

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class Viewport:
    """Scrollable window onto the list content.

    ``current`` is the scroll offset, always kept within
    ``[0, content_height - height]``. ``origin_y`` is the screen-space top of
    the viewport, and ``padding`` is the inset between the viewport and the
    flow container.
    """

    def __init__(self, height: float, origin_y: float = 0.0, padding: float = 0.0):
        self.height = float(height)
        self.origin_y = float(origin_y)
        self.padding = float(padding)
        self._content_height = 0.0
        self._current = 0.0
        self.scrolled = Signal()

    @property
    def current(self) -> float:
        return self._current

    @property
    def content_height(self) -> float:
        return self._content_height

    @content_height.setter
    def content_height(self, value: float):
        self._content_height = max(0.0, float(value))
        self.scroll_to(self._current)

    @property
    def max_offset(self) -> float:
        return max(0.0, self._content_height + 2 * self.padding - self.height)

    def scroll_to(self, offset: float) -> float:
        clamped = max(0.0, min(float(offset), self.max_offset))
        if clamped != self._current:
            self._current = clamped
            self.scrolled.emit(clamped)
        return self._current

    def scroll_by(self, delta: float) -> float:
        return self.scroll_to(self._current + float(delta))

    @property
    def is_scrolled_to_start(self) -> bool:
        return self._current <= 0.0

    @property
    def is_scrolled_to_end(self) -> bool:
        return self._current >= self.max_offset

    def to_local_space(self, position: Point) -> Point:
        x, y = position
        return (float(x), float(y) - self.origin_y)

    def content_origin(self) -> float:
        """Screen-space Y of the content's top edge at the current offset"""
        return self.origin_y + self.padding - self._current


class AutoscrollController:
    """Nudges the viewport while a drag hovers near one of its edges"""

    def __init__(self, drag, viewport: Viewport, settings: Optional[AutoscrollSettings] = None):
        self.drag = drag
        self.viewport = viewport
        self.settings = settings or AutoscrollSettings()
        self._active = False

    def compute_delta(self, local_y: float) -> float:
        """Return the scroll delta for a pointer at viewport-local ``local_y``"""
        params = AutoscrollParams(
            viewport_height=self.viewport.height,
            pointer_y=local_y,
            trigger_distance=self.settings.trigger_distance,
            max_power=self.settings.max_power,
            exp_base=self.settings.exp_base,
        )
        return autoscroll_delta(
            params,
            at_start=self.viewport.is_scrolled_to_start,
            at_end=self.viewport.is_scrolled_to_end,
        )

    def update(self) -> float:
        """Run one frame; return the delta applied to the viewport"""
        session = self.drag.session
        if session is None:
            self._set_active(False)
            return 0.0

        _, local_y = self.viewport.to_local_space(session.pointer)
        delta = self.compute_delta(local_y)
        self._set_active(bool(delta))
        if delta:
            self.viewport.scroll_by(delta)
        return delta

    def _set_active(self, active: bool):
        if active != self._active:
            self._active = active
            logger.debug("Autoscroll started" if active else "Autoscroll stopped")
