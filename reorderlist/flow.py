"""Flow container interface and an in-memory implementation.

A flow container lays rows out top-to-bottom in ascending layout-slot order
with a fixed spacing between them, and reports each row's measured bounding
box. :class:`FillFlowContainer` is the toolkit-independent implementation
used headless and in tests; :mod:`reorderlist.gtk_list` provides one backed
by GTK widgets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from .errors import DuplicateItemError, ItemNotFoundError

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box in the container's local space."""

    x: float
    y: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.y + self.height


class FlowContainer(Protocol):
    """Protocol describing the layout primitive the list core drives."""

    spacing: float

    def add(self, row: Any) -> None:
        """Append a rendered row."""

    def remove(self, row: Any) -> None:
        """Remove a rendered row."""

    def clear(self) -> None:
        """Remove every rendered row."""

    def set_layout_position(self, row: Any, slot: int) -> None:
        """Assign the sort key of ``row``."""

    def get_layout_position(self, row: Any) -> int:
        """Return the sort key of ``row``."""

    def flowing_children(self) -> List[Any]:
        """Return rows in current sort order."""

    def bounding_box(self, row: Any) -> Bounds:
        """Return the measured, post-layout box of ``row``."""

    def to_local_space(self, position: Point) -> Point:
        """Convert a screen-space point into the container's local space."""

    @property
    def content_height(self) -> float:
        """Total height of all rows plus spacing."""

    def __len__(self) -> int:
        ...

    def __contains__(self, row: Any) -> bool:
        ...


def ease_out_quint(progress: float) -> float:
    """Out-quint easing curve mapping ``[0, 1]`` onto ``[0, 1]``."""
    progress = max(0.0, min(1.0, progress))
    return 1.0 - (1.0 - progress) ** 5


class _Placement:
    __slots__ = ("slot", "start_y", "target_y", "drawn_y", "elapsed")

    def __init__(self, slot: int):
        self.slot = slot
        self.start_y: Optional[float] = None
        self.target_y = 0.0
        self.drawn_y = 0.0
        self.elapsed = 0.0


class FillFlowContainer:
    """Vertical flow of rows with animated layout transitions.

    Row heights are read through ``measure`` (``row.height`` by default).
    Whenever the layout changes, each row's drawn position eases from where
    it currently is to its new target over ``layout_duration_ms``;
    :meth:`update` advances the animation.
    """

    def __init__(
        self,
        spacing: float = 1.0,
        width: float = 0.0,
        layout_duration_ms: float = 160.0,
        easing: Callable[[float], float] = ease_out_quint,
        measure: Optional[Callable[[Any], float]] = None,
    ):
        self.spacing = float(spacing)
        self.width = float(width)
        self.layout_duration_ms = max(0.0, float(layout_duration_ms))
        self.easing = easing
        self.measure = measure or (lambda row: float(getattr(row, "height", 0.0)))
        self.offset: Point = (0.0, 0.0)
        self._placements: Dict[Any, _Placement] = {}
        self._insertion: List[Any] = []

    # --- membership -----------------------------------------------------

    def add(self, row):
        if row in self._placements:
            raise DuplicateItemError(row)

        last_slot = max((p.slot for p in self._placements.values()), default=-1)
        placement = _Placement(slot=last_slot + 1)
        self._placements[row] = placement
        self._insertion.append(row)
        self._invalidate_layout(new_rows=(row,))

    def remove(self, row):
        if row not in self._placements:
            raise ItemNotFoundError(row)

        del self._placements[row]
        self._insertion.remove(row)
        self._invalidate_layout()

    def clear(self):
        self._placements = {}
        self._insertion = []

    # --- sort keys ------------------------------------------------------

    def set_layout_position(self, row, slot: int):
        placement = self._placement(row)
        if placement.slot == slot:
            return
        placement.slot = slot
        self._invalidate_layout()

    def get_layout_position(self, row) -> int:
        return self._placement(row).slot

    def flowing_children(self) -> List[Any]:
        # Insertion order breaks ties, matching a stable sort
        return sorted(self._insertion, key=lambda row: self._placements[row].slot)

    # --- geometry -------------------------------------------------------

    def bounding_box(self, row) -> Bounds:
        placement = self._placement(row)
        return Bounds(0.0, placement.drawn_y, self.width, self.measure(row))

    def target_box(self, row) -> Bounds:
        """Return the box ``row`` is animating towards"""
        placement = self._placement(row)
        return Bounds(0.0, placement.target_y, self.width, self.measure(row))

    def to_local_space(self, position: Point) -> Point:
        x, y = position
        offset_x, offset_y = self.offset
        return (float(x) - offset_x, float(y) - offset_y)

    @property
    def content_height(self) -> float:
        children = self.flowing_children()
        if not children:
            return 0.0
        heights = sum(self.measure(row) for row in children)
        return heights + self.spacing * (len(children) - 1)

    @property
    def is_animating(self) -> bool:
        return any(p.start_y is not None for p in self._placements.values())

    def update(self, elapsed_ms: float):
        """Advance layout transitions by ``elapsed_ms`` milliseconds"""
        for placement in self._placements.values():
            if placement.start_y is None:
                continue

            placement.elapsed += max(0.0, float(elapsed_ms))
            if self.layout_duration_ms <= 0 or placement.elapsed >= self.layout_duration_ms:
                placement.drawn_y = placement.target_y
                placement.start_y = None
                continue

            progress = self.easing(placement.elapsed / self.layout_duration_ms)
            placement.drawn_y = placement.start_y + (placement.target_y - placement.start_y) * progress

    def _placement(self, row) -> _Placement:
        try:
            return self._placements[row]
        except KeyError:
            raise ItemNotFoundError(row) from None

    def _invalidate_layout(self, new_rows=()):
        y = 0.0
        for row in self.flowing_children():
            placement = self._placements[row]
            if row in new_rows:
                # New rows appear in place rather than sliding in
                placement.target_y = placement.drawn_y = y
                placement.start_y = None
            elif placement.target_y != y:
                placement.start_y = placement.drawn_y
                placement.target_y = y
                placement.elapsed = 0.0
                if self.layout_duration_ms <= 0:
                    placement.drawn_y = y
                    placement.start_y = None
            y += self.measure(row) + self.spacing

    def __len__(self) -> int:
        return len(self._placements)

    def __contains__(self, row) -> bool:
        return row in self._placements

    def __iter__(self):
        return iter(self.flowing_children())
