"""Pure helper functions for list drag-and-drop workflows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, List, Literal, Optional, Sequence


Position = Literal["above", "below"]


@dataclass(frozen=True)
class RowBounds:
    """Geometry metadata for hit-testing rows."""

    key: Hashable
    top: float
    height: float


@dataclass(frozen=True)
class AutoscrollParams:
    """Parameters for computing the per-frame autoscroll delta."""

    viewport_height: float
    pointer_y: float
    trigger_distance: float
    max_power: float
    exp_base: float


def row_at(rows: Sequence[RowBounds], pointer_y: float) -> Optional[Hashable]:
    """Return the key of the row whose vertical extent contains ``pointer_y``."""

    pointer = float(pointer_y)
    for row in rows:
        if row.top <= pointer < row.top + max(0.0, float(row.height)):
            return row.key
    return None


def hit_test_destination(
    heights: Sequence[float], pointer_y: float, spacing: float = 0.0
) -> Optional[int]:
    """Translate a local pointer Y coordinate into a destination index.

    ``heights`` are the measured heights of the rows in visual order. The
    rows may be mid-animation, so their drawn positions cannot be trusted and
    the scan accumulates heights instead. The destination is the first row
    whose accumulated bottom edge (including ``spacing``) lies below the
    pointer, clamped to the valid index range. Returns ``None`` when there
    are no rows.
    """

    count = len(heights)
    if count == 0:
        return None

    pointer = float(pointer_y)
    accumulated = 0.0
    index = 0
    for index, height in enumerate(heights):
        accumulated += max(0.0, float(height)) + spacing
        if accumulated > pointer:
            break
    else:
        index = count

    return max(0, min(index, count - 1))


def insertion_index(source: int, destination: int) -> int:
    """Return where a row lifted out of ``source`` is inserted to land on ``destination``.

    The dragged row takes the place of the hovered row: moving forward it
    goes below the hovered row, moving back it goes above it. The resulting
    gap is expressed in the original sequence, so when the row came from
    earlier in the list every later index shifts down by one once it has
    been lifted out.
    """

    position: Position = "below" if source < destination else "above"
    gap = destination + 1 if position == "below" else destination

    if source < gap:
        gap -= 1
    return gap


def move_item(order: Sequence[Any], source: int, destination: int) -> List[Any]:
    """Return a copy of ``order`` with the row at ``source`` moved onto ``destination``."""

    count = len(order)
    if not 0 <= source < count:
        raise IndexError(f"Source index {source} out of range for {count} rows")
    if not 0 <= destination < count:
        raise IndexError(f"Destination index {destination} out of range for {count} rows")

    reordered = list(order)
    if source == destination:
        return reordered

    row = reordered.pop(source)
    reordered.insert(insertion_index(source, destination), row)
    return reordered


def autoscroll_delta(params: AutoscrollParams, at_start: bool = False, at_end: bool = False) -> float:
    """Calculate the signed scroll delta for one frame.

    Negative values scroll towards the start of the list, positive values
    towards the end. Inside a trigger band the magnitude is
    ``exp_base ** power`` where ``power`` is how far the pointer has
    penetrated the band, capped at ``max_power``. ``at_start``/``at_end``
    suppress scrolling past the respective edge.
    """

    height = float(params.viewport_height)
    pointer = float(params.pointer_y)
    trigger = float(params.trigger_distance)

    if pointer < trigger:
        if at_start:
            return 0.0
        return -_scale_delta(trigger - pointer, params)

    if pointer > height - trigger:
        if at_end:
            return 0.0
        return _scale_delta(pointer - (height - trigger), params)

    return 0.0


def _scale_delta(distance: float, params: AutoscrollParams) -> float:
    power = min(float(params.max_power), abs(distance))
    return float(params.exp_base) ** power
