"""Rearrangeable list core: ordered items, drag-to-reorder and edge autoscroll.

The modules imported here are toolkit independent. The GTK front-end lives in
:mod:`reorderlist.gtk_list` and is only importable when PyGObject is installed.
"""

__version__ = "0.1.0"

from .autoscroll import AutoscrollController, Viewport
from .config import AutoscrollSettings, Config, ListSettings
from .container import RearrangeableListContainer
from .drag import DragController, DragSession, DragState
from .errors import (
    DuplicateItemError,
    InvalidDragStateError,
    ItemNotFoundError,
    ReorderListError,
)
from .flow import Bounds, FillFlowContainer, FlowContainer
from .items import OrderedItemSet
from .layout import LayoutPositionIndex
from .playlist import BeatmapInfo, BeatmapMetadata, Playlist, PlaylistItem, PlaylistRow
from .rows import RearrangeableRow
from .signals import Signal

__all__ = [
    "AutoscrollController",
    "AutoscrollSettings",
    "BeatmapInfo",
    "BeatmapMetadata",
    "Bounds",
    "Config",
    "DragController",
    "DragSession",
    "DragState",
    "DuplicateItemError",
    "FillFlowContainer",
    "FlowContainer",
    "InvalidDragStateError",
    "ItemNotFoundError",
    "LayoutPositionIndex",
    "ListSettings",
    "OrderedItemSet",
    "Playlist",
    "PlaylistItem",
    "PlaylistRow",
    "RearrangeableListContainer",
    "RearrangeableRow",
    "ReorderListError",
    "Signal",
    "Viewport",
]
