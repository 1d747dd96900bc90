"""Beatmap playlist built on the rearrangeable list container."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .config import Config
from .container import RearrangeableListContainer
from .rows import RearrangeableRow

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class BeatmapMetadata:
    artist: str
    title: str
    author: str
    artist_unicode: Optional[str] = None
    title_unicode: Optional[str] = None


@dataclass(eq=False)
class BeatmapInfo:
    metadata: BeatmapMetadata
    version: str
    ruleset_id: int = 0


@dataclass(eq=False)
class PlaylistItem:
    """One entry of a playlist; two entries for the same beatmap are distinct"""
    beatmap: BeatmapInfo
    ruleset_id: int = 0
    required_mods: List[str] = field(default_factory=list)


def _localised(unicode_text: Optional[str], romanised: str, prefer_unicode: bool) -> str:
    if prefer_unicode and unicode_text:
        return unicode_text
    return romanised or unicode_text or ""


class PlaylistRow(RearrangeableRow):
    """Rendered playlist entry with hover-dependent handle and remove button.

    The drag handle and remove button are only shown while the row is
    hovered. Once a press on the handle makes the row draggable, the remove
    button is hidden until the press ends. While the pointer is held, hover
    changes do not toggle the controls, so dragging across other rows
    leaves them untouched.
    """

    def __init__(self, item: PlaylistItem, height: float = 50.0, handle_width: float = 25.0,
                 prefer_unicode: bool = False):
        super().__init__(item=item, height=height, handle_width=handle_width)
        self.prefer_unicode = prefer_unicode
        self.is_hovered = False
        self.is_pressed = False
        self.handle_visible = False
        self.remove_visible = False
        self.highlighted = False

    @property
    def playlist_item(self) -> PlaylistItem:
        return self.item

    @property
    def artist_text(self) -> str:
        metadata = self.item.beatmap.metadata
        return _localised(metadata.artist_unicode, metadata.artist, self.prefer_unicode)

    @property
    def title_text(self) -> str:
        metadata = self.item.beatmap.metadata
        return _localised(metadata.title_unicode, metadata.title, self.prefer_unicode)

    @property
    def version_text(self) -> str:
        return self.item.beatmap.version

    @property
    def author_text(self) -> str:
        return f"mapped by {self.item.beatmap.metadata.author}"

    def hover(self, pressed: bool = False):
        if pressed:
            if self.is_pressed:
                self.is_hovered = True
            return

        self.is_hovered = True
        self._show_hover_elements(True)
        self.highlighted = True

    def hover_lost(self):
        self.is_hovered = False
        if self.is_pressed:
            return

        self._show_hover_elements(False)
        self.highlighted = False

    def mouse_down(self, local_x: float) -> bool:
        self.is_pressed = True
        draggable = super().mouse_down(local_x)
        if draggable:
            self.remove_visible = False
        return draggable

    def mouse_up(self):
        super().mouse_up()
        self.is_pressed = False
        self.highlighted = False

        if not self.is_hovered:
            self._show_hover_elements(False)
        else:
            self.remove_visible = True

    def mouse_move(self, pressed: bool = False):
        # Rows dropped onto after a drag never received a hover event
        if not self.is_hovered and not pressed:
            self._show_hover_elements(True)

    def _show_hover_elements(self, show: bool):
        self.handle_visible = show
        self.remove_visible = show


class Playlist(RearrangeableListContainer):
    """Rearrangeable list of :class:`PlaylistItem` entries"""

    def __init__(self, flow=None, viewport=None, config: Optional[Config] = None):
        config = config or Config()
        settings = config.get_list_settings()
        prefer_unicode = bool(config.get_setting('ui.prefer_unicode_metadata', False))

        def create_row(item: PlaylistItem) -> PlaylistRow:
            return PlaylistRow(
                item,
                height=settings.row_height,
                handle_width=settings.handle_width,
                prefer_unicode=prefer_unicode,
            )

        super().__init__(row_factory=create_row, flow=flow, viewport=viewport, config=config)

    @property
    def playlist(self) -> List[PlaylistItem]:
        """Entries in their current order"""
        return self.ordered_items()
