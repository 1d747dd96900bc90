#!/usr/bin/env python3
"""
reorderlist - rearrangeable playlist demo
Main application entry point
"""

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

import gi
gi.require_version('Adw', '1')
gi.require_version('Gtk', '4.0')

from gi.repository import Adw, Gio, Gtk

from .config import Config
from .gtk_list import RearrangeableListView
from .platform_utils import APP_ID, get_config_file, get_data_dir
from .playlist import BeatmapInfo, BeatmapMetadata, Playlist, PlaylistItem

logger = logging.getLogger(__name__)

RULESET_NAMES = ["osu!", "osu!taiko", "osu!catch", "osu!mania"]

RULESET_MODS = {
    0: ["HD", "HR", "DT", "FL"],
    1: ["HD", "HR", "DT"],
    2: ["HD", "HR", "DT", "FL"],
    3: ["FI", "HD", "DT", "4K"],
}


def generate_playlist_item(index: int) -> PlaylistItem:
    """Build a sample playlist entry cycling through the four rulesets"""
    ruleset_id = index % len(RULESET_NAMES)
    metadata = BeatmapMetadata(
        artist=f"Test Artist {index + 1}",
        title=f"Test Title {index + 1}",
        author="Test Author",
        artist_unicode=f"テストアーティスト {index + 1}",
        title_unicode=f"テストタイトル {index + 1}",
    )
    beatmap = BeatmapInfo(
        metadata=metadata,
        version=f"{RULESET_NAMES[ruleset_id]} Normal",
        ruleset_id=ruleset_id,
    )
    return PlaylistItem(
        beatmap=beatmap,
        ruleset_id=ruleset_id,
        required_mods=list(RULESET_MODS[ruleset_id]),
    )


class ReorderListApplication(Adw.Application):
    """Main application class for the playlist demo"""

    def __init__(self, verbose: bool = False, config_file: str = None):
        super().__init__(
            application_id=APP_ID,
            flags=Gio.ApplicationFlags.FLAGS_NONE
        )
        self.verbose_override = verbose
        self.config = Config(config_file or get_config_file())
        self.playlist_view = None
        self._last_insert = 0

        self.setup_logging()
        self.connect('activate', self.on_activate)

    def setup_logging(self):
        """Set up logging configuration"""
        log_dir = get_data_dir()
        os.makedirs(log_dir, exist_ok=True)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Clear any existing handlers
        logging.getLogger().handlers.clear()

        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'reorderlist.log'),
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)

        verbose = bool(self.config.get_setting('debug_enabled', False)) or self.verbose_override
        effective_level = logging.DEBUG if verbose else logging.INFO

        root_logger = logging.getLogger()
        root_logger.setLevel(effective_level)
        for handler in (file_handler, console_handler):
            handler.setLevel(effective_level)
            root_logger.addHandler(handler)

        logger.debug("Logging initialised at DEBUG level")

    def on_activate(self, app):
        """Build the main window"""
        window = self.props.active_window
        if window is not None:
            window.present()
            return

        window = Adw.ApplicationWindow(application=self)
        window.set_title("Playlist")
        window.set_default_size(
            int(self.config.get_setting('ui.window_width', 640)),
            int(self.config.get_setting('ui.window_height', 480)),
        )

        header = Adw.HeaderBar()
        add_button = Gtk.Button(label="Add item")
        add_button.connect('clicked', lambda _button: self.add_items(1))
        header.pack_start(add_button)

        add_many_button = Gtk.Button(label="Add 25 items")
        add_many_button.connect('clicked', lambda _button: self.add_items(25))
        header.pack_start(add_many_button)

        clear_button = Gtk.Button(label="Clear")
        clear_button.connect('clicked', lambda _button: self.playlist.clear_items())
        header.pack_end(clear_button)

        self.playlist_view = RearrangeableListView(container_class=Playlist, config=self.config)

        content = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        content.append(header)
        content.append(self.playlist_view)
        window.set_content(content)

        self.add_items(4)
        window.present()

    @property
    def playlist(self) -> Playlist:
        return self.playlist_view.container

    def add_items(self, count: int):
        items = []
        for _ in range(count):
            items.append(generate_playlist_item(self._last_insert))
            self._last_insert += 1
        self.playlist.add_items(items)
        logger.info(f"Added {count} item(s); playlist now has {self.playlist.count}")


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(description="Rearrangeable playlist demo")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose debug logging")
    parser.add_argument("--config", help="Path to a JSON configuration file")
    args = parser.parse_args()
    app = ReorderListApplication(verbose=args.verbose, config_file=args.config)
    return app.run(None)


if __name__ == '__main__':
    sys.exit(main())
