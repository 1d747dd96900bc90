import pytest

from reorderlist.config import Config
from reorderlist.playlist import BeatmapInfo, BeatmapMetadata, Playlist, PlaylistItem, PlaylistRow


def make_item(index, version="osu! Normal", unicode_names=True):
    metadata = BeatmapMetadata(
        artist=f"Artist {index}",
        title=f"Title {index}",
        author="Mapper",
        artist_unicode=f"アーティスト {index}" if unicode_names else None,
        title_unicode=f"タイトル {index}" if unicode_names else None,
    )
    return PlaylistItem(beatmap=BeatmapInfo(metadata=metadata, version=version))


def make_playlist(count=4, **settings):
    config = Config()
    config.set_setting('list.layout_duration_ms', 0)
    for key, value in settings.items():
        config.set_setting(key.replace('__', '.'), value)
    playlist = Playlist(config=config)
    items = [make_item(i) for i in range(count)]
    playlist.add_items(items)
    return playlist, items


def test_row_texts_default_to_romanised_metadata():
    row = PlaylistRow(make_item(1))

    assert row.artist_text == "Artist 1"
    assert row.title_text == "Title 1"
    assert row.version_text == "osu! Normal"
    assert row.author_text == "mapped by Mapper"


def test_row_texts_prefer_unicode_when_configured():
    playlist, items = make_playlist(2, ui__prefer_unicode_metadata=True)
    row = playlist.row_for(items[0])

    assert row.artist_text == "アーティスト 0"
    assert row.title_text == "タイトル 0"


def test_unicode_preference_falls_back_to_romanised():
    row = PlaylistRow(make_item(3, unicode_names=False), prefer_unicode=True)

    assert row.artist_text == "Artist 3"


def test_identical_entries_are_distinct():
    first = make_item(1)
    second = make_item(1)
    playlist = Playlist()

    playlist.add_items([first, second])

    assert playlist.count == 2
    assert playlist.playlist == [first, second]


def test_rows_use_configured_geometry():
    playlist, items = make_playlist(1, list__row_height=40, list__handle_width=30)
    row = playlist.row_for(items[0])

    assert row.height == 40
    assert row.handle_width == 30


def test_hover_shows_controls():
    row = PlaylistRow(make_item(0))
    assert not row.handle_visible and not row.remove_visible

    row.hover()
    assert row.handle_visible and row.remove_visible and row.highlighted

    row.hover_lost()
    assert not row.handle_visible and not row.remove_visible and not row.highlighted


def test_pressing_handle_hides_remove_button():
    row = PlaylistRow(make_item(0))
    row.hover()

    assert row.mouse_down(10.0) is True
    assert row.is_draggable
    assert row.handle_visible
    assert not row.remove_visible

    row.mouse_up()
    assert not row.is_draggable
    assert row.remove_visible


def test_pressing_outside_handle_keeps_remove_button():
    row = PlaylistRow(make_item(0))
    row.hover()

    assert row.mouse_down(200.0) is False
    assert row.remove_visible


def test_controls_stay_while_pressed_row_loses_hover():
    row = PlaylistRow(make_item(0))
    row.hover()
    row.mouse_down(5.0)

    row.hover_lost()
    assert row.handle_visible
    assert row.highlighted

    row.mouse_up()
    assert not row.handle_visible
    assert not row.remove_visible
    assert not row.highlighted


def test_other_rows_ignore_hover_during_press():
    row = PlaylistRow(make_item(0))

    row.hover(pressed=True)

    assert not row.is_hovered
    assert not row.handle_visible


def test_move_after_drop_shows_controls():
    row = PlaylistRow(make_item(0))

    row.mouse_move(pressed=False)
    assert row.handle_visible and row.remove_visible

    other = PlaylistRow(make_item(1))
    other.mouse_move(pressed=True)
    assert not other.handle_visible


def test_remove_button_removes_entry():
    playlist, items = make_playlist(3)

    playlist.row_for(items[1]).request_remove()

    assert playlist.playlist == [items[0], items[2]]


def test_drag_reorders_playlist():
    playlist, items = make_playlist(4)
    top = playlist.flow.offset[1]

    assert playlist.mouse_down((10.0, top + 25.0)) is True
    playlist.mouse_move((10.0, top + 51.0 * 3 + 25.0))
    playlist.mouse_up()

    assert playlist.playlist == [items[1], items[2], items[3], items[0]]
    assert not playlist.row_for(items[0]).is_draggable


@pytest.mark.parametrize("version", ["osu! Normal", "osu!mania Hard"])
def test_version_text_is_difficulty_name(version):
    assert PlaylistRow(make_item(0, version=version)).version_text == version
