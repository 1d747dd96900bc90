"""Tests for viewport clamping and edge autoscroll."""

from __future__ import annotations

import types

import pytest

from reorderlist.autoscroll import AutoscrollController, Viewport
from reorderlist.config import AutoscrollSettings


def _viewport(content_height=500.0):
    viewport = Viewport(height=100.0)
    viewport.content_height = content_height
    return viewport


def _controller(viewport, pointer=None):
    session = None if pointer is None else types.SimpleNamespace(pointer=pointer)
    drag = types.SimpleNamespace(session=session)
    return AutoscrollController(drag, viewport, AutoscrollSettings())


def test_viewport_clamps_scroll_offset():
    viewport = _viewport()

    assert viewport.scroll_by(-20.0) == 0.0
    assert viewport.scroll_to(1000.0) == 400.0
    assert viewport.is_scrolled_to_end
    viewport.content_height = 150.0
    assert viewport.current == 50.0


def test_viewport_emits_scrolled_only_on_change():
    viewport = _viewport()
    offsets = []
    viewport.scrolled.connect(offsets.append)

    viewport.scroll_by(10.0)
    viewport.scroll_by(0.0)
    viewport.scroll_to(-5.0)

    assert offsets == [10.0, 0.0]


def test_no_delta_while_idle():
    viewport = _viewport()
    viewport.scroll_to(200.0)
    controller = _controller(viewport)

    assert controller.update() == 0.0
    assert viewport.current == 200.0


def test_top_band_scrolls_towards_start():
    viewport = _viewport()
    viewport.scroll_to(200.0)
    controller = _controller(viewport, pointer=(10.0, 5.0))

    delta = controller.update()

    assert delta == pytest.approx(-(1.05 ** 5))
    assert viewport.current == pytest.approx(200.0 - 1.05 ** 5)


def test_bottom_band_scrolls_towards_end():
    controller = _controller(_viewport(), pointer=(10.0, 95.0))

    assert controller.update() == pytest.approx(1.05 ** 5)


def test_no_scroll_past_edges():
    viewport = _viewport()
    controller = _controller(viewport, pointer=(10.0, 0.0))
    assert controller.update() == 0.0

    viewport.scroll_to(viewport.max_offset)
    controller = _controller(viewport, pointer=(10.0, 100.0))
    assert controller.update() == 0.0


def test_delta_near_band_boundary_is_minimal():
    viewport = _viewport()
    viewport.scroll_to(200.0)
    controller = _controller(viewport)

    assert controller.compute_delta(10.0) == 0.0
    assert abs(controller.compute_delta(9.999)) == pytest.approx(1.0, rel=1e-3)


def test_delta_grows_with_depth_and_caps():
    viewport = _viewport()
    viewport.scroll_to(200.0)
    controller = _controller(viewport)

    magnitudes = [abs(controller.compute_delta(y)) for y in (9.0, 5.0, 0.0, -20.0, -40.0)]

    assert magnitudes == sorted(magnitudes)
    assert len(set(magnitudes)) == len(magnitudes)
    assert abs(controller.compute_delta(-1000.0)) == pytest.approx(1.05 ** 50)
    assert controller.compute_delta(-1000.0) == controller.compute_delta(-40.0)


def test_pointer_is_converted_to_viewport_space():
    viewport = Viewport(height=100.0, origin_y=300.0)
    viewport.content_height = 500.0
    controller = _controller(viewport, pointer=(10.0, 395.0))

    assert controller.update() == pytest.approx(1.05 ** 5)
