"""Unit tests for the pure drag-and-drop helpers."""

from __future__ import annotations

import pytest

from reorderlist.dnd import (
    AutoscrollParams,
    RowBounds,
    autoscroll_delta,
    hit_test_destination,
    insertion_index,
    move_item,
    row_at,
)


def test_hit_test_returns_none_without_rows():
    assert hit_test_destination([], pointer_y=10.0, spacing=1.0) is None


@pytest.mark.parametrize(
    "pointer_y,expected",
    [
        (-5.0, 0),
        (0.0, 0),
        (50.5, 0),
        (51.0, 1),
        (101.9, 1),
        (102.0, 2),
        (1000.0, 2),
    ],
)
def test_hit_test_accumulates_heights_and_spacing(pointer_y, expected):
    assert hit_test_destination([50.0, 50.0, 50.0], pointer_y, spacing=1.0) == expected


def test_hit_test_handles_uneven_heights():
    heights = [10.0, 100.0, 20.0]

    assert hit_test_destination(heights, 15.0) == 1
    assert hit_test_destination(heights, 109.0) == 1
    assert hit_test_destination(heights, 110.0) == 2


@pytest.mark.parametrize(
    "source,destination,expected",
    [
        (0, 2, 2),
        (3, 0, 0),
        (1, 2, 2),
        (2, 1, 1),
        (0, 4, 4),
    ],
)
def test_insertion_index_lands_on_destination(source, destination, expected):
    assert insertion_index(source, destination) == expected


def test_move_item_forward_lands_after_hovered_row():
    assert move_item(list("ABCDE"), 0, 2) == list("BCADE")


def test_move_item_backward_lands_before_hovered_row():
    assert move_item(list("ABCDE"), 3, 0) == list("DABCE")


def test_move_item_same_index_returns_copy():
    order = list("ABC")

    result = move_item(order, 1, 1)

    assert result == order
    assert result is not order


def test_move_item_rejects_out_of_range_indices():
    with pytest.raises(IndexError):
        move_item(list("ABC"), 3, 0)
    with pytest.raises(IndexError):
        move_item(list("ABC"), 0, -1)


def test_row_at_finds_containing_row():
    rows = [
        RowBounds("r0", top=0.0, height=20.0),
        RowBounds("r1", top=21.0, height=20.0),
    ]

    assert row_at(rows, 5.0) == "r0"
    assert row_at(rows, 21.0) == "r1"
    assert row_at(rows, 20.5) is None
    assert row_at(rows, 100.0) is None


def _params(pointer_y, height=100.0):
    return AutoscrollParams(
        viewport_height=height,
        pointer_y=pointer_y,
        trigger_distance=10.0,
        max_power=50.0,
        exp_base=1.05,
    )


@pytest.mark.parametrize(
    "pointer_y,expected",
    [
        (5.0, -(1.05 ** 5)),
        (0.0, -(1.05 ** 10)),
        (-100.0, -(1.05 ** 50)),
        (10.0, 0.0),
        (50.0, 0.0),
        (90.0, 0.0),
        (95.0, 1.05 ** 5),
        (300.0, 1.05 ** 50),
    ],
)
def test_autoscroll_delta(pointer_y, expected):
    assert pytest.approx(autoscroll_delta(_params(pointer_y)), rel=1e-9) == expected


def test_autoscroll_delta_respects_scroll_limits():
    assert autoscroll_delta(_params(0.0), at_start=True) == 0.0
    assert autoscroll_delta(_params(99.0), at_end=True) == 0.0
    assert autoscroll_delta(_params(0.0), at_end=True) < 0.0
