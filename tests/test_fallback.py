"""Tests for the nearest-match pass."""

import math
import threading

import numpy as np
import pytest

from helpers import TripAfter, image_from_hex, palette
from scheme_map.analysis import count_colours
from scheme_map.core_types import Color
from scheme_map.errors import EmptyPixelSourceError
from scheme_map.palette_data import build_palette
from scheme_map.scheme.fallback import match_nearest, match_nearest_counted

BLACK, WHITE, GREY = "#000000", "#ffffff", "#808080"


def test_nearest_ignores_frequency():
    img = image_from_hex([["#101010"] * 9 + ["#f0f0f0"]])
    found = match_nearest(img, palette(BLACK, WHITE), [1])
    assert found.complete
    assert found.matches[1].color == Color(0xF0, 0xF0, 0xF0)


def test_distance_is_measured_in_widened_space():
    img = image_from_hex([["#202020"]])
    found = match_nearest(img, palette(BLACK, WHITE), [1])
    assert found.matches[1].distance == pytest.approx((0xFFFF - 0x2020) * math.sqrt(3))


def test_distance_tie_keeps_first_in_scan_order():
    base = palette(BLACK, GREY)
    lo_first = image_from_hex([["#404040", "#c0c0c0"]])
    hi_first = image_from_hex([["#c0c0c0", "#404040"]])
    assert match_nearest(lo_first, base, [1]).matches[1].color.hex == "#404040"
    assert match_nearest(hi_first, base, [1]).matches[1].color.hex == "#c0c0c0"


def test_distance_tie_across_row_blocks():
    img = image_from_hex([["#c0c0c0"], ["#404040"]])
    found = match_nearest(img, palette(BLACK, GREY), [1], block_rows=1)
    assert found.matches[1].color.hex == "#c0c0c0"


def test_only_requested_slots_are_matched():
    img = image_from_hex([[BLACK, WHITE]])
    found = match_nearest(img, build_palette("vga"), [3, 12])
    assert sorted(found.matches) == [3, 12]


def test_empty_pixel_source_is_an_error():
    with pytest.raises(EmptyPixelSourceError, match="no pixels to scan"):
        match_nearest(np.zeros((0, 4, 3), dtype=np.uint8), palette(BLACK), [0])


def test_no_slots_requested():
    found = match_nearest(np.zeros((0, 0, 3), dtype=np.uint8), palette(BLACK), [])
    assert found.matches == {}
    assert found.complete


def test_preset_cancellation_keeps_first_block_best():
    token = threading.Event()
    token.set()
    img = image_from_hex([[WHITE], [BLACK]])
    found = match_nearest(img, palette(BLACK), [0], token, block_rows=1)
    assert not found.complete
    assert found.matches[0].color == Color(255, 255, 255)


def test_mid_scan_cancellation_keeps_prefix_best():
    img = image_from_hex([["#303030"], ["#101010"], ["#000000"]])
    found = match_nearest(img, palette(BLACK), [0], TripAfter(0), block_rows=1)
    assert not found.complete
    assert found.matches[0].color.hex == "#303030"


def test_counted_table_agrees_with_pixel_scan():
    rng = np.random.default_rng(11)
    choices = np.array(
        [[0x40, 0x40, 0x40], [0xC0, 0xC0, 0xC0], [0x10, 0x80, 0x20], [0xAA, 0x00, 0x55]],
        dtype=np.uint8,
    )
    img = choices[rng.integers(0, len(choices), size=(6, 7))]
    base = build_palette("vga")
    slots = list(range(len(base)))
    scanned = match_nearest(img, base, slots, block_rows=2)
    counted = match_nearest_counted(count_colours(img), base, slots)
    assert scanned.matches == counted.matches


def test_counted_table_scan_is_chunked_in_order():
    img = image_from_hex([["#c0c0c0", "#101010", "#404040", "#404040"]])
    counts = count_colours(img)
    base = palette(BLACK, GREY)
    whole = match_nearest_counted(counts, base, [0, 1])
    one_at_a_time = match_nearest_counted(counts, base, [0, 1], chunk=1)
    assert whole.matches == one_at_a_time.matches
    assert one_at_a_time.matches[1].color.hex == "#c0c0c0"
    assert one_at_a_time.matches[0].color.hex == "#101010"
