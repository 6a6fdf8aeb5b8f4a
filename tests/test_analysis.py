"""Tests for colour frequency counting."""

import threading

import numpy as np
import pytest

from helpers import TripAfter, image_from_hex
from scheme_map.analysis import count_colours
from scheme_map.core_types import Color

BLACK, WHITE = "#000000", "#ffffff"
A, B, C = "#112233", "#445566", "#778899"


def test_counts_and_first_occurrence_order():
    img = image_from_hex([[WHITE, BLACK], [BLACK, BLACK]])
    counts = count_colours(img)
    assert counts.as_dict() == {Color(0, 0, 0): 3, Color(255, 255, 255): 1}
    assert [cc.color.hex for cc in counts.items()] == [WHITE, BLACK]
    assert counts.first_seen.tolist() == [0, 1]
    assert counts.complete
    assert counts.scanned == counts.total == 4


def test_counts_sum_to_pixel_total():
    rng = np.random.default_rng(7)
    img = rng.integers(0, 4, size=(9, 11, 3), dtype=np.uint8) * 60
    counts = count_colours(img, block_rows=2)
    assert int(counts.counts.sum()) == 99
    assert (counts.counts > 0).all()
    assert len(counts) == len({tuple(p) for p in img.reshape(-1, 3).tolist()})


def test_first_seen_across_blocks():
    img = image_from_hex([[A, A], [B, A], [C, B]])
    counts = count_colours(img, block_rows=1)
    assert [cc.color.hex for cc in counts.items()] == [A, B, C]
    assert counts.first_seen.tolist() == [0, 2, 4]
    assert counts.counts.tolist() == [3, 2, 1]


def test_block_size_does_not_change_result():
    rng = np.random.default_rng(3)
    img = rng.integers(0, 3, size=(13, 5, 3), dtype=np.uint8) * 100
    one = count_colours(img, block_rows=1)
    many = count_colours(img, block_rows=64)
    assert np.array_equal(one.colours, many.colours)
    assert np.array_equal(one.counts, many.counts)
    assert np.array_equal(one.first_seen, many.first_seen)


def test_preset_cancellation_still_reads_first_block():
    token = threading.Event()
    token.set()
    img = image_from_hex([[A, B], [C, A]])
    counts = count_colours(img, token, block_rows=1)
    assert not counts.complete
    assert counts.scanned == 2
    assert counts.total == 4
    assert counts.as_dict() == {Color.from_hex(A): 1, Color.from_hex(B): 1}


def test_preset_cancellation_on_single_block_is_complete():
    token = threading.Event()
    token.set()
    counts = count_colours(image_from_hex([[A, B], [C, A]]), token)
    assert counts.complete
    assert counts.scanned == 4


def test_mid_scan_cancellation_covers_rows_read():
    img = image_from_hex([[A, A], [B, A], [C, C], [C, C]])
    counts = count_colours(img, TripAfter(1), block_rows=1)
    assert not counts.complete
    assert counts.scanned == 4
    expected = count_colours(img[:2])
    assert counts.as_dict() == expected.as_dict()
    assert Color.from_hex(C) not in counts.as_dict()


def test_empty_image():
    counts = count_colours(np.zeros((0, 0, 3), dtype=np.uint8))
    assert len(counts) == 0
    assert counts.total == 0
    assert counts.complete


def test_rejects_non_rgb_arrays():
    with pytest.raises(TypeError):
        count_colours(np.zeros((2, 2, 4), dtype=np.uint8))
    with pytest.raises(TypeError):
        count_colours(np.zeros((2, 2, 3), dtype=np.float32))
