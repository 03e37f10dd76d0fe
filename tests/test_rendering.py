from __future__ import annotations

import random

import pytest

from helpers import BLACK, WHITE, row_of, solid
from rasterprint.errors import InvalidInput
from rasterprint.rendering import GrayscaleBuffer, PixelBuffer, dither, image_to_bits, resize, to_grayscale


def test_pixel_buffer_rejects_wrong_sample_count() -> None:
    with pytest.raises(InvalidInput):
        PixelBuffer(2, 2, bytes(15))


@pytest.mark.parametrize(
    "width,height,target",
    [(1, 1, 384), (10, 5, 20), (640, 480, 384), (1000, 333, 576), (3, 7, 8), (384, 1, 384)],
)
def test_resize_hits_target_width_and_keeps_aspect(width: int, height: int, target: int) -> None:
    out = resize(solid(width, height, WHITE), target)
    assert out.width == target
    assert abs(out.height - height * target / width) <= 1
    assert len(out.samples) == out.width * out.height * 4


def test_resize_height_never_drops_below_one() -> None:
    out = resize(solid(100, 1, BLACK), 10)
    assert (out.width, out.height) == (10, 1)


def test_resize_uses_nearest_neighbour() -> None:
    out = resize(row_of(BLACK, WHITE), 4)
    assert (out.width, out.height) == (4, 2)
    first_row = [out.pixel(x, 0) for x in range(4)]
    assert first_row == [bytes(BLACK), bytes(BLACK), bytes(WHITE), bytes(WHITE)]


def test_resize_rejects_non_positive_target() -> None:
    with pytest.raises(InvalidInput):
        resize(solid(4, 4, WHITE), 0)


def test_grayscale_opaque_white_and_black() -> None:
    white = to_grayscale(solid(3, 2, WHITE))
    black = to_grayscale(solid(3, 2, BLACK))
    assert white.values == pytest.approx([255.0] * 6)
    assert black.values == [0.0] * 6


def test_grayscale_composites_alpha_over_white() -> None:
    gray = to_grayscale(row_of((0, 0, 0, 128), (0, 0, 0, 0), (12, 200, 90, 0)))
    half, clear, clear_colored = gray.values
    assert half == pytest.approx(127.5, abs=1.0)
    assert clear == pytest.approx(255.0)
    assert clear_colored == pytest.approx(255.0)


def test_grayscale_uses_perceptual_weights() -> None:
    gray = to_grayscale(row_of((255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255)))
    assert gray.values == pytest.approx([0.299 * 255, 0.587 * 255, 0.114 * 255])


def test_dither_is_two_valued_for_any_input() -> None:
    rng = random.Random(1234)
    values = [rng.uniform(0, 255) for _ in range(37 * 23)]
    bits = dither(GrayscaleBuffer(37, 23, values))
    assert set(bits.bits) <= {0, 1}
    assert len(bits.bits) == 37 * 23


def test_dither_consumes_grayscale_buffer() -> None:
    gray = GrayscaleBuffer(2, 1, [10.0, 250.0])
    dither(gray)
    assert gray.consumed
    with pytest.raises(InvalidInput):
        gray.values
    with pytest.raises(InvalidInput):
        dither(gray)


def test_dither_diffuses_error_to_the_right() -> None:
    bits = dither(GrayscaleBuffer(2, 1, [120.0, 120.0]))
    assert list(bits.bits) == [1, 0]


def test_dither_diffuses_error_downwards() -> None:
    bits = dither(GrayscaleBuffer(1, 2, [100.0, 100.0]))
    assert list(bits.bits) == [1, 0]


def test_dither_threshold_is_128() -> None:
    bits = dither(GrayscaleBuffer(1, 2, [127.9, 128.0]))
    assert bits.bits[0] == 1
    # 127.9 pushes 5/16 of its error below, so the second pixel stays blank
    assert bits.bits[1] == 0
    assert list(dither(GrayscaleBuffer(1, 1, [128.0])).bits) == [0]


def test_dither_preserves_mid_tone() -> None:
    bits = dither(GrayscaleBuffer(32, 32, [128.0] * 1024))
    marks = sum(bits.bits) / len(bits.bits)
    assert 0.4 < marks < 0.6


def test_image_to_bits_solid_images() -> None:
    assert list(image_to_bits(solid(16, 2, BLACK), 8).bits) == [1] * 8
    assert list(image_to_bits(solid(16, 2, WHITE), 8).bits) == [0] * 8
