"""
Tests for the filter transforms and the FilterEngine.

Tests verify actual pixel values to ensure filters work correctly.
"""

import numpy as np
import pytest

from filtercam import PixelBuffer, FilterEngine, FilterId
from filtercam.filters import TRANSFORM_REGISTRY


def solid(r, g, b, a=255, width=3, height=3) -> PixelBuffer:
    return PixelBuffer.blank(width, height, (r, g, b, a))


@pytest.fixture
def engine() -> FilterEngine:
    return FilterEngine()


# =============================================================================
# Engine contract
# =============================================================================

class TestEngineContract:
    """Properties that hold for every filter."""

    def test_every_filter_has_a_transform(self):
        assert set(TRANSFORM_REGISTRY) == set(FilterId)

    @pytest.mark.parametrize('filter_id', list(FilterId))
    def test_preserves_size_and_identity(self, engine, random_buffer, filter_id):
        pixels = random_buffer.pixels
        result = engine.apply(random_buffer, filter_id)
        assert result is random_buffer
        assert result.pixels is pixels
        assert (result.width, result.height) == (17, 13)
        assert result.pixels.size == 17 * 13 * 4
        assert result.pixels.dtype == np.uint8

    @pytest.mark.parametrize('filter_id', [f for f in FilterId if f is not FilterId.MIRROR])
    def test_alpha_untouched(self, engine, random_buffer, filter_id):
        alpha = random_buffer.view()[:, :, 3].copy()
        engine.apply(random_buffer, filter_id)
        assert np.array_equal(random_buffer.view()[:, :, 3], alpha)

    @pytest.mark.parametrize('filter_id', ['none', 'unknown', 'GRAYSCALE', '', None, 42])
    def test_identity_and_unknown_ids(self, engine, random_buffer, filter_id):
        before = random_buffer.copy()
        engine.apply(random_buffer, filter_id)
        assert random_buffer == before

    def test_string_ids_accepted(self, engine):
        buffer = solid(10, 20, 30)
        engine.apply(buffer, 'invert')
        assert buffer.pixel(1, 1) == (245, 235, 225, 255)

    @pytest.mark.parametrize('filter_id', list(FilterId))
    def test_extreme_values_stay_in_range(self, engine, filter_id):
        """Channels of 0 and 255 never wrap around."""
        pixels = np.zeros((9, 9, 4), dtype=np.uint8)
        pixels[::2, :, :] = 255
        pixels[:, ::3, 1] = 0
        buffer = PixelBuffer.from_array(pixels)
        engine.apply(buffer, filter_id)
        values = buffer.pixels.astype(np.int64)
        assert values.min() >= 0
        assert values.max() <= 255

    @pytest.mark.parametrize('filter_id', list(FilterId))
    def test_empty_buffer(self, engine, filter_id):
        buffer = PixelBuffer(0, 0)
        assert engine.apply(buffer, filter_id) is buffer

    @pytest.mark.parametrize('filter_id', list(FilterId))
    def test_single_pixel(self, engine, filter_id):
        buffer = solid(100, 150, 200, width=1, height=1)
        engine.apply(buffer, filter_id)
        assert len(buffer) == 4

    def test_supports(self, engine):
        assert engine.supports('sepia')
        assert engine.supports(FilterId.COOL)
        assert not engine.supports('sepiaa')


# =============================================================================
# Pointwise filters
# =============================================================================

class TestGrayscaleInvert:
    """Test grayscale and invert."""

    def test_grayscale_average(self, engine):
        buffer = solid(10, 20, 31)
        engine.apply(buffer, FilterId.GRAYSCALE)
        # 61 / 3 = 20.33
        assert buffer.pixel(0, 0) == (20, 20, 20, 255)

    def test_grayscale_rounds_to_nearest(self, engine):
        buffer = solid(1, 2, 2)
        engine.apply(buffer, FilterId.GRAYSCALE)
        # 5 / 3 = 1.67
        assert buffer.pixel(0, 0) == (2, 2, 2, 255)

    def test_grayscale_r_equals_g_equals_b(self, engine, random_buffer):
        engine.apply(random_buffer, FilterId.GRAYSCALE)
        view = random_buffer.view()
        assert np.array_equal(view[:, :, 0], view[:, :, 1])
        assert np.array_equal(view[:, :, 1], view[:, :, 2])

    def test_grayscale_idempotent(self, engine, random_buffer):
        engine.apply(random_buffer, FilterId.GRAYSCALE)
        once = random_buffer.copy()
        engine.apply(random_buffer, FilterId.GRAYSCALE)
        assert random_buffer == once

    def test_invert_values(self, engine):
        buffer = solid(0, 128, 255, a=77)
        engine.apply(buffer, FilterId.INVERT)
        assert buffer.pixel(2, 2) == (255, 127, 0, 77)

    def test_invert_is_involution(self, engine, random_buffer):
        original = random_buffer.copy()
        engine.apply(engine.apply(random_buffer, 'invert'), 'invert')
        assert random_buffer == original


class TestSepiaVintage:
    """Test sepia and vintage."""

    def test_sepia_white_clamps(self, engine, white_buffer):
        """White saturates R and G; B's coefficients only sum to 0.937."""
        engine.apply(white_buffer, FilterId.SEPIA)
        for y in range(2):
            for x in range(2):
                r, g, b, a = white_buffer.pixel(x, y)
                assert (r, g, a) == (255, 255, 255)
                assert b == 239  # 0.937 * 255 = 238.9

    def test_sepia_gray(self, engine):
        buffer = solid(50, 50, 50)
        engine.apply(buffer, FilterId.SEPIA)
        # 67.55, 60.15, 46.85
        assert buffer.pixel(0, 0) == (68, 60, 47, 255)

    def test_sepia_black_stays_black(self, engine):
        buffer = solid(0, 0, 0)
        engine.apply(buffer, FilterId.SEPIA)
        assert buffer.pixel(0, 0) == (0, 0, 0, 255)

    def test_vintage(self, engine):
        buffer = solid(50, 50, 50)
        engine.apply(buffer, FilterId.VINTAGE)
        # Sepia (68, 60, 47), then x1.1, x1.1, x0.9
        assert buffer.pixel(0, 0) == (75, 66, 42, 255)


class TestTints:
    """Test red, green and blue tints."""

    @pytest.mark.parametrize('filter_id,expected', [
        (FilterId.RED, (150, 50, 50)),
        (FilterId.GREEN, (50, 150, 50)),
        (FilterId.BLUE, (50, 50, 150)),
    ])
    def test_tint(self, engine, filter_id, expected):
        buffer = solid(100, 100, 100)
        engine.apply(buffer, filter_id)
        assert buffer.pixel(0, 0)[:3] == expected

    def test_tint_clamps(self, engine):
        buffer = solid(200, 200, 200)
        engine.apply(buffer, FilterId.RED)
        assert buffer.pixel(0, 0)[:3] == (255, 100, 100)

    def test_halving_rounds_half_to_even(self, engine):
        buffer = solid(10, 3, 5)
        engine.apply(buffer, FilterId.RED)
        # 1.5 -> 2, 2.5 -> 2
        assert buffer.pixel(0, 0)[:3] == (15, 2, 2)


class TestNeonPosterize:
    """Test neon glow and posterize."""

    def test_neon_without_glow(self, engine):
        buffer = solid(100, 100, 100)
        engine.apply(buffer, FilterId.NEON)
        assert buffer.pixel(0, 0)[:3] == (150, 150, 150)

    def test_neon_with_glow(self, engine):
        buffer = solid(140, 10, 0)
        engine.apply(buffer, FilterId.NEON)
        # 210 > 200 after the first step, so all channels get x1.2
        assert buffer.pixel(0, 0)[:3] == (252, 18, 0)

    def test_neon_glow_is_per_pixel(self, engine):
        pixels = np.zeros((1, 2, 4), dtype=np.uint8)
        pixels[0, 0] = (140, 10, 0, 255)
        pixels[0, 1] = (100, 10, 0, 255)
        buffer = PixelBuffer.from_array(pixels)
        engine.apply(buffer, FilterId.NEON)
        assert buffer.pixel(0, 0)[:3] == (252, 18, 0)
        assert buffer.pixel(1, 0)[:3] == (150, 15, 0)

    @pytest.mark.parametrize('value,expected', [
        (0, 0), (42, 0), (43, 85), (127, 85), (128, 170),
        (212, 170), (213, 255), (255, 255),
    ])
    def test_posterize_levels(self, engine, value, expected):
        buffer = solid(value, value, value)
        engine.apply(buffer, FilterId.POSTERIZE)
        assert buffer.pixel(0, 0)[:3] == (expected,) * 3

    def test_posterize_output_set(self, engine, random_buffer):
        engine.apply(random_buffer, FilterId.POSTERIZE)
        values = set(np.unique(random_buffer.view()[:, :, :3]).tolist())
        assert values <= {0, 85, 170, 255}


class TestTemperature:
    """Test warm and cool tones."""

    def test_warm(self, engine):
        buffer = solid(100, 100, 100)
        engine.apply(buffer, FilterId.WARM)
        assert buffer.pixel(0, 0)[:3] == (120, 110, 90)

    def test_cool(self, engine):
        buffer = solid(100, 100, 100)
        engine.apply(buffer, FilterId.COOL)
        assert buffer.pixel(0, 0)[:3] == (90, 110, 120)

    def test_warm_clamps_red(self, engine):
        buffer = solid(250, 240, 250)
        engine.apply(buffer, FilterId.WARM)
        assert buffer.pixel(0, 0)[:3] == (255, 255, 225)


# =============================================================================
# Spatial filters
# =============================================================================

class TestMirrorPixelate:
    """Test mirror and pixelate."""

    def test_mirror_moves_whole_pixels(self, engine):
        pixels = np.zeros((1, 3, 4), dtype=np.uint8)
        pixels[0, 0] = (1, 2, 3, 10)
        pixels[0, 1] = (4, 5, 6, 20)
        pixels[0, 2] = (7, 8, 9, 30)
        buffer = PixelBuffer.from_array(pixels)
        engine.apply(buffer, FilterId.MIRROR)
        assert buffer.pixel(0, 0) == (7, 8, 9, 30)
        assert buffer.pixel(1, 0) == (4, 5, 6, 20)
        assert buffer.pixel(2, 0) == (1, 2, 3, 10)

    def test_mirror_twice_is_identity(self, engine, random_buffer):
        original = random_buffer.copy()
        engine.apply(random_buffer, FilterId.MIRROR)
        assert random_buffer != original
        engine.apply(random_buffer, FilterId.MIRROR)
        assert random_buffer == original

    def test_pixelate_blocks_take_top_left(self, engine):
        pixels = np.zeros((16, 16, 4), dtype=np.uint8)
        pixels[:, :, 0] = np.arange(16).reshape(1, 16)
        pixels[:, :, 1] = np.arange(16).reshape(16, 1)
        pixels[:, :, 3] = 255
        buffer = PixelBuffer.from_array(pixels)
        engine.apply(buffer, FilterId.PIXELATE)
        assert buffer.pixel(7, 7)[:2] == (0, 0)
        assert buffer.pixel(8, 0)[:2] == (8, 0)
        assert buffer.pixel(15, 15)[:2] == (8, 8)
        assert buffer.pixel(3, 12)[:2] == (0, 8)

    def test_pixelate_partial_blocks_stay_in_bounds(self, engine, random_buffer):
        """Edge blocks of a 17x13 image are clipped, never wrapped to the next row."""
        original = random_buffer.copy()
        engine.apply(random_buffer, FilterId.PIXELATE)
        assert random_buffer.pixel(16, 12)[:3] == original.pixel(16, 8)[:3]
        assert random_buffer.pixel(9, 0)[:3] == original.pixel(8, 0)[:3]
        # Start of row 1 belongs to the first block, not to the edge block of row 0
        assert random_buffer.pixel(0, 1)[:3] == original.pixel(0, 0)[:3]

    def test_pixelate_custom_block_size(self):
        engine = FilterEngine(pixelate_block_size=2)
        pixels = np.arange(4 * 4 * 4, dtype=np.uint8).reshape(4, 4, 4)
        buffer = PixelBuffer.from_array(pixels.copy())
        engine.apply(buffer, FilterId.PIXELATE)
        assert buffer.pixel(1, 1)[:3] == tuple(int(v) for v in pixels[0, 0, :3])
        assert buffer.pixel(3, 3)[:3] == tuple(int(v) for v in pixels[2, 2, :3])


class TestBlurEmboss:
    """Test the 3x3 neighbourhood filters."""

    def test_blur_striped(self, engine, striped_buffer):
        original = striped_buffer.copy()
        engine.apply(striped_buffer, FilterId.BLUR)
        view = striped_buffer.view()
        before = original.view()
        # Border rows and columns unchanged
        assert np.array_equal(view[0], before[0])
        assert np.array_equal(view[3], before[3])
        assert np.array_equal(view[:, 0], before[:, 0])
        assert np.array_equal(view[:, 3], before[:, 3])
        # Row 1 sees black, white, black rows: 3 * 255 / 9
        assert striped_buffer.pixel(1, 1) == (85, 85, 85, 255)
        # Row 2 sees white, black, white rows: 6 * 255 / 9
        assert striped_buffer.pixel(2, 2) == (170, 170, 170, 255)

    def test_blur_reads_unmodified_source(self, engine):
        pixels = np.zeros((3, 4, 4), dtype=np.uint8)
        pixels[1, 1, :3] = 90
        pixels[:, :, 3] = 255
        buffer = PixelBuffer.from_array(pixels)
        engine.apply(buffer, FilterId.BLUR)
        assert buffer.pixel(1, 1)[:3] == (10, 10, 10)
        # Would be 1 if (1, 1) had already been blurred when (2, 1) was computed
        assert buffer.pixel(2, 1)[:3] == (10, 10, 10)

    def test_blur_too_small_for_interior(self, engine):
        buffer = PixelBuffer.from_array(np.arange(16, dtype=np.uint8).reshape(2, 2, 4))
        original = buffer.copy()
        engine.apply(buffer, FilterId.BLUR)
        assert buffer == original

    def test_emboss_uniform_is_mid_gray(self, engine):
        buffer = solid(200, 10, 90, width=5, height=4)
        engine.apply(buffer, FilterId.EMBOSS)
        assert buffer.pixel(2, 2)[:3] == (128, 128, 128)
        # Borders unchanged
        assert buffer.pixel(0, 0)[:3] == (200, 10, 90)
        assert buffer.pixel(4, 3)[:3] == (200, 10, 90)

    def test_emboss_diagonal_difference(self, engine):
        pixels = np.zeros((3, 3, 4), dtype=np.uint8)
        pixels[0, 0, :3] = (200, 10, 128)
        pixels[2, 2, :3] = (50, 100, 128)
        buffer = PixelBuffer.from_array(pixels)
        engine.apply(buffer, FilterId.EMBOSS)
        # 128 + 150 clamps, 128 - 90 = 38, 128 + 0
        assert buffer.pixel(1, 1)[:3] == (255, 38, 128)


class TestSketch:
    """Test the sketch filter."""

    def test_flat_image_is_white_inside(self, engine):
        buffer = solid(30, 60, 90, width=4, height=4)
        engine.apply(buffer, FilterId.SKETCH)
        assert buffer.pixel(1, 1)[:3] == (255, 255, 255)
        assert buffer.pixel(2, 2)[:3] == (255, 255, 255)
        # Border keeps the grayscale value (30 + 60 + 90) / 3
        assert buffer.pixel(0, 0)[:3] == (60, 60, 60)
        assert buffer.pixel(3, 1)[:3] == (60, 60, 60)

    def test_edges_darken(self, engine):
        pixels = np.zeros((3, 3, 4), dtype=np.uint8)
        pixels[0, 1, :3] = 100   # top
        pixels[2, 1, :3] = 20    # bottom
        pixels[1, 0, :3] = 10    # left
        pixels[1, 2, :3] = 40    # right
        buffer = PixelBuffer.from_array(pixels)
        engine.apply(buffer, FilterId.SKETCH)
        # 255 - (|100 - 20| + |10 - 40|)
        assert buffer.pixel(1, 1)[:3] == (145, 145, 145)

    def test_strong_edges_clamp_to_black(self, engine):
        pixels = np.zeros((3, 3, 4), dtype=np.uint8)
        pixels[0, 1, :3] = 255
        pixels[1, 0, :3] = 255
        buffer = PixelBuffer.from_array(pixels)
        engine.apply(buffer, FilterId.SKETCH)
        assert buffer.pixel(1, 1)[:3] == (0, 0, 0)


class TestRainbow:
    """Test the rainbow generator."""

    @pytest.fixture
    def rainbow(self, engine) -> PixelBuffer:
        buffer = solid(1, 2, 3, a=200, width=400, height=2)
        return engine.apply(buffer, FilterId.RAINBOW)

    @pytest.mark.parametrize('x,y,expected', [
        (0, 0, (255, 0, 0)),
        (30, 0, (255, 128, 0)),
        (60, 0, (255, 255, 0)),
        (119, 1, (0, 255, 0)),
        (180, 0, (0, 255, 255)),
        (240, 0, (0, 0, 255)),
        (300, 0, (255, 0, 255)),
        (360, 0, (255, 0, 0)),
        (359, 1, (255, 0, 0)),
    ])
    def test_hue_gradient(self, rainbow, x, y, expected):
        assert rainbow.pixel(x, y)[:3] == expected

    def test_alpha_kept(self, rainbow):
        assert rainbow.pixel(123, 1)[3] == 200

    def test_ignores_input(self, engine):
        a = engine.apply(solid(0, 0, 0, width=8, height=8), FilterId.RAINBOW)
        b = engine.apply(solid(255, 90, 3, width=8, height=8), FilterId.RAINBOW)
        assert a == b
