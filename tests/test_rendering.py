"""Tests for framebuffer rendering helpers."""

import jax.numpy as jnp
import numpy as np
import pytest
from chip8vm import chip8_display_to_rgb, create_color_scheme


def test_rgb_shape_and_colors(fresh_state):
    display = fresh_state.display.at[0, 1].set(1)

    rgb = chip8_display_to_rgb(display, scale=1, on_color=(1, 2, 3), off_color=(9, 9, 9))

    assert rgb.shape == (32, 64, 3)
    assert rgb.dtype == np.uint8
    assert tuple(rgb[0, 1]) == (1, 2, 3)
    assert tuple(rgb[0, 0]) == (9, 9, 9)


def test_rgb_upscaling(fresh_state):
    display = fresh_state.display.at[31, 63].set(1)

    rgb = chip8_display_to_rgb(display, scale=4)

    assert rgb.shape == (128, 256, 3)
    assert (rgb[124:, 252:] == (0, 255, 0)).all()
    assert (rgb[:124, :] == 0).all()


def test_color_schemes():
    assert create_color_scheme("classic") == ((0, 255, 0), (0, 0, 0))
    with pytest.raises(ValueError):
        create_color_scheme("neon")
