import numpy as np
import pytest

from errors import InvalidArgumentError


def test_mask_is_boolean_with_full_height(rasterizer):
    mask = rasterizer.get_mask_for("A")
    assert mask.dtype == bool
    assert mask.shape[0] == rasterizer.size
    assert mask.any()


def test_columns_are_trimmed_to_the_ink(rasterizer):
    mask = rasterizer.get_mask_for("H")
    assert mask[:, 0].any()
    assert mask[:, -1].any()
    assert mask.shape[1] < rasterizer.size


def test_cached_mask_is_returned_again(rasterizer):
    first = rasterizer.get_mask_for("x")
    second = rasterizer.get_mask_for("x")
    assert second is first
    np.testing.assert_array_equal(first, second)
    assert "x" in rasterizer.cached_characters


def test_masks_are_read_only(rasterizer):
    mask = rasterizer.get_mask_for("B")
    with pytest.raises(ValueError):
        mask[0, 0] = not mask[0, 0]


def test_space_yields_an_empty_mask(rasterizer):
    mask = rasterizer.get_mask_for(" ")
    assert mask.size == 0
    assert mask.shape == (rasterizer.size, 0)


def test_different_characters_differ(rasterizer):
    assert not np.array_equal(rasterizer.get_mask_for("I"), rasterizer.get_mask_for("W"))


@pytest.mark.parametrize("bad", ["", "AB", 7, None, b"A", "\x00", "\ud800"])
def test_rejects_anything_but_one_character(rasterizer, bad):
    with pytest.raises(InvalidArgumentError):
        rasterizer.get_mask_for(bad)


@pytest.mark.parametrize("unrenderable", ["\x00", "\ud800"])
def test_unrenderable_character_is_not_cached(rasterizer, unrenderable):
    with pytest.raises(InvalidArgumentError):
        rasterizer.get_mask_for(unrenderable)
    assert unrenderable not in rasterizer.cached_characters


def test_invalid_argument_is_a_value_error(rasterizer):
    with pytest.raises(ValueError):
        rasterizer.get_mask_for("too long")
