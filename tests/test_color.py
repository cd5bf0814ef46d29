import numpy as np
import pytest

from juliaset import ColorPolicy, Convergent, ConvergentColor, Divergent


def test_convergent_is_transparent_by_default():
    assert ColorPolicy().color(Convergent) == (0, 0, 0, 0)


def test_convergent_can_be_opaque():
    assert ColorPolicy(ConvergentColor.OPAQUE).color(Convergent) == (0, 0, 0, 255)


@pytest.mark.parametrize(
    "n,expected",
    [
        (0, (255, 255, 255, 255)),
        (1, (255, 255, 255, 255)),
        (12, (249, 252, 253, 255)),
        (100, (205, 230, 239, 255)),
        (510, (0, 128, 170, 255)),
    ],
)
def test_divergent_gradient(n, expected):
    assert ColorPolicy().color(Divergent(n)) == expected


def test_red_saturates_near_limit():
    # 255 - 880 // 2 would be negative; it clamps to 0 instead of wrapping.
    assert ColorPolicy().color(Divergent(880)) == (0, 35, 109, 255)


def test_all_channels_saturate_for_large_counts():
    assert ColorPolicy().color(Divergent(1600)) == (0, 0, 0, 255)


@pytest.mark.parametrize("convergent", list(ConvergentColor))
def test_colorize_matches_scalar_policy(convergent):
    policy = ColorPolicy(convergent)
    limit = 900
    counts = np.array([[0, 1, 5, 12], [299, 510, 880, 899], [900, 900, 3, 7]])
    rgba = policy.colorize(counts, limit)
    assert rgba.shape == (3, 4, 4)
    assert rgba.dtype == np.uint8
    for (row, col), n in np.ndenumerate(counts):
        result = Convergent if n == limit else Divergent(int(n))
        assert tuple(int(v) for v in rgba[row, col]) == policy.color(result)
