import math
import sys

import pytest
import numpy as np
import boxgauss
from boxgauss import BoxFilterSpec, plan_boxes


def test_zero_sigma_plans_identity():
    boxes = plan_boxes(0.0)
    assert boxes.radii == (0, 0, 0)
    assert boxes.widths == (1, 1, 1)


def test_three_boxes_by_default():
    for sigma in [0.0, 0.5, 1.0, 3.0, 25.0]:
        boxes = plan_boxes(sigma)
        assert len(boxes) == 3
        assert all(isinstance(spec, BoxFilterSpec) for spec in boxes)
        assert all(spec.radius >= 0 for spec in boxes)


def test_known_plans():
    # sigma=1: w_ideal = sqrt(5), wl = 1, m_ideal = 1.5 -> 2
    assert plan_boxes(1.0).radii == (0, 0, 1)
    # sigma=2: w_ideal = sqrt(17), wl = 3, m_ideal = 1.5 -> 2
    assert plan_boxes(2.0).radii == (1, 1, 2)
    # sigma=sqrt(2): w_ideal = 3 exactly, every box has width 3
    assert plan_boxes(math.sqrt(2.0)).radii == (1, 1, 1)
    # sigma=15: w_ideal = sqrt(901), wl = 29, m_ideal = 1.5 -> 2
    assert plan_boxes(15.0).radii == (14, 14, 15)


def test_narrow_boxes_come_first():
    for sigma in np.linspace(0.1, 30.0, 200):
        radii = plan_boxes(float(sigma)).radii
        assert list(radii) == sorted(radii)
        assert radii[-1] - radii[0] <= 1


def test_radii_are_monotonic_in_sigma():
    previous = plan_boxes(0.0).radii
    for sigma in np.linspace(0.0, 60.0, 3001):
        radii = plan_boxes(float(sigma)).radii
        assert all(a >= b for a, b in zip(radii, previous)), (sigma, previous, radii)
        previous = radii


def test_effective_sigma_tracks_target():
    for sigma in [2.0, 5.0, 10.0, 37.0]:
        boxes = plan_boxes(sigma)
        # integer widths can only get within one width step of the target
        assert abs(boxes.effective_sigma - sigma) < 0.5 + 0.05 * sigma


def test_plan_is_immutable():
    boxes = plan_boxes(4.0)
    with pytest.raises(TypeError):
        boxes[0] = BoxFilterSpec(3)
    with pytest.raises(AttributeError):
        boxes[0].radius = 3


def test_accepts_radius_objects():
    assert plan_boxes(boxgauss.Radius(3.0)) == plan_boxes(3.0)


def test_other_pass_counts():
    assert len(plan_boxes(5.0, passes=1)) == 1
    assert len(plan_boxes(5.0, passes=6)) == 6
    with pytest.raises(ValueError):
        plan_boxes(5.0, passes=0)


@pytest.mark.parametrize("bad", [-1.0, -1e-9, math.nan, math.inf])
def test_invalid_sigma(bad):
    with pytest.raises(boxgauss.InvalidRadius):
        plan_boxes(bad)


@pytest.mark.parametrize("sigma", [1e17, 1e160, sys.float_info.max])
def test_huge_sigma(sigma):
    boxes = plan_boxes(sigma)

    assert len(boxes) == 3
    assert list(boxes.radii) == sorted(boxes.radii)
    assert boxes.radii[-1] - boxes.radii[0] <= 1
    # w_ideal ~ 2 * sigma, so each half-width is close to sigma
    assert math.isclose(boxes.radii[0], sigma, rel_tol=1e-6)
    assert math.isclose(boxes.effective_sigma, sigma, rel_tol=1e-6)


def test_huge_sigma_keeps_monotonic_radii():
    previous = plan_boxes(1e150).radii
    for exponent in range(151, 309):
        radii = plan_boxes(float(f"1e{exponent}")).radii
        assert all(a >= b for a, b in zip(radii, previous))
        previous = radii


def test_box_spec_validates_radius():
    assert BoxFilterSpec(np.int64(2)).width == 5
    with pytest.raises(ValueError):
        BoxFilterSpec(-1)
    with pytest.raises(TypeError):
        BoxFilterSpec(1.5)
    with pytest.raises(TypeError):
        BoxFilterSpec(True)
