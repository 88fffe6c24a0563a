import math

import pytest
import numpy as np
from boxgauss import BoxBlurError, InvalidRadius, Radius


@pytest.mark.parametrize("value", [0, 0.0, 1, 2.5, 1e6, np.float32(3.0), np.int64(4)])
def test_valid_radius(value):
    radius = Radius(value)
    assert radius.sigma == float(value)
    assert float(radius) == float(value)


@pytest.mark.parametrize("value", [-1, -0.001, math.nan, math.inf, -math.inf, np.float64("nan")])
def test_invalid_radius(value):
    with pytest.raises(InvalidRadius) as excinfo:
        Radius(value)
    assert excinfo.value.value is value


@pytest.mark.parametrize("value", ["3", None, True, [1.0], 1 + 2j])
def test_non_numeric_radius(value):
    with pytest.raises(InvalidRadius):
        Radius(value)


def test_invalid_radius_is_value_error():
    with pytest.raises(ValueError):
        Radius(-2)
    with pytest.raises(BoxBlurError):
        Radius(-2)


def test_unchecked_skips_validation():
    # Caller takes responsibility; nothing is checked
    radius = Radius.unchecked(-1.0)
    assert radius.sigma == -1.0


def test_coerce():
    radius = Radius(2.0)
    assert Radius.coerce(radius) is radius
    assert Radius.coerce(2.0) == radius
    with pytest.raises(InvalidRadius):
        Radius.coerce(-2.0)


def test_copy_from_radius():
    assert Radius(Radius(1.5)) == Radius(1.5)


def test_equality_and_hash():
    assert Radius(1.0) == Radius(1)
    assert hash(Radius(1.0)) == hash(Radius(1))
    assert Radius(1.0) != Radius(2.0)
    assert repr(Radius(1.5)) == "Radius(1.5)"
