import math

import pytest

from declsound.vec3 import Vec3


def test_magnitude_of_pythagorean_triple():
    assert Vec3(3.0, 4.0, 0.0).magnitude() == pytest.approx(5.0)


def test_square_magnitude_equals_self_dot():
    v = Vec3(1.5, -2.0, 0.25)
    assert v.square_magnitude() == pytest.approx(v.dot(v))
    assert v.magnitude() == pytest.approx(math.sqrt(v.square_magnitude()))


def test_normalized_has_unit_length_and_same_direction():
    v = Vec3(2.0, -7.0, 3.0)
    n = v.normalized()
    assert n.magnitude() == pytest.approx(1.0)
    assert n.dot(v) == pytest.approx(v.magnitude())


def test_normalized_zero_is_zero():
    assert Vec3(0.0, 0.0, 0.0).normalized() == Vec3(0.0, 0.0, 0.0)


def test_cross_is_perpendicular_and_anticommutative():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(-4.0, 0.5, 2.0)
    c = a.cross(b)
    assert c.dot(a) == pytest.approx(0.0)
    assert c.dot(b) == pytest.approx(0.0)
    assert b.cross(a) == c.scale(-1.0)


def test_cross_of_axes():
    assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)) == Vec3(0, 0, 1)


def test_add_sub_round_trip():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(0.5, -1.0, 4.0)
    assert (a + b) - b == a
    assert a - a == Vec3()


def test_scale_multiplies_magnitude():
    v = Vec3(1.0, -2.0, 2.0)
    assert v.scale(2.5).magnitude() == pytest.approx(2.5 * v.magnitude())


def test_ordering_is_lexicographic():
    assert Vec3(1, 5, 5) < Vec3(2, 0, 0)
    assert Vec3(1, 1, 2) > Vec3(1, 1, 1)
    assert sorted([Vec3(2, 0, 0), Vec3(1, 9, 9)])[0] == Vec3(1, 9, 9)


def test_add_non_vector_raises():
    with pytest.raises(TypeError):
        Vec3(1, 2, 3) + 1