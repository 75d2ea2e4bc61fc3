import pytest

from car_loss import (
    COLLISION_PENALTY,
    TARGET_PARKING_SPOT,
    RectanglePoints,
    SpatialPoint,
    distance,
    fitness_from_loss,
    loss,
)


def shifted(corners, dx, dy, dz):
    return RectanglePoints(*(SpatialPoint(p.x + dx, p.y + dy, p.z + dz) for p in corners))


def test_distance_ignores_vertical_axis():
    assert distance(SpatialPoint(0, 0, 0), SpatialPoint(3, 100, 4)) == 5.0


def test_loss_identical_rectangles_is_zero():
    assert loss(TARGET_PARKING_SPOT, TARGET_PARKING_SPOT) == 0


def test_loss_three_four_five_offset():
    wheels = shifted(TARGET_PARKING_SPOT, 3, 0, 4)
    assert loss(wheels, TARGET_PARKING_SPOT) == 5


def test_loss_offset_with_vertical_noise():
    wheels = shifted(TARGET_PARKING_SPOT, -3, 7, -4)
    assert loss(wheels, TARGET_PARKING_SPOT) == 5


def test_loss_matches_corners_by_label():
    target = RectanglePoints(
        fl=SpatialPoint(0, 0, 0),
        fr=SpatialPoint(2, 0, 0),
        br=SpatialPoint(2, 0, 2),
        bl=SpatialPoint(0, 0, 2),
    )
    # 只有左前角偏离 4
    wheels = target._replace(fl=SpatialPoint(4, 0, 0))
    assert loss(wheels, target) == 1.0


def test_loss_accepts_plain_tuples():
    target = ((0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1))
    wheels = ((3, 0, 4), (4, 0, 4), (4, 0, 5), (3, 0, 5))
    assert loss(wheels, target) == 5


def test_fitness_from_loss():
    assert fitness_from_loss(1.0) == pytest.approx(1.0, rel=1e-4)
    assert fitness_from_loss(0.5) > fitness_from_loss(5.0)
    assert fitness_from_loss(1.0, has_collision=True) == pytest.approx(COLLISION_PENALTY, rel=1e-4)


def test_fitness_from_negative_loss_raises():
    with pytest.raises(ValueError):
        fitness_from_loss(-1.0)
