import math

import pytest

from cubcaster.raycast import (
    Grid,
    Heading,
    cast_all_rays,
    cast_ray,
    distance,
    normalize_angle,
    rgb,
    spawn_angle,
)

BOX = ["11111", "10001", "10001", "10001", "11111"]


@pytest.fixture
def box():
    return Grid(BOX, cell=10)


def test_distance_pythagorean():
    assert distance(0, 0, 3, 4) == pytest.approx(5)


def test_distance_symmetric_and_zero():
    assert distance(1.5, 2, 7, -3) == pytest.approx(distance(7, -3, 1.5, 2))
    assert distance(4, 4, 4, 4) == 0


@pytest.mark.parametrize("angle", [-10.0, -1.0, 0.0, 1.0, 3.5, 7.0, 100.0])
def test_normalize_angle_range(angle):
    result, _ = normalize_angle(angle)
    assert 0 <= result < 2 * math.pi
    again, _ = normalize_angle(angle + 2 * math.pi)
    assert again == pytest.approx(result)


def test_normalize_negative_quarter():
    result, heading = normalize_angle(-math.pi / 2)
    assert result == pytest.approx(3 * math.pi / 2)
    assert heading.up and not heading.down


def test_heading_down_and_left():
    _, heading = normalize_angle(math.pi * 0.75)
    assert heading == Heading(down=True, right=False)
    assert heading.left and not heading.up


def test_heading_at_zero():
    _, heading = normalize_angle(0.0)
    assert heading.right and heading.up


@pytest.mark.parametrize("r,g,b,a", [(0, 103, 72, 255), (238, 216, 186, 255), (1, 2, 3, 4)])
def test_rgb_channels_round_trip(r, g, b, a):
    packed = rgb(r, g, b, a)
    assert (packed >> 24) & 0xFF == r
    assert (packed >> 16) & 0xFF == g
    assert (packed >> 8) & 0xFF == b
    assert packed & 0xFF == a


def test_spawn_angles():
    assert spawn_angle("E") == 0
    assert spawn_angle("W") == pytest.approx(math.pi)
    assert spawn_angle("S") == pytest.approx(math.pi / 2)
    assert spawn_angle("N") == pytest.approx(3 * math.pi / 2)


def test_spawn_angle_unknown():
    with pytest.raises(ValueError):
        spawn_angle("X")


def test_grid_rejects_empty():
    with pytest.raises(ValueError):
        Grid([], cell=10)


def test_grid_dimensions():
    grid = Grid(["1111", "11", "111111"], cell=8)
    assert grid.width == len("111111")
    assert grid.height == 3


def test_has_wall(box):
    assert box.has_wall(5, 5)
    assert not box.has_wall(15, 15)
    assert box.has_wall(-1, 15)
    assert box.has_wall(15, 51)


def test_has_wall_past_short_row():
    grid = Grid(["111111", "101", "111111"], cell=10)
    assert grid.has_wall(45, 15)


def test_blocks_player(box):
    assert not box.blocks_player(11, 11, 5)
    assert box.blocks_player(36, 11, 5)
    assert box.blocks_player(5, 5, 5)
    assert box.blocks_player(-3, 11, 5)


def test_blocks_player_rejects_bad_size(box):
    with pytest.raises(ValueError):
        box.blocks_player(11, 11, 0)


def test_in_bounds(box):
    assert box.in_bounds(15, 15)
    assert not box.in_bounds(50, 5)
    assert not box.in_bounds(-1, 5)
    assert not box.in_bounds(5, math.nan)


def test_in_bounds_short_row():
    grid = Grid(["111111", "101", "111111"], cell=10)
    assert not grid.in_bounds(45, 15)
    assert grid.in_bounds(25, 15)


def test_cast_ray_east(box):
    ray = cast_ray(box, 25, 25, 0.0)
    assert ray.vertical
    assert ray.heading.right
    assert ray.y == pytest.approx(25)
    assert box.has_wall(ray.x, ray.y)
    assert ray.distance == pytest.approx(distance(25, 25, ray.x, ray.y))
    assert 0 <= ray.offset < 1


def test_cast_ray_down_is_horizontal(box):
    ray = cast_ray(box, 25, 25, math.pi / 2)
    assert not ray.vertical
    assert ray.heading.down
    assert ray.x == pytest.approx(25)
    assert box.has_wall(ray.x, ray.y)


def test_cast_ray_normalizes(box):
    a = cast_ray(box, 25, 25, 0.3)
    b = cast_ray(box, 25, 25, 0.3 + 2 * math.pi)
    assert (a.x, a.y, a.vertical) == pytest.approx((b.x, b.y, b.vertical))
    assert a.angle == pytest.approx(b.angle)


@pytest.mark.parametrize("angle", [0.1, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
def test_cast_ray_hits_wall(box, angle):
    ray = cast_ray(box, 25, 25, angle)
    assert box.has_wall(ray.x, ray.y)
    assert 0 <= ray.offset < 1


def test_cast_all_rays_count_and_spacing(box):
    fov = math.pi / 3
    rays = cast_all_rays(box, 25, 25, 0.0, 5, fov, 100)
    assert len(rays) == 5
    assert rays[0].angle == pytest.approx(-fov / 2)
    for first, second in zip(rays, rays[1:]):
        assert second.angle - first.angle == pytest.approx(fov / 5)
    assert all(ray.wall_height > 0 for ray in rays)


def test_closer_walls_are_taller(box):
    fov = math.pi / 3
    near = cast_all_rays(box, 25, 25, 0.0, 5, fov, 100)
    far = cast_all_rays(box, 15, 25, 0.0, 5, fov, 100)
    for near_ray, far_ray in zip(near, far):
        assert near_ray.wall_height > far_ray.wall_height


def test_cast_all_rays_needs_rays(box):
    with pytest.raises(ValueError):
        cast_all_rays(box, 25, 25, 0.0, 0, math.pi / 3, 100)