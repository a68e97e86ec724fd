import math

import pytest

from cubcaster.game import CELL, PLAYER, Animation, Game, Player, check_name, main
from cubcaster.raycast import Grid, spawn_angle
from cubcaster.scene import parse_scene

HEADER = "NO n.png\nSO s.png\nWE w.png\nEA e.png\nF 10,20,30\nC 40,50,60\n"
MAP = "111111\n100001\n10N001\n100001\n111111\n"


@pytest.fixture
def scene():
    return parse_scene(HEADER + MAP, check_paths=False)


@pytest.fixture
def grid(scene):
    return Grid(scene.rows, CELL)


def test_check_name_accepts_cub():
    assert check_name("maps/level.cub") is True


@pytest.mark.parametrize("path", ["level.txt", ".cub", "level.cub.bak", "level"])
def test_check_name_rejects(path):
    assert check_name(path) is False


@pytest.mark.parametrize("argv", [[], ["a.cub", "b.cub"]])
def test_main_wrong_argument_count(argv):
    assert main(argv) == 1


def test_main_bad_extension():
    assert main(["scene.txt"]) == 1


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.cub")]) == 1


def test_main_bad_scene(tmp_path, capsys):
    path = tmp_path / "bad.cub"
    path.write_text("garbage\n")
    assert main([str(path)]) == 1
    assert capsys.readouterr().err.startswith("Error")


def test_player_from_scene(scene):
    player = Player.from_scene(scene)
    assert player.x == 2 * CELL
    assert player.y == 2 * CELL
    assert player.rotation == spawn_angle("N")
    assert player.side_angle == pytest.approx(player.rotation + math.pi / 2)


def test_player_centre(scene):
    player = Player.from_scene(scene)
    assert player.centre == (player.x + PLAYER // 2, player.y + PLAYER // 2)


def test_turn_round_trip(scene):
    player = Player.from_scene(scene)
    start = player.rotation
    player.turn(1)
    assert player.rotation == pytest.approx(start + player.rotation_speed)
    player.turn(-1)
    assert player.rotation == pytest.approx(start)


def test_turn_zero_keeps_angle(scene):
    player = Player.from_scene(scene)
    start = player.rotation
    player.turn(0)
    assert player.rotation == pytest.approx(start)


def test_look_keeps_angle_in_range(scene):
    player = Player.from_scene(scene)
    for _ in range(50):
        player.look(400)
        assert 0 <= player.rotation < 2 * math.pi
        assert player.side_angle == pytest.approx(player.rotation + math.pi / 2)


def test_step_forward_north(scene, grid):
    player = Player.from_scene(scene)
    x, y = player.x, player.y
    assert player.step(grid, 1, 0) is True
    assert player.x == x
    assert player.y == y - player.move_speed


def test_step_backward_round_trip(scene, grid):
    player = Player.from_scene(scene)
    x, y = player.x, player.y
    player.step(grid, 1, 0)
    player.step(grid, -1, 0)
    assert (player.x, player.y) == (x, y)


def test_strafe_right_moves_east_when_facing_north(scene, grid):
    player = Player.from_scene(scene)
    x, y = player.x, player.y
    assert player.step(grid, 0, 1) is True
    assert player.x == x + player.move_speed
    assert player.y == y


def test_no_input_does_not_move(scene, grid):
    player = Player.from_scene(scene)
    x, y = player.x, player.y
    assert player.step(grid, 0, 0) is False
    assert (player.x, player.y) == (x, y)


def test_walls_stop_the_player(scene, grid):
    player = Player.from_scene(scene)
    results = [player.step(grid, 1, 0) for _ in range(60)]
    assert results[-1] is False
    assert player.y >= CELL
    assert not grid.blocks_player(player.x, player.y, PLAYER)


def test_animation_switches_every_few_ticks():
    animation = Animation(frames=14, speed=3)
    assert [animation.advance() for _ in range(6)] == [0, 0, 1, 1, 1, 2]


def test_animation_wraps_around():
    animation = Animation(frames=14, speed=3)
    results = [animation.advance() for _ in range(3 * 14)]
    assert results[-1] == 0
    assert max(results) == 13


@pytest.mark.parametrize("kwargs", [{"frames": 0}, {"speed": 0}])
def test_animation_rejects_bad_settings(kwargs):
    with pytest.raises(ValueError):
        Animation(**kwargs)


def test_game_builds_from_scene(scene):
    game = Game(scene)
    assert game.grid.rows == scene.rows
    assert (game.player.x, game.player.y) == (2 * CELL, 2 * CELL)
    assert game.animation.current == 0