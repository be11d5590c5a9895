import itertools
import math

import pytest

from space_survivor.config import SurvivorConfig, MOVEMENT_DIRECT, MOVEMENT_INERTIAL
from space_survivor.entities import Player
from space_survivor.input_state import InputSnapshot

W, H = 800, 600


def make_player(movement=MOVEMENT_DIRECT):
    return Player.from_config(SurvivorConfig(movement=movement))


def test_starts_centered_with_full_health():
    p = make_player()
    assert (p.x, p.y) == (400.0, 300.0)
    assert p.health == p.max_health == 100


def test_direct_movement_steps_by_speed():
    p = make_player()
    p.update(InputSnapshot(right=True, down=True), W, H)
    assert p.x == pytest.approx(404.0)
    assert p.y == pytest.approx(304.0)


def test_direct_opposing_flags_cancel():
    p = make_player()
    p.update(InputSnapshot(left=True, right=True, up=True, down=True), W, H)
    assert (p.x, p.y) == (400.0, 300.0)


def test_facing_angle_tracks_pointer():
    p = make_player()
    cx, cy = p.center
    p.update(InputSnapshot(pointer_x=cx + 50, pointer_y=cy), W, H)
    assert p.angle == pytest.approx(0.0)
    p.update(InputSnapshot(pointer_x=cx, pointer_y=cy + 50), W, H)
    assert p.angle == pytest.approx(math.pi / 2)
    p.update(InputSnapshot(pointer_x=cx - 50, pointer_y=cy - 50), W, H)
    assert p.angle == pytest.approx(-3 * math.pi / 4)


def test_pointer_far_outside_world_is_tolerated():
    p = make_player()
    p.update(InputSnapshot(pointer_x=-1e9, pointer_y=1e9), W, H)
    assert math.isfinite(p.angle)


def test_non_finite_pointer_keeps_previous_angle():
    p = make_player()
    p.angle = 1.0
    p.update(InputSnapshot(pointer_x=float("nan"), pointer_y=0.0), W, H)
    assert p.angle == 1.0


def test_clamped_at_top_left():
    p = make_player()
    for _ in range(200):
        p.update(InputSnapshot(up=True, left=True), W, H)
    assert (p.x, p.y) == (0.0, 0.0)


def test_clamped_at_bottom_right():
    p = make_player()
    for _ in range(200):
        p.update(InputSnapshot(down=True, right=True), W, H)
    assert p.x == W - p.width
    assert p.y == H - p.height


FLAG_COMBOS = list(itertools.product([False, True], repeat=4))


@pytest.mark.parametrize("movement", [MOVEMENT_DIRECT, MOVEMENT_INERTIAL])
@pytest.mark.parametrize("flags", FLAG_COMBOS)
def test_position_always_within_bounds(movement, flags):
    p = make_player(movement)
    up, down, left, right = flags
    inputs = InputSnapshot(up=up, down=down, left=left, right=right)
    for _ in range(250):
        p.update(inputs, W, H)
        assert 0 <= p.x <= W - p.width
        assert 0 <= p.y <= H - p.height


def test_inertial_accelerates_with_friction():
    p = make_player(MOVEMENT_INERTIAL)
    p.update(InputSnapshot(right=True), W, H)
    assert p.vx == pytest.approx(0.5 * 0.95)
    assert p.x == pytest.approx(400.0 + 0.5 * 0.95)
    assert p.vy == 0.0


def test_inertial_speed_capped():
    p = make_player(MOVEMENT_INERTIAL)
    for _ in range(60):
        p.update(InputSnapshot(right=True, down=True), W, H)
        assert math.hypot(p.vx, p.vy) <= 6.0 + 1e-9


def test_inertial_coasts_after_release():
    p = make_player(MOVEMENT_INERTIAL)
    for _ in range(5):
        p.update(InputSnapshot(left=True), W, H)
    vx = p.vx
    x = p.x
    p.update(InputSnapshot(), W, H)
    assert p.vx == pytest.approx(vx * 0.95)
    assert p.x < x


def test_take_damage_saturates_at_zero():
    p = make_player()
    p.take_damage(150)
    assert p.health == 0


def test_heal_then_damage_saturates():
    p = make_player()
    p.take_damage(100)
    p.heal(50)
    assert p.health == 50
    p.take_damage(200)
    assert p.health == 0


def test_heal_capped_at_max():
    p = make_player()
    p.take_damage(10)
    p.heal(500)
    assert p.health == p.max_health
