import math
import random

import pytest

from space_survivor.enemies import EnemySet, EDGES
from space_survivor.utils import rects_overlap

W, H = 800, 600


@pytest.fixture
def enemies():
    return EnemySet(W, H, enemy_width=30, enemy_height=30, speed=2.0)


def distance(a, b):
    return math.hypot(a[0] - b[0], a[1] - b[1])


def test_pursuit_closes_distance_by_speed(enemies):
    target = (420.0, 310.0)
    enemy = enemies.add(100.0, 100.0)
    d = distance(enemy.center, target)

    enemies.advance_all(target)

    assert distance(enemy.center, target) == pytest.approx(d - 2.0)


def test_pursuit_moves_along_unit_vector(enemies):
    target = (415.0, 115.0)  # straight to the right of the enemy's center
    enemy = enemies.add(100.0, 100.0)
    enemies.advance_all(target)
    assert enemy.x == pytest.approx(102.0)
    assert enemy.y == pytest.approx(100.0)


def test_zero_distance_does_not_move(enemies):
    enemy = enemies.add(100.0, 100.0)
    enemies.advance_all(enemy.center)
    assert (enemy.x, enemy.y) == (100.0, 100.0)
    assert math.isfinite(enemy.x) and math.isfinite(enemy.y)


def test_pursuit_recomputed_each_tick(enemies):
    enemy = enemies.add(100.0, 100.0)
    enemies.advance_all((1000.0, 115.0))
    assert enemy.y == pytest.approx(100.0)
    enemies.advance_all((117.0, 1000.0))
    assert enemy.x == pytest.approx(102.0)
    assert enemy.y == pytest.approx(102.0)


def test_never_spawns_at_zero_probability(enemies):
    rng = random.Random(0)
    for _ in range(500):
        assert enemies.try_spawn_at_edge(0.0, rng) is None
    assert len(enemies) == 0


def test_always_spawns_at_probability_one(enemies):
    rng = random.Random(0)
    for _ in range(50):
        assert enemies.try_spawn_at_edge(1.0, rng) is not None
    assert len(enemies) == 50


def test_spawned_enemies_start_just_outside_the_world(enemies):
    rng = random.Random(7)
    for _ in range(200):
        e = enemies.try_spawn_at_edge(1.0, rng)
        on_top = e.y == -30 and 0 <= e.x < W - 30
        on_right = e.x == W and 0 <= e.y < H - 30
        on_bottom = e.y == H and 0 <= e.x < W - 30
        on_left = e.x == -30 and 0 <= e.y < H - 30
        assert on_top or on_right or on_bottom or on_left
        assert not rects_overlap(*e.box, 0, 0, W, H)


def test_every_edge_is_used(enemies):
    rng = random.Random(3)
    seen = set()
    for _ in range(200):
        e = enemies.try_spawn_at_edge(1.0, rng)
        if e.y == -30:
            seen.add("top")
        elif e.x == W:
            seen.add("right")
        elif e.y == H:
            seen.add("bottom")
        elif e.x == -30:
            seen.add("left")
    assert seen == set(EDGES)


def test_unknown_edge_rejected(enemies):
    with pytest.raises(ValueError):
        enemies.edge_position("middle", random.Random(0))


def test_enemy_ids_are_unique(enemies):
    ids = {enemies.add(0.0, 0.0).id for _ in range(10)}
    assert len(ids) == 10
