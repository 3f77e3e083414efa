import pytest

from starfall import assets
from starfall.components import Age, ParticleTrail, Position, Renderable, Velocity, EnemyTag
from starfall.enemies import create_enemy, enemy_system, fall_speed


def test_fall_speed_is_quartic_in_age(config):
    assert fall_speed(0.8, config) == 0.0
    assert fall_speed(0.0, config) == pytest.approx((1.8 * 0.8) ** 4)
    assert fall_speed(1.8, config) == pytest.approx(1.8 ** 4)


def test_create_enemy_above_the_field(world, config, rng):
    for _ in range(50):
        eid = create_enemy(world, config, rng)
        pos = world.get_component(eid, Position)
        vel = world.get_component(eid, Velocity)
        assert pos.y == config.enemy_spawn_y
        assert pos.x == int(pos.x)
        assert 0 <= pos.x <= config.field_width - config.enemy_width
        assert -1.0 <= vel.x <= 1.0
        assert vel.y == 0.0
    assert world.get_component(eid, Renderable).sprite is assets.ENEMY
    assert world.count(EnemyTag) == 50


def test_enemy_moves_then_updates_fall_speed(world, config, rng):
    eid = create_enemy(world, config, rng)
    pos = world.get_component(eid, Position)
    vel = world.get_component(eid, Velocity)
    pos.x, pos.y = 100.0, 50.2
    vel.x, vel.y = 0.5, 2.3

    enemy_system(world, 0.1, config, rng)

    assert pos.x == pytest.approx(100.5)
    assert pos.y == 53
    assert world.get_component(eid, Age).seconds == pytest.approx(0.1)
    assert vel.y == pytest.approx(fall_speed(0.1, config))


def test_enemy_below_field_escapes(world, config, place_enemy, rng):
    gone = place_enemy(world, 50, config.field_height)
    world.get_component(gone, Velocity).y = 5.0
    stays = place_enemy(world, 50, config.field_height - 0.5)

    escaped = enemy_system(world, config.tick, config, rng)

    assert escaped == [gone]
    assert not world.is_alive(gone)
    assert world.is_alive(stays)
    assert world.get_component(stays, Position).y == config.field_height


def test_enemy_emits_on_first_tick(world, config, place_enemy, rng):
    eid = place_enemy(world, 100, 100)
    enemy_system(world, config.tick, config, rng)
    assert len(world.get_component(eid, ParticleTrail).particles) == 1


def test_enemy_falls_through_the_field_eventually(world, config, rng):
    eid = create_enemy(world, config, rng)
    for _ in range(60 * 5):
        enemy_system(world, config.tick, config, rng)
        world.process_dead_entities()
        if not world.is_alive(eid):
            break
    assert not world.is_alive(eid)
