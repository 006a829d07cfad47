import pytest

from nirvana.collision import WORLD_SIZE, Collision, Side
from nirvana.components import (
    ColliderComponent,
    HealthComponent,
    JumpingComponent,
    PhysicsComponent,
)
from nirvana.defs import GRAVITY, NORMAL_FORCE, ComponentSlot, EntityType
from nirvana.ecs import Entity, Rect

SIZE = 64


def make(kind, x=0, y=0, physics=False, jumping=False, health=None):
    entity = Entity(x, y, SIZE, SIZE)
    entity.add_component(ComponentSlot.COLLIDER, ColliderComponent(kind))
    if physics:
        entity.add_component(ComponentSlot.PHYSICS, PhysicsComponent())
    if jumping:
        entity.add_component(ComponentSlot.JUMPING, JumpingComponent(50))
    if health is not None:
        entity.add_component(ComponentSlot.HEALTH, HealthComponent(*health))
    entity.init_components()
    return entity


def make_player(x=0, y=0):
    return make(EntityType.PLAYER, x, y, physics=True, jumping=True, health=(100, 30))


def test_quadtree_is_created_lazily_over_the_world():
    collision = Collision()
    assert collision.quadtree is None
    collision.handle_collision([make(EntityType.TERRAIN)])
    assert collision.quadtree.width == WORLD_SIZE
    assert collision.quadtree.height == WORLD_SIZE


def test_player_lands_on_terrain():
    player = make_player(0, 0)
    tile = make(EntityType.TERRAIN, 0, SIZE)
    physics = player.get_component(ComponentSlot.PHYSICS)
    physics.yvel = 20
    player.n_ypos = 10

    Collision().handle_collision([player, tile])

    assert player.ypos == tile.ypos - player.height
    assert player.n_ypos == player.ypos
    assert player.get_component(ComponentSlot.COLLIDER).bottom_collision
    assert physics.yaccel == GRAVITY + NORMAL_FORCE
    assert physics.yvel == 0


def test_landing_while_jumping_keeps_velocity_but_ends_jump():
    player = make_player(0, 0)
    tile = make(EntityType.TERRAIN, 0, SIZE)
    jumping = player.get_component(ComponentSlot.JUMPING)
    physics = player.get_component(ComponentSlot.PHYSICS)
    jumping.is_jumping = True
    physics.yvel = 20
    player.n_ypos = 10

    Collision().handle_collision([player, tile])

    assert jumping.is_jumping is False
    assert physics.yvel == 20


def test_player_pushed_back_from_wall_on_the_right():
    player = make_player(0, 0)
    wall = make(EntityType.TERRAIN, SIZE, 0)
    player.n_xpos = 10

    Collision().handle_collision([player, wall])

    assert player.n_xpos == wall.xpos - player.width
    collider = player.get_component(ComponentSlot.COLLIDER)
    assert collider.right_collision
    assert not collider.left_collision


def test_same_kinds_do_not_interact():
    first = make(EntityType.TERRAIN, 0, 0)
    second = make(EntityType.TERRAIN, 10, 10)

    Collision().handle_collision([first, second])

    assert (first.xpos, first.ypos) == (0, 0)
    assert (second.xpos, second.ypos) == (10, 10)


def test_enemy_contact_hurts_player_once():
    player = make_player(0, 0)
    enemy = make(EntityType.ENEMY, SIZE, 0, physics=True, health=(40, 40))
    player.n_xpos = 10

    Collision().handle_collision([player, enemy])

    health = player.get_component(ComponentSlot.HEALTH)
    assert health.health_points == 100 - 5
    assert health.iframes == health.iframe_capacity
    assert enemy.get_component(ComponentSlot.HEALTH).health_points == 40


def test_sword_hurts_enemy():
    sword = make(EntityType.SWORD, 0, 0)
    enemy = make(EntityType.ENEMY, SIZE, 0, physics=True, health=(40, 40))
    sword.n_xpos = 10

    Collision().handle_collision([sword, enemy])

    assert enemy.get_component(ComponentSlot.HEALTH).health_points == 40 - 10


def test_projectile_and_terrain_both_removed_and_tree_cleaned():
    projectile = make(EntityType.PROJECTILE, 0, 0, physics=True)
    tile = make(EntityType.TERRAIN, SIZE, 0)
    projectile.n_xpos = 10
    collision = Collision()

    collision.handle_collision([projectile, tile])

    assert projectile.mark_remove and tile.mark_remove
    remaining = [e for leaf in collision.quadtree.leaves() for e in leaf.entities]
    assert remaining == []


def test_projectile_hits_enemy():
    projectile = make(EntityType.PROJECTILE, 0, 0, physics=True)
    enemy = make(EntityType.ENEMY, SIZE, 0, physics=True, health=(40, 40))
    projectile.n_xpos = 10

    Collision().handle_collision([projectile, enemy])

    assert projectile.mark_remove
    assert not enemy.mark_remove
    assert enemy.get_component(ComponentSlot.HEALTH).health_points == 40 - 10


def test_resolve_pair_without_overlap():
    a = make_player(0, 0)
    b = make(EntityType.TERRAIN, 500, 500)
    collided = {}
    assert Collision().resolve_pair(a, b, True, collided) is False
    assert collided == {}


def test_resolve_pair_axis_mismatch_is_ignored():
    a = make_player(0, 0)
    b = make(EntityType.TERRAIN, 0, 54)
    collided = {}
    assert Collision().resolve_pair(a, b, True, collided) is False
    assert collided == {}
    assert Collision().resolve_pair(a, b, False, collided) is True
    assert collided == {a.tag: {b.tag}}


@pytest.mark.parametrize(
    "x_axis, intersection, side",
    [
        (True, Rect(10, 0, 5, SIZE), Side.LEFT),
        (True, Rect(60, 0, 5, SIZE), Side.RIGHT),
        (False, Rect(10, 0, SIZE, 5), Side.TOP),
        (False, Rect(10, 60, SIZE, 5), Side.BOTTOM),
    ],
)
def test_enemy_pushed_out_of_terrain(x_axis, intersection, side):
    enemy = make(EntityType.ENEMY, 10, 0, physics=True, health=(40, 40))
    tile = make(EntityType.TERRAIN, 0, 0)

    result = Collision().collision_table(enemy, tile, x_axis, intersection)

    assert result is side
    moves = {
        Side.LEFT: (10 + intersection.w, 0),
        Side.RIGHT: (10 - intersection.w, 0),
        Side.TOP: (10, intersection.h),
        Side.BOTTOM: (10, -intersection.h),
    }
    assert (enemy.xpos, enemy.ypos) == moves[side]
    collider = enemy.get_component(ComponentSlot.COLLIDER)
    assert getattr(collider, f"{side.value}_collision") is True


def test_missing_collider_raises():
    plain = Entity(0, 0, SIZE, SIZE)
    with pytest.raises(KeyError):
        Collision().handle_collision([plain])