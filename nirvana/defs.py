"""Game-wide constants and enumerations."""

from enum import IntEnum

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
TILESHEET_SIZE = 64
TILESHEET_X = 64
TILESHEET_Y = 64
MAP_SIZE = 40
GRAVITY = 10
NORMAL_FORCE = -10
SCALING = 1
MAX_COMPONENTS = 32


class AnimationName(IntEnum):
    """Identifiers of the animations an entity can play."""

    WALK = 0
    RUN = 1
    IDLE = 2
    JUMP = 3
    FLY = 4
    ATTACK = 5
    FALL = 6
    LAND = 7
    PERISH = 8
    HURT = 9
    WALL_GRAB = 10


class AnimationType(IntEnum):
    """How an animation advances through its frames."""

    BOUNCE = 0
    LINEAR = 1


class EntityType(IntEnum):
    """Collision categories of entities."""

    PLAYER = 0
    TERRAIN = 1
    PROJECTILE = 2
    ENEMY = 3
    SWORD = 4
    BIRD = 5


class ComponentSlot(IntEnum):
    """The slot each kind of component occupies on an entity."""

    INPUT = 0
    GRAPHICS = 1
    PHYSICS = 2
    JUMPING = 3
    LIGHT = 4
    CAMERA = 5
    HEALTH = 6
    FLYING = 7
    GRAB = 8
    COLLIDER = 9


class Flip(IntEnum):
    """Mirroring applied when a sprite is drawn."""

    NONE = 0
    HORIZONTAL = 1
    VERTICAL = 2