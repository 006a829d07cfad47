"""Components for collision boxes, input, physics, jumping, health and more."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Optional

from nirvana.defs import GRAVITY, NORMAL_FORCE, ComponentSlot, EntityType
from nirvana.ecs import Canvas, Component, Entity, Rect

COLLIDER_COLOR = (255, 0, 0, 255)
HEALTH_BACKGROUND_COLOR = (100, 0, 0, 255)
HEALTH_HURT_COLOR = (0, 220, 0, 255)
HEALTH_COLOR = (220, 0, 0, 255)
HEALTH_BAR_OFFSET = 30
HEALTH_BAR_HEIGHT = 20


def _camera_offset(entity: Entity) -> tuple[int, int]:
    manager = entity.manager
    camera = manager.camera if manager is not None else None
    if camera is None:
        return 0, 0
    return camera.xpos, camera.ypos


class ColliderComponent(Component):
    """An axis-aligned box following its entity, with per-side collision flags."""

    def __init__(self, kind: int, x_offset: int = 0, y_offset: int = 0) -> None:
        self.kind = EntityType(kind)
        self.x_offset = x_offset
        self.y_offset = y_offset
        self.collider = Rect(0, 0, 0, 0)
        self.left_collision = False
        self.right_collision = False
        self.top_collision = False
        self.bottom_collision = False

    def _fit(self, entity: Entity) -> None:
        self.collider = Rect(
            entity.xpos + self.x_offset,
            entity.ypos + self.y_offset,
            entity.width - self.x_offset,
            entity.height - self.y_offset,
        )

    def init(self, entity: Entity) -> None:
        self._fit(entity)

    def update(self, entity: Entity) -> None:
        self.left_collision = False
        self.right_collision = False
        self.top_collision = False
        self.bottom_collision = False
        self._fit(entity)

    def draw(self, entity: Entity, canvas: Canvas) -> None:
        cam_x, cam_y = _camera_offset(entity)
        box = self.collider
        canvas.draw_rect(Rect(cam_x + box.x, cam_y + box.y, box.w, box.h), COLLIDER_COLOR)


@dataclass(frozen=True)
class KeyEvent:
    """A key going down (pressed) or coming up; keys are named like "a" or "space"."""

    key: str
    pressed: bool


_PRESS_FLAGS = {
    "a": "moving_backward",
    "d": "moving_forward",
    "w": "jumping",
    "s": "looking_down",
    "h": "attack",
    "space": "fire",
}

_RELEASE_FLAGS = {
    "a": "moving_backward",
    "d": "moving_forward",
    "w": "jumping",
    "s": "looking_down",
}


class InputComponent(Component):
    """Turns the most recent key event into movement and action flags.

    The last event fed in stays current and is applied again on every update
    until a new one replaces it.
    """

    def __init__(self) -> None:
        self.moving_forward = False
        self.moving_backward = False
        self.jumping = False
        self.looking_down = False
        self.fire = False
        self.in_jump = False
        self.attack = False
        self.event: Optional[KeyEvent] = None

    def feed(self, event: KeyEvent) -> None:
        self.event = event

    def update(self, entity: Entity) -> None:
        if self.event is None:
            return
        flags = _PRESS_FLAGS if self.event.pressed else _RELEASE_FLAGS
        flag = flags.get(self.event.key)
        if flag is not None:
            setattr(self, flag, self.event.pressed)


class PhysicsComponent(Component):
    """Integrates velocity and acceleration into the entity's next position."""

    TIMESTEP = 0.15
    TERMINAL_VELOCITY = 50.0

    def __init__(self) -> None:
        self.xvel = 0.0
        self.yvel = 0.0
        self.xaccel = 0.0
        self.yaccel = float(GRAVITY)

    def update(self, entity: Entity) -> None:
        step = self.TIMESTEP
        entity.xpos = entity.n_xpos
        entity.ypos = entity.n_ypos
        entity.n_xpos += int(0.5 * self.xaccel * self.xaccel * step * step + self.xvel * step)
        entity.n_ypos += int(0.5 * self.yaccel * self.yaccel * step * step + self.yvel * step)
        self.yvel += self.yaccel * step
        self.xvel += self.xaccel * step
        self.yvel = min(self.yvel, self.TERMINAL_VELOCITY)
        self.remove_normal_force()

    def remove_normal_force(self) -> None:
        self.yaccel = float(GRAVITY)

    def apply_normal_force(self) -> None:
        self.yaccel = float(GRAVITY + NORMAL_FORCE)


class JumpingComponent(Component):
    """Launches its entity upwards through the entity's physics component."""

    def __init__(self, jump_magnitude: float) -> None:
        self.jump_magnitude = jump_magnitude
        self.is_jumping = False
        self._physics: Optional[PhysicsComponent] = None

    def init(self, entity: Entity) -> None:
        self._physics = entity.get_component(ComponentSlot.PHYSICS)

    def jump(self) -> None:
        if self._physics is None:
            raise RuntimeError("jumping component used before init")
        self._physics.remove_normal_force()
        self._physics.yvel = -self.jump_magnitude
        self.is_jumping = True

    def reset_jump(self) -> None:
        self.is_jumping = False


class HealthComponent(Component):
    """Hit points with a window of invulnerability after each hit."""

    def __init__(self, health: int, iframe_capacity: int) -> None:
        self.health_points = health
        self.health_capacity = health
        self.iframe_capacity = iframe_capacity
        self.iframes = 0
        self.dead = False
        self.is_hurt = False

    def receive_damage(self, entity: Entity, damage: int) -> None:
        if self.iframes == 0 and not self.dead:
            self.health_points -= damage
            self.dead = self.health_points <= 0
            self.iframes = self.iframe_capacity

    def restore_health(self, amount: int) -> None:
        self.health_points = max(self.health_points + amount, self.health_capacity)

    def update(self, entity: Entity) -> None:
        self.is_hurt = False
        if self.iframes > 0:
            self.is_hurt = True
            self.iframes -= 1

    def draw(self, entity: Entity, canvas: Canvas) -> None:
        cam_x, cam_y = _camera_offset(entity)
        x = cam_x + entity.xpos
        y = cam_y + entity.ypos - HEALTH_BAR_OFFSET
        canvas.fill_rect(Rect(x, y, self.health_capacity, HEALTH_BAR_HEIGHT), HEALTH_BACKGROUND_COLOR)
        color = HEALTH_HURT_COLOR if self.iframes > 0 else HEALTH_COLOR
        canvas.fill_rect(Rect(x, y, self.health_points, HEALTH_BAR_HEIGHT), color)


class GrabComponent(Component):
    """Lets an airborne entity cling to a wall it is pushing against."""

    def __init__(self) -> None:
        self.is_grabbing = False
        self._jumping: Optional[JumpingComponent] = None
        self._collider: Optional[ColliderComponent] = None
        self._input: Optional[InputComponent] = None

    def init(self, entity: Entity) -> None:
        self._jumping = entity.get_component(ComponentSlot.JUMPING)
        self._collider = entity.get_component(ComponentSlot.COLLIDER)
        self._input = entity.get_component(ComponentSlot.INPUT)

    def update(self, entity: Entity) -> None:
        if self._jumping is None or self._collider is None or self._input is None:
            raise RuntimeError("grab component used before init")
        collider, controls = self._collider, self._input
        pushing_wall = (collider.left_collision and controls.moving_backward) or (
            collider.right_collision and controls.moving_forward
        )
        if not collider.bottom_collision and not self.is_grabbing and pushing_wall:
            self._jumping.reset_jump()
            self.is_grabbing = True
        if collider.bottom_collision:
            self.is_grabbing = False


class LightComponent(Component):
    """A light source of a given radius and brightness."""

    def __init__(self, radius: int, brightness: float) -> None:
        self.radius = radius
        self.brightness = brightness
        self.rng = random.Random()

    def init(self, entity: Entity) -> None:
        self.rng.seed(time.time())


class CameraComponent(Component):
    """Marks an entity the camera should keep in view."""