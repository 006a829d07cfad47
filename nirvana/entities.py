"""The concrete entities of the game: camera, player, enemies, weapons, tiles, lights."""

from __future__ import annotations

from nirvana.components import (
    CameraComponent,
    ColliderComponent,
    GrabComponent,
    HealthComponent,
    InputComponent,
    JumpingComponent,
    LightComponent,
    PhysicsComponent,
)
from nirvana.defs import (
    SCALING,
    TILESHEET_SIZE,
    TILESHEET_X,
    TILESHEET_Y,
    AnimationName,
    ComponentSlot,
    EntityType,
    Flip,
)
from nirvana.ecs import Canvas, Entity, Rect
from nirvana.graphics import GraphicsComponent


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


class Camera(Entity):
    """Follows the average position of every entity with a camera component."""

    SMOOTH = 0.1

    def priority_update(self) -> None:
        """Ease towards centring the tracked entities; idle when there are none."""
        manager = self.manager
        if manager is None:
            return
        targets = manager.component_group(ComponentSlot.CAMERA)
        if not targets:
            return
        average_x = _trunc_div(sum(e.xpos for e in targets), len(targets))
        average_y = _trunc_div(sum(e.ypos for e in targets), len(targets))
        goal_x = manager.screen_width // 2 - average_x
        goal_y = manager.screen_height // 2 - average_y
        self.xpos = int(self.xpos + self.SMOOTH * (goal_x - self.xpos))
        self.ypos = int(self.ypos + self.SMOOTH * (goal_y - self.ypos))


class Sushi(Entity):
    """The player character."""

    LATERAL_SPEED = 30
    PROJECTILE_SPEED = 30
    JUMP_HEIGHT = 50
    WIDTH = 64
    HEIGHT = 64
    X_OFFSET = 0
    Y_OFFSET = 0

    def __init__(self, x: int, y: int) -> None:
        super().__init__(x, y, self.WIDTH, self.HEIGHT)
        self.jump_height = self.JUMP_HEIGHT
        self.x_offset = self.X_OFFSET
        self.y_offset = self.Y_OFFSET
        self.flip = Flip.NONE

        self.controls: InputComponent = self.add_component(ComponentSlot.INPUT, InputComponent())
        self.graphics: GraphicsComponent = self.add_component(
            ComponentSlot.GRAPHICS, GraphicsComponent(Rect(0, 0, TILESHEET_SIZE, TILESHEET_SIZE))
        )
        self.physics: PhysicsComponent = self.add_component(
            ComponentSlot.PHYSICS, PhysicsComponent()
        )
        self.collider: ColliderComponent = self.add_component(
            ComponentSlot.COLLIDER,
            ColliderComponent(EntityType.PLAYER, self.x_offset, self.y_offset),
        )
        self.jumping: JumpingComponent = self.add_component(
            ComponentSlot.JUMPING, JumpingComponent(self.jump_height)
        )
        self.add_component(ComponentSlot.CAMERA, CameraComponent())
        self.health: HealthComponent = self.add_component(
            ComponentSlot.HEALTH, HealthComponent(100, 30)
        )
        self.grab: GrabComponent = self.add_component(ComponentSlot.GRAB, GrabComponent())
        self.init_components()
        self._add_animations()

    def _add_animations(self) -> None:
        frame_w = self.width + self.x_offset
        frame_h = self.height
        self.graphics.add_animation(
            AnimationName.WALK, Rect(0 * TILESHEET_X, 1 * TILESHEET_Y, frame_w, frame_h), 12, 2
        )
        self.graphics.add_animation(
            AnimationName.JUMP, Rect(1 * TILESHEET_X, 0 * TILESHEET_Y, frame_w, frame_h), 2, 10
        )
        self.graphics.add_animation(
            AnimationName.IDLE, Rect(0 * TILESHEET_X, 0 * TILESHEET_Y, frame_w, frame_h), 1, 10
        )
        self.graphics.add_animation(
            AnimationName.WALL_GRAB, Rect(2 * TILESHEET_X, 0 * TILESHEET_Y, frame_w, frame_h), 1, 3
        )

    def update(self) -> None:
        controls = self.controls
        if controls.moving_forward and not controls.attack:
            self.flip = Flip.NONE
            self.physics.xvel = self.LATERAL_SPEED
            animation = AnimationName.WALK
        elif controls.moving_backward and not controls.attack:
            self.flip = Flip.HORIZONTAL
            self.physics.xvel = -self.LATERAL_SPEED
            animation = AnimationName.WALK
        else:
            self.physics.xvel = 0
            animation = AnimationName.IDLE

        if controls.jumping and not controls.attack and not self.jumping.is_jumping:
            self.jumping.jump()

        if self.jumping.is_jumping:
            animation = AnimationName.JUMP
        if self.health.is_hurt:
            animation = AnimationName.HURT

        self.graphics.set_animation(animation, self.flip)
        self.update_components()

    def draw(self, canvas: Canvas) -> None:
        self.draw_components(canvas)


class Enemy(Entity):
    """A creature that walks towards the player once the player comes close."""

    WIDTH = 23
    HEIGHT = 12
    CHASE_DISTANCE_SQUARED = 10000

    def __init__(self, x: int, y: int, player: Entity) -> None:
        super().__init__(x, y, self.WIDTH, self.HEIGHT)
        self.player = player
        self.graphics: GraphicsComponent = self.add_component(
            ComponentSlot.GRAPHICS,
            GraphicsComponent(
                Rect(20 * TILESHEET_SIZE, 12 * TILESHEET_SIZE, TILESHEET_SIZE, TILESHEET_SIZE)
            ),
        )
        self.physics: PhysicsComponent = self.add_component(
            ComponentSlot.PHYSICS, PhysicsComponent()
        )
        self.collider: ColliderComponent = self.add_component(
            ComponentSlot.COLLIDER, ColliderComponent(EntityType.ENEMY)
        )
        self.health: HealthComponent = self.add_component(
            ComponentSlot.HEALTH, HealthComponent(40, 40)
        )
        self.init_components()

    def update(self) -> None:
        if self.health.dead:
            self.graphics.set_animation(AnimationName.PERISH)
            if self.graphics.animation_complete:
                self.mark_remove = True
        else:
            dx = self.player.xpos - self.xpos
            dy = self.player.ypos - self.ypos
            if dx * dx + dy * dy < self.CHASE_DISTANCE_SQUARED:
                self.physics.xvel = dx
                self.graphics.set_animation(AnimationName.WALK)
        self.update_components()

    def draw(self, canvas: Canvas) -> None:
        self.draw_components(canvas)


class Projectile(Entity):
    """A shot that flies horizontally without falling."""

    def __init__(self, x: int, y: int, velocity: float, parent: int = -1) -> None:
        super().__init__(x, y, TILESHEET_SIZE * SCALING, TILESHEET_SIZE * SCALING)
        self.velocity = velocity
        self.parent = parent
        self.collider: ColliderComponent = self.add_component(
            ComponentSlot.COLLIDER, ColliderComponent(EntityType.PROJECTILE)
        )
        self.graphics: GraphicsComponent = self.add_component(
            ComponentSlot.GRAPHICS,
            GraphicsComponent(Rect(13 * TILESHEET_SIZE, 0, TILESHEET_SIZE, TILESHEET_SIZE)),
        )
        self.physics: PhysicsComponent = self.add_component(
            ComponentSlot.PHYSICS, PhysicsComponent()
        )
        self.physics.xvel = velocity
        self.physics.yvel = 0

    def update(self) -> None:
        self.physics.apply_normal_force()
        self.update_components()

    def draw(self, canvas: Canvas) -> None:
        self.draw_components(canvas)


class Sword(Entity):
    """An invisible hit box that damages enemies."""

    def __init__(self, x: int, y: int, parent: int, width: int, height: int) -> None:
        super().__init__(x, y, width, height)
        self.parent = parent
        self.collider: ColliderComponent = self.add_component(
            ComponentSlot.COLLIDER, ColliderComponent(EntityType.SWORD)
        )
        self.init_components()

    def update(self) -> None:
        self.update_components()

    def draw(self, canvas: Canvas) -> None:
        self.draw_components(canvas)


class Tile(Entity):
    """A solid block of terrain drawn from a tilesheet cell."""

    def __init__(self, sprite_x: int, sprite_y: int, x: int, y: int) -> None:
        super().__init__(x, y, TILESHEET_SIZE, TILESHEET_SIZE)
        self.sprite_x = sprite_x
        self.sprite_y = sprite_y
        self.graphics: GraphicsComponent = self.add_component(
            ComponentSlot.GRAPHICS,
            GraphicsComponent(Rect(sprite_x, sprite_y, TILESHEET_SIZE, TILESHEET_SIZE)),
        )
        self.collider: ColliderComponent = self.add_component(
            ComponentSlot.COLLIDER, ColliderComponent(EntityType.TERRAIN)
        )
        self.init_components()

    def update(self) -> None:
        self.update_components()

    def draw(self, canvas: Canvas) -> None:
        self.draw_components(canvas)


class LightTest(Entity):
    """A point carrying a light source."""

    def __init__(self, x: int, y: int) -> None:
        super().__init__(x, y, 1, 1)
        self.light: LightComponent = self.add_component(
            ComponentSlot.LIGHT, LightComponent(100, 0.3)
        )

    def update(self) -> None:
        self.update_components()

    def draw(self, canvas: Canvas) -> None:
        self.draw_components(canvas)