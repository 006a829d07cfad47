"""Sprite animations and the component that draws an entity's sprite."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from nirvana.defs import SCALING, TILESHEET_SIZE, AnimationType, Flip
from nirvana.ecs import Canvas, Component, Entity, Rect


@dataclass
class Animation:
    """A run of frames laid out left to right on the tilesheet."""

    src: Rect
    frames: int
    speed: int
    kind: AnimationType = AnimationType.LINEAR
    index: int = 0


def _camera_offset(entity: Entity) -> tuple[int, int]:
    manager = entity.manager
    camera = manager.camera if manager is not None else None
    if camera is None:
        return 0, 0
    return camera.xpos, camera.ypos


class GraphicsComponent(Component):
    """Draws a tilesheet region for its entity and steps through animations."""

    def __init__(self, src: Rect) -> None:
        self.src = src
        self.flip = Flip.NONE
        self.alpha = 255
        self.animation_complete = False
        self.animation_index = 0
        self.frame_index = 0
        self.x_offset = 0
        self.y_offset = 0
        self.current_animation: Optional[Animation] = None
        self._animations: dict[int, Animation] = {}
        self._bounce = False
        self._frame_delay = 0

    def add_animation(
        self,
        name: int,
        src: Rect,
        frames: int,
        speed: int,
        kind: AnimationType = AnimationType.LINEAR,
        x_offset: Optional[int] = None,
        y_offset: Optional[int] = None,
    ) -> Animation:
        """Register an animation under a name, replacing any earlier one."""
        animation = Animation(src, frames, speed, AnimationType(kind))
        self._animations[name] = animation
        if x_offset is not None:
            self.x_offset = x_offset
        if y_offset is not None:
            self.y_offset = y_offset
        return animation

    def set_animation(self, name: int, flip: Optional[Flip] = None) -> None:
        """Switch to a registered animation; unknown names leave it unchanged."""
        animation = self._animations.get(name)
        if animation is not None:
            if self.current_animation is not None and self.current_animation is not animation:
                self.animation_complete = False
                self.frame_index = 0
            self.animation_index = name
            self.current_animation = animation
        if flip is not None:
            self.flip = Flip(flip)

    def unset_animation(self) -> None:
        self.current_animation = None

    def update(self, entity: Entity) -> None:
        animation = self.current_animation
        if animation is None:
            return
        self.src = replace(animation.src, x=animation.src.x + TILESHEET_SIZE * self.frame_index)
        self._frame_delay += 1
        if self._frame_delay <= animation.speed:
            return
        if animation.kind is AnimationType.LINEAR:
            self.frame_index = (self.frame_index + 1) % animation.frames
        elif animation.kind is AnimationType.BOUNCE:
            self.frame_index = self.frame_index + 1 - 2 * self._bounce
            if self.frame_index == animation.frames - 1:
                self._bounce = True
            elif self.frame_index == 0:
                self._bounce = False
        self.animation_complete = self.frame_index == 0
        self._frame_delay = 0

    def draw(self, entity: Entity, canvas: Canvas) -> None:
        cam_x, cam_y = _camera_offset(entity)
        dest = Rect(
            cam_x + entity.xpos,
            cam_y + entity.ypos,
            self.src.w * SCALING,
            self.src.h * SCALING,
        )
        canvas.draw_texture(self.src, dest, self.alpha, self.flip)
        self.alpha = 255