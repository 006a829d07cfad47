"""Broad-phase bucketing and pairwise resolution of collisions between entities."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from nirvana.defs import MAP_SIZE, SCALING, TILESHEET_SIZE, ComponentSlot, EntityType
from nirvana.ecs import Entity, Rect
from nirvana.quadtree import QuadTree

WORLD_SIZE = MAP_SIZE * TILESHEET_SIZE * SCALING

PLAYER_CONTACT_DAMAGE = 5
SWORD_DAMAGE = 10
PROJECTILE_DAMAGE = 10


class Side(Enum):
    """The side of an entity that touched something."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class Collision:
    """Detects overlapping entities of different kinds and applies the outcome."""

    def __init__(self, world_width: int = WORLD_SIZE, world_height: int = WORLD_SIZE) -> None:
        self.world_width = world_width
        self.world_height = world_height
        self.quadtree: Optional[QuadTree] = None

    def handle_collision(self, entities: Iterable[Optional[Entity]]) -> None:
        """Resolve one frame of collisions, x axis first, then y axis, per entity."""
        if self.quadtree is None:
            self.quadtree = QuadTree(0, 0, self.world_width, self.world_height, 0)

        self.quadtree.construct(entities)
        leaves = list(self.quadtree.leaves())
        collided_with: dict[int, set[int]] = {}

        for leaf in leaves:
            members = list(leaf.entities)
            for a in members:
                a_kind = a.get_component(ComponentSlot.COLLIDER).kind

                a.xpos = a.n_xpos
                for b in members:
                    self._try_pair(a, a_kind, b, True, collided_with)
                a.n_xpos = a.xpos

                a.ypos = a.n_ypos
                for b in members:
                    self._try_pair(a, a_kind, b, False, collided_with)
                a.n_ypos = a.ypos

        for leaf in leaves:
            leaf.clean()
        self.quadtree.combine()

    def _try_pair(
        self,
        a: Entity,
        a_kind: EntityType,
        b: Entity,
        x_axis: bool,
        collided_with: dict[int, set[int]],
    ) -> None:
        b_kind = b.get_component(ComponentSlot.COLLIDER).kind
        if a_kind != b_kind and b.tag not in collided_with.get(a.tag, ()):
            self.resolve_pair(a, b, x_axis, collided_with)

    def resolve_pair(
        self,
        a: Entity,
        b: Entity,
        x_axis: bool,
        collided_with: dict[int, set[int]],
    ) -> bool:
        """Apply the collision of a with b along one axis; True if it happened.

        An overlap counts for the x axis when it is narrower than it is tall,
        and for the y axis otherwise.
        """
        a_box = Rect(a.xpos, a.ypos, a.width, a.height)
        b_box = Rect(b.xpos, b.ypos, b.width, b.height)
        intersection = a_box.intersection(b_box)
        if intersection is None:
            return False
        horizontal = intersection.w < intersection.h
        if horizontal != x_axis:
            return False
        collided_with.setdefault(a.tag, set()).add(b.tag)
        self.collision_table(a, b, x_axis, intersection)
        return True

    def collision_table(
        self, a: Entity, b: Entity, x_axis: bool, intersection: Rect
    ) -> Optional[Side]:
        """Apply what a meeting b means; return the side of a pushed out of terrain."""
        a_kind = a.get_component(ComponentSlot.COLLIDER).kind
        b_kind = b.get_component(ComponentSlot.COLLIDER).kind

        if a_kind is EntityType.PLAYER:
            if b_kind is EntityType.TERRAIN:
                physics = a.get_component(ComponentSlot.PHYSICS)
                side = self._touch(a, x_axis, intersection)
                if side is Side.BOTTOM:
                    jumping = a.get_component(ComponentSlot.JUMPING)
                    if not jumping.is_jumping:
                        physics.yvel = 0
                    jumping.reset_jump()
                return side
            if b_kind is EntityType.ENEMY:
                a.get_component(ComponentSlot.HEALTH).receive_damage(a, PLAYER_CONTACT_DAMAGE)
        elif a_kind is EntityType.SWORD:
            if b_kind is EntityType.ENEMY:
                b.get_component(ComponentSlot.HEALTH).receive_damage(b, SWORD_DAMAGE)
        elif a_kind is EntityType.PROJECTILE:
            if b_kind is EntityType.TERRAIN:
                if not a.mark_remove:
                    a.mark_remove = True
                    b.mark_remove = True
            elif b_kind is EntityType.ENEMY:
                b.get_component(ComponentSlot.HEALTH).receive_damage(b, PROJECTILE_DAMAGE)
                a.mark_remove = True
        elif a_kind is EntityType.ENEMY:
            if b_kind is EntityType.TERRAIN:
                return self._touch(a, x_axis, intersection)
        return None

    def _touch(self, a: Entity, x_axis: bool, intersection: Rect) -> Side:
        side = self._determine_side(a, x_axis, intersection)
        self._push_out(a, side, intersection)
        return side

    @staticmethod
    def _determine_side(a: Entity, x_axis: bool, intersection: Rect) -> Side:
        collider = a.get_component(ComponentSlot.COLLIDER)
        if x_axis:
            if intersection.x <= a.xpos:
                collider.left_collision = True
                return Side.LEFT
            collider.right_collision = True
            return Side.RIGHT
        if intersection.y <= a.ypos:
            collider.top_collision = True
            return Side.TOP
        collider.bottom_collision = True
        return Side.BOTTOM

    @staticmethod
    def _push_out(a: Entity, side: Side, intersection: Rect) -> None:
        physics = a.get_component(ComponentSlot.PHYSICS)
        if side is Side.LEFT:
            a.xpos += intersection.w
        elif side is Side.RIGHT:
            a.xpos -= intersection.w
        elif side is Side.TOP:
            a.ypos += intersection.h
        else:
            a.ypos -= intersection.h
            physics.apply_normal_force()