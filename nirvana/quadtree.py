"""A region quadtree that buckets entities for broad-phase collision."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from nirvana.ecs import Entity


class QuadTree:
    """A square-ish region that splits into four quadrants when crowded."""

    MAX_OBJECTS = 10
    MAX_DEPTH = 5

    def __init__(self, x: int, y: int, width: int, height: int, depth: int = 0) -> None:
        self.xpos = x
        self.ypos = y
        self.width = width
        self.height = height
        self.depth = depth
        self.entities: dict[Entity, None] = {}
        self.children: Optional[tuple[QuadTree, QuadTree, QuadTree, QuadTree]] = None

    def __repr__(self) -> str:
        return (
            f"QuadTree(x={self.xpos}, y={self.ypos}, w={self.width}, "
            f"h={self.height}, depth={self.depth}, entities={len(self.entities)})"
        )

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def _overlaps(self, entity: Entity) -> bool:
        return not (
            entity.xpos + entity.width < self.xpos
            or entity.xpos > self.xpos + self.width
            or entity.ypos + entity.height < self.ypos
            or entity.ypos > self.ypos + self.height
        )

    def insert(self, entity: Entity) -> bool:
        """Place an entity in every leaf it touches; False if it lies outside."""
        if not self._overlaps(entity):
            return False
        if self.depth == self.MAX_DEPTH or (
            len(self.entities) < self.MAX_OBJECTS and self.children is None
        ):
            self.entities[entity] = None
            return True
        self.entities.clear()
        if self.children is None:
            self.subdivide()
        for child in self.children:
            child.insert(entity)
        return True

    def subdivide(self) -> None:
        """Split into north-west, north-east, south-west and south-east quadrants."""
        half_w = self.width // 2
        half_h = self.height // 2
        depth = self.depth + 1
        self.children = (
            QuadTree(self.xpos, self.ypos, half_w, half_h, depth),
            QuadTree(self.xpos + half_w, self.ypos, half_w, half_h, depth),
            QuadTree(self.xpos, self.ypos + half_h, half_w, half_h, depth),
            QuadTree(self.xpos + half_w, self.ypos + half_h, half_w, half_h, depth),
        )

    def clean(self) -> None:
        """Forget entities that are marked for removal or have left this region."""
        self.entities = {
            entity: None
            for entity in self.entities
            if not entity.mark_remove and self._overlaps(entity)
        }

    def construct(self, entities: Iterable[Optional[Entity]]) -> None:
        for entity in entities:
            if entity is not None and not entity.mark_remove:
                self.insert(entity)

    def combine(self) -> None:
        """Collapse quadrants whose four leaves have all become empty."""
        if self.children is None:
            return
        for child in self.children:
            child.combine()
        if all(child.is_leaf for child in self.children) and not any(
            child.entities for child in self.children
        ):
            self.children = None

    def leaves(self) -> Iterator["QuadTree"]:
        """Yield leaf regions in north-west, north-east, south-west, south-east order."""
        if self.children is None:
            yield self
            return
        for child in self.children:
            yield from child.leaves()