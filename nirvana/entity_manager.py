"""Ownership of entities and the per-component groups they belong to."""

from __future__ import annotations

from typing import Iterator, Optional

from nirvana.defs import SCREEN_HEIGHT, SCREEN_WIDTH, ComponentSlot
from nirvana.ecs import Canvas, Entity


class EntityManager:
    """Holds the live entities and, for each component slot, who has one."""

    def __init__(
        self,
        camera: Optional[Entity] = None,
        screen_width: int = SCREEN_WIDTH,
        screen_height: int = SCREEN_HEIGHT,
    ) -> None:
        self.camera = camera
        self.screen_width = screen_width
        self.screen_height = screen_height
        self._entities: dict[Entity, None] = {}
        self._groups: dict[ComponentSlot, dict[Entity, None]] = {
            slot: {} for slot in ComponentSlot
        }

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities))

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities

    def add_entity(self, entity: Entity) -> None:
        """Take ownership of an entity and register the components it already has."""
        self._entities[entity] = None
        entity.manager = self
        for slot in entity.components:
            self.add_entity_to_group(entity, slot)

    def _discard(self, entity: Entity) -> None:
        for group in self._groups.values():
            group.pop(entity, None)
        self._entities.pop(entity, None)
        entity.manager = None

    def refresh_entities(self) -> None:
        """Drop entities marked for removal and flag the rest as on or off screen."""
        cam_x = self.camera.xpos if self.camera is not None else 0
        cam_y = self.camera.ypos if self.camera is not None else 0
        for entity in list(self._entities):
            if entity.mark_remove:
                self._discard(entity)
                continue
            screen_x = cam_x + entity.xpos
            screen_y = cam_y + entity.ypos
            off_screen = (
                screen_x > self.screen_width
                or screen_y > self.screen_height
                or screen_y + entity.width < 0
                or screen_x + entity.width < 0
            )
            entity.mark_active = not off_screen

    def update_entities(self) -> None:
        """Run every priority update, then every regular update."""
        entities = list(self._entities)
        for entity in entities:
            if not entity.mark_remove:
                entity.priority_update()
        for entity in entities:
            if not entity.mark_remove:
                entity.update()

    def draw_entities(self, canvas: Canvas) -> None:
        for entity in list(self._entities):
            if entity.mark_active:
                entity.draw(canvas)

    def add_entity_to_group(self, entity: Entity, slot: int) -> None:
        self._groups[ComponentSlot(slot)][entity] = None

    def remove_entity_from_group(self, entity: Entity, slot: int) -> None:
        self._groups[ComponentSlot(slot)].pop(entity, None)

    def component_group(self, slot: int) -> list[Entity]:
        """Return a snapshot of the entities holding a component in the slot."""
        return list(self._groups[ComponentSlot(slot)])