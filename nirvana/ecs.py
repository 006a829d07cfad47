"""Entities, components and the drawing surface they render onto."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

from nirvana.defs import ComponentSlot, Flip

if TYPE_CHECKING:
    from nirvana.entity_manager import EntityManager

Color = tuple[int, int, int, int]


@dataclass(frozen=True)
class Rect:
    """An axis-aligned integer rectangle."""

    x: int
    y: int
    w: int
    h: int

    @property
    def empty(self) -> bool:
        return self.w <= 0 or self.h <= 0

    def intersection(self, other: "Rect") -> Optional["Rect"]:
        """Return the overlapping rectangle, or None when they do not overlap."""
        if self.empty or other.empty:
            return None
        left = max(self.x, other.x)
        right = min(self.x + self.w, other.x + other.w)
        top = max(self.y, other.y)
        bottom = min(self.y + self.h, other.y + other.h)
        result = Rect(left, top, right - left, bottom - top)
        return None if result.empty else result


class Canvas(Protocol):
    """A surface that entities and components draw onto."""

    def draw_rect(self, rect: Rect, color: Color) -> None:
        ...

    def fill_rect(self, rect: Rect, color: Color) -> None:
        ...

    def draw_texture(self, src: Rect, dest: Rect, alpha: int, flip: Flip) -> None:
        ...


class Component:
    """A piece of behaviour attached to an entity; all hooks default to no-ops."""

    def init(self, entity: "Entity") -> None:
        pass

    def update(self, entity: "Entity") -> None:
        pass

    def draw(self, entity: "Entity", canvas: Canvas) -> None:
        pass


class Entity:
    """A positioned object in the world holding at most one component per slot."""

    _tags = itertools.count()

    def __init__(self, x: int = 0, y: int = 0, width: int = 0, height: int = 0) -> None:
        self.xpos = self.n_xpos = x
        self.ypos = self.n_ypos = y
        self.width = width
        self.height = height
        self.mark_active = True
        self.mark_remove = False
        self.manager: Optional[EntityManager] = None
        self.components: dict[ComponentSlot, Component] = {}
        self.tag = next(Entity._tags)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tag={self.tag}, x={self.xpos}, y={self.ypos})"

    def priority_update(self) -> None:
        pass

    def update(self) -> None:
        pass

    def draw(self, canvas: Canvas) -> None:
        pass

    def get_component(self, slot: int) -> Component:
        """Return the component in the slot; raise KeyError if it is empty."""
        slot = ComponentSlot(slot)
        try:
            return self.components[slot]
        except KeyError:
            raise KeyError(f"{self!r} has no {slot.name} component") from None

    def has_component(self, slot: int) -> bool:
        return ComponentSlot(slot) in self.components

    def add_component(self, slot: int, component: Component) -> Component:
        """Put a component in an empty slot and return what the slot holds."""
        slot = ComponentSlot(slot)
        existing = self.components.get(slot)
        if existing is not None:
            return existing
        self.components[slot] = component
        if self.manager is not None:
            self.manager.add_entity_to_group(self, slot)
        return component

    def delete_component(self, slot: int) -> None:
        slot = ComponentSlot(slot)
        if self.components.pop(slot, None) is not None and self.manager is not None:
            self.manager.remove_entity_from_group(self, slot)

    def _ordered_components(self) -> list[Component]:
        return [component for _, component in sorted(self.components.items())]

    def update_components(self) -> None:
        for component in self._ordered_components():
            component.update(self)

    def init_components(self) -> None:
        for component in self._ordered_components():
            component.init(self)

    def draw_components(self, canvas: Canvas) -> None:
        for component in self._ordered_components():
            component.draw(self, canvas)