"""The window, the drawing surface and the main loop."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

import pygame

from nirvana.collision import Collision
from nirvana.components import KeyEvent
from nirvana.defs import SCREEN_HEIGHT, SCREEN_WIDTH, TILESHEET_SIZE, ComponentSlot, Flip
from nirvana.ecs import Color, Rect
from nirvana.entities import Camera, Sushi, Tile
from nirvana.entity_manager import EntityManager
from nirvana.tilemap import load_map

WINDOW_TITLE = "Wasabi"
BACKGROUND_COLOR = (47, 64, 81, 255)
FPS = 60
FRAME_DELAY = 1000 // FPS
DEFAULT_MAP = "assets/map.map"
DEFAULT_TEXTURE = "assets/Tilesheet/spritesheet.png"

_KEY_NAMES = {
    pygame.K_a: "a",
    pygame.K_d: "d",
    pygame.K_w: "w",
    pygame.K_s: "s",
    pygame.K_h: "h",
    pygame.K_SPACE: "space",
}


def _to_pygame_rect(rect: Rect) -> pygame.Rect:
    return pygame.Rect(rect.x, rect.y, rect.w, rect.h)


class PygameCanvas:
    """Draws onto a pygame surface, taking sprites from one tilesheet texture."""

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self.texture: Optional[pygame.Surface] = None

    def load_texture(self, path: Union[str, os.PathLike]) -> None:
        """Load the tilesheet; raise FileNotFoundError if the file is missing."""
        file = Path(path)
        if not file.is_file():
            raise FileNotFoundError(f"texture not found: {file}")
        self.texture = pygame.image.load(str(file))

    def clear(self) -> None:
        self.surface.fill(BACKGROUND_COLOR)

    def present(self) -> None:
        """Show the frame when drawing onto the display window."""
        if pygame.display.get_init() and pygame.display.get_surface() is self.surface:
            pygame.display.flip()

    def draw_rect(self, rect: Rect, color: Color) -> None:
        pygame.draw.rect(self.surface, color, _to_pygame_rect(rect), width=1)

    def fill_rect(self, rect: Rect, color: Color) -> None:
        self.surface.fill(color, _to_pygame_rect(rect))

    def draw_texture(self, src: Rect, dest: Rect, alpha: int, flip: Flip) -> None:
        """Copy a region of the tilesheet to the destination, scaled and mirrored."""
        if self.texture is None or dest.empty:
            return
        region = _to_pygame_rect(src).clip(self.texture.get_rect())
        if region.width <= 0 or region.height <= 0:
            return
        image = self.texture.subsurface(region).copy()
        if flip != Flip.NONE:
            image = pygame.transform.flip(
                image, flip == Flip.HORIZONTAL, flip == Flip.VERTICAL
            )
        if image.get_size() != (dest.w, dest.h):
            image = pygame.transform.scale(image, (dest.w, dest.h))
        image.set_alpha(alpha)
        self.surface.blit(image, (dest.x, dest.y))


class Game:
    """Owns the world: the camera, the player, the map and collision handling."""

    def __init__(
        self,
        canvas: PygameCanvas,
        map_path: Optional[Union[str, os.PathLike]] = None,
        texture_path: Optional[Union[str, os.PathLike]] = None,
    ) -> None:
        self.canvas = canvas
        self.collision = Collision()
        if texture_path is not None:
            canvas.load_texture(texture_path)
        self.camera = Camera()
        self.manager = EntityManager(camera=self.camera)
        self.player = Sushi(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2 - TILESHEET_SIZE * 2)
        self.manager.add_entity(self.player)
        self.manager.add_entity(self.camera)
        self.tiles: list[Tile] = (
            load_map(map_path, self.manager) if map_path is not None else []
        )

    def update(self) -> None:
        self.manager.refresh_entities()
        self.manager.update_entities()
        self.check_collision()

    def draw(self) -> None:
        self.canvas.clear()
        self.manager.draw_entities(self.canvas)
        self.canvas.present()

    def check_collision(self) -> None:
        self.collision.handle_collision(self.manager.component_group(ComponentSlot.COLLIDER))

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Pass key presses to entities with input; False when the game should stop."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_q:
            return False
        if event.type in (pygame.KEYDOWN, pygame.KEYUP):
            name = _KEY_NAMES.get(event.key)
            if name is not None:
                key_event = KeyEvent(name, event.type == pygame.KEYDOWN)
                for entity in self.manager.component_group(ComponentSlot.INPUT):
                    entity.get_component(ComponentSlot.INPUT).feed(key_event)
        return True

    def run(self) -> None:
        """Run frames at up to FPS until a quit request arrives."""
        running = True
        while running:
            frame_start = pygame.time.get_ticks()
            running = self.handle_event(pygame.event.poll())
            self.update()
            self.draw()
            frame_time = pygame.time.get_ticks() - frame_start
            if FRAME_DELAY > frame_time:
                pygame.time.delay(FRAME_DELAY - frame_time)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="nirvana", description="A side-scrolling platformer.")
    parser.add_argument("--map", default=DEFAULT_MAP, help="map file to load")
    parser.add_argument("--texture", default=DEFAULT_TEXTURE, help="tilesheet image")
    args = parser.parse_args(argv)

    pygame.display.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        game = Game(PygameCanvas(screen), map_path=args.map, texture_path=args.texture)
        game.run()
    except (OSError, pygame.error) as error:
        print(f"nirvana: {error}", file=sys.stderr)
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())