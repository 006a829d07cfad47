"""Loading tile maps: a grid of integers where 1 marks a block of terrain."""

from __future__ import annotations

import itertools
import os
from pathlib import Path
from typing import Iterable, Union

from nirvana.defs import MAP_SIZE, SCALING, TILESHEET_SIZE
from nirvana.entities import Tile
from nirvana.entity_manager import EntityManager

TERRAIN_CELL = 1
TERRAIN_SPRITE_X = 12 * TILESHEET_SIZE
TERRAIN_SPRITE_Y = 1 * TILESHEET_SIZE


def parse_map(text: str) -> list[Tile]:
    """Build the tiles described by whitespace-separated integers, row by row.

    The grid is MAP_SIZE by MAP_SIZE; extra numbers are ignored and a short
    grid leaves the remaining cells empty. A token that is not an integer
    raises ValueError.
    """
    cells = itertools.product(range(MAP_SIZE), range(MAP_SIZE))
    tiles = []
    for (row, col), token in zip(cells, text.split()):
        if int(token) == TERRAIN_CELL:
            tiles.append(
                Tile(
                    TERRAIN_SPRITE_X,
                    TERRAIN_SPRITE_Y,
                    col * TILESHEET_SIZE * SCALING,
                    row * TILESHEET_SIZE * SCALING,
                )
            )
    return tiles


def load_map(path: Union[str, os.PathLike], manager: EntityManager) -> list[Tile]:
    """Read a map file, hand its tiles to the manager and return them."""
    tiles = parse_map(Path(path).read_text())
    for tile in tiles:
        manager.add_entity(tile)
    return tiles


def clear_map(tiles: Iterable[Tile]) -> None:
    """Mark every tile for removal on the next refresh."""
    for tile in tiles:
        tile.mark_remove = True