# nirvana

A small side-scrolling platformer. You play a piece of sushi walking and
jumping around a tile map. The world is built from entities carrying
components (physics, jumping, health, wall grabbing, collision boxes,
graphics), and collisions are found with a quadtree and resolved one axis
at a time.

## Installing

```
pip install .
```

This pulls in `pygame`, which is used for the window, keyboard input and
drawing.

## Playing

```
nirvana
```

By default the game reads `assets/map.map` (the level) and
`assets/Tilesheet/spritesheet.png` (the sprite sheet, 64×64 pixel tiles)
relative to the current directory. Other files can be given:

```
nirvana --map levels/first.map --texture art/sheet.png
```

If either file cannot be read, the command prints `nirvana: <error>` to
standard error and exits with status 1. The window is 1280×720 and the game
runs at up to 60 frames per second.

Keys:

| Key     | Effect                                                      |
|---------|-------------------------------------------------------------|
| `d`     | walk right                                                  |
| `a`     | walk left                                                   |
| `w`     | jump                                                        |
| `s`     | sets the "looking down" flag                                |
| `h`     | sets the "attack" flag, which stops walking and jumping     |
| `space` | sets the "fire" flag                                        |
| `q`     | quit (closing the window also quits)                        |

The last key event received stays in effect each frame until another one
arrives. Pressing towards a wall while in the air grabs it and lets you jump
again; landing releases the grab. Touching an enemy costs health, and a
short invulnerability follows every hit.

## What the game does not do

The `attack` and `fire` flags are recorded but nothing acts on them: no
sword swing or projectile is created by the player. `Enemy`, `Projectile`,
`Sword` and `LightTest` exist as entities, but the game never places any of
them in the level, and `LightComponent` draws nothing. There is no sound, no
menu, no score and no saving.

## Map format

A map is a 40 × 40 grid of whitespace-separated integers, read row by row.
A `1` places a solid terrain tile; any other integer leaves the cell empty.
Numbers beyond the grid are ignored and a short file leaves the remaining
cells empty; a token that is not an integer raises `ValueError`.

- `nirvana.tilemap.parse_map(text)` returns the `Tile` entities for a map text.
- `nirvana.tilemap.load_map(path, manager)` reads a file, adds its tiles to an
  `EntityManager` and returns them.
- `nirvana.tilemap.clear_map(tiles)` marks tiles for removal on the next refresh.

## Using the pieces

The engine parts work without opening a window:

- `nirvana.defs` — screen, tile and physics constants, and the `AnimationName`,
  `AnimationType`, `EntityType`, `ComponentSlot` and `Flip` enumerations
- `nirvana.ecs` — `Entity`, `Component`, `Rect` and the `Canvas` drawing protocol
- `nirvana.entity_manager` — `EntityManager`, which owns entities, keeps one
  group per component slot, flags off-screen entities and removes marked ones
- `nirvana.quadtree` — `QuadTree` spatial partitioning (`insert`, `construct`,
  `leaves`, `clean`, `combine`)
- `nirvana.components` — `ColliderComponent`, `InputComponent` (fed with
  `KeyEvent`), `PhysicsComponent`, `JumpingComponent`, `HealthComponent`,
  `GrabComponent`, `LightComponent` and `CameraComponent`
- `nirvana.graphics` — `Animation` and `GraphicsComponent`, with linear and
  bounce frame stepping
- `nirvana.collision` — `Collision`, which buckets colliders in a quadtree and
  pushes players and enemies out of terrain, applies contact damage, and
  removes projectiles that hit terrain
- `nirvana.entities` — `Camera`, `Sushi`, `Enemy`, `Projectile`, `Sword`,
  `Tile` and `LightTest`
- `nirvana.game` — `Game`, `PygameCanvas` and the `main` entry point

Any object with `draw_rect`, `fill_rect` and `draw_texture` methods can serve
as a `Canvas`, so entities can be drawn onto something other than a pygame
surface.

## Tests

```
pip install .[test]
pytest
```