# starshooter

A small arcade space shooter built on pygame. Fly a ship around the screen,
shoot down waves of aliens and watch the score count up. Three kinds of alien
come down from the top, each with its own speed, toughness, firing pattern and
point value. You start with three lives.

## Installing

```
pip install .
```

This needs pygame. To run the tests, install the test extra and run pytest:

```
pip install .[test]
pytest
```

## Playing

```
starshooter
starshooter --assets path/to/assets
```

The game reads `spritesheet.png`, `shot.flac`, `explode1.flac` and
`explode2.flac` from the directory given with `--assets` (the current
directory by default). If one of them cannot be loaded, or the display or
audio cannot be set up, it prints `couldn't initialize ...` and exits with
status 1.

The game draws into a 320×240 buffer and scales it three times onto a
960×720 window, at 60 frames per second.

Controls:

- Arrow keys move the ship.
- `X` fires.
- `Escape` or closing the window quits.

Aliens:

| Alien    | Hits to destroy | Points |
|----------|-----------------|--------|
| bug      | 4               | 200    |
| arrow    | 2               | 150    |
| large    | 12              | 800    |

New aliens arrive every two seconds. After being hit the ship disappears for a
moment and then flickers while it is invincible. When your lives run out the
screen shows "G A M E  O V E R"; the aliens keep coming until you quit.

Shot and explosion sounds are played at their recorded pitch.

## Other programs

```
starshooter-welcome
starshooter-welcome --seconds 2
```

Opens an 800×600 window, shows a welcome message in the middle for the given
number of seconds (five by default) and exits.

```
starshooter-template
starshooter-template --assets path/to/assets --log log.txt
```

A two-scene skeleton: a title menu and a playfield. Press Enter on the menu to
start, then move the plane with the arrow keys or WASD. It needs
`pirulen.ttf`, `main-bg.jpg`, `start-bg.jpg`, `plane.png`,
`smallfighter0006.png`, `S31-Night Prowler.ogg` and `mythica.ogg` in the
assets directory. Each run writes a fresh log of scene changes, key and mouse
events to the log file and to standard output. If a resource cannot be
loaded it logs the failure, waits two seconds and exits with status 1.

The template is only a starting point: the plane cannot fire, it is not kept
inside the window, the three enemies stay where they appear, and there is no
collision, score or settings screen.

## Using the game logic

The simulation in `starshooter.world` and `starshooter.entities` needs no
display, so you can drive it directly:

```python
import random

from starshooter.world import Controls, World

world = World(rng=random.Random(1))
for _ in range(600):
    world.update(Controls(fire=True))
print(world.score, world.hud.score_text(), world.game_over())
```

`World` holds the `ship`, `aliens`, `shots`, `effects`, `stars` and `hud`,
and `World.update` advances all of them by one frame. Pass a `sound` callable
taking a sample name, a volume and a speed to hear shots and explosions.
`starshooter.game.Renderer` draws a `World` onto a pygame surface.