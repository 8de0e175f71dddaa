"""The ship, aliens, starfield, score display and the world that ties them."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Optional

from starshooter.entities import (
    BUFFER_H,
    BUFFER_W,
    SHIP_H,
    SHIP_W,
    Effects,
    Shots,
    SoundHook,
    between,
    between_f,
)

SHIP_SPEED = 3
SHIP_MAX_X = BUFFER_W - SHIP_W
SHIP_MAX_Y = BUFFER_H - SHIP_H
SHIP_LIVES = 3
SHIP_START_INVINCIBLE = 120
SHIP_SHOT_COOLDOWN = 5
RESPAWN_TIME = 90
INVINCIBLE_AFTER_HIT = 180

ALIENS_N = 16
ALIEN_SPAWN_PERIOD = 120
ALIEN_HIT_BLINK = 4

STARS_N = BUFFER_W // 2 - 1


@dataclass
class Controls:
    """The player's inputs for one frame."""

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    fire: bool = False
    quit: bool = False


@dataclass
class Ship:
    """The player's ship."""

    x: int = BUFFER_W // 2 - SHIP_W // 2
    y: int = BUFFER_H // 2 - SHIP_H // 2
    shot_timer: int = 0
    lives: int = SHIP_LIVES
    respawn_timer: int = 0
    invincible_timer: int = SHIP_START_INVINCIBLE

    def update(self, controls, shots, effects) -> None:
        if self.lives < 0:
            return
        if self.respawn_timer:
            self.respawn_timer -= 1
            return

        if controls.left:
            self.x -= SHIP_SPEED
        if controls.right:
            self.x += SHIP_SPEED
        if controls.up:
            self.y -= SHIP_SPEED
        if controls.down:
            self.y += SHIP_SPEED
        self.x = min(max(self.x, 0), SHIP_MAX_X)
        self.y = min(max(self.y, 0), SHIP_MAX_Y)

        if self.invincible_timer:
            self.invincible_timer -= 1
        elif shots.collide(True, self.x, self.y, SHIP_W, SHIP_H):
            cx = self.x + SHIP_W // 2
            cy = self.y + SHIP_H // 2
            for ox, oy in ((0, 0), (4, 2), (-2, -4), (1, -5)):
                effects.add(False, cx + ox, cy + oy)
            self.lives -= 1
            self.respawn_timer = RESPAWN_TIME
            self.invincible_timer = INVINCIBLE_AFTER_HIT

        if self.shot_timer:
            self.shot_timer -= 1
        elif controls.fire:
            if shots.add(True, False, self.x + SHIP_W // 2, self.y):
                self.shot_timer = SHIP_SHOT_COOLDOWN

    def visible(self) -> bool:
        """Whether the ship is drawn this frame (it flickers while invincible)."""
        if self.lives < 0 or self.respawn_timer:
            return False
        return (self.invincible_timer // 2) % 3 != 1


class AlienType(IntEnum):
    BUG = 0
    ARROW = 1
    THICCBOI = 2

    @property
    def width(self) -> int:
        return _ALIEN_STATS[self][0]

    @property
    def height(self) -> int:
        return _ALIEN_STATS[self][1]

    @property
    def life(self) -> int:
        return _ALIEN_STATS[self][2]

    @property
    def score(self) -> int:
        return _ALIEN_STATS[self][3]

    @property
    def shot_interval(self) -> int:
        return _ALIEN_STATS[self][4]


# width, height, life, score, frames between volleys
_ALIEN_STATS = {
    AlienType.BUG: (14, 9, 4, 200, 150),
    AlienType.ARROW: (13, 10, 2, 150, 80),
    AlienType.THICCBOI: (45, 27, 12, 800, 200),
}


@dataclass
class Alien:
    """One enemy on screen."""

    x: int
    y: int
    kind: AlienType
    shot_timer: int
    life: int
    blink: int = 0

    @property
    def center(self) -> tuple[int, int]:
        return self.x + self.kind.width // 2, self.y + self.kind.height // 2

    def visible(self) -> bool:
        return self.blink <= 2


class Aliens:
    """The fixed set of alien slots, spawning waves and resolving hits."""

    def __init__(self, rng=None, capacity: int = ALIENS_N) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.slots: list[Optional[Alien]] = [None] * capacity

    def _spawn(self, x: int) -> Alien:
        y = between(self._rng, -40, -30)
        kind = AlienType(between(self._rng, 0, len(AlienType)))
        shot_timer = between(self._rng, 1, 99)
        return Alien(x, y, kind, shot_timer, kind.life)

    def update(self, frames, shots, effects) -> int:
        """Advance every alien by one frame and return the points scored."""
        new_quota = 0 if frames % ALIEN_SPAWN_PERIOD else between(self._rng, 2, 4)
        new_x = between(self._rng, 10, BUFFER_W - 50)
        points = 0

        for index, alien in enumerate(self.slots):
            if alien is None:
                if new_quota > 0:
                    new_x += between(self._rng, 40, 80)
                    if new_x > BUFFER_W - 60:
                        new_x -= BUFFER_W - 60
                    self.slots[index] = self._spawn(new_x)
                    new_quota -= 1
                continue

            kind = alien.kind
            if kind is AlienType.BUG:
                if frames % 2:
                    alien.y += 1
            elif kind is AlienType.ARROW:
                alien.y += 1
            elif frames % 4 == 0:
                alien.y += 1

            if alien.y >= BUFFER_H:
                self.slots[index] = None
                continue

            if alien.blink:
                alien.blink -= 1

            if shots.collide(False, alien.x, alien.y, kind.width, kind.height):
                alien.life -= 1
                alien.blink = ALIEN_HIT_BLINK

            cx, cy = alien.center

            if alien.life <= 0:
                effects.add(False, cx, cy)
                points += kind.score
                if kind is AlienType.THICCBOI:
                    effects.add(False, cx - 10, cy - 4)
                    effects.add(False, cx + 4, cy + 10)
                    effects.add(False, cx + 8, cy + 8)
                self.slots[index] = None
                continue

            alien.shot_timer -= 1
            if alien.shot_timer == 0:
                if kind is AlienType.BUG:
                    shots.add(False, False, cx, cy)
                elif kind is AlienType.ARROW:
                    shots.add(False, True, cx, alien.y)
                else:
                    shots.add(False, True, cx - 5, cy)
                    shots.add(False, True, cx + 5, cy)
                    shots.add(False, True, cx - 5, cy + 8)
                    shots.add(False, True, cx + 5, cy + 8)
                alien.shot_timer = kind.shot_interval

        return points

    def __iter__(self) -> Iterator[Alien]:
        return (alien for alien in self.slots if alien is not None)


@dataclass
class Star:
    """A background star scrolling down one column."""

    x: float
    y: float
    speed: float

    @property
    def brightness(self) -> float:
        return self.speed * 0.8


class Starfield:
    """Columns of stars falling at random speeds."""

    def __init__(self, rng=None, count: int = STARS_N) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._stars = [
            Star(
                1.5 + 2 * column,
                between_f(self._rng, 0, BUFFER_H),
                between_f(self._rng, 0.1, 1),
            )
            for column in range(count)
        ]

    def update(self) -> None:
        for star in self._stars:
            star.y += star.speed
            if star.y >= BUFFER_H:
                star.y = 0
                star.speed = between_f(self._rng, 0.1, 1)

    def __iter__(self) -> Iterator[Star]:
        return iter(self._stars)


@dataclass
class Hud:
    """The score counter that rolls up toward the real score."""

    score_display: int = 0

    def update(self, frames, score) -> None:
        if frames % 2:
            return
        for power in range(5, 0, -1):
            step = 1 << power
            if self.score_display <= score - step:
                self.score_display += step

    def score_text(self) -> str:
        return f"{self.score_display:06d}"


class World:
    """The whole game state, advanced one frame at a time."""

    def __init__(self, rng=None, sound: Optional[SoundHook] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.effects = Effects(self.rng, sound)
        self.shots = Shots(self.effects, self.rng, sound)
        self.ship = Ship()
        self.aliens = Aliens(self.rng)
        self.stars = Starfield(self.rng)
        self.hud = Hud()
        self.frames = 0
        self.score = 0

    def update(self, controls) -> None:
        self.effects.update()
        self.shots.update()
        self.stars.update()
        self.ship.update(controls, self.shots, self.effects)
        self.score += self.aliens.update(self.frames, self.shots, self.effects)
        self.hud.update(self.frames, self.score)
        self.frames += 1

    def game_over(self) -> bool:
        return self.ship.lives < 0