"""Randomness helpers, keyboard state, visual effects and shots."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

BUFFER_W = 320
BUFFER_H = 240

SHIP_W = 12
SHIP_H = 13

SHIP_SHOT_W = 2
SHIP_SHOT_H = 9
SHIP_SHOT_SPEED = 5

LIFE_W = 6
LIFE_H = 6

ALIEN_SHOT_W = 4
ALIEN_SHOT_H = 4

EXPLOSION_FRAMES = 4
SPARKS_FRAMES = 3

FX_N = 128
SHOTS_N = 128

SoundHook = Callable[[str, float, float], None]


def between(rng, lo, hi):
    """Return a random integer in [lo, hi)."""
    return lo + rng.randrange(hi - lo)


def between_f(rng, lo, hi):
    """Return a random float in [lo, hi]."""
    return lo + rng.random() * (hi - lo)


def collide(ax1, ay1, ax2, ay2, bx1, by1, bx2, by2):
    """Tell whether two boxes overlap; touching edges count as overlap."""
    return not (ax1 > bx2 or ax2 < bx1 or ay1 > by2 or ay2 < by1)


class Keyboard:
    """Key state that remembers a press until the next tick, even if released."""

    _SEEN = 1
    _DOWN = 2

    def __init__(self) -> None:
        self._state: dict = {}

    def press(self, key) -> None:
        self._state[key] = self._SEEN | self._DOWN

    def release(self, key) -> None:
        remaining = self._state.get(key, 0) & ~self._DOWN
        if remaining:
            self._state[key] = remaining
        else:
            self._state.pop(key, None)

    def tick(self) -> None:
        self._state = {
            key: flags & ~self._SEEN
            for key, flags in self._state.items()
            if flags & ~self._SEEN
        }

    def held(self, key) -> bool:
        return bool(self._state.get(key, 0))


def _first_free(slots: list) -> Optional[int]:
    return next((index for index, item in enumerate(slots) if item is None), None)


@dataclass
class Effect:
    """An explosion or spark animation playing at a point."""

    x: int
    y: int
    spark: bool
    frame: int = 0

    @property
    def lifetime(self) -> int:
        return (SPARKS_FRAMES if self.spark else EXPLOSION_FRAMES) * 2

    @property
    def sprite_index(self) -> int:
        return self.frame // 2


class Effects:
    """A fixed-capacity set of running effects."""

    def __init__(self, rng=None, sound: Optional[SoundHook] = None, capacity: int = FX_N) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._sound = sound
        self._slots: list[Optional[Effect]] = [None] * capacity

    def add(self, spark, x, y) -> bool:
        """Start an effect; explosions also play a sound. Returns False when full."""
        if not spark:
            variant = between(self._rng, 0, 2)
            if self._sound is not None:
                self._sound(f"explode{variant + 1}", 0.75, 1.0)
        index = _first_free(self._slots)
        if index is None:
            return False
        self._slots[index] = Effect(x, y, bool(spark))
        return True

    def update(self) -> None:
        for index, effect in enumerate(self._slots):
            if effect is None:
                continue
            effect.frame += 1
            if effect.frame == effect.lifetime:
                self._slots[index] = None

    def __iter__(self) -> Iterator[Effect]:
        return (effect for effect in self._slots if effect is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self)


@dataclass
class Shot:
    """A projectile fired by the ship or by an alien."""

    x: int
    y: int
    ship: bool
    dx: int = 0
    dy: int = 0
    frame: int = 0

    @property
    def width(self) -> int:
        return SHIP_SHOT_W if self.ship else ALIEN_SHOT_W

    @property
    def height(self) -> int:
        return SHIP_SHOT_H if self.ship else ALIEN_SHOT_H

    @property
    def sprite_index(self) -> int:
        return (self.frame // 2) % 2


class Shots:
    """A fixed-capacity set of flying shots."""

    def __init__(
        self,
        effects: Effects,
        rng=None,
        sound: Optional[SoundHook] = None,
        capacity: int = SHOTS_N,
    ) -> None:
        self._effects = effects
        self._rng = rng if rng is not None else random.Random()
        self._sound = sound
        self._slots: list[Optional[Shot]] = [None] * capacity

    def add(self, ship, straight, x, y) -> bool:
        """Fire a shot centred on x. Returns False when no slot is free."""
        speed = 1.0 if ship else between_f(self._rng, 1.5, 1.6)
        if self._sound is not None:
            self._sound("shot", 0.3, speed)

        index = _first_free(self._slots)
        if index is None:
            return False

        if ship:
            shot = Shot(x - SHIP_SHOT_W // 2, y, True)
        else:
            if straight:
                dx, dy = 0, 2
            else:
                dx = between(self._rng, -2, 2)
                dy = between(self._rng, -2, 2)
            if not dx and not dy:
                # a shot with no speed is not worth keeping
                return True
            shot = Shot(x - ALIEN_SHOT_W // 2, y - ALIEN_SHOT_H // 2, False, dx, dy)

        self._slots[index] = shot
        return True

    def update(self) -> None:
        for index, shot in enumerate(self._slots):
            if shot is None:
                continue
            if shot.ship:
                shot.y -= SHIP_SHOT_SPEED
                if shot.y < -SHIP_SHOT_H:
                    self._slots[index] = None
                    continue
            else:
                shot.x += shot.dx
                shot.y += shot.dy
                if (
                    shot.x < -ALIEN_SHOT_W
                    or shot.x > BUFFER_W
                    or shot.y < -ALIEN_SHOT_H
                    or shot.y > BUFFER_H
                ):
                    self._slots[index] = None
                    continue
            shot.frame += 1

    def collide(self, ship, x, y, w, h) -> bool:
        """Remove the first opposing shot touching the box and spark there."""
        for index, shot in enumerate(self._slots):
            if shot is None or shot.ship == ship:
                continue
            sw, sh = shot.width, shot.height
            if collide(x, y, x + w, y + h, shot.x, shot.y, shot.x + sw, shot.y + sh):
                self._effects.add(True, shot.x + sw // 2, shot.y + sh // 2)
                self._slots[index] = None
                return True
        return False

    def __iter__(self) -> Iterator[Shot]:
        return (shot for shot in self._slots if shot is not None)

    def __len__(self) -> int:
        return sum(1 for _ in self)