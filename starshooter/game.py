"""Sprites, sounds, drawing and the main loop of the shooter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Mapping, Optional

import pygame

from starshooter.entities import (
    BUFFER_H,
    BUFFER_W,
    LIFE_W,
    Keyboard,
)
from starshooter.world import AlienType, Controls, World

DISP_SCALE = 3
DISP_W = BUFFER_W * DISP_SCALE
DISP_H = BUFFER_H * DISP_SCALE
FPS = 60
RESERVED_CHANNELS = 128

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
HALF_TINT = (128, 128, 128)

SOUND_FILES = {
    "shot": ("shot.flac", "shot sample"),
    "explode1": ("explode1.flac", "explode[0] sample"),
    "explode2": ("explode2.flac", "explode[1] sample"),
}


class InitError(RuntimeError):
    """A resource the game needs could not be set up."""

    def __init__(self, description: str) -> None:
        super().__init__(f"couldn't initialize {description}")
        self.description = description


class SpriteSheet:
    """Named sprites cut from one sheet image."""

    def __init__(self, sheet: pygame.Surface) -> None:
        self.sheet = sheet
        self.ship = self.grab(0, 0, 12, 13)
        self.ship_shot = [self.grab(13, 0, 2, 9), self.grab(16, 0, 2, 9)]
        self.life = self.grab(0, 14, 6, 6)
        self.alien = {
            AlienType.BUG: self.grab(19, 0, AlienType.BUG.width, AlienType.BUG.height),
            AlienType.ARROW: self.grab(19, 10, AlienType.ARROW.width, AlienType.ARROW.height),
            AlienType.THICCBOI: self.grab(
                0, 21, AlienType.THICCBOI.width, AlienType.THICCBOI.height
            ),
        }
        self.alien_shot = self.grab(13, 10, 4, 4)
        self.explosion = [
            self.grab(33, 10, 9, 9),
            self.grab(43, 9, 11, 11),
            self.grab(46, 21, 17, 18),
            self.grab(46, 40, 17, 17),
        ]
        self.sparks = [
            self.grab(34, 0, 10, 8),
            self.grab(45, 0, 7, 8),
            self.grab(54, 0, 9, 8),
        ]
        self.powerup = [self.grab(x, 49, 9, 12) for x in (0, 10, 20, 30)]

    @classmethod
    def load(cls, path) -> "SpriteSheet":
        try:
            sheet = pygame.image.load(str(path))
        except (pygame.error, OSError) as exc:
            raise InitError("spritesheet") from exc
        return cls(sheet)

    def grab(self, x, y, w, h) -> pygame.Surface:
        """Return the w by h region of the sheet at (x, y)."""
        try:
            return self.sheet.subsurface(pygame.Rect(x, y, w, h))
        except ValueError as exc:
            raise InitError("sprite grab") from exc


class Sounds:
    """Named sound samples played on demand."""

    def __init__(self, samples: Mapping[str, object]) -> None:
        self._samples = dict(samples)

    @classmethod
    def load(cls, asset_dir) -> "Sounds":
        base = Path(asset_dir)
        samples = {}
        for name, (filename, description) in SOUND_FILES.items():
            try:
                samples[name] = pygame.mixer.Sound(str(base / filename))
            except (pygame.error, OSError) as exc:
                raise InitError(description) from exc
        return cls(samples)

    def play(self, name, volume, speed) -> None:
        """Play a sample once at the given volume; the mixer plays at native rate."""
        sample = self._samples[name]
        sample.set_volume(volume)
        sample.play()


def controls_from_keyboard(keyboard) -> Controls:
    """Read the player's controls from the keyboard state."""
    return Controls(
        left=keyboard.held(pygame.K_LEFT),
        right=keyboard.held(pygame.K_RIGHT),
        up=keyboard.held(pygame.K_UP),
        down=keyboard.held(pygame.K_DOWN),
        fire=keyboard.held(pygame.K_x),
        quit=keyboard.held(pygame.K_ESCAPE),
    )


class Renderer:
    """Draws the world into a small buffer and scales it onto the screen."""

    def __init__(self, screen: pygame.Surface, sprites: SpriteSheet, font) -> None:
        self.screen = screen
        self.sprites = sprites
        self.font = font
        self.buffer = pygame.Surface((BUFFER_W, BUFFER_H))
        self._dim_alien_shot = sprites.alien_shot.copy()
        self._dim_alien_shot.fill(HALF_TINT, special_flags=pygame.BLEND_RGB_MULT)

    def draw(self, world) -> pygame.Surface:
        """Render one frame; returns the unscaled buffer."""
        buffer = self.buffer
        buffer.fill(BLACK)

        for star in world.stars:
            level = max(0, min(255, round(star.brightness * 255)))
            buffer.set_at((int(star.x), int(star.y)), (level, level, level))

        for alien in world.aliens:
            if alien.visible():
                buffer.blit(self.sprites.alien[alien.kind], (alien.x, alien.y))

        for shot in world.shots:
            frame = shot.sprite_index
            if shot.ship:
                buffer.blit(self.sprites.ship_shot[frame], (shot.x, shot.y))
            else:
                sprite = self.sprites.alien_shot if frame else self._dim_alien_shot
                buffer.blit(sprite, (shot.x, shot.y))

        for effect in world.effects:
            frames = self.sprites.sparks if effect.spark else self.sprites.explosion
            sprite = frames[effect.sprite_index]
            buffer.blit(
                sprite,
                (effect.x - sprite.get_width() // 2, effect.y - sprite.get_height() // 2),
            )

        ship = world.ship
        if ship.visible():
            buffer.blit(self.sprites.ship, (ship.x, ship.y))

        self._draw_hud(world)
        pygame.transform.scale(buffer, self.screen.get_size(), self.screen)
        return buffer

    def _draw_hud(self, world) -> None:
        buffer = self.buffer
        buffer.blit(self.font.render(world.hud.score_text(), False, WHITE), (1, 1))

        spacing = LIFE_W + 1
        for life in range(world.ship.lives):
            buffer.blit(self.sprites.life, (1 + life * spacing, 10))

        if world.game_over():
            text = self.font.render("G A M E  O V E R", False, WHITE)
            buffer.blit(text, text.get_rect(midtop=(BUFFER_W // 2, BUFFER_H // 2)))


def run(asset_dir) -> None:
    """Open the window and play until the window closes or Escape is pressed."""
    base = Path(asset_dir)
    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((DISP_W, DISP_H))
        except pygame.error as exc:
            raise InitError("display") from exc
        try:
            pygame.mixer.init()
            pygame.mixer.set_num_channels(RESERVED_CHANNELS)
        except pygame.error as exc:
            raise InitError("audio") from exc
        sounds = Sounds.load(base)
        sprites = SpriteSheet.load(base / "spritesheet.png")
        try:
            font = pygame.font.Font(None, 11)
        except (pygame.error, OSError) as exc:
            raise InitError("font") from exc

        world = World(sound=sounds.play)
        keyboard = Keyboard()
        renderer = Renderer(screen, sprites, font)
        clock = pygame.time.Clock()

        while True:
            done = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    done = True
                elif event.type == pygame.KEYDOWN:
                    keyboard.press(event.key)
                elif event.type == pygame.KEYUP:
                    keyboard.release(event.key)
            if done:
                break

            controls = controls_from_keyboard(keyboard)
            world.update(controls)
            if controls.quit:
                break
            keyboard.tick()

            renderer.draw(world)
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        pygame.quit()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="starshooter", description="Vertical space shooter.")
    parser.add_argument(
        "--assets",
        default=".",
        help="directory holding spritesheet.png and the sound files",
    )
    args = parser.parse_args(argv)
    try:
        run(args.assets)
    except InitError as exc:
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())