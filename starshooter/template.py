"""A two-scene shooter skeleton: a title menu and a playfield with a plane and enemies."""

from __future__ import annotations

import argparse
import math
import random
import sys
import time
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Collection, Optional

import pygame

FPS = 60
SCREEN_W = 800
SCREEN_H = 600
RESERVE_SAMPLES = 10
MAX_ENEMY = 3
PLANE_SPEED = 4
DIAGONAL_FACTOR = 0.71  # roughly 1 / sqrt(2)
WINDOW_TITLE = "I2P(I)_2020 Final Project <student_id>"
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


class Scene(IntEnum):
    MENU = 1
    START = 2


class GameAborted(RuntimeError):
    """The game hit an error it cannot recover from."""


class ResourceError(RuntimeError):
    """A resource file could not be loaded."""


class GameLogger:
    """Writes messages to a log file, started afresh each run, and to a stream."""

    def __init__(
        self,
        path="log.txt",
        enabled: bool = True,
        stream=None,
        error_stream=None,
        abort_delay: float = 2.0,
    ) -> None:
        self.path = Path(path)
        self.enabled = enabled
        self._stream = stream
        self._error_stream = error_stream
        self.abort_delay = abort_delay
        self._clear_file = True

    def log(self, message) -> None:
        if not self.enabled:
            return
        try:
            with self.path.open("w" if self._clear_file else "a", encoding="utf-8") as handle:
                handle.write(f"{message}\n")
        except OSError:
            pass
        stream = self._stream if self._stream is not None else sys.stdout
        print(message, file=stream)
        self._clear_file = False

    def abort(self, message):
        """Log the message, warn, wait a moment and raise GameAborted."""
        self.log(message)
        error_stream = self._error_stream if self._error_stream is not None else sys.stderr
        error_stream.write("error occurred, exiting after 2 secs")
        error_stream.flush()
        if self.abort_delay > 0:
            time.sleep(self.abort_delay)
        raise GameAborted(message)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class MovableObject:
    """An object positioned by its centre, with a size, a velocity and an image."""

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    hidden: bool = False
    img: Optional[pygame.Surface] = None

    def draw_position(self) -> tuple[int, int]:
        """Top-left corner at which the image is drawn."""
        return _round_half_away(self.x - self.w / 2), _round_half_away(self.y - self.h / 2)


def load_bitmap_resized(filename, width, height) -> pygame.Surface:
    """Load an image and scale it to width by height."""
    try:
        loaded = pygame.image.load(str(filename))
    except (pygame.error, OSError, FileNotFoundError) as exc:
        raise ResourceError(f"failed to load image: {filename}") from exc
    return pygame.transform.scale(loaded, (int(width), int(height)))


def plane_velocity(up, down, left, right) -> tuple[int, int]:
    """Unit direction (vx, vy) from the four direction inputs."""
    vx = int(bool(right)) - int(bool(left))
    vy = int(bool(down)) - int(bool(up))
    return vx, vy


@dataclass
class Assets:
    """Fonts, images and music used by the scenes."""

    font_32: object
    font_24: object
    main_background: pygame.Surface
    main_bgm: object
    start_background: pygame.Surface
    plane: pygame.Surface
    enemy: pygame.Surface
    start_bgm: object

    @classmethod
    def load(cls, asset_dir, logger: GameLogger) -> "Assets":
        base = Path(asset_dir)

        def font(size):
            try:
                return pygame.font.Font(str(base / "pirulen.ttf"), size)
            except (pygame.error, OSError, FileNotFoundError):
                logger.abort(f"failed to load font: pirulen.ttf with size {size}")

        def resized(name):
            try:
                image = load_bitmap_resized(base / name, SCREEN_W, SCREEN_H)
            except ResourceError:
                logger.abort(f"failed to load image: {name}")
            logger.log(f"resized image: {name}")
            return image

        def image(name):
            try:
                return pygame.image.load(str(base / name))
            except (pygame.error, OSError, FileNotFoundError):
                logger.abort(f"failed to load image: {name}")

        def sound(name):
            try:
                return pygame.mixer.Sound(str(base / name))
            except (pygame.error, OSError, FileNotFoundError):
                logger.abort(f"failed to load audio: {name}")

        font_32 = font(32)
        font_24 = font(24)
        main_background = resized("main-bg.jpg")
        main_bgm = sound("S31-Night Prowler.ogg")
        start_background = resized("start-bg.jpg")
        plane = image("plane.png")
        enemy = image("smallfighter0006.png")
        start_bgm = sound("mythica.ogg")
        return cls(
            font_32, font_24, main_background, main_bgm,
            start_background, plane, enemy, start_bgm,
        )


class TemplateGame:
    """Scene switching, plane movement and drawing."""

    def __init__(self, assets: Assets, logger: Optional[GameLogger] = None, rng=None) -> None:
        self.assets = assets
        self.logger = logger if logger is not None else GameLogger()
        self.rng = rng if rng is not None else random.Random()
        self.active_scene: Optional[Scene] = None
        self.plane = MovableObject()
        self.enemies: list[MovableObject] = [MovableObject() for _ in range(MAX_ENEMY)]
        self._bgm_channel = None
        self.change_scene(Scene.MENU)

    def change_scene(self, next_scene) -> None:
        current = int(self.active_scene) if self.active_scene is not None else 0
        self.logger.log(f"Change scene from {current} to {int(next_scene)}")
        if self.active_scene in (Scene.MENU, Scene.START):
            if self._bgm_channel is not None:
                self._bgm_channel.stop()
                self._bgm_channel = None
            self.logger.log("stop audio (bgm)")

        self.active_scene = Scene(next_scene)
        if self.active_scene is Scene.MENU:
            self._play_bgm(self.assets.main_bgm)
        elif self.active_scene is Scene.START:
            self._enter_start()
            self._play_bgm(self.assets.start_bgm)

    def _play_bgm(self, sample) -> None:
        channel = sample.play(loops=-1)
        if channel is None:
            self.logger.abort("failed to play audio (bgm)")
        self._bgm_channel = channel

    def _enter_start(self) -> None:
        plane_img = self.assets.plane
        self.plane = MovableObject(
            x=400, y=500, w=plane_img.get_width(), h=plane_img.get_height(), img=plane_img
        )
        enemy_img = self.assets.enemy
        width, height = enemy_img.get_width(), enemy_img.get_height()
        self.enemies = [
            MovableObject(
                x=width / 2 + self.rng.random() * (SCREEN_W - width),
                y=80,
                w=width,
                h=height,
                img=enemy_img,
            )
            for _ in range(MAX_ENEMY)
        ]

    def on_key_down(self, keycode) -> None:
        self.logger.log(f"Key with keycode {keycode} down")
        if self.active_scene is Scene.MENU and keycode == pygame.K_RETURN:
            self.change_scene(Scene.START)

    def on_mouse_down(self, button, x, y) -> None:
        self.logger.log(f"Mouse button {button} down at ({x}, {y})")

    def update(self, keys: Collection[int]) -> None:
        """Advance one frame given the set of keycodes currently held."""
        if self.active_scene is not Scene.START:
            return

        def held(*codes):
            return any(code in keys for code in codes)

        plane = self.plane
        plane.vx, plane.vy = plane_velocity(
            held(pygame.K_UP, pygame.K_w),
            held(pygame.K_DOWN, pygame.K_s),
            held(pygame.K_LEFT, pygame.K_a),
            held(pygame.K_RIGHT, pygame.K_d),
        )
        plane.y += plane.vy * PLANE_SPEED * (DIAGONAL_FACTOR if plane.vx else 1)
        plane.x += plane.vx * PLANE_SPEED * (DIAGONAL_FACTOR if plane.vy else 1)

    def draw(self, surface) -> None:
        if self.active_scene is Scene.MENU:
            surface.blit(self.assets.main_background, (0, 0))
            title = self.assets.font_32.render("Space Shooter", True, WHITE)
            surface.blit(title, title.get_rect(midtop=(SCREEN_W // 2, 30)))
            hint = self.assets.font_24.render("Press enter key to start", True, WHITE)
            surface.blit(hint, (20, SCREEN_H - 50))
        elif self.active_scene is Scene.START:
            surface.blit(self.assets.start_background, (0, 0))
            for obj in (self.plane, *self.enemies):
                if obj.hidden or obj.img is None:
                    continue
                surface.blit(obj.img, obj.draw_position())


def _event_loop(game: TemplateGame, screen, logger: GameLogger) -> None:
    keys: set[int] = set()
    mouse_buttons: set[int] = set()
    clock = pygame.time.Clock()
    done = False
    while not done:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.log("Window close button clicked")
                done = True
            elif event.type == pygame.KEYDOWN:
                keys.add(event.key)
                game.on_key_down(event.key)
            elif event.type == pygame.KEYUP:
                logger.log(f"Key with keycode {event.key} up")
                keys.discard(event.key)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                mouse_buttons.add(event.button)
                game.on_mouse_down(event.button, *event.pos)
            elif event.type == pygame.MOUSEBUTTONUP:
                logger.log(f"Mouse button {event.button} up at ({event.pos[0]}, {event.pos[1]})")
                mouse_buttons.discard(event.button)
            elif event.type == pygame.MOUSEWHEEL:
                x, y = pygame.mouse.get_pos()
                logger.log(f"Mouse scroll at ({x}, {y}) with delta {event.y}")
        if done:
            break
        game.update(keys)
        game.draw(screen)
        pygame.display.flip()
        clock.tick(FPS)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="starshooter-template")
    parser.add_argument("--assets", default=".", help="directory holding fonts, images and music")
    parser.add_argument("--log", default="log.txt", help="log file path")
    args = parser.parse_args(argv)

    logger = GameLogger(args.log)
    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
        except pygame.error:
            logger.abort("failed to create display")
        pygame.display.set_caption(WINDOW_TITLE)
        try:
            pygame.mixer.init()
            pygame.mixer.set_num_channels(RESERVE_SAMPLES)
        except pygame.error:
            logger.abort("failed to initialize audio add-on")
        logger.log("Engine initialized")
        logger.log("Game begin")
        assets = Assets.load(args.assets, logger)
        game = TemplateGame(assets, logger, random.Random())
        logger.log("Game initialized")
        game.draw(screen)
        pygame.display.flip()
        logger.log("Game start event loop")
        _event_loop(game, screen, logger)
        logger.log("Game end")
    except GameAborted:
        return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())