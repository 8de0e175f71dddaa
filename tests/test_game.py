import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from starshooter.entities import Keyboard
from starshooter.game import (
    DISP_H,
    DISP_W,
    InitError,
    Renderer,
    Sounds,
    SpriteSheet,
    controls_from_keyboard,
)
from starshooter.world import World

RED = (255, 0, 0)


@pytest.fixture
def sheet():
    surface = pygame.Surface((64, 64))
    surface.fill(RED)
    return SpriteSheet(surface)


@pytest.fixture
def font():
    pygame.font.init()
    return pygame.font.Font(None, 11)


class FakeSample:
    def __init__(self):
        self.volume = None
        self.plays = 0

    def set_volume(self, volume):
        self.volume = volume

    def play(self):
        self.plays += 1


def test_grab_returns_region_of_requested_size(sheet):
    sprite = sheet.grab(2, 3, 5, 7)
    assert sprite.get_size() == (5, 7)


def test_named_sprites_have_source_sizes(sheet):
    assert sheet.ship.get_size() == (12, 13)
    assert [s.get_size() for s in sheet.sparks] == [(10, 8), (7, 8), (9, 8)]
    assert len(sheet.explosion) == 4


def test_grab_outside_sheet_raises(sheet):
    with pytest.raises(InitError) as info:
        sheet.grab(60, 60, 10, 10)
    assert info.value.description == "sprite grab"


def test_sheet_too_small_raises():
    with pytest.raises(InitError):
        SpriteSheet(pygame.Surface((10, 10)))


def test_missing_sheet_file_raises(tmp_path):
    with pytest.raises(InitError) as info:
        SpriteSheet.load(tmp_path / "spritesheet.png")
    assert str(info.value) == "couldn't initialize spritesheet"


def test_missing_sound_files_raise(tmp_path):
    with pytest.raises(InitError) as info:
        Sounds.load(tmp_path)
    assert info.value.description == "shot sample"


def test_sounds_play_sets_volume_and_plays():
    shot = FakeSample()
    sounds = Sounds({"shot": shot})
    sounds.play("shot", 0.3, 1.0)
    assert shot.volume == 0.3
    assert shot.plays == 1


def test_sounds_unknown_name_raises():
    with pytest.raises(KeyError):
        Sounds({}).play("shot", 0.3, 1.0)


def test_world_uses_sounds_as_hook():
    shot = FakeSample()
    sounds = Sounds({"shot": shot})
    world = World(sound=sounds.play)
    world.shots.add(True, False, 100, 100)
    assert shot.plays == 1


def test_controls_follow_keyboard():
    keyboard = Keyboard()
    keyboard.press(pygame.K_LEFT)
    keyboard.press(pygame.K_x)
    controls = controls_from_keyboard(keyboard)
    assert controls.left and controls.fire
    assert not controls.right and not controls.quit


def test_controls_released_after_tick():
    keyboard = Keyboard()
    keyboard.press(pygame.K_ESCAPE)
    keyboard.release(pygame.K_ESCAPE)
    assert controls_from_keyboard(keyboard).quit
    keyboard.tick()
    assert not controls_from_keyboard(keyboard).quit


def test_renderer_draws_ship_scaled(sheet, font):
    screen = pygame.Surface((DISP_W, DISP_H))
    world = World()
    renderer = Renderer(screen, sheet, font)
    buffer = renderer.draw(world)
    ship = world.ship
    assert tuple(buffer.get_at((ship.x + 5, ship.y + 5)))[:3] == RED
    scaled = screen.get_at(((ship.x + 5) * 3 + 1, (ship.y + 5) * 3 + 1))
    assert tuple(scaled)[:3] == RED


def test_renderer_draws_life_icons(sheet, font):
    screen = pygame.Surface((DISP_W, DISP_H))
    world = World()
    renderer = Renderer(screen, sheet, font)
    buffer = renderer.draw(world)
    assert tuple(buffer.get_at((16, 14)))[:3] == RED

    world.ship.lives = 0
    buffer = renderer.draw(world)
    assert tuple(buffer.get_at((16, 14)))[:3] == (0, 0, 0)


def test_renderer_dims_alien_shot_on_first_frame(sheet, font):
    screen = pygame.Surface((DISP_W, DISP_H))
    world = World()
    world.shots.add(False, True, 100, 100)
    shot = next(iter(world.shots))
    buffer = renderer_draw = Renderer(screen, sheet, font).draw(world)
    red = buffer.get_at((shot.x + 1, shot.y + 1)).r
    assert renderer_draw is buffer
    assert 0 < red < 255