import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from starshooter.welcome import MESSAGE, render_welcome


@pytest.fixture
def font():
    pygame.font.init()
    return pygame.font.Font(None, 16)


def test_greeting_is_centred_horizontally(font):
    surface = pygame.Surface((800, 600))
    rect = render_welcome(surface, font)
    assert rect.centerx == 400
    assert rect.top == 300


def test_background_is_cleared_to_black(font):
    surface = pygame.Surface((800, 600))
    surface.fill((255, 255, 255))
    render_welcome(surface, font)
    assert tuple(surface.get_at((0, 0)))[:3] == (0, 0, 0)
    assert tuple(surface.get_at((799, 599)))[:3] == (0, 0, 0)


def test_greeting_text_is_white(font):
    surface = pygame.Surface((800, 600))
    rect = render_welcome(surface, font)
    colours = {
        tuple(surface.get_at((x, y)))[:3]
        for x in range(rect.left, rect.right)
        for y in range(rect.top, rect.bottom)
    }
    assert (255, 255, 255) in colours


def test_rect_matches_rendered_message_size(font):
    surface = pygame.Surface((800, 600))
    rect = render_welcome(surface, font)
    assert rect.size == font.size(MESSAGE)