"""A window that greets the player for a few seconds."""

from __future__ import annotations

import argparse
import sys

import pygame

WINDOW_W = 800
WINDOW_H = 600
MESSAGE = "Welcome to Allegro!"


def render_welcome(surface, font) -> pygame.Rect:
    """Clear the surface and write the greeting centred; returns the text's area."""
    surface.fill((0, 0, 0))
    text = font.render(MESSAGE, True, (255, 255, 255))
    rect = text.get_rect(midtop=(surface.get_width() // 2, surface.get_height() // 2))
    surface.blit(text, rect)
    return rect


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="starshooter-welcome")
    parser.add_argument("--seconds", type=float, default=5.0, help="how long to show the window")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
        font = pygame.font.Font(None, 16)
        render_welcome(screen, font)
        pygame.display.flip()
        pygame.time.wait(int(args.seconds * 1000))
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())