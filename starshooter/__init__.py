"""A small arcade space shooter with a playable game, a welcome screen and a two-scene template."""

__version__ = "0.1.0"