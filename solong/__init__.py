"""A side-scrolling platformer with randomly generated cave levels."""

__version__ = "0.0.5"