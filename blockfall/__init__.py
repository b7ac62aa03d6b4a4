"""A falling-block puzzle game with a piece queue, hold slot and wall kicks."""

__version__ = "0.1.0"
__all__ = ["__version__"]