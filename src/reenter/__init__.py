"""reenter: pick an old project back up where you left it."""

__version__ = "0.1.0"
