"""Dragon Runner - a side-scrolling runner minigame."""

__version__ = "0.1.0"
