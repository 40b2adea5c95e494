"""vnbook - Content-driven visual novel reader with a playthrough scoreboard."""

__version__ = "0.1.0"
