"""Terminal emulator core: colour themes, settings, shortcuts and panel layout."""

__version__ = "0.1.0"