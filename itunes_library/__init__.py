#!/usr/bin/env python3
"""
iTunes Library Parser

Reads an iTunes "Library.xml" export in a single streaming pass and exposes
its library properties, tracks and playlists as Python objects.
"""

__version__ = "1.1.0"

from .core import (
    Library,
    LibraryParser,
    ParserSettings,
    Playlist,
    Track,
    parse_library,
)

__all__ = [
    "Library",
    "LibraryParser",
    "ParserSettings",
    "Playlist",
    "Track",
    "parse_library",
]
