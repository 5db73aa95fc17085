"""
Core parsing functionality for iTunes library exports
"""

from .config import MissingTrackPolicy, ParserSettings
from .errors import (
    DocumentMalformedError,
    FieldFormatError,
    ITunesLibraryError,
    LibrarySourceError,
    MissingRequiredKeyError,
    UnknownKeyWarning,
    UnresolvedTrackError,
)
from .models import Library, Playlist, Track
from .parser import LibraryParser, ParseStats, parse_library

__all__ = [
    "DocumentMalformedError",
    "FieldFormatError",
    "ITunesLibraryError",
    "Library",
    "LibraryParser",
    "LibrarySourceError",
    "MissingRequiredKeyError",
    "MissingTrackPolicy",
    "ParseStats",
    "ParserSettings",
    "Playlist",
    "Track",
    "UnknownKeyWarning",
    "UnresolvedTrackError",
    "parse_library",
]
