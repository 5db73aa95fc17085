#!/usr/bin/env python3
"""
Streaming parser for iTunes library XML exports.

The export is a single plist dictionary holding the library properties, a
``Tracks`` dictionary of track dictionaries and a ``Playlists`` array of
playlist dictionaries. The parser makes one forward pass with ``iterparse``
and handles each region when its element ends, detaching processed track and
playlist elements so only the current region is held in memory.
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Tuple, Union
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as ET
from loguru import logger

from itunes_library.core.config import ParserSettings, get_parser_settings
from itunes_library.core.errors import (
    DocumentMalformedError,
    LibrarySourceError,
    MissingRequiredKeyError,
    UnresolvedTrackError,
)
from itunes_library.core.field_mapping import (
    library_mapper,
    playlist_mapper,
    track_mapper,
)
from itunes_library.core.models import Library, Playlist, Track
from itunes_library.core.resolver import TrackReferenceResolver
from itunes_library.core.walker import RegionReport, walk_region

LibrarySource = Union[str, Path, IO[bytes]]

LIBRARY_PATH: Tuple[str, ...] = ("plist", "dict")
TRACKS_PATH: Tuple[str, ...] = ("plist", "dict", "dict")
TRACK_PATH: Tuple[str, ...] = ("plist", "dict", "dict", "dict")
PLAYLISTS_PATH: Tuple[str, ...] = ("plist", "dict", "array")
PLAYLIST_PATH: Tuple[str, ...] = ("plist", "dict", "array", "dict")


@dataclass
class ParseStats:
    """Counters collected during one parse."""

    tracks: int = 0
    playlists: int = 0
    unknown_keys: int = 0
    field_errors: int = 0
    dropped_tracks: int = 0
    dropped_playlists: int = 0
    duplicate_ids: int = 0
    unresolved_references: int = 0

    @property
    def warnings(self) -> int:
        return (
            self.unknown_keys
            + self.field_errors
            + self.dropped_tracks
            + self.dropped_playlists
            + self.unresolved_references
        )

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class LibraryParser:
    """Parser for iTunes XML library files"""

    def __init__(
        self, source: LibrarySource, settings: Optional[ParserSettings] = None
    ):
        self.source = source
        self.settings = settings or get_parser_settings()
        self.stats = ParseStats()

        self._library: Optional[Library] = None
        self._tracks: Dict[int, Track] = {}
        self._playlists: Dict[int, Playlist] = {}

        self._library_mapper = library_mapper(self.settings)
        self._track_mapper = track_mapper(self.settings)
        self._playlist_mapper = playlist_mapper(self.settings)
        self._resolver = TrackReferenceResolver(self._tracks, self.settings)

    def _source_arg(self) -> Any:
        if isinstance(self.source, (str, Path)):
            path = Path(self.source)
            if not path.is_file():
                logger.error(f"❌ XML file not found at: {path}")
                raise LibrarySourceError(f"XML file not found at: {path}")
            return str(path)
        return self.source

    def _reset(self) -> None:
        self.stats = ParseStats()
        self._library = None
        self._tracks.clear()
        self._playlists.clear()
        self._resolver.unresolved = 0

    def parse(self) -> ParseStats:
        """
        Parse the whole document in a single pass.

        Afterwards the results are available from ``get_library()``,
        ``get_tracks()`` and ``get_playlists()``.

        Returns:
            Counters describing what was read and what was skipped.

        Raises:
            LibrarySourceError: If the source file cannot be opened.
            DocumentMalformedError: If the document is not well-formed XML.
        """
        source = self._source_arg()
        self._reset()
        logger.info(f"Parsing library from: {self._describe_source()}")

        path: List[str] = []
        stack: List[Element] = []
        try:
            for event, elem in ET.iterparse(source, events=("start", "end")):
                if event == "start":
                    path.append(elem.tag)
                    stack.append(elem)
                    continue

                current = tuple(path)
                if current == TRACK_PATH:
                    self._handle_track(elem)
                    stack[-2].remove(elem)
                elif current == PLAYLIST_PATH:
                    self._handle_playlist(elem)
                    stack[-2].remove(elem)
                elif current in (TRACKS_PATH, PLAYLISTS_PATH):
                    elem.clear()
                elif current == LIBRARY_PATH:
                    self._handle_library(elem)

                path.pop()
                stack.pop()
        except ET.ParseError as e:
            logger.error(f"❌ Failed to parse XML file: {e}")
            self._reset()
            raise DocumentMalformedError(str(e)) from e
        except DefusedXmlException as e:
            logger.error(f"❌ Refusing unsafe XML construct: {e}")
            self._reset()
            raise DocumentMalformedError(str(e)) from e
        except OSError as e:
            logger.error(f"❌ Failed to read XML file: {e}")
            self._reset()
            raise LibrarySourceError(str(e)) from e

        self.stats.tracks = len(self._tracks)
        self.stats.playlists = len(self._playlists)
        self.stats.unresolved_references = self._resolver.unresolved

        if self._library is None:
            logger.warning("⚠️  No library properties found in document")
        if self.stats.warnings:
            logger.warning(
                f"⚠️  Parsed with {self.stats.warnings} warnings: {self.stats.to_dict()}"
            )
        logger.info(
            f"✅ Library parsing complete. {self.stats.tracks} tracks, "
            f"{self.stats.playlists} playlists."
        )
        return self.stats

    def _describe_source(self) -> str:
        if isinstance(self.source, (str, Path)):
            return str(self.source)
        return getattr(self.source, "name", repr(self.source))

    def _count(self, report: RegionReport) -> None:
        self.stats.unknown_keys += report.unknown
        self.stats.field_errors += report.failed

    def _handle_library(self, elem: Element) -> None:
        library = Library()
        self._count(walk_region(elem, library, self._library_mapper))
        self._library = library
        logger.debug(f"Library {library.library_persistent_id} parsed")

    def _handle_track(self, elem: Element) -> None:
        track = Track()
        self._count(walk_region(elem, track, self._track_mapper))

        if track.track_id is None:
            logger.warning(f"⚠️  {MissingRequiredKeyError('Track', 'Track ID')}")
            self.stats.dropped_tracks += 1
            return

        if track.track_id in self._tracks:
            logger.debug(f"Track {track.track_id} repeated, keeping the last one")
            self.stats.duplicate_ids += 1
        self._tracks[track.track_id] = track

    def _handle_playlist(self, elem: Element) -> None:
        playlist = Playlist()
        report = RegionReport()
        try:
            walk_region(
                elem,
                playlist,
                self._playlist_mapper,
                resolver=self._resolver,
                report=report,
            )
        except UnresolvedTrackError as e:
            self._count(report)
            logger.warning(f"⚠️  {e}, dropping playlist '{playlist.name}'")
            self.stats.dropped_playlists += 1
            return
        self._count(report)

        if playlist.playlist_id is None:
            logger.warning(
                f"⚠️  {MissingRequiredKeyError('Playlist', 'Playlist ID')}"
            )
            self.stats.dropped_playlists += 1
            return

        if playlist.playlist_id in self._playlists:
            logger.debug(
                f"Playlist {playlist.playlist_id} repeated, keeping the last one"
            )
            self.stats.duplicate_ids += 1
        self._playlists[playlist.playlist_id] = playlist

    def get_library(self) -> Optional[Library]:
        """Get the parsed Library, or None if none was parsed."""
        return self._library

    def get_tracks(self) -> Dict[int, Track]:
        """Get the parsed tracks keyed by track ID."""
        return self._tracks

    def get_playlists(self) -> Dict[int, Playlist]:
        """Get the parsed playlists keyed by playlist ID."""
        return self._playlists


def parse_library(
    source: LibrarySource, settings: Optional[ParserSettings] = None
) -> LibraryParser:
    """Create a parser for ``source``, run it and return it."""
    library_parser = LibraryParser(source, settings=settings)
    library_parser.parse()
    return library_parser
