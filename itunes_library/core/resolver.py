#!/usr/bin/env python3
"""
Resolution of playlist track references against the parsed track table.
"""

from typing import Dict, Mapping, Optional
from xml.etree.ElementTree import Element

from loguru import logger

from itunes_library.core.coercion import FieldKind, coerce
from itunes_library.core.config import MissingTrackPolicy, ParserSettings
from itunes_library.core.errors import FieldFormatError, UnresolvedTrackError
from itunes_library.core.models import Playlist, Track
from itunes_library.core.walker import iter_pairs

TRACK_ID_KEY = "Track ID"


class TrackReferenceResolver:
    """Rebuilds a playlist's ordered track mapping from its ``<array>``."""

    def __init__(
        self,
        tracks: Mapping[int, Track],
        settings: Optional[ParserSettings] = None,
    ):
        self.tracks = tracks
        self.settings = settings or ParserSettings()
        self.unresolved = 0

    @property
    def policy(self) -> MissingTrackPolicy:
        return self.settings.missing_track_policy

    def _reference_text(self, entry: Element) -> Optional[str]:
        """Get the raw track ID text of one array entry."""
        for pair in iter_pairs(entry):
            if pair.key == TRACK_ID_KEY:
                return pair.raw

        # The exporter writes exactly one pair per entry
        children = list(entry)
        if len(children) > 1:
            return children[1].text
        return None

    def resolve(
        self, array_element: Element, playlist_id: Optional[int] = None
    ) -> Dict[int, Optional[Track]]:
        """
        Map each referenced track ID to its Track, in array order.

        Args:
            array_element: The ``<array>`` of ``<dict>`` references.
            playlist_id: ID of the owning playlist, for log messages.

        Returns:
            Ordered mapping of track ID to the shared Track object, or to None
            for unresolved IDs under the ``null`` policy.

        Raises:
            UnresolvedTrackError: Under the ``fail`` policy, for the first
                unresolved ID.
        """
        items: Dict[int, Optional[Track]] = {}

        for entry in array_element:
            raw = self._reference_text(entry)
            try:
                track_id = coerce(FieldKind.INTEGER, raw, self.settings)
            except FieldFormatError as e:
                logger.warning(
                    f"⚠️  Playlist {playlist_id}: skipping bad track reference {e}"
                )
                continue

            track = self.tracks.get(track_id)
            if track is None:
                self.unresolved += 1
                if self.policy is MissingTrackPolicy.FAIL:
                    raise UnresolvedTrackError(playlist_id, track_id)
                logger.warning(
                    f"⚠️  Playlist {playlist_id} references unknown track {track_id}"
                )
                if self.policy is MissingTrackPolicy.DROP:
                    continue

            items[track_id] = track

        return items

    def apply(self, array_element: Element, playlist: Playlist) -> Dict[int, Optional[Track]]:
        """Resolve the array and assign the result to the playlist."""
        playlist.playlist_items = self.resolve(array_element, playlist.playlist_id)
        return playlist.playlist_items
