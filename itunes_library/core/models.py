#!/usr/bin/env python3
"""
Data models for the iTunes library parser.

This module contains the dataclasses for the three entities found in a
library export. Every field is optional; ``None`` means the property was not
present in the document (or could not be read).
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, Optional

from itunes_library.core.coercion import url_to_path


class _Record:
    """Shared helpers for the entity dataclasses."""

    @classmethod
    def field_names(cls) -> list:
        """Names of the record's fields in declaration order."""
        return [f.name for f in fields(cls)]  # type: ignore[arg-type]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a dictionary, excluding unset values."""
        return {
            name: getattr(self, name)
            for name in self.field_names()
            if getattr(self, name) is not None
        }


@dataclass
class Library(_Record):
    """Library-level properties of an export."""

    application_version: Optional[str] = None
    date: Optional[datetime] = None
    features: Optional[int] = None
    library_persistent_id: Optional[str] = None
    major_version: Optional[int] = None
    minor_version: Optional[int] = None
    music_folder: Optional[str] = None
    show_content_ratings: Optional[bool] = None


@dataclass
class Track(_Record):
    """Represents a track with all the properties iTunes exports for it."""

    # Identification
    track_id: Optional[int] = None
    persistent_id: Optional[str] = None
    name: Optional[str] = None
    artist: Optional[str] = None
    album_artist: Optional[str] = None
    album: Optional[str] = None
    composer: Optional[str] = None
    genre: Optional[str] = None
    grouping: Optional[str] = None
    comments: Optional[str] = None
    kind: Optional[str] = None
    track_type: Optional[str] = None
    equalizer: Optional[str] = None

    # Sort names
    sort_name: Optional[str] = None
    sort_artist: Optional[str] = None
    sort_album_artist: Optional[str] = None
    sort_album: Optional[str] = None
    sort_composer: Optional[str] = None
    sort_series: Optional[str] = None

    # Numbering
    year: Optional[int] = None
    track_number: Optional[int] = None
    track_count: Optional[int] = None
    disc_number: Optional[int] = None
    disc_count: Optional[int] = None
    bpm: Optional[int] = None

    # File
    location: Optional[str] = None
    size: Optional[int] = None
    total_time: Optional[int] = None  # in milliseconds
    start_time: Optional[int] = None
    stop_time: Optional[int] = None
    bit_rate: Optional[int] = None
    sample_rate: Optional[int] = None
    file_type: Optional[int] = None
    file_folder_count: Optional[int] = None
    library_folder_count: Optional[int] = None
    artwork_count: Optional[int] = None
    volume_adjustment: Optional[int] = None

    # Dates
    date_added: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    release_date: Optional[datetime] = None

    # Playback statistics
    play_count: Optional[int] = None
    play_date: Optional[int] = None  # seconds since 1904-01-01, local time
    play_date_utc: Optional[datetime] = None
    skip_count: Optional[int] = None
    skip_date: Optional[datetime] = None
    rating: Optional[int] = None
    album_rating: Optional[int] = None
    album_rating_computed: Optional[bool] = None
    loved: Optional[bool] = None
    unplayed: Optional[bool] = None

    # Flags
    compilation: Optional[bool] = None
    clean: Optional[bool] = None
    explicit: Optional[bool] = None
    disabled: Optional[bool] = None
    purchased: Optional[bool] = None
    part_of_gapless_album: Optional[bool] = None

    # Video / podcast
    has_video: Optional[bool] = None
    movie: Optional[bool] = None
    podcast: Optional[bool] = None
    video_height: Optional[int] = None
    video_width: Optional[int] = None
    series: Optional[str] = None
    season: Optional[int] = None
    episode: Optional[str] = None
    episode_order: Optional[int] = None

    @property
    def location_path(self) -> Optional[str]:
        """The location decoded into a filesystem path."""
        return url_to_path(self.location)


@dataclass
class Playlist(_Record):
    """
    Represents a playlist.

    ``playlist_items`` maps track IDs to the Track objects held in the
    parser's track table, in the order the playlist lists them.
    """

    playlist_id: Optional[int] = None
    playlist_persistent_id: Optional[str] = None
    parent_persistent_id: Optional[str] = None
    name: Optional[str] = None
    distinguished_kind: Optional[int] = None

    master: Optional[bool] = None
    visible: Optional[bool] = None
    all_items: Optional[bool] = None
    folder: Optional[bool] = None

    music: Optional[bool] = None
    movies: Optional[bool] = None
    tv_shows: Optional[bool] = None
    podcasts: Optional[bool] = None
    audiobooks: Optional[bool] = None

    smart_info: Optional[str] = None
    smart_criteria: Optional[str] = None

    playlist_items: Dict[int, Optional[Track]] = field(default_factory=dict)

    @property
    def track_items(self) -> Dict[int, Optional[Track]]:
        """Alias of ``playlist_items``."""
        return self.playlist_items

    @property
    def is_smart(self) -> bool:
        return self.smart_criteria is not None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["playlist_items"] = list(self.playlist_items)
        return data
