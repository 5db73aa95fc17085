#!/usr/bin/env python3
"""
Field tables mapping export property keys onto entity attributes.

Each table maps an exact, case-sensitive key name to a ``FieldSpec``: the
attribute it sets and the kind its raw value is coerced to.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from loguru import logger

from itunes_library.core.coercion import FieldKind, coerce
from itunes_library.core.config import ParserSettings
from itunes_library.core.errors import FieldFormatError, UnknownKeyWarning

_WHITESPACE_RE = re.compile(r"\s+")


def strip_whitespace(value: str) -> str:
    """Remove all whitespace, e.g. line breaks wrapping base64 data."""
    return _WHITESPACE_RE.sub("", value)


@dataclass(frozen=True)
class FieldSpec:
    """How one property key is stored on a record."""

    attribute: Optional[str]
    kind: FieldKind
    transform: Optional[Callable[[str], str]] = None


def _f(
    attribute: Optional[str],
    kind: FieldKind = FieldKind.STRING,
    transform: Optional[Callable[[str], str]] = None,
) -> FieldSpec:
    return FieldSpec(attribute, kind, transform)


STR, INT, LONG, BOOL, DATE, URL = (
    FieldKind.STRING,
    FieldKind.INTEGER,
    FieldKind.LONG,
    FieldKind.BOOLEAN,
    FieldKind.TIMESTAMP,
    FieldKind.URL,
)

LIBRARY_FIELDS: Dict[str, FieldSpec] = {
    "Major Version": _f("major_version", INT),
    "Minor Version": _f("minor_version", INT),
    "Date": _f("date", DATE),
    "Application Version": _f("application_version", STR),
    "Features": _f("features", INT),
    "Show Content Ratings": _f("show_content_ratings", BOOL),
    "Music Folder": _f("music_folder", URL),
    "Library Persistent ID": _f("library_persistent_id", STR),
}

TRACK_FIELDS: Dict[str, FieldSpec] = {
    "Album": _f("album", STR),
    "Album Artist": _f("album_artist", STR),
    "Album Rating": _f("album_rating", INT),
    "Album Rating Computed": _f("album_rating_computed", BOOL),
    "Artist": _f("artist", STR),
    "Artwork Count": _f("artwork_count", INT),
    "Bit Rate": _f("bit_rate", INT),
    "BPM": _f("bpm", INT),
    "Comments": _f("comments", STR),
    "Compilation": _f("compilation", BOOL),
    "Composer": _f("composer", STR),
    "Clean": _f("clean", BOOL),
    "Date Added": _f("date_added", DATE),
    "Date Modified": _f("date_modified", DATE),
    "Disc Count": _f("disc_count", INT),
    "Disc Number": _f("disc_number", INT),
    "Disabled": _f("disabled", BOOL),
    "Episode": _f("episode", STR),
    "Episode Order": _f("episode_order", INT),
    "Equalizer": _f("equalizer", STR),
    "Explicit": _f("explicit", BOOL),
    "File Folder Count": _f("file_folder_count", INT),
    "File Type": _f("file_type", LONG),
    "Genre": _f("genre", STR),
    "Grouping": _f("grouping", STR),
    "Kind": _f("kind", STR),
    "Library Folder Count": _f("library_folder_count", INT),
    "Location": _f("location", URL),
    "Loved": _f("loved", BOOL),
    "Name": _f("name", STR),
    "Part Of Gapless Album": _f("part_of_gapless_album", BOOL),
    "Persistent ID": _f("persistent_id", STR),
    "Play Count": _f("play_count", INT),
    "Play Date": _f("play_date", LONG),
    "Play Date UTC": _f("play_date_utc", DATE),
    "Purchased": _f("purchased", BOOL),
    "Rating": _f("rating", INT),
    "Release Date": _f("release_date", DATE),
    "Sample Rate": _f("sample_rate", INT),
    "Size": _f("size", LONG),
    "Skip Count": _f("skip_count", INT),
    "Skip Date": _f("skip_date", DATE),
    "Season": _f("season", INT),
    "Series": _f("series", STR),
    "Sort Album": _f("sort_album", STR),
    "Sort Album Artist": _f("sort_album_artist", STR),
    "Sort Artist": _f("sort_artist", STR),
    "Sort Composer": _f("sort_composer", STR),
    "Sort Name": _f("sort_name", STR),
    "Sort Series": _f("sort_series", STR),
    "Start Time": _f("start_time", LONG),
    "Stop Time": _f("stop_time", LONG),
    "Total Time": _f("total_time", LONG),
    "Track Count": _f("track_count", INT),
    "Track ID": _f("track_id", INT),
    "Track Number": _f("track_number", INT),
    "Track Type": _f("track_type", STR),
    "Volume Adjustment": _f("volume_adjustment", INT),
    "Year": _f("year", INT),
    "Has Video": _f("has_video", BOOL),
    "Movie": _f("movie", BOOL),
    "Video Height": _f("video_height", INT),
    "Video Width": _f("video_width", INT),
    "Unplayed": _f("unplayed", BOOL),
    "Podcast": _f("podcast", BOOL),
}

PLAYLIST_FIELDS: Dict[str, FieldSpec] = {
    "All Items": _f("all_items", BOOL),
    "Audiobooks": _f("audiobooks", BOOL),
    "Distinguished Kind": _f("distinguished_kind", INT),
    "Folder": _f("folder", BOOL),
    "Master": _f("master", BOOL),
    "Movies": _f("movies", BOOL),
    "Music": _f("music", BOOL),
    "Name": _f("name", STR),
    "Parent Persistent ID": _f("parent_persistent_id", STR),
    "Playlist ID": _f("playlist_id", INT),
    # Items are resolved from the nested array, not set from a scalar
    "Playlist Items": _f(None, FieldKind.INERT),
    "Playlist Persistent ID": _f("playlist_persistent_id", STR),
    "Podcasts": _f("podcasts", BOOL),
    "Smart Criteria": _f("smart_criteria", STR, strip_whitespace),
    "Smart Info": _f("smart_info", STR, strip_whitespace),
    "TV Shows": _f("tv_shows", BOOL),
    "Visible": _f("visible", BOOL),
}


class FieldMapper:
    """Applies key/value pairs to records of one entity type."""

    def __init__(
        self, entity: str, table: Dict[str, FieldSpec], settings: ParserSettings
    ):
        self.entity = entity
        self.table = table
        self.settings = settings

    def apply(self, record: Any, key: str, raw: Optional[str]) -> bool:
        """
        Set the field named by ``key`` on ``record``.

        Args:
            record: The record under construction.
            key: The property key from the document.
            raw: The raw text value.

        Returns:
            True if the key is known, False if it was skipped as unknown.

        Raises:
            FieldFormatError: If the raw value cannot be coerced.
        """
        spec = self.table.get(key)
        if spec is None:
            logger.warning(str(UnknownKeyWarning(self.entity, key, raw)))
            return False

        if spec.attribute is None:
            return True

        value = raw
        if spec.transform is not None and value is not None:
            value = spec.transform(value)

        try:
            typed = coerce(spec.kind, value, self.settings)
        except FieldFormatError as e:
            raise e.with_key(key) from e

        setattr(record, spec.attribute, typed)
        return True


def library_mapper(settings: ParserSettings) -> FieldMapper:
    return FieldMapper("Library", LIBRARY_FIELDS, settings)


def track_mapper(settings: ParserSettings) -> FieldMapper:
    return FieldMapper("Track", TRACK_FIELDS, settings)


def playlist_mapper(settings: ParserSettings) -> FieldMapper:
    return FieldMapper("Playlist", PLAYLIST_FIELDS, settings)
