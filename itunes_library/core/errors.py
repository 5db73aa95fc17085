"""
Exception types raised and logged while parsing an iTunes library export.
"""

from typing import Optional


class ITunesLibraryError(Exception):
    """Base exception for iTunes library parsing errors."""


class LibrarySourceError(ITunesLibraryError):
    """Raised when the library source cannot be opened."""


class DocumentMalformedError(ITunesLibraryError):
    """Raised when the library document is not well-formed XML."""


class FieldFormatError(ITunesLibraryError):
    """Raised when a raw value cannot be coerced to its field kind."""

    def __init__(
        self,
        raw: Optional[str],
        kind: str,
        reason: str,
        key: Optional[str] = None,
    ):
        self.raw = raw
        self.kind = kind
        self.reason = reason
        self.key = key
        super().__init__(self._format())

    def _format(self) -> str:
        prefix = f"'{self.key}': " if self.key else ""
        return f"{prefix}cannot read {self.raw!r} as {self.kind} ({self.reason})"

    def with_key(self, key: str) -> "FieldFormatError":
        """Return a copy of this error bound to a property key."""
        return FieldFormatError(self.raw, self.kind, self.reason, key=key)


class MissingRequiredKeyError(ITunesLibraryError):
    """A track or playlist region has no ID and cannot be indexed."""

    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} record without '{key}' dropped")


class UnresolvedTrackError(ITunesLibraryError):
    """A playlist references a track ID absent from the track table."""

    def __init__(self, playlist_id: Optional[int], track_id: int):
        self.playlist_id = playlist_id
        self.track_id = track_id
        super().__init__(
            f"Playlist {playlist_id} references unknown track {track_id}"
        )


class UnknownKeyWarning(UserWarning):
    """A property key is not part of the entity's field table."""

    def __init__(self, entity: str, key: str, raw: Optional[str]):
        self.entity = entity
        self.key = key
        self.raw = raw
        super().__init__(f"Unknown {entity} key '{key}' with value '{raw}'")
