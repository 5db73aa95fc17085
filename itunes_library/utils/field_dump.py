#!/usr/bin/env python3
"""
Field enumeration for diagnostics.

Lists a record's fields under their export key names, using the same field
tables the parser uses, so a dump reads like the source document.
"""

from typing import Any, Dict, List, Optional, Tuple

from itunes_library.core.coercion import to_text
from itunes_library.core.config import ParserSettings
from itunes_library.core.field_mapping import (
    LIBRARY_FIELDS,
    PLAYLIST_FIELDS,
    TRACK_FIELDS,
    FieldSpec,
)
from itunes_library.core.models import Library, Playlist, Track

_TABLES: Dict[type, Dict[str, FieldSpec]] = {
    Library: LIBRARY_FIELDS,
    Track: TRACK_FIELDS,
    Playlist: PLAYLIST_FIELDS,
}


def describe(
    record: Any,
    settings: Optional[ParserSettings] = None,
    include_unset: bool = False,
) -> List[Tuple[str, Optional[str]]]:
    """
    List ``(key, text)`` pairs for a Library, Track or Playlist.

    Args:
        record: The record to describe.
        settings: Settings used to render timestamps.
        include_unset: Include fields that have no value.

    Returns:
        Pairs ordered by the record's field declaration order.
    """
    settings = settings or ParserSettings()
    table = _TABLES.get(type(record))
    if table is None:
        raise TypeError(f"Cannot describe {type(record).__name__}")

    by_attribute = {
        spec.attribute: (key, spec) for key, spec in table.items() if spec.attribute
    }

    rows: List[Tuple[str, Optional[str]]] = []
    for name in record.field_names():
        if name not in by_attribute:
            continue
        key, spec = by_attribute[name]
        value = getattr(record, name)
        if value is None and not include_unset:
            continue
        rows.append((key, to_text(spec.kind, value, settings)))
    return rows
