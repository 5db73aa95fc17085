#!/usr/bin/env python3
"""
Key/value pair walking over plist ``<dict>`` elements.

A plist dictionary is a flat run of siblings: ``<key>`` followed by its value
element. Booleans are encoded by the tag itself (``<true/>``/``<false/>``).
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, NamedTuple, Optional
from xml.etree.ElementTree import Element

from loguru import logger

from itunes_library.core.errors import FieldFormatError

if TYPE_CHECKING:
    from itunes_library.core.field_mapping import FieldMapper
    from itunes_library.core.resolver import TrackReferenceResolver

KEY_TAG = "key"
ARRAY_TAG = "array"
BOOLEAN_TAGS = ("true", "false")

# Keys introducing the track and playlist containers, not scalar properties
RESERVED_KEYS = ("Tracks", "Playlists")


class Pair(NamedTuple):
    """A key with either its raw text value or a nested track array."""

    key: str
    raw: Optional[str]
    array: Optional[Element] = None


@dataclass
class RegionReport:
    """Outcome of applying one region's pairs to a record."""

    applied: int = 0
    unknown: int = 0
    failed: int = 0
    track_arrays: int = 0


def iter_pairs(element: Element, expect_track_array: bool = False) -> Iterator[Pair]:
    """
    Yield the key/value pairs held by a plist ``<dict>`` element.

    Args:
        element: The dictionary element.
        expect_track_array: If True, an ``<array>`` value is yielded as a
            track array instead of its text.

    Yields:
        Pair tuples in document order.
    """
    children = list(element)
    i = 0
    while i < len(children):
        child = children[i]
        if child.tag != KEY_TAG:
            i += 1
            continue

        key = child.text or ""
        if key in RESERVED_KEYS:
            i += 1
            continue

        if i + 1 >= len(children):
            logger.warning(f"⚠️  Key '{key}' has no value element, ignoring it")
            break

        value_elem = children[i + 1]
        if value_elem.tag in BOOLEAN_TAGS:
            yield Pair(key, value_elem.tag)
        elif expect_track_array and value_elem.tag == ARRAY_TAG:
            yield Pair(key, None, value_elem)
        else:
            yield Pair(key, value_elem.text or "")
        i += 2


def walk_region(
    element: Element,
    record: Any,
    mapper: "FieldMapper",
    resolver: Optional["TrackReferenceResolver"] = None,
    report: Optional[RegionReport] = None,
) -> RegionReport:
    """
    Apply every pair of a region element to a record.

    Field format errors are logged and counted; the field stays unset and the
    walk continues. Track arrays are handed to ``resolver`` when one is given.
    Pass ``report`` to keep the counts gathered before an error raised by
    the resolver.
    """
    if report is None:
        report = RegionReport()

    for pair in iter_pairs(element, expect_track_array=resolver is not None):
        if pair.array is not None and resolver is not None:
            resolver.apply(pair.array, record)
            report.track_arrays += 1
            continue

        try:
            known = mapper.apply(record, pair.key, pair.raw)
        except FieldFormatError as e:
            logger.warning(f"⚠️  Skipping {mapper.entity} field {e}")
            report.failed += 1
            continue

        if known:
            report.applied += 1
        else:
            report.unknown += 1

    return report
