#!/usr/bin/env python3
"""
Typed-value coercion for iTunes library property values.

Every raw value in the export is text (or a ``<true/>``/``<false/>`` tag that
the walker turns into text). This module converts that text into the Python
type a field expects and renders it back into its canonical text form.
"""

import re
import urllib.parse
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from itunes_library.core.config import ParserSettings
from itunes_library.core.errors import FieldFormatError

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Schemes that address a host and therefore need a network location
_NETWORK_SCHEMES = {"http", "https", "ftp"}


class FieldKind(str, Enum):
    """Target type of a property value."""

    STRING = "string"
    INTEGER = "integer"
    LONG = "long"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    URL = "url"
    INERT = "inert"


def _coerce_boolean(raw: str) -> bool:
    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise FieldFormatError(raw, FieldKind.BOOLEAN.value, "expected true or false")


def _coerce_integer(raw: str, kind: FieldKind, low: int, high: int) -> int:
    if not _INTEGER_RE.fullmatch(raw):
        raise FieldFormatError(raw, kind.value, "not a base-10 number")
    value = int(raw)
    if not low <= value <= high:
        raise FieldFormatError(raw, kind.value, "out of range")
    return value


def _coerce_timestamp(raw: str, settings: ParserSettings) -> datetime:
    try:
        parsed = datetime.strptime(raw, settings.date_format)
    except ValueError as e:
        raise FieldFormatError(raw, FieldKind.TIMESTAMP.value, str(e)) from e
    return parsed.replace(tzinfo=settings.tzinfo)


def _coerce_url(raw: str, settings: ParserSettings) -> str:
    try:
        parts = urllib.parse.urlsplit(raw)
    except ValueError as e:
        raise FieldFormatError(raw, FieldKind.URL.value, str(e)) from e

    if not parts.scheme:
        raise FieldFormatError(raw, FieldKind.URL.value, "no scheme")
    if parts.scheme.lower() not in settings.url_schemes:
        raise FieldFormatError(
            raw, FieldKind.URL.value, f"unsupported scheme '{parts.scheme}'"
        )
    if parts.scheme.lower() in _NETWORK_SCHEMES and not parts.netloc:
        raise FieldFormatError(raw, FieldKind.URL.value, "no host")
    if _PERCENT_RE.search(raw):
        raise FieldFormatError(raw, FieldKind.URL.value, "bad percent escape")
    return raw


def coerce(kind: FieldKind, raw: Optional[str], settings: ParserSettings) -> Any:
    """
    Convert a raw text value into the type described by ``kind``.

    Args:
        kind: The field kind to coerce to.
        raw: The raw text taken from the document (already XML-unescaped).
        settings: Parser settings holding date format, timezone and URL schemes.

    Returns:
        The typed value.

    Raises:
        FieldFormatError: If the text is not valid for the kind.
    """
    if kind is FieldKind.INERT:
        return None
    if raw is None:
        raw = ""
    if kind is FieldKind.STRING:
        return raw
    if kind is FieldKind.BOOLEAN:
        return _coerce_boolean(raw)
    if kind is FieldKind.INTEGER:
        return _coerce_integer(raw, kind, INT32_MIN, INT32_MAX)
    if kind is FieldKind.LONG:
        return _coerce_integer(raw, kind, INT64_MIN, INT64_MAX)
    if kind is FieldKind.TIMESTAMP:
        return _coerce_timestamp(raw, settings)
    if kind is FieldKind.URL:
        return _coerce_url(raw, settings)
    raise ValueError(f"Unsupported field kind: {kind}")


def to_text(kind: FieldKind, value: Any, settings: ParserSettings) -> Optional[str]:
    """Render a typed value in the canonical text form of its kind."""
    if value is None:
        return None
    if kind is FieldKind.BOOLEAN:
        return "true" if value else "false"
    if kind is FieldKind.TIMESTAMP:
        return value.astimezone(settings.tzinfo).strftime(settings.date_format)
    return str(value)


def url_to_path(url: Optional[str]) -> Optional[str]:
    """Decode a ``file://`` URL into a filesystem path."""
    if not url:
        return None
    if url.startswith("file://"):
        return urllib.parse.unquote(urllib.parse.urlsplit(url).path)
    return urllib.parse.unquote(url)
