# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""pdfdocinfo - Print PDF document information from Info and XMP metadata."""

from importlib.metadata import PackageNotFoundError, version

from .dates import CalendarValue, format_calendar, parse_info_date, parse_xmp_date
from .encoding import CodecEncodingTable, EncodingTable, reencode
from .exceptions import (
    ConfigurationError,
    DocumentOpenError,
    PasswordError,
    PDFDocInfoError,
)
from .fields import FIELD_SPECS, MetadataFieldSpec, ResolverConfig, resolve_field
from .xmp import CharData, Element, parse_xmp_packet

try:
    __version__ = version("pdfdocinfo")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    "CalendarValue",
    "parse_info_date",
    "parse_xmp_date",
    "format_calendar",
    "EncodingTable",
    "CodecEncodingTable",
    "reencode",
    "Element",
    "CharData",
    "parse_xmp_packet",
    "MetadataFieldSpec",
    "FIELD_SPECS",
    "ResolverConfig",
    "resolve_field",
    "PDFDocInfoError",
    "DocumentOpenError",
    "PasswordError",
    "ConfigurationError",
]
