# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Resolution of document metadata fields.

Each known field is looked up in the Info dictionary and in the XMP
packet. A value found in XMP always replaces the Info dictionary value,
including the case where an XMP date does not parse and its raw text is
used instead.
"""

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field

from .dates import (
    CalendarValue,
    format_calendar,
    parse_info_date,
    parse_xmp_date,
)
from .encoding import CodecEncodingTable, EncodingTable, reencode
from .xmp import Element, find_property_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetadataFieldSpec:
    """Static description of one reported metadata field.

    Attributes:
        legacy_key: Info dictionary key (without leading slash).
        xmp_primary_key: Qualified XMP property tag searched first.
        xmp_alias_key: Qualified XMP property tag searched when the primary
            key is absent.
        label: Report label, padded to the value column.
        is_date: Whether values are parsed as dates.
    """

    legacy_key: str
    xmp_primary_key: str
    xmp_alias_key: str | None
    label: str
    is_date: bool = False


FIELD_SPECS: tuple[MetadataFieldSpec, ...] = (
    MetadataFieldSpec("Title", "dc:title", None, "Title:          "),
    MetadataFieldSpec("Subject", "dc:description", None, "Subject:        "),
    MetadataFieldSpec("Keywords", "pdf:Keywords", None, "Keywords:       "),
    MetadataFieldSpec("Author", "dc:creator", None, "Author:         "),
    MetadataFieldSpec("Creator", "xmp:CreatorTool", None, "Creator:        "),
    MetadataFieldSpec("Producer", "pdf:Producer", None, "Producer:       "),
    MetadataFieldSpec(
        "CreationDate",
        "xap:CreateDate",
        "xmp:CreateDate",
        "CreationDate:   ",
        is_date=True,
    ),
    MetadataFieldSpec(
        "ModDate",
        "xap:ModifyDate",
        "xmp:ModifyDate",
        "ModDate:        ",
        is_date=True,
    ),
)


@dataclass(frozen=True)
class DateValue:
    """A value that parsed as a date, with the text it was parsed from."""

    value: CalendarValue
    text: str


@dataclass(frozen=True)
class RawText:
    """A value used verbatim."""

    text: str


FieldValue = DateValue | RawText


@dataclass(frozen=True)
class ResolverConfig:
    """Inputs shared by all field resolutions.

    Attributes:
        info: String entries of the Info dictionary, or None if the
            document has none.
        xmp_root: Parsed XMP packet, or None if absent or malformed.
        encoding: Output text encoding table.
        raw_dates: If True, date fields are reported as raw text.
    """

    info: Mapping[str, str] | None = None
    xmp_root: Element | None = None
    encoding: EncodingTable = field(default_factory=CodecEncodingTable)
    raw_dates: bool = False


def evaluate(
    raw: str,
    is_date: bool,
    parse_date: Callable[[str], CalendarValue | None],
) -> FieldValue:
    """Classify a raw value: a parsed date if possible, else raw text."""
    if is_date:
        parsed = parse_date(raw)
        if parsed is not None:
            return DateValue(parsed, raw)
    return RawText(raw)


def render_value(value: FieldValue, encoding: EncodingTable) -> bytes:
    """Render a field value to output bytes."""
    if isinstance(value, DateValue):
        rendered = format_calendar(value.value)
        if rendered is not None:
            return rendered.encode("ascii")
    return reencode(value.text, encoding)


def _resolve(
    spec: MetadataFieldSpec, config: ResolverConfig
) -> tuple[FieldValue, str] | None:
    """Pick the winning value of a field and name its source."""
    is_date = spec.is_date and not config.raw_dates
    value: tuple[FieldValue, str] | None = None

    if config.info is not None:
        raw = config.info.get(spec.legacy_key)
        if isinstance(raw, str):
            value = (evaluate(raw, is_date, parse_info_date), "Info")

    if config.xmp_root is not None:
        node = find_property_text(
            config.xmp_root, spec.xmp_primary_key, spec.xmp_alias_key
        )
        if node is not None:
            if value is not None:
                logger.debug("%s: XMP value replaces Info value", spec.legacy_key)
            value = (evaluate(node.text, is_date, parse_xmp_date), "XMP")

    return value


def resolve_field(spec: MetadataFieldSpec, config: ResolverConfig) -> bytes | None:
    """Resolve the display value of a single metadata field.

    Args:
        spec: Field to resolve.
        config: Info dictionary, XMP tree and output encoding.

    Returns:
        Encoded value or None if neither source provides one.
    """
    resolved = _resolve(spec, config)
    if resolved is None:
        return None

    value, source = resolved
    logger.debug("%s resolved from %s: %r", spec.legacy_key, source, value)
    return render_value(value, config.encoding)


def iter_report_lines(
    config: ResolverConfig,
    specs: tuple[MetadataFieldSpec, ...] = FIELD_SPECS,
) -> Iterator[bytes]:
    """Yield ``label + value + newline`` for every field that has a value.

    Fields are emitted in table order; fields without a value are skipped.
    """
    for spec in specs:
        value = resolve_field(spec, config)
        if value is not None:
            yield spec.label.encode("ascii") + value + b"\n"
