# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Document information report."""

import logging
from collections.abc import Iterator

import pikepdf

from .document import (
    iter_summary_lines,
    read_document_summary,
    read_info_dict,
    read_xmp_packet,
)
from .encoding import EncodingTable
from .fields import ResolverConfig, iter_report_lines
from .xmp import parse_xmp_packet

logger = logging.getLogger(__name__)


def build_resolver_config(
    pdf: pikepdf.Pdf,
    encoding: EncodingTable,
    raw_dates: bool = False,
) -> ResolverConfig:
    """Reads the metadata sources of a document.

    A missing or malformed XMP packet leaves only the Info dictionary as
    a source, and vice versa.
    """
    info = read_info_dict(pdf)
    xmp_root = None
    packet = read_xmp_packet(pdf)
    if packet is not None:
        xmp_root = parse_xmp_packet(packet)
        if xmp_root is None:
            logger.warning("Ignoring malformed XMP metadata packet")

    return ResolverConfig(
        info=info,
        xmp_root=xmp_root,
        encoding=encoding,
        raw_dates=raw_dates,
    )


def iter_document_report(
    pdf: pikepdf.Pdf,
    encoding: EncodingTable,
    raw_dates: bool = False,
) -> Iterator[bytes]:
    """Yields the report lines of a document as encoded bytes.

    The metadata fields come first, in fixed order and only when they
    have a value, followed by the document summary.

    Args:
        pdf: Opened pikepdf PDF object.
        encoding: Output text encoding table.
        raw_dates: If True, dates are printed as stored.
    """
    config = build_resolver_config(pdf, encoding, raw_dates=raw_dates)
    yield from iter_report_lines(config)

    for line in iter_summary_lines(read_document_summary(pdf)):
        yield line.encode("ascii")
