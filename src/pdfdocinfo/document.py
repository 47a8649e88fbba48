# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Access to PDF documents via pikepdf.

Reads the inputs of metadata resolution (Info dictionary and XMP packet)
and the document-level facts printed after the metadata fields.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import pikepdf
from pikepdf.models import EncryptionMethod

from .exceptions import DocumentOpenError, PasswordError

logger = logging.getLogger(__name__)


@dataclass
class DocumentSummary:
    """Document-level facts shown after the metadata fields.

    Attributes:
        tagged: True if the catalog has a structure tree.
        form: "dynamic XFA", "static XFA", "AcroForm" or "none".
        pages: Number of pages.
        encrypted: True if the document is encrypted.
        encryption_algorithm: "RC4" or "AES" for encrypted documents.
        key_bits: Encryption key length in bits.
        can_print: Printing permission.
        can_copy: Content extraction permission.
        can_change: Modification permission.
        can_add_notes: Annotation permission.
        linearized: True if the file is linearized ("optimized").
        pdf_version: Header version, e.g. "1.7".
    """

    tagged: bool
    form: str
    pages: int
    encrypted: bool
    pdf_version: str
    linearized: bool = False
    encryption_algorithm: str | None = None
    key_bits: int = 0
    can_print: bool = True
    can_copy: bool = True
    can_change: bool = True
    can_add_notes: bool = True


def open_document(
    path: Path,
    owner_password: str | None = None,
    user_password: str | None = None,
) -> pikepdf.Pdf:
    """Opens a PDF file.

    Args:
        path: Path to the PDF file.
        owner_password: Owner password, tried in preference to the user one.
        user_password: User password, tried when the owner password is
            missing or rejected.

    Returns:
        Opened pikepdf PDF object.

    Raises:
        FileNotFoundError: If the file does not exist.
        PasswordError: If the document is encrypted and the password fails.
        DocumentOpenError: If the file is not a readable PDF.
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    password = owner_password if owner_password is not None else user_password
    try:
        try:
            return pikepdf.open(path, password=password or "")
        except pikepdf.PasswordError:
            if owner_password is None or user_password is None:
                raise
            logger.debug("Owner password rejected, trying user password")
            return pikepdf.open(path, password=user_password)
    except pikepdf.PasswordError as e:
        raise PasswordError(f"Incorrect password for {path.name}") from e
    except (pikepdf.PdfError, OSError) as e:
        raise DocumentOpenError(f"Cannot open {path.name}: {e}") from e


def read_info_dict(pdf: pikepdf.Pdf) -> dict[str, str] | None:
    """Reads the string entries of the document Info dictionary.

    Keys are returned without the leading slash. Text strings are decoded
    by pikepdf (PDFDocEncoding, or UTF-16 when a byte order mark is
    present). Entries that are not strings are skipped.

    Args:
        pdf: Opened pikepdf PDF object.

    Returns:
        Mapping of key to text, or None if there is no Info dictionary.
    """
    try:
        info = pdf.trailer.get("/Info")
        if info is None:
            return None
        if not isinstance(info, pikepdf.Dictionary):
            logger.debug("Trailer /Info is not a dictionary")
            return None

        result: dict[str, str] = {}
        for key, value in info.items():
            if isinstance(value, pikepdf.String):
                result[key[1:]] = str(value)
        return result
    except Exception as e:
        logger.warning("Error reading Info dictionary: %s", e)
        return None


def read_xmp_packet(pdf: pikepdf.Pdf) -> bytes | None:
    """Reads the catalog XMP metadata stream.

    Args:
        pdf: Opened pikepdf PDF object.

    Returns:
        Decoded stream bytes or None if not present or unreadable.
    """
    try:
        metadata = pdf.Root.get("/Metadata")
        if metadata is None:
            return None

        # Dereference if necessary
        try:
            metadata = metadata.get_object()
        except (AttributeError, ValueError, TypeError):
            pass

        return bytes(metadata.read_bytes())
    except Exception as e:
        logger.warning("Error reading XMP metadata: %s", e)
        return None


def _detect_form(pdf: pikepdf.Pdf) -> str:
    acroform = pdf.Root.get("/AcroForm")
    if not isinstance(acroform, pikepdf.Dictionary):
        return "none"
    xfa = acroform.get("/XFA")
    if isinstance(xfa, (pikepdf.Stream, pikepdf.Array)):
        if bool(pdf.Root.get("/NeedsRendering", False)):
            return "dynamic XFA"
        return "static XFA"
    return "AcroForm"


def read_document_summary(pdf: pikepdf.Pdf) -> DocumentSummary:
    """Collects the document-level facts of an opened PDF.

    Args:
        pdf: Opened pikepdf PDF object.

    Returns:
        Summary of structure, forms, pages, encryption and version.
    """
    summary = DocumentSummary(
        tagged="/StructTreeRoot" in pdf.Root,
        form=_detect_form(pdf),
        pages=len(pdf.pages),
        encrypted=pdf.is_encrypted,
        pdf_version=pdf.pdf_version,
        linearized=pdf.is_linearized,
    )

    if summary.encrypted:
        encryption = pdf.encryption
        if encryption.stream_method == EncryptionMethod.rc4:
            summary.encryption_algorithm = "RC4"
        else:
            summary.encryption_algorithm = "AES"
        summary.key_bits = encryption.bits
        allow = pdf.allow
        summary.can_print = allow.print_lowres
        summary.can_copy = allow.extract
        summary.can_change = allow.modify_other
        summary.can_add_notes = allow.modify_annotation

    return summary


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def iter_summary_lines(summary: DocumentSummary) -> Iterator[str]:
    """Yields the report lines for a document summary, newline-terminated."""
    yield f"Tagged:         {_yes_no(summary.tagged)}\n"
    yield f"Form:           {summary.form}\n"
    yield f"Pages:          {summary.pages}\n"
    if summary.encrypted:
        yield (
            f"Encrypted:      {summary.encryption_algorithm} "
            f"{summary.key_bits}-bit\n"
        )
        yield (
            f"Permissions:    print:{_yes_no(summary.can_print)} "
            f"copy:{_yes_no(summary.can_copy)} "
            f"change:{_yes_no(summary.can_change)} "
            f"addNotes:{_yes_no(summary.can_add_notes)}\n"
        )
    else:
        yield "Encrypted:      no\n"
    yield f"Optimized:      {_yes_no(summary.linearized)}\n"
    yield f"PDF version:    {summary.pdf_version}\n"
