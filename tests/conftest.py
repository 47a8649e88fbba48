# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pytest fixtures for the pdfdocinfo test suite."""

from collections.abc import Generator
from pathlib import Path

import pikepdf
import pytest
from pikepdf import Array, Dictionary, Name, Pdf

# -- Global PDF tracker --

_tracked_pdfs: list[Pdf] = []


@pytest.fixture(autouse=True)
def _auto_close_pdfs():
    """Close all tracked PDF objects after each test."""
    yield
    for pdf in reversed(_tracked_pdfs):
        try:
            pdf.close()
        except Exception:
            pass
    _tracked_pdfs.clear()


def new_pdf(**kwargs) -> Pdf:
    """Create a tracked Pdf (auto-closed after test)."""
    pdf = Pdf.new(**kwargs)
    _tracked_pdfs.append(pdf)
    return pdf


def open_pdf(source, **kwargs) -> Pdf:
    """Open a tracked Pdf (auto-closed after test)."""
    pdf = Pdf.open(source, **kwargs)
    _tracked_pdfs.append(pdf)
    return pdf


def make_pdf_with_page() -> Pdf:
    """Create a minimal PDF with one page (auto-tracked)."""
    pdf = new_pdf()
    page = pikepdf.Page(Dictionary(Type=Name.Page, MediaBox=Array([0, 0, 612, 792])))
    pdf.pages.append(page)
    return pdf


def xmp_packet(description_xml: str) -> bytes:
    """Wrap rdf:Description markup in a complete XMP packet."""
    return (
        '<?xpacket begin="\ufeff" id="W5M0MpCehiHzreSzNTczkc9d"?>\n'
        '<x:xmpmeta xmlns:x="adobe:ns:meta/">\n'
        '<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"\n'
        '         xmlns:dc="http://purl.org/dc/elements/1.1/"\n'
        '         xmlns:xmp="http://ns.adobe.com/xap/1.0/"\n'
        '         xmlns:xap="http://ns.adobe.com/xap/1.0/"\n'
        '         xmlns:pdf="http://ns.adobe.com/pdf/1.3/">\n'
        f"{description_xml}\n"
        "</rdf:RDF>\n"
        "</x:xmpmeta>\n"
        '<?xpacket end="w"?>'
    ).encode()


def set_xmp(pdf: Pdf, packet: bytes) -> None:
    """Attach an uncompressed XMP metadata stream to the catalog."""
    stream = pikepdf.Stream(pdf, packet)
    stream.Type = Name.Metadata
    stream.Subtype = Name.XML
    pdf.Root.Metadata = pdf.make_indirect(stream)


# -- Fixtures --


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Temporary directory for tests."""
    return tmp_path


@pytest.fixture
def sample_pdf(tmp_dir: Path) -> Path:
    """Minimal valid PDF on disk without any metadata.

    Args:
        tmp_dir: Temporary directory.

    Returns:
        Path to the PDF file.
    """
    pdf = make_pdf_with_page()
    pdf_path = tmp_dir / "sample.pdf"
    pdf.save(pdf_path)
    return pdf_path


@pytest.fixture
def pdf_with_info(tmp_dir: Path) -> Path:
    """PDF with Info dictionary metadata only.

    Args:
        tmp_dir: Temporary directory.

    Returns:
        Path to the PDF file.
    """
    pdf = make_pdf_with_page()
    pdf.docinfo["/Title"] = "Info Title"
    pdf.docinfo["/Author"] = "Info Author"
    pdf.docinfo["/Producer"] = "Info Producer"
    pdf.docinfo["/CreationDate"] = "D:20230615120000"
    pdf.docinfo["/ModDate"] = "D:20240101083000+01'00'"

    pdf_path = tmp_dir / "with_info.pdf"
    pdf.save(pdf_path)
    return pdf_path


@pytest.fixture
def pdf_with_info_and_xmp(tmp_dir: Path) -> Path:
    """PDF whose XMP packet overrides part of its Info dictionary.

    Args:
        tmp_dir: Temporary directory.

    Returns:
        Path to the PDF file.
    """
    pdf = make_pdf_with_page()
    pdf.docinfo["/Title"] = "Info Title"
    pdf.docinfo["/Author"] = "Info Author"
    pdf.docinfo["/CreationDate"] = "D:20200101000000"

    set_xmp(
        pdf,
        xmp_packet(
            '<rdf:Description rdf:about="">\n'
            "  <dc:title>\n"
            "    <rdf:Alt>\n"
            '      <rdf:li xml:lang="x-default">XMP Title</rdf:li>\n'
            "    </rdf:Alt>\n"
            "  </dc:title>\n"
            "  <xmp:CreateDate>2023-06-15T12:00:00+02:00</xmp:CreateDate>\n"
            "  <pdf:Producer>XMP Producer</pdf:Producer>\n"
            "</rdf:Description>"
        ),
    )

    pdf_path = tmp_dir / "with_info_and_xmp.pdf"
    pdf.save(pdf_path)
    return pdf_path


@pytest.fixture
def encrypted_pdf(tmp_dir: Path) -> Path:
    """PDF encrypted with an owner password only.

    Args:
        tmp_dir: Temporary directory.

    Returns:
        Path to the encrypted PDF file.
    """
    pdf = make_pdf_with_page()
    pdf.docinfo["/Title"] = "Secret Title"

    encrypted_path = tmp_dir / "encrypted.pdf"
    pdf.save(encrypted_path, encryption=pikepdf.Encryption(owner="testpassword"))
    return encrypted_path


@pytest.fixture
def user_password_pdf(tmp_dir: Path) -> Path:
    """PDF that requires a user password to open.

    Args:
        tmp_dir: Temporary directory.

    Returns:
        Path to the encrypted PDF file.
    """
    pdf = make_pdf_with_page()
    pdf.docinfo["/Title"] = "Locked Title"

    encrypted_path = tmp_dir / "locked.pdf"
    pdf.save(
        encrypted_path,
        encryption=pikepdf.Encryption(owner="ownerpw", user="userpw"),
    )
    return encrypted_path


@pytest.fixture
def sample_pdf_obj(sample_pdf: Path) -> Generator[Pdf, None, None]:
    """Open pikepdf.Pdf object without metadata."""
    pdf = Pdf.open(sample_pdf)
    yield pdf
    pdf.close()
