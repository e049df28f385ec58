"""Task functions working on PDF documents as bytes.

Every task checks its required inputs before a document is opened, works on
its own :class:`~pdftasks.document.PdfDocument` and returns the serialized
result.
"""

import io
import logging
from typing import List, Optional, Sequence

import pikepdf

from . import attachments as attachment_tools
from . import compositor, footer, merger
from .document import PdfDocument
from .errors import InvalidArgumentError
from .extractor import TextLocationExtractor
from .options import (
    ConvertEmbeddedOptions,
    FooterOptions,
    HtmlToPdfOptions,
    MarginOptions,
    PdfCommonOptions,
)
from .renderers import get_renderer
from .splitter import MarkerSplitter, Segment

logger = logging.getLogger(__name__)

FILENAME_PLACEHOLDER = "[FILENAME]"


def _require(value, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None")


def add_image_as_new_page(pdf_document: bytes, image: bytes, caption: Optional[str] = None) -> bytes:
    """Add an image on a new page after the last page.

    Bytes that are not an image leave the document unchanged.
    """
    _require(pdf_document, "pdf_document")
    _require(image, "image")

    document = PdfDocument(pdf_document)
    compositor.add_image_as_new_page(document, image, caption)
    return document.to_bytes()


def convert_embedded_images_to_pages(
    pdf_document: bytes,
    options: Optional[ConvertEmbeddedOptions] = None
) -> bytes:
    """Move embedded image files to new pages after the last page.

    Each attachment that decodes as an image gets its own page and is then
    removed from the document. Other attachments are left alone.
    """
    _require(pdf_document, "pdf_document")
    options = options or ConvertEmbeddedOptions()
    # Non-images are skipped by the compositor, so no filter means all files
    pattern = options.filter or "*"

    document = PdfDocument(pdf_document)
    found = attachment_tools.extract_attachments(document.pdf, pattern)

    converted = 0
    for attachment in found:
        caption = options.caption.replace(FILENAME_PLACEHOLDER, attachment.name) if options.caption else None
        if compositor.add_image_as_new_page(document, attachment.data, caption):
            attachment_tools.remove_attachment(document.pdf, attachment.name)
            converted += 1

    logger.info("Converted %d of %d attachment(s) to pages", converted, len(found))
    return document.to_bytes()


def merge_embedded_pdf_documents(pdf_document: bytes, options: Optional[PdfCommonOptions] = None) -> bytes:
    # Append the pages of embedded PDF files to the document.
    _require(pdf_document, "pdf_document")
    options = options or PdfCommonOptions()

    # The file extension is the only way embedded PDFs are recognized
    pattern = options.filter
    if not pattern:
        pattern = "*.pdf"
    elif not pattern.lower().endswith(".pdf"):
        pattern += ".pdf"

    document = PdfDocument(pdf_document)
    for attachment in attachment_tools.extract_attachments(document.pdf, pattern):
        embedded = document.keep_open(pikepdf.open(io.BytesIO(attachment.data)))
        merger.append_document(document.pdf, embedded)
        logger.debug("Merged embedded document %s (%d pages)", attachment.name, len(embedded.pages))

    return document.to_bytes()


def extract_attachments(
    pdf_document: bytes,
    options: Optional[PdfCommonOptions] = None
) -> List[attachment_tools.AttachmentRecord]:
    """Extract embedded files (EF) as AttachmentRecord objects."""
    _require(pdf_document, "pdf_document")
    options = options or PdfCommonOptions()

    with PdfDocument(pdf_document) as document:
        return attachment_tools.extract_attachments(
            document.pdf,
            options.filter or "*",
            include_description_prefix=options.extract_description_prefix,
            make_filename_safe=options.make_filename_safe
        )


def remove_attachments(pdf_document: bytes, options: Optional[PdfCommonOptions] = None) -> bytes:
    # Remove embedded (EF) and associated (AF) files matching the filter.
    _require(pdf_document, "pdf_document")
    options = options or PdfCommonOptions()

    document = PdfDocument(pdf_document)
    for name in attachment_tools.get_attachment_names(document.pdf, options.filter or "*"):
        attachment_tools.remove_attachment(document.pdf, name)
    return document.to_bytes()


def add_footer(pdf_document: bytes, text: str) -> bytes:
    _require(pdf_document, "pdf_document")
    _require(text, "text")

    document = PdfDocument(pdf_document)
    footer.add_footer(document, text)
    return document.to_bytes()


def convert_html_to_pdf(
    html: str,
    options: Optional[HtmlToPdfOptions] = None,
    margins: Optional[MarginOptions] = None,
    footer_options: Optional[FooterOptions] = None,
    renderer: str = "weasyprint"
) -> bytes:
    if not html:
        raise InvalidArgumentError("html must not be empty")
    return get_renderer(renderer).render(html, options, margins, footer_options)


def extract_text_by_regex(pdf_document: bytes, pattern: str) -> str:
    """Every match of pattern in the document's text, concatenated."""
    _require(pdf_document, "pdf_document")
    return TextLocationExtractor(pattern).extract_text(pdf_document)


def split_by_marker(pdf_document: bytes, pattern: str) -> List[Segment]:
    """Split a merged document at pages where pattern matches.

    Each segment ends with the page of its marker match and carries the
    matched text as metadata, e.g. ``{name:"...", merge:"..."}`` recipient
    blocks printed in merged mail runs.
    """
    _require(pdf_document, "pdf_document")
    return MarkerSplitter(pattern).split(pdf_document)


def merge_pdfs(documents: Sequence[bytes]) -> bytes:
    return merger.merge_pdfs(documents)
