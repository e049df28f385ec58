import io
import logging

import pikepdf
from reportlab.pdfgen import canvas

from .document import PdfDocument
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

FOOTER_FONT = "Helvetica"
FOOTER_FONT_SIZE = 10
LINE_HEIGHT = 12


def render_footer(text: str, width: float, height: float) -> bytes:
    # Transparent page of the given size with the footer text centered at the bottom.
    lines = text.split('\n')
    baseline = 15 + 5 * (len(lines) - 1)

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(width, height))
    c.setFont(FOOTER_FONT, FOOTER_FONT_SIZE)
    # First line on top, the last one closest to the bottom edge
    y = baseline + LINE_HEIGHT * (len(lines) - 1) / 2
    for line in lines:
        c.drawCentredString(width / 2, y, line)
        y -= LINE_HEIGHT
    c.showPage()
    c.save()
    return buffer.getvalue()


def add_footer(document: PdfDocument, text: str) -> None:
    """Stamp a footer on every page. Use \\n to break the text into lines."""
    if document is None:
        raise InvalidArgumentError("pdf document must not be None")
    if text is None:
        raise InvalidArgumentError("footer text must not be None")

    pdf = document.pdf
    for page in pdf.pages:
        box = page.mediabox
        x0, y0, x1, y1 = (float(v) for v in box)
        overlay = document.keep_open(pikepdf.open(io.BytesIO(render_footer(text, x1 - x0, y1 - y0))))
        form = pdf.copy_foreign(overlay.pages[0].as_form_xobject())
        page.add_overlay(form, pikepdf.Rectangle(x0, y0, x1, y1))

    logger.info("Added footer to %d page(s)", len(pdf.pages))
