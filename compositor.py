import io
import logging
from typing import Optional, Tuple

import pikepdf
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .document import PdfDocument
from .errors import InvalidArgumentError, InvalidImageDataError
from .images import normalize_orientation, open_image

logger = logging.getLogger(__name__)

MARGIN = 10.0
CAPTION_HEIGHT = 20.0
CAPTION_FONT = "Helvetica"
CAPTION_FONT_SIZE = 11


def page_size_for(image_width: float, image_height: float) -> Tuple[float, float]:
    # Portrait for tall images, landscape otherwise.
    return A4 if image_width < image_height else landscape(A4)


def fit_image(
    image_width: float,
    image_height: float,
    page_width: float,
    page_height: float,
    has_caption: bool = False
) -> Tuple[float, float, float, float]:
    """Rectangle (x, y, width, height) to draw the image in.

    The image keeps its aspect ratio, is never scaled up, and is centered
    in the page minus margins and the caption band.
    """
    band = CAPTION_HEIGHT if has_caption else 0.0
    max_width = page_width - MARGIN * 2
    max_height = page_height - band - MARGIN * 2

    ratio = min(max_width / image_width, max_height / image_height)
    if ratio < 1.0:
        image_width *= ratio
        image_height *= ratio

    x = (page_width - image_width) / 2
    y = (page_height - image_height) / 2 - band / 2
    return x, y, image_width, image_height


def render_image_page(image, caption: Optional[str] = None) -> bytes:
    # Single page PDF with the image and an optional caption above it.
    has_caption = bool(caption and caption.strip())
    image_width, image_height = image.size
    page_width, page_height = page_size_for(image_width, image_height)

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(page_width, page_height))

    if has_caption:
        c.setFont(CAPTION_FONT, CAPTION_FONT_SIZE)
        c.drawString(MARGIN, page_height - CAPTION_HEIGHT / 2 - MARGIN, caption)

    x, y, width, height = fit_image(image_width, image_height, page_width, page_height, has_caption)
    c.drawImage(ImageReader(image), x, y, width, height, mask='auto')
    c.showPage()
    c.save()
    return buffer.getvalue()


def add_image_as_new_page(
    document: PdfDocument,
    image_bytes: bytes,
    caption: Optional[str] = None,
    strict: bool = False
) -> bool:
    """Add the image on a new page after the last page.

    EXIF orientation is applied first. If the bytes are not an image no page
    is added and False is returned, or InvalidImageDataError is raised when
    ``strict`` is set.
    """
    if document is None:
        raise InvalidArgumentError("pdf document must not be None")
    if image_bytes is None:
        raise InvalidArgumentError("image must not be None")

    normalized = normalize_orientation(image_bytes)
    image = open_image(normalized) if normalized is not None else None
    if image is None:
        if strict:
            raise InvalidImageDataError("Image data could not be decoded")
        logger.warning("Skipping %d bytes that are not an image", len(image_bytes))
        return False

    page_pdf = document.keep_open(pikepdf.open(io.BytesIO(render_image_page(image, caption))))
    document.pdf.pages.append(page_pdf.pages[0])
    logger.debug("Added image page %d (%dx%d)", document.page_count, image.size[0], image.size[1])
    return True
