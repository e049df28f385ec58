import io
import logging
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)

EXIF_ORIENTATION = 0x0112


def open_image(image_bytes: bytes) -> Optional[Image.Image]:
    # None if the bytes are not an image Pillow can decode.
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        logger.debug("Not an image: %s", e)
        return None
    return image


def normalize_orientation(image_bytes: bytes) -> Optional[bytes]:
    """Rotate/flip an image as its EXIF orientation tag says.

    Returns the re-encoded image (same format) when a rotation was applied,
    the input unchanged when none was needed, and None when the input is
    not an image.
    """
    image = open_image(image_bytes)
    if image is None:
        return None

    orientation = image.getexif().get(EXIF_ORIENTATION, 1)
    if orientation in (None, 1):
        return image_bytes

    transposed = ImageOps.exif_transpose(image)
    output = io.BytesIO()
    transposed.save(output, format=image.format or "PNG")
    logger.debug("Applied EXIF orientation %s", orientation)
    return output.getvalue()
