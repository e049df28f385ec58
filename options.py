"""Option objects accepted by the task functions in :mod:`pdftasks.tasks`."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from reportlab.lib import pagesizes
from reportlab.lib.units import mm

from .errors import InvalidArgumentError


class Orientation(str, Enum):
    PORTRAIT = "Portrait"
    LANDSCAPE = "Landscape"

    @classmethod
    def parse(cls, value) -> "Orientation":
        if isinstance(value, Orientation):
            return value
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise InvalidArgumentError(f"Unknown orientation: {value}")


# Sizes that reportlab.lib.pagesizes does not define (width, height in points)
_EXTRA_PAGE_SIZES = {
    "EXECUTIVE": (184.15 * mm, 266.7 * mm),
    "FOLIO": (210 * mm, 330 * mm),
    "COMM10E": (105 * mm, 241 * mm),
    "DLE": (110 * mm, 220 * mm),
    "C5E": (163 * mm, 229 * mm),
}

PAGE_SIZES = (
    "A0", "A1", "A2", "A3", "A4", "A5", "A6", "A7", "A8", "A9",
    "B0", "B1", "B2", "B3", "B4", "B5", "B6", "B7", "B8", "B9", "B10",
    "C5E", "Comm10E", "DLE", "Executive", "Folio",
    "Ledger", "Legal", "Letter", "Tabloid",
)


def resolve_page_size(name: str) -> Tuple[float, float]:
    """Portrait (width, height) in points for a named paper size."""
    key = name.strip().upper()
    if key in _EXTRA_PAGE_SIZES:
        return _EXTRA_PAGE_SIZES[key]
    size = getattr(pagesizes, key, None)
    if not isinstance(size, tuple):
        raise InvalidArgumentError(f"Unknown page size: {name}")
    return pagesizes.portrait(size)


def canonical_page_size(name: str) -> str:
    # Spelling wkhtmltopdf expects ("a4" -> "A4", "letter" -> "Letter")
    for known in PAGE_SIZES:
        if known.lower() == name.strip().lower():
            return known
    raise InvalidArgumentError(f"Unknown page size: {name}")


@dataclass
class PdfCommonOptions:
    # Comma separated file name globs, e.g. "*.jpg, *.png"
    filter: Optional[str] = None
    extract_description_prefix: bool = False
    make_filename_safe: bool = False


@dataclass
class ConvertEmbeddedOptions:
    # "[FILENAME]" in the caption is replaced by the attachment name
    caption: Optional[str] = None
    filter: Optional[str] = None


@dataclass
class HtmlToPdfOptions:
    title: Optional[str] = None
    orientation: Orientation = Orientation.PORTRAIT
    page_size: str = "A4"
    executable_path: Optional[str] = None
    disable_smart_shrinking: bool = False


@dataclass
class MarginOptions:
    # Millimeters
    top: float = 10
    bottom: float = 10
    left: float = 10
    right: float = 10


@dataclass
class FooterOptions:
    text: Optional[str] = None
    html_path: Optional[str] = None
    spacing: float = 0
    include_line: bool = False
