import io
import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

import pdfplumber

from .errors import InvalidArgumentError
from .patterns import compile_regex

logger = logging.getLogger(__name__)


@dataclass
class TextMatch:
    # A pattern match and the 1-based page it was found on
    page: int
    text: str


@dataclass
class TextFragment:
    # One decoded line of page text and where it sits (x0, top, x1, bottom)
    text: str
    bbox: Tuple[float, float, float, float]


def decode_page_lines(page) -> List[TextFragment]:
    # Decode a pdfplumber page glyph by glyph into lines, top to bottom.
    chars = page.chars
    if not chars:
        return []

    # Group chars by y-position
    lines_by_top = {}
    for c in chars:
        top_key = round(c['top'])
        if top_key not in lines_by_top:
            lines_by_top[top_key] = []
        lines_by_top[top_key].append(c)

    fragments = []
    for top_key in sorted(lines_by_top.keys()):
        line_chars = sorted(lines_by_top[top_key], key=lambda x: x['x0'])
        line_text = ' '.join(''.join(c['text'] for c in line_chars).split())
        if not line_text:
            continue

        bbox = (
            min(c['x0'] for c in line_chars),
            min(c['top'] for c in line_chars),
            max(c['x1'] for c in line_chars),
            max(c['bottom'] for c in line_chars),
        )
        fragments.append(TextFragment(text=line_text, bbox=bbox))

    return fragments


PageDecoder = Callable[[object], List[TextFragment]]


class TextLocationExtractor:
    """Finds a regular expression in the decoded text of every page.

    Each decoded fragment is searched on its own; a match never spans two
    fragments. Matches are reported page by page in the order the decoder
    returns the fragments.
    """

    def __init__(self, pattern: str, decoder: PageDecoder = decode_page_lines):
        # Compiled up front so an invalid pattern fails before any page is read
        self.regex = compile_regex(pattern)
        self.decoder = decoder

    def locate(self, pdf_bytes: bytes) -> List[TextMatch]:
        if pdf_bytes is None:
            raise InvalidArgumentError("pdf document must not be None")

        results = []
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for page_num, page in enumerate(pdf.pages, start=1):
                for fragment in self.decoder(page):
                    for match in self.regex.finditer(fragment.text):
                        text = match.group(0)
                        if text:
                            results.append(TextMatch(page=page_num, text=text))

        logger.debug("Pattern %r matched %d time(s)", self.regex.pattern, len(results))
        return results

    def extract_text(self, pdf_bytes: bytes) -> str:
        # All matched text, concatenated without separators.
        return ''.join(match.text for match in self.locate(pdf_bytes))
