import io
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import pikepdf

from .errors import InvalidArgumentError
from .extractor import PageDecoder, TextLocationExtractor, decode_page_lines

logger = logging.getLogger(__name__)


@dataclass
class Segment:
    # Text of the marker that closes the segment, and the segment as a PDF
    metadata: str
    document: bytes


def segment_ranges(pages: Sequence[int]) -> List[Tuple[int, int]]:
    """Page ranges (1-based, inclusive) closed by markers on ``pages``.

    Segment i runs from the page after marker i-1 up to and including the
    page of marker i. Pages after the last marker belong to no segment.
    A marker on the same page as the previous one (or reported on an earlier
    page) gets a segment holding only its own page.
    """
    ranges = []
    previous = 0
    for page in pages:
        start = previous + 1
        if start > page:
            logger.warning("Marker on page %d does not follow previous marker page %d", page, previous)
            start = page
        ranges.append((start, page))
        previous = page
    return ranges


class MarkerSplitter:
    # Splits a merged PDF into one document per marker match.

    def __init__(self, pattern: str, decoder: PageDecoder = decode_page_lines):
        self.extractor = TextLocationExtractor(pattern, decoder=decoder)

    def split(self, pdf_bytes: bytes) -> List[Segment]:
        if pdf_bytes is None:
            raise InvalidArgumentError("pdf document must not be None")

        matches = self.extractor.locate(pdf_bytes)
        if not matches:
            return []

        ranges = segment_ranges([m.page for m in matches])
        results = []

        with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
            for match, (start_page, end_page) in zip(matches, ranges):
                output_pdf = pikepdf.Pdf.new()
                for page_num in range(start_page, end_page + 1):
                    output_pdf.pages.append(pdf.pages[page_num - 1])

                output = io.BytesIO()
                output_pdf.save(output)
                output_pdf.close()

                logger.info("Segment %d: pages %d-%d (%s)", len(results) + 1, start_page, end_page, match.text)
                results.append(Segment(metadata=match.text, document=output.getvalue()))

        return results
