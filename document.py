import io
import logging
from typing import List

import pikepdf

from .errors import DocumentClosedError, InvalidArgumentError

logger = logging.getLogger(__name__)


class PdfDocument:
    """An open PDF that is modified in place and serialized exactly once.

    Documents restricted with only an owner password are opened without
    one; the restriction does not apply to reading or copying pages.
    """

    def __init__(self, pdf_bytes: bytes):
        if pdf_bytes is None:
            raise InvalidArgumentError("pdf document must not be None")
        self._pdf = pikepdf.open(io.BytesIO(pdf_bytes))
        # Documents pages or objects were copied from. qpdf reads their
        # stream data when the target is written, so they stay open until then.
        self._sources: List[pikepdf.Pdf] = []
        self._closed = False

    @property
    def pdf(self) -> pikepdf.Pdf:
        if self._closed:
            raise DocumentClosedError("Cannot access a closed document.")
        return self._pdf

    @property
    def page_count(self) -> int:
        return len(self.pdf.pages)

    def keep_open(self, source: pikepdf.Pdf) -> pikepdf.Pdf:
        # Close source together with this document.
        if self._closed:
            raise DocumentClosedError("Cannot access a closed document.")
        self._sources.append(source)
        return source

    def to_bytes(self) -> bytes:
        if self._closed:
            raise DocumentClosedError("Cannot call to_bytes() on a closed document.")
        output = io.BytesIO()
        try:
            self._pdf.save(output)
        finally:
            self.close()
        logger.debug("Serialized document (%d bytes)", output.tell())
        return output.getvalue()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._pdf.close()
        for source in self._sources:
            source.close()
        self._sources = []

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
