import io
import logging
from typing import List, Sequence

import pikepdf

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def append_document(target: pikepdf.Pdf, source: pikepdf.Pdf) -> None:
    # Append all pages of source after the last page of target.
    # source must stay open until target has been saved.
    target.pages.extend(source.pages)


def merge_pdfs(documents: Sequence[bytes]) -> bytes:
    """Concatenate the pages of every document, in the order given.

    The whole list is validated before anything is opened.
    """
    if documents is None:
        raise InvalidArgumentError("documents must not be None")
    if any(document is None for document in documents):
        raise InvalidArgumentError("documents must not contain None")
    if len(documents) == 0:
        raise InvalidArgumentError("at least one document is required")

    sources: List[pikepdf.Pdf] = []
    merged = pikepdf.Pdf.new()
    try:
        for document in documents:
            source = pikepdf.open(io.BytesIO(document))
            sources.append(source)
            append_document(merged, source)

        output = io.BytesIO()
        merged.save(output)
    finally:
        merged.close()
        for source in sources:
            source.close()

    logger.info("Merged %d document(s)", len(documents))
    return output.getvalue()
