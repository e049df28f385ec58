"""
pdftasks - PDF attachment and page tasks

Works on PDF documents as bytes:
1. Extract, filter and remove embedded file attachments
2. Turn embedded images into pages, merge embedded PDFs
3. Split a merged PDF at marker text, merge several PDFs
4. Footers and HTML to PDF conversion
"""

__version__ = "1.0.0"

from .attachments import AttachmentRecord
from .document import PdfDocument
from .errors import (
    DocumentClosedError,
    InvalidArgumentError,
    InvalidImageDataError,
    PatternError,
    PdfTaskError,
    RenderError,
)
from .extractor import TextLocationExtractor, TextMatch
from .splitter import MarkerSplitter, Segment

__all__ = [
    'AttachmentRecord', 'PdfDocument', 'TextLocationExtractor', 'TextMatch',
    'MarkerSplitter', 'Segment', 'PdfTaskError', 'InvalidArgumentError',
    'PatternError', 'DocumentClosedError', 'InvalidImageDataError', 'RenderError',
]
