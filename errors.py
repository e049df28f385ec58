"""Exceptions raised by pdftasks.

Documents that simply lack what is being asked for (no attachments, no
marker matches) are not errors; those cases return empty results.
"""


class PdfTaskError(Exception):
    """Base class for all pdftasks errors."""
    pass


class InvalidArgumentError(PdfTaskError, ValueError):
    """A required argument was None or otherwise unusable."""
    pass


class PatternError(PdfTaskError, ValueError):
    """A regular expression could not be compiled."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern


class DocumentClosedError(PdfTaskError, RuntimeError):
    """The document was already serialized and cannot be used again."""
    pass


class InvalidImageDataError(PdfTaskError):
    """The supplied bytes could not be decoded as an image."""
    pass


class RenderError(PdfTaskError):
    """The markup renderer produced no document.

    The message is the renderer's own error output, unchanged.
    """
    pass
