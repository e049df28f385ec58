"""Base markup renderer class"""

from abc import ABC, abstractmethod
from typing import Optional

from ..options import FooterOptions, HtmlToPdfOptions, MarginOptions


class MarkupRenderer(ABC):
    """Abstract base class for markup renderers.

    A renderer turns an HTML string into a paginated PDF. Failures of the
    underlying engine are not retried and reach the caller as raised.
    """

    @abstractmethod
    def render(
        self,
        markup: str,
        options: Optional[HtmlToPdfOptions] = None,
        margins: Optional[MarginOptions] = None,
        footer: Optional[FooterOptions] = None
    ) -> bytes:
        """Render the markup.

        Args:
            markup: HTML document or fragment
            options: Page size, orientation and title
            margins: Page margins in millimeters
            footer: Footer shown on every page

        Returns:
            The PDF document as bytes
        """
        pass
