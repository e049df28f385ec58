"""HTML renderer using WeasyPrint"""

import logging
from typing import Optional

from ..options import FooterOptions, HtmlToPdfOptions, MarginOptions, Orientation, resolve_page_size
from .base import MarkupRenderer

logger = logging.getLogger(__name__)


def _css_string(text: str) -> str:
    escaped = text.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\A ')
    return f'"{escaped}"'


def page_css(options: HtmlToPdfOptions, margins: MarginOptions, footer: Optional[FooterOptions]) -> str:
    width, height = resolve_page_size(options.page_size)
    if Orientation.parse(options.orientation) is Orientation.LANDSCAPE:
        width, height = height, width

    rules = [
        f"size: {width:.2f}pt {height:.2f}pt;",
        f"margin: {margins.top}mm {margins.right}mm {margins.bottom}mm {margins.left}mm;",
    ]
    if footer is not None and footer.text:
        border = "border-top: 0.5pt solid black;" if footer.include_line else ""
        rules.append(
            "@bottom-center { "
            f"content: {_css_string(footer.text)}; white-space: pre; "
            f"font-size: 9pt; padding-top: {footer.spacing}mm; {border}"
            "}"
        )
    return "@page { " + " ".join(rules) + " }"


class WeasyPrintRenderer(MarkupRenderer):
    """Renders HTML in-process with WeasyPrint.

    Only the footer text is supported; ``FooterOptions.html_path`` is a
    wkhtmltopdf feature and is ignored here.
    """

    def render(
        self,
        markup: str,
        options: Optional[HtmlToPdfOptions] = None,
        margins: Optional[MarginOptions] = None,
        footer: Optional[FooterOptions] = None
    ) -> bytes:
        # Loads pango at import time
        from weasyprint import CSS, HTML

        options = options or HtmlToPdfOptions()
        margins = margins or MarginOptions()

        if footer is not None and footer.html_path:
            logger.warning("WeasyPrint does not support footer HTML, ignoring %s", footer.html_path)

        stylesheet = CSS(string=page_css(options, margins, footer))
        document = HTML(string=markup).render(stylesheets=[stylesheet])
        if options.title:
            document.metadata.title = options.title
        return document.write_pdf()
