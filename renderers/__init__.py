from ..errors import InvalidArgumentError
from .base import MarkupRenderer
from .weasyprint_renderer import WeasyPrintRenderer
from .wkhtmltopdf_renderer import WkHtmlToPdfRenderer


def get_renderer(name: str = "weasyprint") -> MarkupRenderer:
    key = (name or "").strip().lower()

    if key == "weasyprint":
        return WeasyPrintRenderer()
    if key == "wkhtmltopdf":
        return WkHtmlToPdfRenderer()

    raise InvalidArgumentError(f"Unsupported renderer: {name}")


__all__ = ['MarkupRenderer', 'WeasyPrintRenderer', 'WkHtmlToPdfRenderer', 'get_renderer']
