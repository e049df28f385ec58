"""HTML renderer driving the wkhtmltopdf executable"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from ..errors import RenderError
from ..options import (
    FooterOptions,
    HtmlToPdfOptions,
    MarginOptions,
    Orientation,
    canonical_page_size,
)
from .base import MarkupRenderer

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE_PATH = "C:/Program Files/wkhtmltox/bin/wkhtmltopdf.exe"
IMAGE_DPI = 600
IMAGE_QUALITY = 94


def encode_special_chars(text: str) -> str:
    # Non-ASCII characters as numeric character references.
    return ''.join(ch if ord(ch) <= 127 else f"&#{ord(ch)};" for ch in text)


class WkHtmlToPdfRenderer(MarkupRenderer):
    """Renders HTML by piping it through wkhtmltopdf.

    The HTML is written to stdin and the PDF read from stdout. No output
    means the conversion failed; the process' stderr becomes the message of
    the raised RenderError.
    """

    def __init__(self, executable_path: Optional[str] = None):
        self.executable_path = executable_path

    def _get_path(self, options: HtmlToPdfOptions) -> str:
        path = (
            options.executable_path
            or self.executable_path
            or shutil.which("wkhtmltopdf")
            or DEFAULT_EXECUTABLE_PATH
        )
        if not Path(path).is_file():
            raise FileNotFoundError(f"Executable not found: {path}")
        return path

    def get_switches(
        self,
        options: HtmlToPdfOptions,
        margins: MarginOptions,
        footer: Optional[FooterOptions]
    ) -> List[str]:
        switches = [
            "-q",
            "--page-size", canonical_page_size(options.page_size),
            "--orientation", Orientation.parse(options.orientation).value,
            "--margin-top", f"{margins.top}mm",
            "--margin-bottom", f"{margins.bottom}mm",
            "--margin-left", f"{margins.left}mm",
            "--margin-right", f"{margins.right}mm",
        ]
        if options.title:
            switches += ["--title", options.title]

        switches += [
            "--image-dpi", str(IMAGE_DPI),
            "--image-quality", str(IMAGE_QUALITY),
        ]
        if options.disable_smart_shrinking:
            switches.append("--disable-smart-shrinking")

        if footer is not None:
            if footer.text:
                switches += ["--footer-center", footer.text]
            if footer.html_path:
                switches += ["--footer-html", footer.html_path]
            if footer.spacing:
                switches += ["--footer-spacing", str(footer.spacing)]
            if footer.include_line:
                switches.append("--footer-line")

        # Read HTML from stdin, write PDF to stdout
        return switches + ["-", "-"]

    def render(
        self,
        markup: str,
        options: Optional[HtmlToPdfOptions] = None,
        margins: Optional[MarginOptions] = None,
        footer: Optional[FooterOptions] = None
    ) -> bytes:
        options = options or HtmlToPdfOptions()
        margins = margins or MarginOptions()

        command = [self._get_path(options)] + self.get_switches(options, margins, footer)
        logger.debug("Running %s", " ".join(command))

        result = subprocess.run(
            command,
            input=encode_special_chars(markup).encode("ascii"),
            capture_output=True
        )

        if not result.stdout:
            raise RenderError(result.stderr.decode("utf-8", errors="replace"))
        return result.stdout
