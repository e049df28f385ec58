import argparse
import logging
import sys
from pathlib import Path
from typing import List

from . import tasks
from .errors import PdfTaskError
from .options import (
    ConvertEmbeddedOptions,
    FooterOptions,
    HtmlToPdfOptions,
    MarginOptions,
    Orientation,
    PdfCommonOptions,
)


class PdfTaskRunner:
    # Reads input files, runs a task and writes its results.

    def __init__(self, output: str = "output", verbose: bool = True):
        self.output = Path(output)
        self.verbose = verbose

    def _log(self, message: str):
        # Print log message if verbose mode is on.
        if self.verbose:
            print(message)

    def _write(self, path: Path, data: bytes) -> str:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        self._log(f"  Created: {path}")
        return str(path)

    def attachments(self, input_path: str, pattern: str, extract: bool, prefix: bool) -> List[str]:
        options = PdfCommonOptions(filter=pattern, extract_description_prefix=prefix, make_filename_safe=True)
        found = tasks.extract_attachments(Path(input_path).read_bytes(), options)
        self._log(f"Found {len(found)} attachment(s)")

        results = []
        for attachment in found:
            label = f"{attachment.description_prefix} {attachment.name}".strip()
            self._log(f"  - {label} ({len(attachment.data)} bytes)")
            if extract:
                results.append(self._write(self.output / attachment.name, attachment.data))
        return results

    def remove(self, input_path: str, pattern: str) -> str:
        result = tasks.remove_attachments(Path(input_path).read_bytes(), PdfCommonOptions(filter=pattern))
        return self._write(self.output, result)

    def images_to_pages(self, input_path: str, pattern: str, caption: str) -> str:
        options = ConvertEmbeddedOptions(caption=caption, filter=pattern)
        result = tasks.convert_embedded_images_to_pages(Path(input_path).read_bytes(), options)
        return self._write(self.output, result)

    def merge(self, input_paths: List[str]) -> str:
        documents = [Path(p).read_bytes() for p in input_paths]
        self._log(f"Merging {len(documents)} documents")
        return self._write(self.output, tasks.merge_pdfs(documents))

    def merge_embedded(self, input_path: str, pattern: str) -> str:
        result = tasks.merge_embedded_pdf_documents(Path(input_path).read_bytes(), PdfCommonOptions(filter=pattern))
        return self._write(self.output, result)

    def split(self, input_path: str, pattern: str) -> List[str]:
        segments = tasks.split_by_marker(Path(input_path).read_bytes(), pattern)
        self._log(f"Found {len(segments)} segment(s)")

        results = []
        for idx, segment in enumerate(segments):
            section_num = str(idx + 1).zfill(2)
            self._log(f"  {section_num}: {segment.metadata}")
            results.append(self._write(self.output / f"Segment_{section_num}.pdf", segment.document))
            (self.output / f"Segment_{section_num}.txt").write_text(segment.metadata, encoding='utf-8')
        return results

    def text(self, input_path: str, pattern: str) -> str:
        return tasks.extract_text_by_regex(Path(input_path).read_bytes(), pattern)

    def footer(self, input_path: str, text: str) -> str:
        result = tasks.add_footer(Path(input_path).read_bytes(), text.replace('\\n', '\n'))
        return self._write(self.output, result)

    def html(self, input_path: str, args) -> str:
        options = HtmlToPdfOptions(
            title=args.title,
            orientation=Orientation.parse(args.orientation),
            page_size=args.page_size,
            executable_path=args.executable,
            disable_smart_shrinking=args.disable_smart_shrinking
        )
        margins = MarginOptions(top=args.margin, bottom=args.margin, left=args.margin, right=args.margin)
        footer = FooterOptions(text=args.footer) if args.footer else None
        html = Path(input_path).read_text(encoding='utf-8')
        result = tasks.convert_html_to_pdf(html, options, margins, footer, renderer=args.renderer)
        return self._write(self.output, result)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="pdftasks - PDF attachment, split and merge tasks"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress output messages")
    parser.add_argument("--debug", action="store_true", help="Show debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    p = commands.add_parser("attachments", help="List or extract embedded files")
    p.add_argument("input")
    p.add_argument("-f", "--filter", default="*", help="File name filter, e.g. '*.jpg, *.png'")
    p.add_argument("-x", "--extract", action="store_true", help="Write the files to the output directory")
    p.add_argument("--prefix", action="store_true", help="Show description prefixes")
    p.add_argument("-o", "--output", default="attachments")

    p = commands.add_parser("remove", help="Remove embedded and associated files")
    p.add_argument("input")
    p.add_argument("-f", "--filter", default="*")
    p.add_argument("-o", "--output", required=True)

    p = commands.add_parser("images-to-pages", help="Move embedded images to new pages")
    p.add_argument("input")
    p.add_argument("-f", "--filter", default="*")
    p.add_argument("-c", "--caption", help="Caption above each image, [FILENAME] is replaced")
    p.add_argument("-o", "--output", required=True)

    p = commands.add_parser("merge", help="Merge PDF files in the given order")
    p.add_argument("inputs", nargs="+")
    p.add_argument("-o", "--output", required=True)

    p = commands.add_parser("merge-embedded", help="Append embedded PDF files")
    p.add_argument("input")
    p.add_argument("-f", "--filter", default=None)
    p.add_argument("-o", "--output", required=True)

    p = commands.add_parser("split", help="Split a merged PDF at marker text")
    p.add_argument("input")
    p.add_argument("pattern", help="Regular expression matching the marker")
    p.add_argument("-o", "--output", default="segments")

    p = commands.add_parser("text", help="Print all text matching a regular expression")
    p.add_argument("input")
    p.add_argument("pattern")

    p = commands.add_parser("footer", help="Add a footer to every page")
    p.add_argument("input")
    p.add_argument("text", help="Footer text, \\n starts a new line")
    p.add_argument("-o", "--output", required=True)

    p = commands.add_parser("html", help="Convert an HTML file to PDF")
    p.add_argument("input")
    p.add_argument("-o", "--output", required=True)
    p.add_argument("--renderer", choices=["weasyprint", "wkhtmltopdf"], default="weasyprint")
    p.add_argument("--title")
    p.add_argument("--orientation", default="Portrait")
    p.add_argument("--page-size", default="A4")
    p.add_argument("--margin", type=float, default=10, help="Margin in mm")
    p.add_argument("--footer")
    p.add_argument("--executable", help="Path to wkhtmltopdf")
    p.add_argument("--disable-smart-shrinking", action="store_true")

    return parser


def main(argv=None):
    # CLI entry point.
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    runner = PdfTaskRunner(output=getattr(args, "output", "output"), verbose=not args.quiet)

    try:
        if args.command == "attachments":
            runner.attachments(args.input, args.filter, args.extract, args.prefix)
        elif args.command == "remove":
            runner.remove(args.input, args.filter)
        elif args.command == "images-to-pages":
            runner.images_to_pages(args.input, args.filter, args.caption)
        elif args.command == "merge":
            runner.merge(args.inputs)
        elif args.command == "merge-embedded":
            runner.merge_embedded(args.input, args.filter)
        elif args.command == "split":
            runner.split(args.input, args.pattern)
        elif args.command == "text":
            print(runner.text(args.input, args.pattern))
        elif args.command == "footer":
            runner.footer(args.input, args.text)
        elif args.command == "html":
            runner.html(args.input, args)

    except FileNotFoundError as e:
        print(f"File not found: {e.filename or e}", file=sys.stderr)
        sys.exit(1)
    except PdfTaskError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
