"""Tests for the command line interface."""

import pytest

from pdftasks.main import build_parser, main
from pdf_factory import Attachment, attach, make_pdf, numbered_pdf, page_count


def test_merge(tmp_path):
    first = tmp_path / "a.pdf"
    second = tmp_path / "b.pdf"
    first.write_bytes(numbered_pdf(1))
    second.write_bytes(numbered_pdf(2))
    output = tmp_path / "merged.pdf"

    main(["-q", "merge", str(first), str(second), "-o", str(output)])

    assert page_count(output.read_bytes()) == 3


def test_split_writes_documents_and_metadata(tmp_path):
    source = tmp_path / "merged.pdf"
    source.write_bytes(make_pdf(["x", "{one}", "{two}"]))
    output = tmp_path / "segments"

    main(["-q", "split", str(source), r"\{\w+\}", "-o", str(output)])

    assert (output / "Segment_01.txt").read_text(encoding="utf-8") == "{one}"
    assert page_count((output / "Segment_01.pdf").read_bytes()) == 2
    assert page_count((output / "Segment_02.pdf").read_bytes()) == 1


def test_extract_attachments(tmp_path):
    source = tmp_path / "in.pdf"
    source.write_bytes(attach(numbered_pdf(1), [Attachment("a.txt", b"hello"), Attachment("b.png", b"x")]))
    output = tmp_path / "files"

    main(["-q", "attachments", str(source), "-f", "*.txt", "-x", "-o", str(output)])

    assert [p.name for p in output.iterdir()] == ["a.txt"]
    assert (output / "a.txt").read_bytes() == b"hello"


def test_text_prints_matches(tmp_path, capsys):
    source = tmp_path / "in.pdf"
    source.write_bytes(make_pdf(["Order 42"]))

    main(["text", str(source), r"\d+"])

    assert capsys.readouterr().out.strip() == "42"


def test_missing_input_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["text", str(tmp_path / "missing.pdf"), "x"])
    assert excinfo.value.code == 1
    assert "missing.pdf" in capsys.readouterr().err


def test_invalid_pattern_exits(tmp_path, capsys):
    source = tmp_path / "in.pdf"
    source.write_bytes(numbered_pdf(1))
    with pytest.raises(SystemExit) as excinfo:
        main(["text", str(source), "("])
    assert excinfo.value.code == 2
    assert "Invalid pattern" in capsys.readouterr().err


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
