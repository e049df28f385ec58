"""Tests for embedded file name tree access."""

import io

import pikepdf
import pytest

from pdftasks.name_tree import (
    FlatNameTree,
    PagedNameTree,
    delete_indices,
    locate_embedded_files,
    name_tree_entries,
)
from pdf_factory import Attachment, attach, make_pdf


def _open(data: bytes) -> pikepdf.Pdf:
    return pikepdf.open(io.BytesIO(data))


@pytest.fixture(scope="module")
def base_pdf() -> bytes:
    return make_pdf(["Attachments"])


def _files(*names):
    return [Attachment(name, f"data of {name}".encode()) for name in names]


class TestLocate:

    def test_no_name_tree(self, base_pdf):
        with _open(base_pdf) as pdf:
            assert locate_embedded_files(pdf) is None
            assert name_tree_entries(pdf) == []

    def test_flat_tree(self, base_pdf):
        data = attach(base_pdf, _files("a.txt", "b.txt"))
        with _open(data) as pdf:
            tree = locate_embedded_files(pdf)
            assert isinstance(tree, FlatNameTree)
            assert [e.key for e in name_tree_entries(pdf)] == ["a.txt", "b.txt"]

    def test_kids_are_concatenated_in_order(self, base_pdf):
        data = attach(base_pdf, _files("a.txt", "b.txt", "c.txt", "d.txt", "e.txt"), per_kid=2)
        with _open(data) as pdf:
            tree = locate_embedded_files(pdf)
            assert isinstance(tree, PagedNameTree)
            assert len(tree.kids) == 3
            entries = name_tree_entries(pdf)
            assert [e.key for e in entries] == ["a.txt", "b.txt", "c.txt", "d.txt", "e.txt"]
            assert [e.index for e in entries] == [0, 2, 0, 2, 0]

    def test_entries_carry_file_specs(self, base_pdf):
        data = attach(base_pdf, _files("a.txt"))
        with _open(data) as pdf:
            entry = name_tree_entries(pdf)[0]
            assert str(entry.file_spec.UF) == "a.txt"

    def test_odd_length_array_yields_no_entries(self, base_pdf):
        raw = [pikepdf.String("a"), pikepdf.String("b"), pikepdf.String("c")]
        data = attach(base_pdf, [], raw_names=raw)
        with _open(data) as pdf:
            assert locate_embedded_files(pdf) is not None
            assert name_tree_entries(pdf) == []

    def test_empty_kids_are_absent(self, base_pdf):
        with _open(base_pdf) as pdf:
            pdf.Root.Names = pikepdf.Dictionary(
                EmbeddedFiles=pikepdf.Dictionary(Kids=pikepdf.Array([pikepdf.Dictionary(Names=pikepdf.Array())]))
            )
            assert locate_embedded_files(pdf) is None

    def test_deeper_tree_is_absent(self, base_pdf):
        with _open(base_pdf) as pdf:
            leaf = pikepdf.Dictionary(Names=pikepdf.Array([pikepdf.String("x"), pikepdf.Dictionary()]))
            middle = pikepdf.Dictionary(Kids=pikepdf.Array([leaf]))
            pdf.Root.Names = pikepdf.Dictionary(
                EmbeddedFiles=pikepdf.Dictionary(Kids=pikepdf.Array([middle]))
            )
            assert locate_embedded_files(pdf) is None
            assert name_tree_entries(pdf) == []


class TestDeleteIndices:

    def test_deletes_highest_index_first(self):
        array = pikepdf.Array([0, 1, 2, 3, 4, 5])
        delete_indices(array, [0, 1, 4, 5])
        assert [int(x) for x in array] == [2, 3]

    def test_order_of_indices_does_not_matter(self):
        array = pikepdf.Array([10, 11, 12, 13, 14])
        delete_indices(array, [1, 3])
        assert [int(x) for x in array] == [10, 12, 14]
