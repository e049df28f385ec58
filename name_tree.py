"""Embedded-file name tree access.

The ``/EmbeddedFiles`` name tree of a catalog keeps its entries either in a
single ``/Names`` array of alternating key/value items, or split over
``/Kids`` nodes that each carry such an array. Both shapes are normalized
once into a flat list of :class:`NameTreeEntry` in natural attachment order
(kid order, then position inside the kid).

Trees nested deeper than one level of kids are not supported and are
reported as absent.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

import pikepdf

logger = logging.getLogger(__name__)


@dataclass
class FlatNameTree:
    names: pikepdf.Array


@dataclass
class PagedNameTree:
    kids: List[pikepdf.Array]


NameTree = Union[FlatNameTree, PagedNameTree]


@dataclass
class NameTreeEntry:
    key: str
    file_spec: Optional[pikepdf.Dictionary]
    # Array the pair lives in and the index of the key inside it
    owner: pikepdf.Array
    index: int


def _embedded_files_node(pdf: pikepdf.Pdf) -> Optional[pikepdf.Dictionary]:
    names = pdf.Root.get("/Names")
    if not isinstance(names, pikepdf.Dictionary):
        return None
    node = names.get("/EmbeddedFiles")
    if not isinstance(node, pikepdf.Dictionary):
        return None
    return node


def locate_embedded_files(pdf: pikepdf.Pdf) -> Optional[NameTree]:
    node = _embedded_files_node(pdf)
    if node is None:
        return None

    names = node.get("/Names")
    if isinstance(names, pikepdf.Array):
        return FlatNameTree(names)

    kids = node.get("/Kids")
    if not isinstance(kids, pikepdf.Array):
        return None

    arrays = []
    for kid in kids:
        if not isinstance(kid, pikepdf.Dictionary):
            continue
        kid_names = kid.get("/Names")
        if isinstance(kid_names, pikepdf.Array):
            arrays.append(kid_names)
        elif "/Kids" in kid:
            logger.warning("Embedded file name tree is nested deeper than one level, ignoring it")
            return None

    if sum(len(a) for a in arrays) == 0:
        return None
    return PagedNameTree(arrays)


def flatten(tree: Optional[NameTree]) -> List[NameTreeEntry]:
    if tree is None:
        return []

    if isinstance(tree, FlatNameTree):
        arrays = [tree.names]
    else:
        arrays = tree.kids

    entries = []
    for array in arrays:
        if len(array) % 2 != 0:
            logger.warning("Odd-length name tree array (%d items), treating as empty", len(array))
            return []
        for i in range(0, len(array), 2):
            value = array[i + 1]
            file_spec = value if isinstance(value, pikepdf.Dictionary) else None
            entries.append(NameTreeEntry(
                key=str(array[i]),
                file_spec=file_spec,
                owner=array,
                index=i
            ))
    return entries


def name_tree_entries(pdf: pikepdf.Pdf) -> List[NameTreeEntry]:
    return flatten(locate_embedded_files(pdf))


def delete_indices(array: pikepdf.Array, indices: Iterable[int]) -> None:
    # Highest index first, so earlier deletions never shift the later ones.
    for index in sorted(set(indices), reverse=True):
        del array[index]


def refresh_limits(pdf: pikepdf.Pdf) -> None:
    # Keep /Limits of the kids in line with their remaining keys.
    node = _embedded_files_node(pdf)
    if node is None:
        return
    kids = node.get("/Kids")
    if not isinstance(kids, pikepdf.Array):
        return
    for kid in kids:
        if not isinstance(kid, pikepdf.Dictionary) or "/Limits" not in kid:
            continue
        names = kid.get("/Names")
        if not isinstance(names, pikepdf.Array):
            continue
        if len(names) >= 2:
            kid.Limits = pikepdf.Array([names[0], names[len(names) - 2]])
        else:
            del kid["/Limits"]
