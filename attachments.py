import logging
import os
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional

import pikepdf

from .errors import InvalidArgumentError
from .name_tree import delete_indices, name_tree_entries, refresh_limits
from .patterns import compile_glob, matches

logger = logging.getLogger(__name__)


if os.name == "nt":
    INVALID_FILENAME_CHARS = frozenset('<>:"/\\|?*' + ''.join(chr(i) for i in range(32)))
else:
    INVALID_FILENAME_CHARS = frozenset('/\0')


@dataclass
class AttachmentRecord:
    # A file embedded in a PDF document
    name: str
    extension: str
    data: bytes
    description_prefix: str = ""


def sanitize_filename(name: str) -> str:
    # Replace characters the host file system does not allow with '_'.
    return ''.join('_' if ch in INVALID_FILENAME_CHARS else ch for ch in name)


def extension_of(name: str) -> str:
    _, dot, extension = name.rpartition('.')
    return extension if dot else ""


def file_spec_name(file_spec: Optional[pikepdf.Dictionary]) -> Optional[str]:
    # Unicode file name (/UF) wins over the legacy one (/F).
    if file_spec is None:
        return None
    for key in ("/UF", "/F"):
        value = file_spec.get(key)
        if isinstance(value, pikepdf.String):
            return str(value)
    return None


def file_spec_stream(file_spec: Optional[pikepdf.Dictionary]) -> Optional[pikepdf.Stream]:
    if file_spec is None:
        return None
    refs = file_spec.get("/EF")
    if not isinstance(refs, pikepdf.Dictionary):
        return None
    for key in ("/UF", "/F"):
        stream = refs.get(key)
        if isinstance(stream, pikepdf.Stream):
            return stream
    return None


def description_prefix(file_spec: pikepdf.Dictionary, name: str) -> str:
    """Prefix placed in front of the file name in the description.

    Descriptions look like ``"GM image.PNG"`` where ``GM`` is the prefix.
    When the description does not contain the file name there is no prefix.
    """
    description = file_spec.get("/Desc")
    if not isinstance(description, pikepdf.String):
        return ""
    description = str(description)
    if not description or name not in description:
        return ""
    return description.replace(name, "").rstrip()


def _require_document(pdf) -> None:
    if pdf is None:
        raise InvalidArgumentError("pdf document must not be None")


def extract_attachments(
    pdf: pikepdf.Pdf,
    pattern: Optional[str] = None,
    include_description_prefix: bool = False,
    make_filename_safe: bool = False
) -> List[AttachmentRecord]:
    """Extract embedded files (EF) from the document.

    Associated files (AF) are not extracted. Entries with the same name and
    the same data length are considered duplicates; only the first one in
    tree order is returned.

    Args:
        pdf: Open document, not modified
        pattern: Comma separated file name globs, None matches everything
        include_description_prefix: Fill in ``description_prefix``
        make_filename_safe: Replace characters invalid in file names with '_'.
            The pattern is always matched against the original name.
    """
    _require_document(pdf)
    regex = compile_glob(pattern)

    attachments = []
    seen = set()

    for entry in name_tree_entries(pdf):
        name = file_spec_name(entry.file_spec)
        stream = file_spec_stream(entry.file_spec)
        if name is None or stream is None:
            logger.debug("Skipping name tree entry %r without file name or stream", entry.key)
            continue

        data = bytes(stream.read_bytes())
        identity = (name, len(data))
        if identity in seen:
            logger.debug("Skipping duplicate attachment %s (%d bytes)", name, len(data))
            continue
        seen.add(identity)

        if not matches(regex, name):
            continue

        prefix = description_prefix(entry.file_spec, name) if include_description_prefix else ""
        attachments.append(AttachmentRecord(
            name=sanitize_filename(name) if make_filename_safe else name,
            extension=extension_of(name),
            data=data,
            description_prefix=prefix
        ))

    logger.info("Extracted %d attachment(s)", len(attachments))
    return attachments


def get_attachment_names(pdf: pikepdf.Pdf, pattern: Optional[str] = None) -> List[str]:
    # Like extract_attachments, without reading any file data.
    _require_document(pdf)
    regex = compile_glob(pattern)

    names = []
    for entry in name_tree_entries(pdf):
        name = file_spec_name(entry.file_spec)
        if name is not None and matches(regex, name):
            names.append(name)
    return names


def remove_attachment(pdf: pikepdf.Pdf, name: str) -> int:
    """Remove embedded (EF) and associated (AF) files named ``name``.

    The name is compared case-insensitively and must match exactly.
    Returns the number of entries removed.
    """
    _require_document(pdf)
    if name is None:
        raise InvalidArgumentError("attachment name must not be None")
    wanted = name.casefold()

    def is_wanted(file_spec) -> bool:
        file_name = file_spec_name(file_spec)
        return file_name is not None and file_name.casefold() == wanted

    # Group pair indices by the array that owns them; with kids there is
    # one array per kid.
    pending: Dict[int, List[int]] = defaultdict(list)
    owners: Dict[int, pikepdf.Array] = {}
    for entry in name_tree_entries(pdf):
        if is_wanted(entry.file_spec):
            owners[id(entry.owner)] = entry.owner
            pending[id(entry.owner)].extend([entry.index, entry.index + 1])

    removed = 0
    for key, indices in pending.items():
        delete_indices(owners[key], indices)
        removed += len(indices) // 2
    if pending:
        refresh_limits(pdf)

    associated = pdf.Root.get("/AF")
    if isinstance(associated, pikepdf.Array):
        indices = [
            i for i, file_spec in enumerate(associated)
            if isinstance(file_spec, pikepdf.Dictionary) and is_wanted(file_spec)
        ]
        delete_indices(associated, indices)
        removed += len(indices)

    logger.info("Removed %d attachment entries named %s", removed, name)
    return removed
