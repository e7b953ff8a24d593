"""
Merge and subtract over sequences of stringtables.

Both operations return a new CsfFile and never modify their inputs.
They work purely on the model: the caller is responsible for making sure
all inputs came from the same kind of file.
"""

from typing import Sequence, Set

from .errors import InsufficientInputsError
from .model import CsfFile


def merge(files: Sequence[CsfFile]) -> CsfFile:
    """
    Union of all labels, later files overriding earlier ones by name.

    Metadata rule (kept exactly as CsfStudio has always applied it):
        after folding in each file, if the running label total equals that
        file's own label count, version and language are taken from it.
        In practice this tracks the last file whose labels were all new
        relative to everything merged before it, as long as nothing overlapped.

    Raises:
        InsufficientInputsError: If `files` is empty
    """
    if not files:
        raise InsufficientInputsError("Need at least 1 file for merging.")

    result = CsfFile()
    for csf in files:
        for label_name, label_value in csf.labels.items():
            result.add_or_replace(label_name, label_value)

        if len(result) == len(csf):
            result.version = csf.version
            result.language = csf.language

    return result


def subtract(files: Sequence[CsfFile]) -> CsfFile:
    """
    Copy of files[0] without any label whose name appears in files[1:].

    Values are not compared; a shared name is enough for removal.

    Raises:
        InsufficientInputsError: If fewer than 2 files are given
    """
    if len(files) < 2:
        raise InsufficientInputsError("Need at least 2 files for subtraction.")

    result = files[0].clone()
    labels_to_remove: Set[str] = set()
    for csf in files[1:]:
        labels_to_remove.update(csf.labels)

    for label_name in labels_to_remove:
        result.remove(label_name)

    return result


__all__ = ["merge", "subtract"]
