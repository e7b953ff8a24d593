r"""
LLF: a line-oriented, YAML-like representation of a stringtable.

    # converted
    #Version: 3
    #Language: 0
    #csf count: 2
    #build time: 2024-01-01 12:00:00

    gui:ok: OK
    tip:long: >-
      first line
      second line

Parsing rules:
    - "#Version:" and "#Language:" comments set metadata; other comments are ignored
    - The first ": " on a line separates the label name from its value
    - "name: >-" opens a block; every following line indented by two spaces
      is one line of the value
    - Blank lines outside a block are ignored; blank lines inside a block are
      empty value lines when more block lines follow them
    - A trailing "\r" is dropped from every line (CRLF files), so a value
      line ending in "\r" loses it: "a\r\nb" loads back as "a\nb"
"""

import re
from datetime import datetime
from typing import BinaryIO, List, Optional, Tuple

from ..errors import InvalidArgumentError, InvalidLabelNameError, MalformedTextFileError
from ..model import LINE_BREAK, CsfFile, CsfFileOptions, CsfLang, validate_label_name
from ..serialization import read_text, write_text


SEPARATOR = ": "
BLOCK_MARKER = ">-"
BLOCK_INDENT = "  "

_VERSION_RE = re.compile(r"^#Version:\s*(-?\d+)")
_LANGUAGE_RE = re.compile(r"^#Language:\s*(-?\d+)")


def split_label_line(line: str) -> Optional[Tuple[str, str]]:
    """Split "name: value" (or "name:" for an empty value). Returns None if there is no separator."""
    name, sep, value = line.partition(SEPARATOR)
    if sep:
        return name, value
    if line.endswith(":"):
        return line[:-1], ""
    return None


def load_llf(stream: BinaryIO, options: Optional[CsfFileOptions] = None) -> CsfFile:
    """
    Load a stringtable from its LLF representation.

    Missing "#Version"/"#Language" comments leave the CsfFile defaults.

    Raises:
        MalformedTextFileError: If a line is neither a comment, a label, nor a block line
        InvalidLabelNameError: If a label name is invalid
    """
    csf = CsfFile(options)

    block_name: Optional[str] = None
    block_lines: List[str] = []
    pending_blank = 0

    def close_block():
        nonlocal block_name, block_lines, pending_blank
        if block_name is not None:
            csf.add_or_replace(block_name, LINE_BREAK.join(block_lines))
        block_name, block_lines, pending_blank = None, [], 0

    for line_number, line in enumerate(read_text(stream).split("\n"), start=1):
        line = line.rstrip("\r")

        if block_name is not None:
            if line.startswith(BLOCK_INDENT):
                block_lines.extend([""] * pending_blank)
                pending_blank = 0
                block_lines.append(line[len(BLOCK_INDENT):])
                continue
            if not line.strip():
                pending_blank += 1
                continue
            close_block()

        if not line.strip():
            continue

        if line.startswith("#"):
            version_match = _VERSION_RE.match(line)
            if version_match:
                csf.version = int(version_match.group(1))
                continue
            language_match = _LANGUAGE_RE.match(line)
            if language_match:
                csf.language = CsfLang.from_code(int(language_match.group(1)))
            continue

        parts = split_label_line(line)
        if parts is None:
            raise MalformedTextFileError(f"Line {line_number}: expected 'name: value', got {line!r}.")
        name, value = parts
        if value == BLOCK_MARKER:
            block_name = name
        else:
            csf.add_or_replace(name, value)

    close_block()
    return csf


def save_llf(csf: CsfFile, stream: BinaryIO, file_name: str = "converted") -> None:
    """
    Write a stringtable in its LLF representation.

    Raises:
        InvalidLabelNameError: If a label name cannot be written unambiguously
            (contains ": ", starts with '#' or a space, or is invalid)
    """
    if csf is None:
        raise InvalidArgumentError("csf must not be None.")

    lines = [
        f"# {file_name}",
        f"#Version: {csf.version}",
        f"#Language: {int(csf.language)}",
        f"#csf count: {len(csf)}",
        f"#build time: {datetime.now():%Y-%m-%d %H:%M:%S}",
        "",
    ]

    for label_name, label_value in csf.labels.items():
        _check_llf_name(label_name)
        if LINE_BREAK in label_value or label_value == BLOCK_MARKER:
            lines.append(f"{label_name}{SEPARATOR}{BLOCK_MARKER}")
            lines.extend(BLOCK_INDENT + part for part in label_value.split(LINE_BREAK))
        else:
            lines.append(f"{label_name}{SEPARATOR}{label_value}")

    write_text(stream, "\n".join(lines) + "\n")


def _check_llf_name(label_name: str) -> None:
    if not validate_label_name(label_name):
        raise InvalidLabelNameError(f"Invalid characters in label name {label_name!r}.")
    if SEPARATOR in label_name or label_name.startswith(("#", " ")) or label_name.endswith(":"):
        raise InvalidLabelNameError(f"Label name {label_name!r} cannot be written as LLF.")


__all__ = ["split_label_line", "load_llf", "save_llf"]
