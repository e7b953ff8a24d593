r"""
INI representation of a stringtable.

Layout (the same one CsfStudio reads and writes):

    [SadPencil.Ra2CsfFile.Ini]
    IniVersion=2
    CsfVersion=3
    CsfLang=0

    [gui:ok]
    Value=OK

    [tip:long]
    Value=first line
    ValueLine2=second line

Each label is a section. Line n of the value is stored under "Value" for
n == 1 and "ValueLine<n>" otherwise. Keys are case-insensitive on read.
There are no comments and no interpolation: ';', '#' and '%' are plain text.
Leading and trailing whitespace of a value line is not preserved, and that
includes a carriage return: "a\r" loads back as "a" and "a\r\nb" as "a\nb".
Use JSON, YAML or CSF for values that must keep "\r".
"""

import configparser
from io import StringIO
from typing import BinaryIO, Optional

from ..errors import InvalidArgumentError, InvalidLabelNameError, MalformedTextFileError
from ..model import LINE_BREAK, CsfFile, CsfFileOptions, CsfLang, validate_label_name
from ..serialization import read_text, write_text


INI_TYPE_NAME = "SadPencil.Ra2CsfFile.Ini"
HEADER_SECTION = "SadPencil.Ra2CsfFile.Ini"
INI_VERSION_KEY = "IniVersion"
CSF_VERSION_KEY = "CsfVersion"
CSF_LANGUAGE_KEY = "CsfLang"
INI_VERSION = 2

# Label names cannot contain control characters, so no label collides with this.
_NO_DEFAULT_SECTION = "\x00"


def _new_parser(preserve_key_case: bool = False) -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        delimiters=("=",),
        comment_prefixes=(),
        inline_comment_prefixes=None,
        strict=True,
        empty_lines_in_values=False,
        interpolation=None,
        default_section=_NO_DEFAULT_SECTION,
    )
    if preserve_key_case:
        parser.optionxform = str
    return parser


def value_key_name(line_index: int) -> str:
    """Key holding line `line_index` (1-based) of a label value."""
    return "Value" if line_index == 1 else f"ValueLine{line_index}"


def load_ini(stream: BinaryIO, options: Optional[CsfFileOptions] = None) -> CsfFile:
    """
    Load a stringtable from its INI representation.

    Raises:
        MalformedTextFileError: If the INI is unparsable, lacks the header
            section, or has an unknown IniVersion
        InvalidLabelNameError: If a section name is not a valid label name
    """
    parser = _new_parser()
    try:
        parser.read_string(read_text(stream))
    except configparser.Error as exc:
        raise MalformedTextFileError(f"Invalid {INI_TYPE_NAME} file: {exc}") from exc

    header_name = next(
        (s for s in parser.sections() if s.lower() == HEADER_SECTION.lower()), None
    )
    if header_name is None:
        raise MalformedTextFileError(f"Invalid {INI_TYPE_NAME} file. Missing section [{HEADER_SECTION}].")
    header = parser[header_name]

    if INI_VERSION_KEY not in header:
        raise MalformedTextFileError(f'Invalid {INI_TYPE_NAME} file. Missing key "{INI_VERSION_KEY}".')
    if _parse_int(header, INI_VERSION_KEY) != INI_VERSION:
        raise MalformedTextFileError(f"Unknown {INI_TYPE_NAME} file version. Expected {INI_VERSION}.")

    csf = CsfFile(options)
    if CSF_VERSION_KEY in header:
        csf.version = _parse_int(header, CSF_VERSION_KEY)
    if CSF_LANGUAGE_KEY in header:
        csf.language = CsfLang.from_code(_parse_int(header, CSF_LANGUAGE_KEY))

    for section_name in parser.sections():
        if section_name == header_name:
            continue
        if not validate_label_name(section_name):
            raise InvalidLabelNameError(f"Invalid characters in label name {section_name!r}.")

        section = parser[section_name]
        value_lines = []
        line_index = 1
        while value_key_name(line_index) in section:
            value_lines.append(section[value_key_name(line_index)])
            line_index += 1

        if value_lines:
            csf.add_or_replace(section_name, LINE_BREAK.join(value_lines))

    return csf


def _parse_int(section: configparser.SectionProxy, key: str) -> int:
    try:
        return int(section[key])
    except ValueError as exc:
        raise MalformedTextFileError(
            f"Invalid {INI_TYPE_NAME} file. {key} must be an integer, got {section[key]!r}."
        ) from exc


def save_ini(csf: CsfFile, stream: BinaryIO) -> None:
    """
    Write a stringtable in its INI representation.

    Raises:
        InvalidLabelNameError: If a stored label name is invalid
    """
    if csf is None:
        raise InvalidArgumentError("csf must not be None.")

    parser = _new_parser(preserve_key_case=True)
    parser.add_section(HEADER_SECTION)
    parser.set(HEADER_SECTION, INI_VERSION_KEY, str(INI_VERSION))
    parser.set(HEADER_SECTION, CSF_VERSION_KEY, str(csf.version))
    parser.set(HEADER_SECTION, CSF_LANGUAGE_KEY, str(int(csf.language)))

    for label_name, label_value in csf.labels.items():
        if not validate_label_name(label_name):
            raise InvalidLabelNameError(f"Invalid characters in label name {label_name!r}.")

        parser.add_section(label_name)
        for line_index, line in enumerate(label_value.split(LINE_BREAK), start=1):
            parser.set(label_name, value_key_name(line_index), line)

    buffer = StringIO()
    parser.write(buffer, space_around_delimiters=False)
    write_text(stream, buffer.getvalue())


__all__ = ["HEADER_SECTION", "INI_VERSION", "value_key_name", "load_ini", "save_ini"]
