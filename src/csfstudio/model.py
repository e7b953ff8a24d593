"""
Core Stringtable Model Objects

Defines the in-memory representation shared by every file format:
    - CsfLang (language code of a stringtable)
    - CsfFileOptions (behavior switches carried alongside a document)
    - CsfFile (the label store: ordered, name-unique label map plus metadata)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about byte layouts or textual grammars
        - Are plain value objects (clone is deep, no shared state)
        - Are the single source of truth for every format adapter
"""

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Union

from .errors import InvalidArgumentError, InvalidLabelNameError


LINE_BREAK = "\n"

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


class CsfLang(IntEnum):
    """
    Language codes stored in the CSF header.

    Codes outside this enum are legal in the wild. They are kept as the raw
    int (see from_code) so that a load/save cycle reproduces them exactly.
    """

    ENGLISH_US = 0
    ENGLISH_UK = 1
    GERMAN = 2
    FRENCH = 3
    SPANISH = 4
    ITALIAN = 5
    JAPANESE = 6
    JABBERWOCKIE = 7
    KOREAN = 8
    CHINESE = 9

    @classmethod
    def from_code(cls, code: int) -> Union["CsfLang", int]:
        """
        Map a raw header code to a language.

        Args:
            code: Integer language code

        Returns:
            The matching CsfLang member, or the raw int for unknown codes
        """
        try:
            return cls(code)
        except ValueError:
            return code


Language = Union[CsfLang, int]


@dataclass(frozen=True)
class CsfFileOptions:
    """
    Switches that control how a stringtable is read and written.

    These are not part of the persisted content and do not take part in
    equality.

    Properties:
        encoding1252_read_workaround:
            Remap Windows-1252 C1 control characters (U+0080..U+009F) to the
            printable characters they stand for when reading .csf values

        encoding1252_write_workaround:
            Apply the reverse remap when writing .csf values
    """

    encoding1252_read_workaround: bool = False
    encoding1252_write_workaround: bool = False


def validate_label_name(label_name: Optional[str]) -> bool:
    """Return True for a non-empty ASCII name without control characters."""
    if not label_name:
        return False
    return all(32 <= ord(c) < 127 for c in label_name)


def lowercase_label_name(label_name: str) -> str:
    """Lowercase a label name for case-insensitive lookup."""
    return label_name.lower()


class CsfFile:
    """
    A stringtable: label names mapped to label values, plus metadata.

    Properties:
        version:
            CSF format version (signed 32-bit, default 3). Opaque: it is only
            carried through load/save.

        language:
            CsfLang member, or a raw int for an unrecognised code

        labels:
            Read-only, insertion-ordered view of name -> value.
            Names are always lowercase; values use LINE_BREAK between lines.

        options:
            CsfFileOptions used by the binary codec

    INVARIANTS:
        - Every stored name passes validate_label_name
        - Every stored name is already lowercase
        - No two entries share a name (inserting again overwrites in place)
    """

    def __init__(
        self,
        options: Optional[CsfFileOptions] = None,
        *,
        version: int = 3,
        language: Language = CsfLang.ENGLISH_US,
        labels: Optional[Mapping[str, str]] = None,
    ):
        self.options = options if options is not None else CsfFileOptions()
        self._labels: Dict[str, str] = {}
        self.version = version
        self.language = language
        if labels:
            for name, value in labels.items():
                self.add_or_replace(name, value)

    @property
    def version(self) -> int:
        return self._version

    @version.setter
    def version(self, value: int) -> None:
        self._version = _check_int32(value, "version")

    @property
    def language(self) -> Language:
        return self._language

    @language.setter
    def language(self, value: Language) -> None:
        self._language = CsfLang.from_code(_check_int32(value, "language"))

    @property
    def labels(self) -> Mapping[str, str]:
        return MappingProxyType(self._labels)

    def add_label(self, label_name: str, label_value: str) -> bool:
        """
        Add or replace a label whose name is already lowercase.

        Args:
            label_name: Label name (must be lowercase)
            label_value: Label value

        Returns:
            True if an existing label was replaced

        Raises:
            InvalidArgumentError: If name or value is None or not a string
            InvalidLabelNameError: If the name is invalid or not lowercase
        """
        _check_str(label_name, "label_name")
        _check_str(label_value, "label_value")
        if not validate_label_name(label_name):
            raise InvalidLabelNameError(f"Invalid characters found in label name {label_name!r}.")
        if label_name != lowercase_label_name(label_name):
            raise InvalidLabelNameError(f"Label name {label_name!r} should be in lower case.")

        replaced = label_name in self._labels
        self._labels[label_name] = label_value
        return replaced

    def add_or_replace(self, label_name: str, label_value: str) -> bool:
        """
        Add or replace a label, lowercasing the name first.

        This is the entry point used by every loader.

        Returns:
            True if an existing label was replaced
        """
        _check_str(label_name, "label_name")
        return self.add_label(lowercase_label_name(label_name), label_value)

    def remove(self, label_name: str) -> bool:
        """Remove a label by its (lowercase) name. Returns whether it existed."""
        return self._labels.pop(label_name, None) is not None

    def get(self, label_name: str, default: Optional[str] = None) -> Optional[str]:
        return self._labels.get(label_name, default)

    def clone(self) -> "CsfFile":
        """Return an independent copy; mutating one never affects the other."""
        copy = CsfFile(self.options, version=self._version, language=self._language)
        copy._labels = dict(self._labels)
        return copy

    __copy__ = clone

    def __deepcopy__(self, memo) -> "CsfFile":
        return self.clone()

    def __contains__(self, label_name: object) -> bool:
        return label_name in self._labels

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CsfFile):
            return NotImplemented
        return (
            self._version == other._version
            and int(self._language) == int(other._language)
            and self._labels == other._labels
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"CsfFile(version={self._version}, language={self._language!r}, "
            f"labels={len(self._labels)})"
        )


def _check_str(value: object, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None.")
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} must be a string, got {type(value).__name__}.")


def _check_int32(value: object, name: str) -> int:
    # bool is an int subclass but never a meaningful header field
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {type(value).__name__}.")
    if not INT32_MIN <= value <= INT32_MAX:
        raise InvalidArgumentError(f"{name} {value} does not fit in a signed 32-bit integer.")
    return value
