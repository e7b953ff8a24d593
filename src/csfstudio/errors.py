"""
Error taxonomy for CSF Studio.

Every failure raised by the core and the format adapters derives from
CsfError and carries:
    - kind: an ErrorKind value (stable, comparable category)
    - offset: absolute byte offset in the source stream, when known

ARCHITECTURAL RULE:
    All of these errors are terminal for the operation that raised them.
    Parsing is deterministic, so nothing here is retried internally.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Categories of failure."""

    INVALID_ARGUMENT = "invalid_argument"
    INVALID_LABEL_NAME = "invalid_label_name"
    INVALID_LABEL_VALUE = "invalid_label_value"
    MALFORMED_BINARY_FILE = "malformed_binary_file"
    MALFORMED_TEXT_FILE = "malformed_text_file"
    ODD_BYTE_COUNT = "odd_byte_count"
    IO_FAILURE = "io_failure"
    INSUFFICIENT_INPUTS = "insufficient_inputs"


class CsfError(Exception):
    """
    Base class for all CSF Studio errors.

    Properties:
        kind:
            ErrorKind of this error (class-level constant)

        offset:
            Byte offset of the offending field, or None when the error
            does not come from a byte stream
    """

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str, offset: Optional[int] = None):
        if offset is not None:
            message = f"{message} (at position {offset})"
        super().__init__(message)
        self.offset = offset


class InvalidArgumentError(CsfError):
    """Raised when a required input is missing or has the wrong type."""
    kind = ErrorKind.INVALID_ARGUMENT


class InvalidLabelNameError(CsfError):
    """Raised when a label name is empty, non-ASCII, has control characters or is not lowercase."""
    kind = ErrorKind.INVALID_LABEL_NAME


class InvalidLabelValueError(CsfError):
    """Raised when a label value cannot be encoded as UTF-16."""
    kind = ErrorKind.INVALID_LABEL_VALUE


class MalformedBinaryFileError(CsfError):
    """Raised when a .csf byte stream does not follow the CSF layout."""
    kind = ErrorKind.MALFORMED_BINARY_FILE


class UnexpectedEofError(MalformedBinaryFileError):
    """Raised when the stream ends in the middle of a record."""
    pass


class InvalidValueTagError(MalformedBinaryFileError):
    """Raised when a value record starts with neither ' RTS' nor 'WRTS'."""
    pass


class InvalidValueEncodingError(MalformedBinaryFileError):
    """Raised when the de-obfuscated value bytes are not valid UTF-16."""
    pass


class MalformedTextFileError(CsfError):
    """Raised when an INI/JSON/YAML/LLF document cannot be turned into a stringtable."""
    kind = ErrorKind.MALFORMED_TEXT_FILE


class OddByteCountError(CsfError):
    """Raised when a UTF-16 encoded value has an odd number of bytes."""
    kind = ErrorKind.ODD_BYTE_COUNT


class IoFailureError(CsfError):
    """Wraps an OSError raised by the underlying stream."""
    kind = ErrorKind.IO_FAILURE


class InsufficientInputsError(CsfError):
    """Raised when merge or subtract receives too few stringtables."""
    kind = ErrorKind.INSUFFICIENT_INPUTS


__all__ = [
    "ErrorKind",
    "CsfError",
    "InvalidArgumentError",
    "InvalidLabelNameError",
    "InvalidLabelValueError",
    "MalformedBinaryFileError",
    "UnexpectedEofError",
    "InvalidValueTagError",
    "InvalidValueEncodingError",
    "MalformedTextFileError",
    "OddByteCountError",
    "IoFailureError",
    "InsufficientInputsError",
]
