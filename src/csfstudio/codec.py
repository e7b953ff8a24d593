"""
CSF Binary Codec (.csf stringtables used by Red Alert 2 / Yuri's Revenge).

Format (all integers little-endian int32):
    Header:
        " FSC"  magic (4 bytes)
        version
        label count
        value count
        reserved (0 on write, ignored on read)
        language code
    Label (label count times):
        " LBL"  tag (searched for in 4-byte strides)
        value record count
        name length, name (ASCII)
        Value record (value record count times):
            " RTS" or "WRTS" tag
            char count, char count * 2 bytes of UTF-16LE with every byte inverted
            "WRTS" only: extra length, extra bytes (discarded)

Only the first value record of a label is kept. A label with no value
record is skipped. Writing always emits exactly one " RTS" record per label.

ARCHITECTURAL RULE:
    On any failure the stream is put back where the call found it, so the
    caller can retry (e.g. with different options) on the same stream.
"""

from io import BytesIO
from typing import BinaryIO, Optional

from .binary_io import IoBuffer
from .errors import (
    CsfError,
    InvalidArgumentError,
    InvalidLabelNameError,
    InvalidLabelValueError,
    InvalidValueEncodingError,
    InvalidValueTagError,
    IoFailureError,
    MalformedBinaryFileError,
    OddByteCountError,
    UnexpectedEofError,
)
from .legacy_codepage import to_legacy, to_unicode
from .model import CsfFile, CsfFileOptions, CsfLang, lowercase_label_name, validate_label_name


FILE_MAGIC = b" FSC"
LABEL_TAG = b" LBL"
VALUE_TAG = b" RTS"
EXTRA_VALUE_TAG = b"WRTS"

# byte -> ~byte
_INVERT_TABLE = bytes(0xFF - i for i in range(256))


def invert_bytes(data: bytes) -> bytes:
    """Bitwise-NOT every byte. Applying it twice gives back the input."""
    return data.translate(_INVERT_TABLE)


def encode_value(value: str) -> bytes:
    """
    Encode a label value into its obfuscated on-disk form.

    Raises:
        InvalidLabelValueError: If the value cannot be encoded as UTF-16
        OddByteCountError: If the encoded form is not a whole number of code units
    """
    try:
        data = invert_bytes(value.encode("utf-16-le"))
    except UnicodeEncodeError as exc:
        raise InvalidLabelValueError(f"Label value cannot be encoded as UTF-16: {exc.reason}.") from exc
    if len(data) % 2 != 0:
        raise OddByteCountError(
            f"Unexpected UTF-16LE bytes. Odd number of bytes ({len(data)}) detected."
        )
    return data


def decode_value(data: bytes) -> str:
    """Inverse of encode_value. Raises UnicodeDecodeError on invalid UTF-16."""
    return invert_bytes(data).decode("utf-16-le")


def load_csf(stream: BinaryIO, options: Optional[CsfFileOptions] = None) -> CsfFile:
    """
    Load a stringtable from a .csf byte stream.

    Args:
        stream: Seekable binary stream positioned at the CSF header
        options: CsfFileOptions (defaults to CsfFileOptions())

    Returns:
        CsfFile carrying `options`

    Raises:
        InvalidArgumentError: If stream is None
        MalformedBinaryFileError: If the bytes do not follow the CSF layout
        InvalidLabelNameError: If a label name is invalid
        IoFailureError: If the stream itself fails or is closed
    """
    if stream is None:
        raise InvalidArgumentError("stream must not be None.")
    options = options if options is not None else CsfFileOptions()

    try:
        original_position = stream.tell()
    except (OSError, ValueError) as exc:  # ValueError: closed stream
        raise IoFailureError(f"Error reading CSF file: {exc}") from exc

    try:
        return _read_csf(IoBuffer(stream), options)
    except CsfError:
        stream.seek(original_position)
        raise
    except OSError as exc:
        stream.seek(original_position)
        raise IoFailureError(f"Error reading CSF file: {exc}") from exc


def _read_csf(io: IoBuffer, options: CsfFileOptions) -> CsfFile:
    csf = CsfFile(options)

    header_start = io.position
    if io.stream.read(4) != FILE_MAGIC:
        raise MalformedBinaryFileError("Invalid CSF file header.", offset=header_start)

    csf.version = io.read_int32()
    label_count = io.read_int32()
    _ = io.read_int32()  # value count
    _ = io.read_int32()  # reserved
    csf.language = CsfLang.from_code(io.read_int32())

    for _ in range(label_count):
        name, value = _read_label(io, options)
        if value is not None:
            csf.add_or_replace(name, value)

    return csf


def _read_label(io: IoBuffer, options: CsfFileOptions):
    while True:
        tag_start = io.position
        tag = io.stream.read(4)
        if tag == LABEL_TAG:
            break
        if len(tag) != 4:
            raise UnexpectedEofError("Unexpected end of file while looking for a label.", offset=tag_start)

    value_count = io.read_int32()
    name_length = io.read_length("label name length")
    name_start = io.position
    name_bytes = io.read_bytes(name_length)
    try:
        name = lowercase_label_name(name_bytes.decode("ascii"))
    except UnicodeDecodeError as exc:
        raise InvalidLabelNameError("Invalid label name.", offset=name_start) from exc
    if not validate_label_name(name):
        raise InvalidLabelNameError(f"Invalid characters found in label name {name!r}.", offset=name_start)

    label_value = None
    for index in range(value_count):
        value = _read_value(io, options)
        if index == 0:
            label_value = value
    return name, label_value


def _read_value(io: IoBuffer, options: CsfFileOptions) -> str:
    tag_start = io.position
    tag = io.read_tag()
    if tag == VALUE_TAG:
        has_extra = False
    elif tag == EXTRA_VALUE_TAG:
        has_extra = True
    else:
        raise InvalidValueTagError(f"Invalid label value type {tag!r}.", offset=tag_start)

    char_count = io.read_length("label value length")
    value_start = io.position
    raw = io.read_bytes(char_count * 2)
    try:
        value = decode_value(raw)
    except UnicodeDecodeError as exc:
        raise InvalidValueEncodingError("Invalid label value string.", offset=value_start) from exc
    if options.encoding1252_read_workaround:
        value = to_unicode(value)

    if has_extra:
        extra_length = io.read_length("extra value length")
        io.read_bytes(extra_length)

    return value


def write_csf(csf: CsfFile, stream: BinaryIO) -> None:
    """
    Write a stringtable to a .csf byte stream.

    The whole document is built in memory first; nothing reaches `stream`
    unless every label is valid.

    Raises:
        InvalidArgumentError: If csf or stream is None
        InvalidLabelNameError: If a stored label name is invalid
        InvalidLabelValueError: If a value cannot be encoded as UTF-16
        OddByteCountError: If a value encodes to an odd number of bytes
        IoFailureError: If the stream itself fails or is closed
    """
    if csf is None:
        raise InvalidArgumentError("csf must not be None.")
    if stream is None:
        raise InvalidArgumentError("stream must not be None.")

    try:
        original_position = stream.tell()
    except (OSError, ValueError) as exc:  # ValueError: closed stream
        raise IoFailureError(f"Error writing CSF file: {exc}") from exc

    try:
        stream.write(_build_csf(csf))
    except CsfError:
        stream.seek(original_position)
        raise
    except OSError as exc:
        stream.seek(original_position)
        raise IoFailureError(f"Error writing CSF file: {exc}") from exc


def _build_csf(csf: CsfFile) -> bytes:
    io = IoBuffer(BytesIO())

    io.write_bytes(FILE_MAGIC)
    io.write_int32(csf.version)
    io.write_int32(len(csf.labels))
    io.write_int32(len(csf.labels))
    io.write_int32(0)
    io.write_int32(int(csf.language))

    for label_name, label_value in csf.labels.items():
        if csf.options.encoding1252_write_workaround:
            label_value = to_legacy(label_value)
        if not validate_label_name(label_name):
            raise InvalidLabelNameError(f"Invalid characters found in label name {label_name!r}.")

        io.write_bytes(LABEL_TAG)
        io.write_int32(1)
        name_bytes = label_name.encode("ascii")
        io.write_int32(len(name_bytes))
        io.write_bytes(name_bytes)

        io.write_bytes(VALUE_TAG)
        value_bytes = encode_value(label_value)
        io.write_int32(len(value_bytes) // 2)
        io.write_bytes(value_bytes)

    return io.stream.getvalue()


def csf_to_bytes(csf: CsfFile) -> bytes:
    """Serialize a stringtable to .csf bytes."""
    buffer = BytesIO()
    write_csf(csf, buffer)
    return buffer.getvalue()


def csf_from_bytes(data: bytes, options: Optional[CsfFileOptions] = None) -> CsfFile:
    """Parse .csf bytes into a stringtable."""
    return load_csf(BytesIO(data), options)


__all__ = [
    "FILE_MAGIC",
    "LABEL_TAG",
    "VALUE_TAG",
    "EXTRA_VALUE_TAG",
    "invert_bytes",
    "encode_value",
    "decode_value",
    "load_csf",
    "write_csf",
    "csf_to_bytes",
    "csf_from_bytes",
]
