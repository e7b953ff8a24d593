"""
Serialization helpers for CsfFile objects.

Provides lossless JSON/YAML round-trip via an intermediate dict:

    {"version": 3, "language": 0, "labels": {"name:hello": "Hello"}}

Label order is kept as-is (no key sorting) so output is deterministic
and diff-friendly. Stream functions work on binary streams in UTF-8.
"""
from __future__ import annotations

import json
from typing import Any, BinaryIO, Dict, Optional

import yaml

from .errors import InvalidArgumentError, MalformedTextFileError
from .model import CsfFile, CsfFileOptions, CsfLang


def csf_to_dict(csf: CsfFile) -> Dict[str, Any]:
    if csf is None:
        raise InvalidArgumentError("csf must not be None.")
    return {
        "version": csf.version,
        "language": int(csf.language),
        "labels": dict(csf.labels),
    }


def csf_from_dict(d: Any, options: Optional[CsfFileOptions] = None) -> CsfFile:
    if not isinstance(d, dict):
        raise MalformedTextFileError(f"Expected a mapping at the top level, got {type(d).__name__}.")

    csf = CsfFile(options)
    csf.version = _int_field(d, "version", csf.version)
    csf.language = CsfLang.from_code(_int_field(d, "language", int(csf.language)))

    labels = d.get("labels")
    if labels is None:
        return csf
    if not isinstance(labels, dict):
        raise MalformedTextFileError(f"'labels' must be a mapping, got {type(labels).__name__}.")
    for name, value in labels.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise MalformedTextFileError(f"Label {name!r} must map a string name to a string value.")
        csf.add_or_replace(name, value)
    return csf


def _int_field(d: Dict[str, Any], key: str, default: int) -> int:
    value = d.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedTextFileError(f"'{key}' must be an integer, got {value!r}.")
    return value


def csf_to_json(csf: CsfFile) -> str:
    return json.dumps(csf_to_dict(csf), indent=2, ensure_ascii=False)


def csf_from_json(s: str, options: Optional[CsfFileOptions] = None) -> CsfFile:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as exc:
        raise MalformedTextFileError(f"Invalid JSON format: {exc}") from exc
    return csf_from_dict(d, options)


def csf_to_yaml(csf: CsfFile) -> str:
    return yaml.safe_dump(csf_to_dict(csf), allow_unicode=True, sort_keys=False)


def csf_from_yaml(s: str, options: Optional[CsfFileOptions] = None) -> CsfFile:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as exc:
        raise MalformedTextFileError(f"Invalid YAML format: {exc}") from exc
    return csf_from_dict(d, options)


def read_text(stream: BinaryIO) -> str:
    """Read a whole UTF-8 document (BOM tolerated) from a binary stream."""
    if stream is None:
        raise InvalidArgumentError("stream must not be None.")
    try:
        return stream.read().decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise MalformedTextFileError(f"Document is not valid UTF-8: {exc}") from exc


def write_text(stream: BinaryIO, text: str) -> None:
    if stream is None:
        raise InvalidArgumentError("stream must not be None.")
    stream.write(text.encode("utf-8"))


def load_json(stream: BinaryIO, options: Optional[CsfFileOptions] = None) -> CsfFile:
    return csf_from_json(read_text(stream), options)


def save_json(csf: CsfFile, stream: BinaryIO) -> None:
    write_text(stream, csf_to_json(csf))


def load_yaml(stream: BinaryIO, options: Optional[CsfFileOptions] = None) -> CsfFile:
    return csf_from_yaml(read_text(stream), options)


def save_yaml(csf: CsfFile, stream: BinaryIO) -> None:
    write_text(stream, csf_to_yaml(csf))


__all__ = [
    "csf_to_dict",
    "csf_from_dict",
    "csf_to_json",
    "csf_from_json",
    "csf_to_yaml",
    "csf_from_yaml",
    "read_text",
    "write_text",
    "load_json",
    "save_json",
    "load_yaml",
    "save_yaml",
]
