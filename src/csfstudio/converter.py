"""
File-level loading and saving, with the format picked from the extension.
"""

from enum import Enum
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Optional, Union

from .codec import load_csf, write_csf
from .errors import InvalidArgumentError
from .formats.ini import load_ini, save_ini
from .formats.llf import load_llf, save_llf
from .model import CsfFile, CsfFileOptions
from .serialization import load_json, load_yaml, save_json, save_yaml


PathLike = Union[str, Path]


class FileFormat(Enum):
    """Supported stringtable representations."""
    CSF = "csf"
    INI = "ini"
    JSON = "json"
    YAML = "yaml"
    LLF = "llf"


_EXTENSIONS: Dict[str, FileFormat] = {
    ".csf": FileFormat.CSF,
    ".ini": FileFormat.INI,
    ".json": FileFormat.JSON,
    ".yaml": FileFormat.YAML,
    ".yml": FileFormat.YAML,
    ".llf": FileFormat.LLF,
}

_LOADERS: Dict[FileFormat, Callable[[BinaryIO, Optional[CsfFileOptions]], CsfFile]] = {
    FileFormat.CSF: load_csf,
    FileFormat.INI: load_ini,
    FileFormat.JSON: load_json,
    FileFormat.YAML: load_yaml,
    FileFormat.LLF: load_llf,
}

_SAVERS: Dict[FileFormat, Callable[[CsfFile, BinaryIO], None]] = {
    FileFormat.CSF: write_csf,
    FileFormat.INI: save_ini,
    FileFormat.JSON: save_json,
    FileFormat.YAML: save_yaml,
}


def detect_format(path: PathLike) -> FileFormat:
    """
    Map a file path to its format by extension (case-insensitive).

    Raises:
        InvalidArgumentError: If the extension is not a known format
    """
    suffix = Path(path).suffix.lower()
    try:
        return _EXTENSIONS[suffix]
    except KeyError:
        raise InvalidArgumentError(f"Unsupported file format: {suffix or str(path)!r}") from None


def load_file(
    path: PathLike,
    options: Optional[CsfFileOptions] = None,
    file_format: Optional[FileFormat] = None,
) -> CsfFile:
    """
    Load a stringtable file.

    Args:
        path: File to read
        options: CsfFileOptions for the loaded table
        file_format: Force a format instead of detecting it from the extension

    Raises:
        FileNotFoundError: If the file doesn't exist
        CsfError: If the content is invalid
    """
    file_format = file_format or detect_format(path)
    with open(path, "rb") as f:
        return _LOADERS[file_format](f, options)


def save_file(csf: CsfFile, path: PathLike, file_format: Optional[FileFormat] = None) -> None:
    """
    Save a stringtable file, creating parent directories as needed.

    The document is rendered in memory first, so a failed save leaves no file behind.
    """
    file_format = file_format or detect_format(path)
    path = Path(path)

    buffer = BytesIO()
    if file_format is FileFormat.LLF:
        save_llf(csf, buffer, file_name=path.stem)
    else:
        _SAVERS[file_format](csf, buffer)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(buffer.getvalue())


__all__ = ["FileFormat", "detect_format", "load_file", "save_file"]
