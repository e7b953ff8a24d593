"""
Windows-1252 compatibility remap for CSF label values.

Some stringtables were produced by tools that pushed Windows-1252 bytes
straight into UTF-16, so characters such as the euro sign ended up stored
as the C1 control codepoints U+0080..U+009F. This module maps those 27
codepoints to the printable characters Windows-1252 assigns them, and back.

Nothing outside this table is touched. This is not a general encoder.
"""

from types import MappingProxyType
from typing import Dict, Mapping


LEGACY_TO_UNICODE: Mapping[str, str] = MappingProxyType({
    "\u0080": "\u20ac",  # €
    "\u0082": "\u201a",  # ‚
    "\u0083": "\u0192",  # ƒ
    "\u0084": "\u201e",  # „
    "\u0085": "\u2026",  # …
    "\u0086": "\u2020",  # †
    "\u0087": "\u2021",  # ‡
    "\u0088": "\u02c6",  # ˆ
    "\u0089": "\u2030",  # ‰
    "\u008a": "\u0160",  # Š
    "\u008b": "\u2039",  # ‹
    "\u008c": "\u0152",  # Œ
    "\u008e": "\u017d",  # Ž
    "\u0091": "\u2018",  # ‘
    "\u0092": "\u2019",  # ’
    "\u0093": "\u201c",  # “
    "\u0094": "\u201d",  # ”
    "\u0095": "\u2022",  # •
    "\u0096": "\u2013",  # –
    "\u0097": "\u2014",  # —
    "\u0098": "\u02dc",  # ˜
    "\u0099": "\u2122",  # ™
    "\u009a": "\u0161",  # š
    "\u009b": "\u203a",  # ›
    "\u009c": "\u0153",  # œ
    "\u009e": "\u017e",  # ž
    "\u009f": "\u0178",  # Ÿ
})

UNICODE_TO_LEGACY: Mapping[str, str] = MappingProxyType(
    {unicode_char: legacy_char for legacy_char, unicode_char in LEGACY_TO_UNICODE.items()}
)


def _translation_table(mapping: Mapping[str, str]) -> Dict[int, str]:
    return {ord(source): target for source, target in mapping.items()}


_TO_UNICODE_TABLE = _translation_table(LEGACY_TO_UNICODE)
_TO_LEGACY_TABLE = _translation_table(UNICODE_TO_LEGACY)


def to_unicode(text: str) -> str:
    """Replace C1 control characters with their Windows-1252 printable counterparts."""
    return text.translate(_TO_UNICODE_TABLE)


def to_legacy(text: str) -> str:
    """Replace Windows-1252 printable characters with the C1 codepoints they occupy."""
    return text.translate(_TO_LEGACY_TABLE)


__all__ = ["LEGACY_TO_UNICODE", "UNICODE_TO_LEGACY", "to_unicode", "to_legacy"]
