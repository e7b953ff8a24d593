"""
Example stringtable builder.

Builds a small Red Alert 2 style stringtable that exercises the awkward
parts of every format: a multi-line value, non-ASCII text, characters from
the Windows-1252 remap table, an empty value and mixed-case source names.
"""
from typing import Optional

from .model import CsfFile, CsfFileOptions, CsfLang, Language


def build_example_stringtable(
    language: Language = CsfLang.ENGLISH_US,
    version: int = 3,
    options: Optional[CsfFileOptions] = None,
) -> CsfFile:
    csf = CsfFile(options, version=version, language=language)

    # Names arrive in the casing the game uses and are stored lowercase
    csf.add_or_replace("GUI:OK", "OK")
    csf.add_or_replace("GUI:Cancel", "Cancel")
    csf.add_or_replace("Name:E1", "GI")
    csf.add_or_replace("Name:ENGINEER", "Engineer")

    csf.add_or_replace(
        "TXT_MISSION_BRIEFING",
        "Commander, the Soviets have landed.\nSecure the bridge.\n\nGood luck.",
    )
    csf.add_or_replace("TXT_COST", "Cost: €1000 — “discounted”")
    csf.add_or_replace("TXT_GREETING_DE", "Grüße, Kommandant!")
    csf.add_or_replace("TXT_GREETING_ZH", "指挥官，你好")
    csf.add_or_replace("TXT_EMPTY", "")

    return csf
