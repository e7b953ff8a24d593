"""
CSF Studio Package

Reads, writes and converts Red Alert 2 / Yuri's Revenge stringtables (.csf).

ARCHITECTURAL GUARANTEE:
------------------------
Every representation (CSF, INI, JSON, YAML, LLF) loads into and saves
from the same CsfFile model:
    - model: the label store
    - codec: the binary .csf layout
    - combine: merge / subtract across stringtables
    - serialization, formats: textual projections

The model and the codec do not log. Only the command line does.
"""

from .model import CsfFile, CsfFileOptions, CsfLang

__version__ = "0.1.0"

__all__ = ["CsfFile", "CsfFileOptions", "CsfLang", "__version__"]
