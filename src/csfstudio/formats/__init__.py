"""Textual stringtable formats (INI, LLF). JSON and YAML live in csfstudio.serialization."""

from .ini import load_ini, save_ini
from .llf import load_llf, save_llf

__all__ = ["load_ini", "save_ini", "load_llf", "save_llf"]
