"""
Tests for merge and subtract.
"""

import pytest
from csfstudio.combine import merge, subtract
from csfstudio.errors import ErrorKind, InsufficientInputsError
from csfstudio.model import CsfFile, CsfLang


def _table(labels, version=3, language=CsfLang.ENGLISH_US):
    return CsfFile(version=version, language=language, labels=labels)


class TestMerge:
    """Test label union and the metadata rule."""

    def test_overlapping_files(self):
        """Should union labels, later values winning, and keep the first file's metadata."""
        a = _table({"a": "1", "b": "2"}, version=3, language=CsfLang.ENGLISH_US)
        b = _table({"b": "3", "c": "4"}, version=5, language=CsfLang.FRENCH)

        result = merge([a, b])

        assert dict(result.labels) == {"a": "1", "b": "3", "c": "4"}
        # Open question: which input's metadata a merge should carry is
        # undecided. This pins the current rule, under which b does not
        # donate (running total 3 != len(b) 2).
        assert result.version == 3
        assert result.language is CsfLang.ENGLISH_US

    def test_later_file_wins(self):
        """Should keep the value from the last file defining a label."""
        files = [_table({"x": str(i)}) for i in range(4)]
        assert merge(files).get("x") == "3"

    def test_metadata_from_superset_file(self):
        """Should take metadata from a later file holding every label merged so far."""
        a = _table({"a": "1"}, version=3)
        b = _table({"a": "2", "b": "3"}, version=9, language=CsfLang.KOREAN)

        result = merge([a, b])

        assert result.version == 9
        assert result.language is CsfLang.KOREAN

    def test_metadata_not_taken_from_disjoint_later_file(self):
        """Should not take metadata from a later file with only new labels."""
        a = _table({"a": "1"}, version=3)
        b = _table({"b": "2"}, version=9)
        assert merge([a, b]).version == 3

    def test_single_file(self):
        """Should return an equal but separate table for one input."""
        a = _table({"a": "1"}, version=4, language=42)
        result = merge([a])
        assert result == a
        assert result is not a

    def test_empty_first_file_takes_its_metadata(self):
        """Should take metadata from an empty first file."""
        empty = _table({}, version=8, language=CsfLang.JAPANESE)
        result = merge([empty])
        assert result.version == 8
        assert result.language is CsfLang.JAPANESE

    def test_order_of_first_appearance(self):
        """Should order labels by first appearance across inputs."""
        result = merge([_table({"b": "1", "a": "2"}), _table({"c": "3", "b": "4"})])
        assert list(result) == ["b", "a", "c"]

    def test_inputs_untouched(self):
        """Should not modify its inputs."""
        a = _table({"a": "1"})
        b = _table({"a": "2"})
        merge([a, b])
        assert a.get("a") == "1"

    def test_no_files(self):
        """Should refuse an empty input list."""
        with pytest.raises(InsufficientInputsError) as excinfo:
            merge([])
        assert excinfo.value.kind is ErrorKind.INSUFFICIENT_INPUTS


class TestSubtract:
    """Test removal of labels present in later files."""

    def test_basic(self):
        """Should drop shared names regardless of value and keep the first file's metadata."""
        a = _table({"a": "1", "b": "2"}, version=5, language=CsfLang.GERMAN)
        b = _table({"b": "something else", "c": "4"})

        result = subtract([a, b])

        assert dict(result.labels) == {"a": "1"}
        assert result.version == 5
        assert result.language is CsfLang.GERMAN

    def test_union_of_later_files(self):
        """Should subtract the names of every later file."""
        a = _table({"a": "1", "b": "2", "c": "3"})
        result = subtract([a, _table({"a": "x"}), _table({"c": "y"})])
        assert list(result) == ["b"]

    def test_nothing_shared(self):
        """Should return a copy when no names are shared."""
        a = _table({"a": "1"})
        assert subtract([a, _table({"z": "1"})]) == a

    def test_inputs_untouched(self):
        """Should not modify its inputs."""
        a = _table({"a": "1"})
        subtract([a, _table({"a": "1"})])
        assert "a" in a

    @pytest.mark.parametrize("files", [[], [CsfFile()]])
    def test_too_few_files(self, files):
        """Should refuse fewer than two inputs."""
        with pytest.raises(InsufficientInputsError):
            subtract(files)
