"""
Tests for JSON/YAML serialization of stringtables.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `csfstudio.serialization`.
"""

import json
from io import BytesIO

import pytest
import yaml
from csfstudio.errors import InvalidArgumentError, InvalidLabelNameError, MalformedTextFileError
from csfstudio.examples import build_example_stringtable
from csfstudio.model import CsfFile, CsfFileOptions, CsfLang
from csfstudio.serialization import (
    csf_from_dict,
    csf_from_json,
    csf_from_yaml,
    csf_to_dict,
    csf_to_json,
    csf_to_yaml,
    load_json,
    load_yaml,
    read_text,
    save_json,
    save_yaml,
)


def test_dict_shape():
    """Should project version, language code and labels into a plain dict."""
    csf = CsfFile(version=3, language=CsfLang.FRENCH, labels={"gui:ok": "OK"})
    assert csf_to_dict(csf) == {"version": 3, "language": 3, "labels": {"gui:ok": "OK"}}


def test_json_round_trip_preserves_structure():
    """Should restore an equal table, label order included, from JSON."""
    csf = build_example_stringtable(language=CsfLang.GERMAN, version=2)

    data = csf_to_json(csf)
    restored = csf_from_json(data)

    assert restored == csf
    assert list(restored) == list(csf)


def test_json_is_readable_unicode():
    """Should write non-ASCII text literally."""
    data = csf_to_json(CsfFile(labels={"txt": "指挥官"}))
    assert "指挥官" in data
    assert json.loads(data)["labels"]["txt"] == "指挥官"


def test_yaml_round_trip_preserves_structure():
    """Should restore an equal table, unknown language included, from YAML."""
    csf = build_example_stringtable(language=42)

    data = csf_to_yaml(csf)
    restored = csf_from_yaml(data)

    assert restored == csf
    assert restored.language == 42


def test_yaml_keeps_label_order():
    """Should not sort label names."""
    csf = CsfFile(labels={"z": "1", "a": "2"})
    assert list(yaml.safe_load(csf_to_yaml(csf))["labels"]) == ["z", "a"]


def test_stream_round_trip():
    """Should round-trip through binary streams."""
    csf = build_example_stringtable()
    for save, load in ((save_json, load_json), (save_yaml, load_yaml)):
        buffer = BytesIO()
        save(csf, buffer)
        buffer.seek(0)
        assert load(buffer) == csf


def test_loader_passes_options():
    """Should attach the given options to the loaded table."""
    options = CsfFileOptions(encoding1252_write_workaround=True)
    assert csf_from_json('{"labels": {}}', options).options is options


def test_missing_fields_use_defaults():
    """Should fall back to the table defaults for missing fields."""
    csf = csf_from_dict({})
    assert csf.version == 3
    assert csf.language is CsfLang.ENGLISH_US
    assert len(csf) == 0


def test_names_are_lowercased():
    """Should lowercase loaded names."""
    assert list(csf_from_dict({"labels": {"GUI:OK": "OK"}})) == ["gui:ok"]


def test_bom_is_tolerated():
    """Should accept a UTF-8 byte order mark."""
    stream = BytesIO(b"\xef\xbb\xbf" + b'{"labels": {"a": "1"}}')
    assert load_json(stream).get("a") == "1"


@pytest.mark.parametrize("document", [
    "{not json",
    "[1, 2, 3]",
    '{"version": "three"}',
    '{"version": true}',
    '{"labels": ["a", "b"]}',
    '{"labels": {"a": 1}}',
    '{"labels": {"a": null}}',
])
def test_malformed_json(document):
    """Should reject documents that are not a stringtable."""
    with pytest.raises(MalformedTextFileError):
        csf_from_json(document)


def test_malformed_yaml():
    """Should reject unparsable YAML."""
    with pytest.raises(MalformedTextFileError):
        csf_from_yaml("labels: [unclosed")


def test_invalid_label_name():
    """Should reject an invalid label name."""
    with pytest.raises(InvalidLabelNameError):
        csf_from_json('{"labels": {"bad\\u0001": "x"}}')


def test_not_utf8():
    """Should reject bytes that are not UTF-8."""
    with pytest.raises(MalformedTextFileError):
        read_text(BytesIO(b"\xff\xfe\x00"))


def test_none_arguments():
    """Should reject a missing table or stream."""
    with pytest.raises(InvalidArgumentError):
        csf_to_dict(None)
    with pytest.raises(InvalidArgumentError):
        read_text(None)
