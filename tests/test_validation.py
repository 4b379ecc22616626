"""Tests for utils.validation and utils.normalization -- checksummer config."""

import json

import pytest
from pydantic import ValidationError

import config
from utils.normalization import is_blank, join_csv, split_csv
from utils.validation import (
    ChecksummerConfig,
    load_config_file,
    validate_checksummer_config,
)


class TestNormalization:
    def test_is_blank(self):
        assert is_blank(None)
        assert is_blank("")
        assert is_blank(" \t\n")
        assert not is_blank(" x ")

    def test_non_breaking_spaces_not_blank(self):
        assert not is_blank("\u00a0")
        assert not is_blank("\u2007")
        assert not is_blank("\u202f")
        assert not is_blank("\x85")

    def test_unicode_separators_blank(self):
        assert is_blank("\u2003\u3000\u2028\x1f")

    def test_split_csv(self):
        assert split_csv("title, ,author,") == ["title", "author"]
        assert split_csv("") == []
        assert split_csv(None) == []

    def test_split_keeps_duplicates(self):
        assert split_csv("a,b,a") == ["a", "b", "a"]

    def test_join_csv(self):
        assert join_csv(["a", "b"]) == "a,b"
        assert join_csv(None) == ""


class TestChecksummerConfig:
    def test_defaults(self):
        cfg = ChecksummerConfig()
        assert cfg.source_fields is None
        assert cfg.disabled is False
        assert cfg.keep is False
        assert cfg.algorithm == "md5"
        assert cfg.effective_target_field == config.DEFAULT_TARGET_FIELD

    def test_csv_source_fields(self):
        cfg = ChecksummerConfig(source_fields="title,author")
        assert cfg.source_fields == ["title", "author"]

    def test_list_source_fields_kept_verbatim(self):
        cfg = ChecksummerConfig(source_fields=[" title ", "", "author", "author"])
        assert cfg.source_fields == [" title ", "", "author", "author"]

    def test_blank_only_list_stays_non_empty(self):
        cfg = ChecksummerConfig(source_fields=[" "])
        assert cfg.source_fields == [" "]

    def test_tuple_source_fields(self):
        cfg = ChecksummerConfig(source_fields=("b", "a"))
        assert cfg.source_fields == ["b", "a"]

    def test_camel_case_keys(self):
        cfg = validate_checksummer_config(
            {"sourceFields": "a,b", "targetField": "sum", "disabled": True}
        )
        assert cfg.source_fields == ["a", "b"]
        assert cfg.target_field == "sum"
        assert cfg.disabled is True

    def test_blank_target_field(self):
        cfg = ChecksummerConfig(target_field="   ")
        assert cfg.target_field is None

    def test_invalid_algorithm(self):
        with pytest.raises(ValidationError):
            ChecksummerConfig(algorithm="nope")

    def test_invalid_encoding(self):
        with pytest.raises(ValidationError):
            ChecksummerConfig(encoding="no-such-codec")

    def test_non_unicode_encoding_rejected(self):
        with pytest.raises(ValidationError):
            ChecksummerConfig(encoding="latin-1")

    def test_unicode_encodings_accepted(self):
        assert ChecksummerConfig(encoding="utf-16").encoding == "utf-16"

    def test_invalid_chunk_size(self):
        with pytest.raises(ValidationError):
            ChecksummerConfig(chunk_size=0)

    def test_assignment_validated(self):
        cfg = ChecksummerConfig()
        cfg.source_fields = "x, y"
        assert cfg.source_fields == ["x", "y"]
        with pytest.raises(ValidationError):
            cfg.algorithm = "nope"

    def test_to_dict(self):
        cfg = ChecksummerConfig(source_fields=["a", "b"], keep=True)
        d = cfg.to_dict()
        assert d["sourceFields"] == "a,b"
        assert d["keep"] is True
        assert validate_checksummer_config(d).source_fields == ["a", "b"]

    def test_from_env(self, monkeypatch):
        monkeypatch.setattr(config, "CHECKSUM_SOURCE_FIELDS", "title")
        monkeypatch.setattr(config, "CHECKSUM_DISABLED", True)
        cfg = ChecksummerConfig.from_env()
        assert cfg.source_fields == ["title"]
        assert cfg.disabled is True


class TestLoadConfigFile:
    def test_load(self, tmp_path):
        path = tmp_path / "checksum.json"
        path.write_text(json.dumps({"sourceFields": "title", "keep": True}))
        cfg = load_config_file(path)
        assert cfg.source_fields == ["title"]
        assert cfg.keep is True

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "checksum.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_config_file(path)
