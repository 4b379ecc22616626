"""Pydantic models for validating checksummer configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from checksum.hashing import is_supported_algorithm
from utils.normalization import is_blank, join_csv, split_csv

import config


# ── Checksummer configuration ─────────────────────────────────────────────

class ChecksummerConfig(BaseModel):
    """Settings of a document checksummer.

    ``source_fields`` empty or ``None`` means the whole content is
    checksummed.  ``keep`` and ``target_field`` control whether the checksum
    is written back to the document metadata.
    """

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    source_fields: Optional[list[str]] = Field(
        default=None,
        validation_alias=AliasChoices("source_fields", "sourceFields"),
    )
    disabled: bool = False
    keep: bool = False
    target_field: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("target_field", "targetField"),
    )
    algorithm: str = "md5"
    encoding: str = "utf-8"
    chunk_size: int = Field(
        default=65536,
        gt=0,
        validation_alias=AliasChoices("chunk_size", "chunkSize"),
    )

    @field_validator("source_fields", mode="before")
    @classmethod
    def parse_source_fields(cls, v: Any) -> Optional[list[str]]:
        if v is None:
            return None
        if isinstance(v, str):
            return split_csv(v)
        if isinstance(v, tuple):
            return list(v)
        return v

    @field_validator("target_field")
    @classmethod
    def blank_target_is_none(cls, v: Optional[str]) -> Optional[str]:
        return None if is_blank(v) else v.strip()

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        name = v.strip().lower()
        if not is_supported_algorithm(name):
            raise ValueError(f"unsupported digest algorithm: {v}")
        return name

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            "\U0010ffff".encode(v)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {v}") from exc
        except UnicodeEncodeError as exc:
            raise ValueError(f"encoding cannot represent all metadata values: {v}") from exc
        return v

    @classmethod
    def from_env(cls) -> "ChecksummerConfig":
        """Build a config from the environment-backed ``config`` module."""
        return cls(
            source_fields=config.CHECKSUM_SOURCE_FIELDS,
            disabled=config.CHECKSUM_DISABLED,
            keep=config.CHECKSUM_KEEP,
            target_field=config.CHECKSUM_TARGET_FIELD,
            algorithm=config.CHECKSUM_ALGORITHM,
            encoding=config.CHECKSUM_ENCODING,
            chunk_size=config.CHECKSUM_CHUNK_SIZE,
        )

    def to_dict(self) -> dict[str, Any]:
        """Render the config in its file form (``sourceFields`` as CSV)."""
        return {
            "disabled": self.disabled,
            "keep": self.keep,
            "targetField": self.target_field,
            "sourceFields": join_csv(self.source_fields),
            "algorithm": self.algorithm,
            "encoding": self.encoding,
            "chunkSize": self.chunk_size,
        }

    @property
    def effective_target_field(self) -> str:
        return self.target_field or config.DEFAULT_TARGET_FIELD


def validate_checksummer_config(data: dict) -> ChecksummerConfig:
    """Parse and validate a checksummer config mapping."""
    return ChecksummerConfig.model_validate(data)


def load_config_file(path: str | Path) -> ChecksummerConfig:
    """Read a JSON config file and validate it."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")
    return validate_checksummer_config(data)
