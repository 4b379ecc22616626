"""Document and metadata containers read by the checksummer.

A ``Document`` is owned by the calling pipeline.  The checksummer reads its
metadata, and opens (then closes) a fresh content stream through
``open_content`` when it needs the body bytes.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Callable, Iterator, Mapping, Optional


# ── Metadata ──────────────────────────────────────────────────────────────

class Metadata:
    """Multi-valued metadata: field name -> ordered list of string values.

    An absent field and a field present with no values are different
    things: ``get_values`` returns ``None`` for the former and ``[]`` for the
    latter.  Value order within a field is preserved.
    """

    def __init__(self, fields: Optional[Mapping[str, Any]] = None) -> None:
        self._fields: dict[str, list[str]] = {}
        if fields:
            for name, values in fields.items():
                self.set_values(name, values)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Metadata":
        """Build metadata from a plain mapping.

        Each value may be a single string, ``None`` (present, no values), or a
        sequence of strings.
        """
        return cls(data)

    def to_dict(self) -> dict[str, list[str]]:
        return {name: list(values) for name, values in self._fields.items()}

    def get_values(self, name: str) -> Optional[list[str]]:
        """Return a copy of the values of *name*, or ``None`` if absent."""
        values = self._fields.get(name)
        if values is None:
            return None
        return list(values)

    def get_value(self, name: str) -> Optional[str]:
        """Return the first value of *name*, or ``None``."""
        values = self._fields.get(name)
        if not values:
            return None
        return values[0]

    def set_values(self, name: str, values: Any) -> None:
        """Replace all values of *name*."""
        self._fields[name] = _as_value_list(values)

    def add_value(self, name: str, value: str) -> None:
        """Append *value* to *name*, creating the field if needed."""
        self._fields.setdefault(name, []).append(value)

    def remove(self, name: str) -> Optional[list[str]]:
        """Remove *name* and return its former values (``None`` if absent)."""
        return self._fields.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Metadata):
            return NotImplemented
        return self._fields == other._fields

    def __repr__(self) -> str:
        return f"Metadata({self._fields!r})"


def _as_value_list(values: Any) -> list[str]:
    if values is None:
        return []
    if isinstance(values, str):
        return [values]
    return [v if isinstance(v, str) else str(v) for v in values]


# ── Document ──────────────────────────────────────────────────────────────

ContentOpener = Callable[[], BinaryIO]


@dataclass
class Document:
    """A processed document: reference, metadata and a body opener."""
    reference: str
    content_opener: ContentOpener = field(repr=False)
    metadata: Metadata = field(default_factory=Metadata)

    def open_content(self) -> BinaryIO:
        """Open a new readable byte stream over the document body."""
        return self.content_opener()

    @classmethod
    def from_bytes(
        cls,
        reference: str,
        content: bytes = b"",
        metadata: Optional[Metadata | Mapping[str, Any]] = None,
    ) -> "Document":
        """Build a document whose body is held in memory."""
        return cls(
            reference=reference,
            content_opener=lambda: io.BytesIO(content),
            metadata=_coerce_metadata(metadata),
        )

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        metadata: Optional[Metadata | Mapping[str, Any]] = None,
        reference: Optional[str] = None,
    ) -> "Document":
        """Build a document backed by a file on disk.

        The file is opened lazily, each time ``open_content`` is called.
        """
        p = Path(path)
        return cls(
            reference=reference or str(p),
            content_opener=lambda: p.open("rb"),
            metadata=_coerce_metadata(metadata),
        )


def _coerce_metadata(metadata: Optional[Metadata | Mapping[str, Any]]) -> Metadata:
    if metadata is None:
        return Metadata()
    if isinstance(metadata, Metadata):
        return metadata
    return Metadata.from_dict(metadata)
