"""Document checksum creation.

One checksummer, two strategies selected per call:

  disabled            -> no checksum (``None``), no I/O
  source fields set   -> digest of ``field=value;`` pairs, fields sorted
  otherwise           -> streaming digest of the whole body

Field checksums are independent of metadata key order and of the order the
fields were configured in.  When no configured field has a non-blank value the
result is ``None``, whereas empty *content* still yields a real digest.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from checksum.document import Document, Metadata
from checksum.hashing import (
    DEFAULT_ALGORITHM,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_ENCODING,
    digest_stream,
    digest_text,
    new_hasher,
)
from utils.normalization import is_not_blank
from utils.validation import ChecksummerConfig

logger = logging.getLogger(__name__)


class ChecksumError(Exception):
    """Raised when a document's content cannot be read for checksumming."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Cannot create document checksum on : {reference}")
        self.reference = reference


# ── Field checksum ────────────────────────────────────────────────────────

def build_field_buffer(metadata: Metadata, field_names: Iterable[str]) -> str:
    """Concatenate ``field=value;`` for every non-blank value.

    Fields are visited in sorted order; duplicates are visited once per
    occurrence.  Values keep their stored order.  Absent fields contribute
    nothing.
    """
    parts: list[str] = []
    for name in sorted(field_names):
        values = metadata.get_values(name)
        if values is None:
            continue
        for value in values:
            if is_not_blank(value):
                parts.append(f"{name}={value};")
    return "".join(parts)


def compute_from_fields(
    metadata: Metadata,
    field_names: Iterable[str],
    encoding: str = DEFAULT_ENCODING,
    algorithm: str = DEFAULT_ALGORITHM,
) -> Optional[str]:
    """Checksum the values of *field_names*, or ``None`` if none contribute.

    Field names are used as given.  *encoding* must be able to represent
    every value (``ChecksummerConfig`` only accepts Unicode codecs).
    """
    names = list(field_names)
    combined = build_field_buffer(metadata, names)
    if not combined:
        return None
    checksum = digest_text(combined, encoding=encoding, algorithm=algorithm)
    logger.debug("Document checksum from %s : %s", ",".join(names), checksum)
    return checksum


# ── Content checksum ──────────────────────────────────────────────────────

def compute_from_content(
    document: Document,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Checksum the whole document body.

    The stream is opened here and closed on every exit path.  A failure to
    close after a successful digest is logged, not raised.

    Raises
    ------
    ChecksumError
        If the content cannot be opened or read.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    new_hasher(algorithm)

    try:
        stream = document.open_content()
        try:
            checksum = digest_stream(stream, algorithm=algorithm, chunk_size=chunk_size)
        except BaseException:
            stream.close()
            raise
    except (OSError, ValueError) as exc:
        raise ChecksumError(document.reference) from exc

    try:
        stream.close()
    except OSError as exc:
        logger.warning(
            "Could not close content stream of %s: %s", document.reference, exc
        )
    logger.debug("Document checksum from content: %s", checksum)
    return checksum


# ── Mode selection ────────────────────────────────────────────────────────

def compute_checksum(document: Document, cfg: ChecksummerConfig) -> Optional[str]:
    """Compute the checksum of *document* according to *cfg*.

    Returns ``None`` when disabled or when no source field has a value.
    """
    if cfg.disabled:
        return None
    if cfg.source_fields:
        return compute_from_fields(
            document.metadata,
            cfg.source_fields,
            encoding=cfg.encoding,
            algorithm=cfg.algorithm,
        )
    return compute_from_content(
        document, algorithm=cfg.algorithm, chunk_size=cfg.chunk_size
    )


class DocumentChecksummer:
    """Checksummer bound to a (mutable) configuration.

    The configuration is read on each call, so changing ``source_fields`` or
    ``disabled`` between documents takes effect on the next document.
    """

    def __init__(self, cfg: ChecksummerConfig | None = None) -> None:
        self.config = cfg if cfg is not None else ChecksummerConfig()

    # -- configuration accessors --

    @property
    def source_fields(self) -> Optional[list[str]]:
        return self.config.source_fields

    @source_fields.setter
    def source_fields(self, fields: Optional[Iterable[str] | str]) -> None:
        if fields is not None and not isinstance(fields, str):
            fields = list(fields)
        self.config.source_fields = fields

    @property
    def disabled(self) -> bool:
        return self.config.disabled

    @disabled.setter
    def disabled(self, disabled: bool) -> None:
        self.config.disabled = disabled

    @property
    def keep(self) -> bool:
        return self.config.keep

    @keep.setter
    def keep(self, keep: bool) -> None:
        self.config.keep = keep

    @property
    def target_field(self) -> Optional[str]:
        return self.config.target_field

    @target_field.setter
    def target_field(self, target_field: Optional[str]) -> None:
        self.config.target_field = target_field

    # -- checksum --

    def compute_checksum(self, document: Document) -> Optional[str]:
        return compute_checksum(document, self.config)

    def create_document_checksum(self, document: Document) -> Optional[str]:
        """Compute the checksum and, if ``keep`` is set, store it on the document.

        The checksum replaces any existing values of the target field.
        Nothing is stored when the result is ``None``.
        """
        checksum = self.compute_checksum(document)
        if self.config.keep and checksum is not None:
            field_name = self.config.effective_target_field
            document.metadata.set_values(field_name, [checksum])
            logger.debug(
                "Document checksum stored in %s for %s", field_name, document.reference
            )
        return checksum

    def __repr__(self) -> str:
        return f"DocumentChecksummer({self.config!r})"
