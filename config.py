"""Central configuration for the document checksummer."""

import os
from dotenv import load_dotenv

load_dotenv()


# ---------------------------------------------------------------------------
# Checksum source
# ---------------------------------------------------------------------------
# Comma-separated metadata fields.  Empty means "checksum the whole content".
CHECKSUM_SOURCE_FIELDS: str = os.getenv("CHECKSUM_SOURCE_FIELDS", "")
CHECKSUM_DISABLED: bool = os.getenv("CHECKSUM_DISABLED", "false").lower() == "true"

# ---------------------------------------------------------------------------
# Keeping the checksum on the document
# ---------------------------------------------------------------------------
CHECKSUM_KEEP: bool = os.getenv("CHECKSUM_KEEP", "false").lower() == "true"
CHECKSUM_TARGET_FIELD: str = os.getenv("CHECKSUM_TARGET_FIELD", "")
DEFAULT_TARGET_FIELD: str = "collector.checksum-doc"

# ---------------------------------------------------------------------------
# Digest
# ---------------------------------------------------------------------------
CHECKSUM_ALGORITHM: str = os.getenv("CHECKSUM_ALGORITHM", "md5")
CHECKSUM_ENCODING: str = os.getenv("CHECKSUM_ENCODING", "utf-8")
CHECKSUM_CHUNK_SIZE: int = int(os.getenv("CHECKSUM_CHUNK_SIZE", "65536"))

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
