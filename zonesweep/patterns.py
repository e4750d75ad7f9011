from fnmatch import fnmatchcase
from pathlib import Path, PurePath
from typing import Iterable, Union

NAME_MARKER = "Zone.Identifier"
CONTENT_MARKER = b"[ZoneTransfer]"

# Script files, logs, version-control metadata, caches, dependency trees
DEFAULT_EXCLUDE_PATTERNS = (
    "*.sh",
    "*.log",
    ".git*",
    "*cache*",
    "*node_modules*",
)

BINARY_SAMPLE_SIZE = 8192
READ_CHUNK_SIZE = 64 * 1024


def is_name_match(name: str) -> bool:
    return NAME_MARKER in name


def is_excluded(rel_path: Union[str, PurePath], patterns: Iterable[str]) -> bool:
    """
    True when any component of rel_path matches any of the glob patterns.
    Matching per component lets a single pattern prune a whole directory.
    """
    patterns = tuple(patterns)
    if not patterns:
        return False
    for part in PurePath(rel_path).parts:
        if part in (".", ""):
            continue
        if any(fnmatchcase(part, p) for p in patterns):
            return True
    return False


def is_binary(sample: bytes) -> bool:
    return b"\x00" in sample


def is_content_match(path: Path, marker: bytes = CONTENT_MARKER) -> bool:
    """
    Returns True if the file at path is text and contains marker.

    Binary files (a NUL byte in the first BINARY_SAMPLE_SIZE bytes) never
    match. Raises OSError if the file cannot be read.
    """
    tail = b""
    with path.open("rb") as f:
        sample = f.read(BINARY_SAMPLE_SIZE)
        if is_binary(sample):
            return False
        chunk = sample
        while chunk:
            if marker in tail + chunk:
                return True
            # Keep enough bytes to catch a marker split across reads
            tail = (tail + chunk)[-(len(marker) - 1):] if len(marker) > 1 else b""
            chunk = f.read(READ_CHUNK_SIZE)
    return False
