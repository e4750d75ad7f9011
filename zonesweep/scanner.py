"""
Directory scanning for Zone Identifier artifacts.

Two independent passes walk the tree: one matches file names containing
"Zone.Identifier", the other matches text files whose content holds the
"[ZoneTransfer]" header. A file may satisfy one, both, or neither.
"""

import os
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Sequence, Union

from .logger import get_logger
from .patterns import (
    DEFAULT_EXCLUDE_PATTERNS,
    is_content_match,
    is_excluded,
    is_name_match,
)

PathLike = Union[str, Path]


def _on_walk_error(error: OSError) -> None:
    logger = get_logger()
    logger.record_traversal_error(type(error).__name__)
    logger.warning(
        "Skipping unreadable directory",
        path=getattr(error, "filename", None),
        error=str(error),
    )


def _iter_regular_files(root: Path, exclude_patterns: Sequence[str] = ()) -> Iterator[Path]:
    """
    Yield regular files under root in sorted order.
    Symlinks are neither followed nor yielded. Directories and files whose
    path relative to root matches an exclusion pattern are skipped.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
        rel_dir = Path(os.path.relpath(dirpath, root))
        if exclude_patterns:
            dirnames[:] = [d for d in dirnames if not is_excluded(rel_dir / d, exclude_patterns)]
        dirnames.sort()

        for filename in sorted(filenames):
            if exclude_patterns and is_excluded(rel_dir / filename, exclude_patterns):
                continue
            path = Path(dirpath) / filename
            if path.is_symlink() or not path.is_file():
                continue
            yield path


def scan_by_name(root: PathLike) -> List[Path]:
    """Return regular files under root whose name contains 'Zone.Identifier'."""
    logger = get_logger()
    found = []
    for path in _iter_regular_files(Path(root)):
        if is_name_match(path.name):
            found.append(path)
            logger.record_match("name")
            logger.debug("Name match", path=str(path))
    return found


def scan_by_content(
    root: PathLike,
    exclude_patterns: Iterable[str] = DEFAULT_EXCLUDE_PATTERNS,
) -> List[Path]:
    """
    Return text files under root containing '[ZoneTransfer]'.

    Args:
        root: Directory to walk
        exclude_patterns: Glob patterns matched against each path component;
            matching directories are pruned and matching files skipped

    Returns:
        Matching paths in walk order. Binary and unreadable files are skipped.
    """
    logger = get_logger()
    patterns = tuple(exclude_patterns)
    found = []
    for path in _iter_regular_files(Path(root), patterns):
        logger.record_file_scanned()
        try:
            matched = is_content_match(path)
        except OSError as e:
            logger.warning("Skipping unreadable file", path=str(path), error=str(e))
            continue
        if matched:
            found.append(path)
            logger.record_match("content")
            logger.debug("Content match", path=str(path))
    return found


def merge_unique(first: Iterable[Path], second: Iterable[Path]) -> List[Path]:
    """Union of two candidate lists, deduplicated by path, first-seen order kept."""
    merged: Dict[Path, None] = {}
    for path in list(first) + list(second):
        merged.setdefault(path, None)
    return list(merged)


def attribute_sources(named: Iterable[Path], content: Iterable[Path]) -> Dict[Path, List[str]]:
    """Map each merged candidate to the passes that found it ("name", "content")."""
    named, content = list(named), list(content)
    named_set, content_set = set(named), set(content)
    sources: Dict[Path, List[str]] = {}
    for path in merge_unique(named, content):
        sources[path] = [
            source
            for source, group in (("name", named_set), ("content", content_set))
            if path in group
        ]
    return sources
