"""
Cleanup module for removing Zone Identifier artifacts.

Deletion is not atomic: each path is attempted independently and a
failure is recorded without aborting the rest of the batch.
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from .logger import get_logger

DeletionError = Tuple[Path, str]


def _describe(error: OSError) -> str:
    if isinstance(error, FileNotFoundError):
        return "no such file"
    if isinstance(error, IsADirectoryError):
        return "is a directory"
    if isinstance(error, PermissionError):
        return "permission denied"
    return error.strerror or str(error)


def delete_all(
    paths: Iterable[Path],
    on_deleted: Optional[Callable[[Path], None]] = None,
    on_error: Optional[Callable[[Path, str], None]] = None,
) -> Tuple[int, List[DeletionError]]:
    """
    Remove every path in paths.

    Args:
        paths: Files to remove, attempted in order
        on_deleted: Optional callback(path) after each successful removal
        on_error: Optional callback(path, message) after each failure

    Returns:
        Tuple of (deleted_count, errors) where errors is a list of
        (path, message) for each path that could not be removed
    """
    logger = get_logger()
    deleted = 0
    errors: List[DeletionError] = []

    for path in paths:
        path = Path(path)
        try:
            path.unlink()
        except OSError as e:
            message = _describe(e)
            errors.append((path, message))
            logger.record_deletion_failure(type(e).__name__)
            logger.error("Failed to remove file", path=str(path), error=str(e))
            if on_error:
                on_error(path, message)
            continue

        deleted += 1
        logger.record_deletion()
        logger.debug("Removed file", path=str(path))
        if on_deleted:
            on_deleted(path)

    logger.info(
        f"Cleanup complete: {deleted} removed, {len(errors)} failed",
        files_deleted=deleted,
        deletions_failed=len(errors),
    )
    return deleted, errors
