"""Crash-safe text-file output shared by the CSV writers.

Reports are written to a temporary file next to the target and moved
into place only once complete. Appends go straight to the existing file
and are truncated back to its previous size if the write fails, so
adding a trial costs only the new rows. Either way a failed write leaves
the previous report untouched instead of a truncated one.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

from ..domain.errors import ReportWriteError

logger = logging.getLogger(__name__)


@contextmanager
def atomic_writer(path: Path, append: bool = False) -> Iterator[IO[str]]:
    """Open ``path`` for writing without ever exposing partial output.

    Args:
        path: Final location of the file.
        append: Keep the current content of ``path`` and write after it.

    Yields:
        A text handle positioned where new content should go.

    Raises:
        ReportWriteError: If the file cannot be created, written or moved.
    """
    if append and path.is_file():
        with _rollback_appender(path) as handle:
            yield handle
        return

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        # mkstemp creates 0600 files
        os.chmod(tmp_name, 0o644)
    except OSError as e:
        raise ReportWriteError(
            f"Cannot create output file {path}", file_path=str(path), cause=e
        )

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", newline="", encoding="utf-8") as handle:
            yield handle
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise ReportWriteError(
            f"Cannot write output file {path}", file_path=str(path), cause=e
        )
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        logger.warning("Discarded partial output", extra={"path": str(path)})
        raise


@contextmanager
def _rollback_appender(path: Path) -> Iterator[IO[str]]:
    """Append to ``path``, truncating back to its old size on failure."""
    try:
        size = path.stat().st_size
        handle = path.open("a", newline="", encoding="utf-8")
    except OSError as e:
        raise ReportWriteError(
            f"Cannot open output file {path}", file_path=str(path), cause=e
        )

    try:
        with handle:
            yield handle
    except OSError as e:
        _truncate(path, size)
        raise ReportWriteError(
            f"Cannot write output file {path}", file_path=str(path), cause=e
        )
    except BaseException:
        _truncate(path, size)
        logger.warning("Discarded partial output", extra={"path": str(path)})
        raise


def _truncate(path: Path, size: int) -> None:
    try:
        os.truncate(path, size)
    except OSError as e:
        logger.error(
            "Could not roll back partial output",
            extra={"path": str(path), "size": size, "error": str(e)},
        )
