# src/frontscan/core/utils/file_utils.py
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from auditor.model import FileFormat, SourceDocument
from frontscan.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

SKIPPED_DIRS = {"node_modules"}


def is_supported_file(path: Union[str, Path]) -> bool:
    return FileFormat.from_path(path) is not None


def walk_dir(root: Union[str, Path], exclude: Iterable[Union[str, Path]] = ()) -> Iterator[Path]:
    """
    Yields every supported file below `root` in sorted, depth-first order.

    Hidden directories, node_modules and any directory listed in `exclude`
    (e.g. the cache directory) are not entered. Unreadable directories are
    logged and skipped.

    Raises:
        FileNotFoundError: If `root` does not exist.
        NotADirectoryError: If `root` is not a directory.
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Scan root not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Scan root is not a directory: {root}")

    excluded = {Path(p).resolve() for p in exclude}

    def on_error(err: OSError):
        logger.warning(f"Skipping unreadable directory: {err}")

    for current, dirs, files in os.walk(root, onerror=on_error):
        dirs[:] = sorted(
            d for d in dirs
            if not d.startswith(".") and d not in SKIPPED_DIRS and (Path(current) / d).resolve() not in excluded
        )
        for name in sorted(files):
            path = Path(current) / name
            if is_supported_file(path):
                yield path


def list_files(root: Union[str, Path], exclude: Iterable[Union[str, Path]] = ()) -> List[Path]:
    return list(walk_dir(root, exclude))


def read_document(path: Union[str, Path], root: Optional[Union[str, Path]] = None) -> SourceDocument:
    """
    Reads a file into a SourceDocument. The format comes from the extension only.
    The document path is made relative to `root` when one is given.

    Raises:
        ValueError: If the extension is not supported.
        OSError / UnicodeDecodeError: If the file cannot be read as UTF-8 text.
    """
    path = Path(path)
    file_format = FileFormat.from_path(path)
    if file_format is None:
        raise ValueError(f"Unsupported file type: {path.suffix or path.name}")

    content = path.read_text(encoding="utf-8")
    display = PathUtils.relative_posix(path, Path(root)) if root is not None else path.as_posix()
    return SourceDocument(path=display, format=file_format, content=content)
