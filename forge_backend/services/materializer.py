"""
File Materializer - write generated bundles to disk and list them back
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Any, Mapping

from .errors import MaterializationError, ValidationError

logger = logging.getLogger(__name__)

EXTENSION_TYPES = {
    ".html": "html",
    ".css": "css",
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
    ".json": "json",
}


def resolve_target(root: Path, file_name: str) -> Path:
    """Path of ``file_name`` under ``root``; rejects names that escape it"""
    if not file_name or not file_name.strip():
        raise ValidationError("fileName is required")
    relative = PurePosixPath(file_name.replace("\\", "/"))
    if relative.is_absolute() or ".." in relative.parts:
        raise ValidationError(f"Invalid file name: {file_name}")
    return root.joinpath(*relative.parts)


def write_file(root: Path, file_name: str, content: str) -> Path:
    """Write one file under ``root``, creating parent directories"""
    target = resolve_target(root, file_name)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        raise MaterializationError(f"Failed to write {file_name}: {e}") from e
    logger.info("Created file: %s", file_name)
    return target


def materialize(bundle: Mapping[str, Mapping[str, Any]], root: Path) -> list[str]:
    """Write every bundle entry in order and return the names written

    A failure stops the batch; files already written stay on disk.
    """
    root = Path(root)
    # Validate every name up front so a bad entry never leaves a partial batch
    for file_name in bundle:
        resolve_target(root, file_name)

    written: list[str] = []
    for file_name, entry in bundle.items():
        try:
            write_file(root, file_name, entry["content"])
        except MaterializationError as e:
            raise MaterializationError(str(e), written) from e.__cause__
        written.append(file_name)
    return written


def file_type(path: Path) -> str:
    return EXTENSION_TYPES.get(path.suffix.lower(), "text")


def scan(root: Path) -> dict[str, dict[str, str]]:
    """Map relative path -> {content, type} for every visible file under ``root``"""
    root = Path(root)
    files: dict[str, dict[str, str]] = {}
    if not root.is_dir():
        return files

    def _walk(directory: Path, prefix: PurePosixPath | None):
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            return
        for entry in entries:
            if entry.name.startswith("."):
                continue
            relative = prefix / entry.name if prefix else PurePosixPath(entry.name)
            if entry.is_dir():
                _walk(entry, relative)
            elif entry.is_file():
                try:
                    content = entry.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError):
                    # Unreadable files are left out of the listing
                    continue
                files[str(relative)] = {"content": content, "type": file_type(entry)}

    _walk(root, None)
    return files
