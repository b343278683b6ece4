from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

from antig.errors import CopyIOError


Visitor = Callable[[os.DirEntry], None]


def canonical(path: Path) -> Path:
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        # RuntimeError is how pathlib reports symlink loops before Python 3.13
        raise CopyIOError(f"Cannot get the metadata for `{path}`: {exc}", path) from exc


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError as exc:
        raise CopyIOError(f"Cannot get the metadata for `{entry.path}`: {exc}", Path(entry.path)) from exc


def _walk(
    root: Path,
    excluded: Path,
    ancestors: frozenset[Path],
    on_file: Visitor,
    on_directory: Visitor | None,
    create_dirs: bool,
) -> None:
    try:
        with os.scandir(root) as it:
            entries = list(it)
    except OSError as exc:
        raise CopyIOError(f"Cannot read directory `{root}`: {exc}", root) from exc

    for entry in entries:
        path = Path(entry.path)
        resolved = canonical(path)
        if resolved == excluded:
            continue

        if _is_dir(entry):
            if resolved in ancestors:
                raise CopyIOError(f"Symlink loop: `{path}` points back to `{resolved}`", path)
            if create_dirs:
                on_directory(entry)
            _walk(path, excluded, ancestors | {resolved}, on_file, on_directory, create_dirs)
        else:
            on_file(entry)


def walk(
    root: Path,
    exclude: Path,
    on_file: Visitor,
    on_directory: Visitor | None = None,
    create_dirs: bool = False,
) -> None:
    """Depth-first walk of ``root`` that never enters ``exclude``.

    ``on_directory`` is called for each subdirectory before it is entered,
    and only when ``create_dirs`` is set. A ``root`` that is not a directory
    is silently ignored. Any listing, canonicalization or visitor failure
    aborts the whole walk, as does a symlink pointing back at a directory
    being walked.
    """
    if create_dirs and on_directory is None:
        raise ValueError("create_dirs requires an on_directory visitor")

    root = Path(root)
    if not root.is_dir():
        return

    _walk(root, canonical(Path(exclude)), frozenset({canonical(root)}), on_file, on_directory, create_dirs)


def count_only(root: Path, exclude: Path, on_file: Visitor) -> None:
    walk(root, exclude, on_file)


def copy_and_create(root: Path, exclude: Path, on_file: Visitor, on_directory: Visitor) -> None:
    walk(root, exclude, on_file, on_directory, create_dirs=True)
