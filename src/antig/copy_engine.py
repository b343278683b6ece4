from __future__ import annotations

import logging
import os
from pathlib import Path
import shutil

from tqdm import tqdm

from antig.errors import CopyIOError
from antig.models import CopyStats, FileCounter
from antig.walker import copy_and_create


logger = logging.getLogger("antig.copy")


def mirror_root(source: Path, destination: Path) -> Path:
    # abspath keeps the name of "." and "dir/" sources without following symlinks
    return Path(destination) / Path(os.path.abspath(source)).name


def mirrored_path(entry_path: str | Path, source: Path, root: Path) -> Path:
    return root / os.path.relpath(entry_path, source)


def _make_dir(path: Path) -> bool:
    try:
        path.mkdir()
    except FileExistsError as exc:
        if not path.is_dir():
            raise CopyIOError(f"Cannot create directory `{path}`: a file is in the way", path) from exc
        return False
    except OSError as exc:
        raise CopyIOError(f"Cannot create directory `{path}`: {exc}", path) from exc
    return True


def _place_file(source_file: Path, target: Path, stats: CopyStats) -> None:
    try:
        if target.exists():
            if source_file.stat().st_size == target.stat().st_size:
                logger.debug("Skipping %s, %s already has the same size", source_file, target)
                stats.skipped += 1
                return
            target.unlink()
            stats.replaced += 1
        shutil.copyfile(source_file, target)
    except OSError as exc:
        raise CopyIOError(
            f"Cannot copy `{source_file}` into `{target}`: {exc}", source_file, target
        ) from exc
    stats.copied += 1


def copy_file(source: Path, destination: Path, verbose: bool = False) -> tuple[Path, CopyStats]:
    """Copy a single file into ``destination`` or onto it when it is not a directory."""
    source = Path(source)
    destination = Path(destination)
    target = destination / source.name if destination.is_dir() else destination

    if verbose:
        tqdm.write(f"cp: {source} => {target}")

    stats = CopyStats()
    _place_file(source, target, stats)
    return target, stats


def copy_directory(
    progress: tqdm | None,
    source: Path,
    destination: Path,
    counter: FileCounter,
    verbose: bool = False,
    show_progress: bool = True,
) -> CopyStats:
    """Mirror ``source`` under ``destination / source.name``.

    Files already present with the same size are left alone, files of a
    different size are replaced. The destination itself is never walked,
    so it may live inside ``source``.
    """
    source = Path(source)
    destination = Path(destination)
    root = mirror_root(source, destination)
    show_progress = show_progress and progress is not None

    stats = CopyStats()
    if _make_dir(root):
        stats.directories += 1

    def on_directory(entry: os.DirEntry) -> None:
        if _make_dir(mirrored_path(entry.path, source, root)):
            stats.directories += 1

    def on_file(entry: os.DirEntry) -> None:
        target = mirrored_path(entry.path, source, root)
        if verbose:
            tqdm.write(f"cp: {entry.path} => {target}")
        if show_progress:
            progress.total = counter.value
            progress.refresh()

        _place_file(Path(entry.path), target, stats)

        if show_progress:
            progress.update(1)

    copy_and_create(source, destination, on_file, on_directory)
    return stats
