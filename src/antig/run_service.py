from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from pathlib import Path

from tqdm import tqdm

from antig.copy_engine import copy_directory, copy_file
from antig.counter import start_counters
from antig.errors import ConfigurationError, CopyIOError
from antig.models import CopyStats, FileCounter
from antig.walker import canonical


BAR_FORMAT = "{bar:60} {n_fmt:>7}/{total_fmt:7} {percentage:3.0f}% [{elapsed}]"


@dataclass(slots=True)
class CopyOptions:
    sources: list[Path] = field(default_factory=list)
    destination: Path = Path(".")
    recursive: bool = False
    noise: bool = False
    progress: bool = True


def resolve_destination(sources: list[Path], destination: Path) -> Path:
    """Expand a bare ``.`` destination into ``<cwd>/<source name>`` for a single source."""
    if Path(destination) != Path(".") or len(sources) != 1:
        return Path(destination)

    name = Path(os.path.abspath(sources[0])).name
    if not name:
        raise ConfigurationError(f"Cannot infer a destination name from `{sources[0]}`.")
    return Path.cwd().resolve() / name


def _is_same_path(source: Path, destination: Path) -> bool:
    return destination.exists() and canonical(source) == canonical(destination)


def validate_sources(sources: list[Path], destination: Path, recursive: bool) -> None:
    if not sources:
        raise ConfigurationError("At least one source is required.")

    for source in sources:
        if not source.exists():
            raise ConfigurationError(f"`{source}` does not exist.")
        if _is_same_path(source, destination):
            continue
        if source.is_dir():
            if not recursive:
                raise ConfigurationError("cannot copy a directory without recursive process.")
            if destination.exists() and not destination.is_dir():
                raise ConfigurationError(f"`{destination}` is not a directory.")


def _ensure_destination(destination: Path, log: logging.Logger) -> None:
    if destination.exists():
        return
    try:
        destination.mkdir()
    except OSError as exc:
        raise CopyIOError(f"Cannot create directory `{destination}`: {exc}", destination) from exc
    log.info("Created destination directory %s", destination)


def run_copy(options: CopyOptions, logger: logging.Logger | None = None) -> CopyStats:
    log = logger or logging.getLogger("antig.run")

    sources = [Path(source) for source in options.sources]
    destination = resolve_destination(sources, Path(options.destination))
    validate_sources(sources, destination, options.recursive)
    _ensure_destination(destination, log)

    counter = FileCounter()
    start_counters(sources, destination, counter, enabled=options.progress)

    summary = CopyStats()
    with tqdm(
        total=0,
        unit="file",
        bar_format=BAR_FORMAT,
        colour="cyan",
        disable=not options.progress,
    ) as bar:
        for source in sources:
            if _is_same_path(source, destination):
                log.info("Skipping %s: source and destination are the same", source)
                continue

            if source.is_dir():
                stats = copy_directory(
                    bar if options.progress else None,
                    source,
                    destination,
                    counter,
                    verbose=options.noise,
                    show_progress=options.progress,
                )
                log.info(
                    "%s -> %s | copied=%s skipped=%s replaced=%s directories=%s",
                    source,
                    destination,
                    stats.copied,
                    stats.skipped,
                    stats.replaced,
                    stats.directories,
                )
            else:
                target, stats = copy_file(source, destination, verbose=options.noise)
                log.info("%s -> %s | copied=%s skipped=%s", source, target, stats.copied, stats.skipped)

            summary.absorb(stats)

    return summary
