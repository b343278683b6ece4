from __future__ import annotations

import logging
from pathlib import Path
import threading
from typing import Iterable

from antig.models import FileCounter
from antig.walker import count_only


logger = logging.getLogger("antig.counter")


def _count(source: Path, destination: Path, counter: FileCounter) -> None:
    try:
        count_only(source, destination, lambda _entry: counter.increment())
    except Exception as exc:
        # The total only sizes the progress bar; a failed scan must not touch the copy.
        logger.debug("File count for %s stopped early: %s", source, exc)


def count_files(source: Path, destination: Path, counter: FileCounter) -> threading.Thread:
    thread = threading.Thread(
        target=_count,
        args=(Path(source), Path(destination), counter),
        name=f"antig-count-{Path(source).name}",
        daemon=True,
    )
    thread.start()
    return thread


def start_counters(
    sources: Iterable[Path],
    destination: Path,
    counter: FileCounter,
    enabled: bool,
) -> list[threading.Thread]:
    if not enabled:
        return []
    return [count_files(source, destination, counter) for source in sources if Path(source).is_dir()]
