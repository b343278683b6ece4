from __future__ import annotations

from dataclasses import dataclass
import threading


@dataclass(slots=True)
class CopyStats:
    copied: int = 0
    skipped: int = 0
    replaced: int = 0
    directories: int = 0

    def absorb(self, other: "CopyStats") -> None:
        self.copied += other.copied
        self.skipped += other.skipped
        self.replaced += other.replaced
        self.directories += other.directories


class FileCounter:
    """Total of files discovered so far, shared with the counting threads."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self, amount: int = 1) -> None:
        with self._lock:
            self._value += amount

    @property
    def value(self) -> int:
        with self._lock:
            return self._value
