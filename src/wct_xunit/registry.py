from __future__ import annotations
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from .events import BrowserIdentity
from .reporters.accumulator import ReportAccumulator


@dataclass
class BrowserGroups:
    """All report groups of one browser plus its group-boundary cursor."""
    browser: BrowserIdentity
    files: Dict[str, ReportAccumulator] = field(default_factory=dict)
    current_file: Optional[str] = None
    current: Optional[ReportAccumulator] = None
    flushed: bool = False


class ReporterRegistry:
    """browser id -> file -> ReportAccumulator. Entries live for the whole run."""

    def __init__(self):
        self._browsers: Dict[object, BrowserGroups] = {}
        self._lock = threading.Lock()

    def groups(self, browser: BrowserIdentity) -> BrowserGroups:
        with self._lock:
            return self._groups_locked(browser)

    def _groups_locked(self, browser: BrowserIdentity) -> BrowserGroups:
        entry = self._browsers.get(browser.id)
        if entry is None:
            entry = BrowserGroups(browser)
            self._browsers[browser.id] = entry
        return entry

    def get_or_create(self, browser: BrowserIdentity, file: str, now: float) -> ReportAccumulator:
        with self._lock:
            entry = self._groups_locked(browser)
            acc = entry.files.get(file)
            if acc is None:
                acc = ReportAccumulator.create(now)
                entry.files[file] = acc
            return acc

    def all_for(self, browser: BrowserIdentity) -> List[Tuple[str, ReportAccumulator]]:
        """Every group of ``browser`` in creation order."""
        with self._lock:
            entry = self._browsers.get(browser.id)
            return list(entry.files.items()) if entry else []

    def open_groups(self) -> List[Tuple[BrowserIdentity, str]]:
        """Groups that have not been written out yet, e.g. of a browser that never finished."""
        with self._lock:
            return [(entry.browser, file)
                    for entry in self._browsers.values()
                    for file, acc in entry.files.items()
                    if not acc.serialized]

    def __len__(self) -> int:
        with self._lock:
            return sum(len(entry.files) for entry in self._browsers.values())
