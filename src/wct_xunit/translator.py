"""Maps runner lifecycle events onto report groups.

The runner executes the tests of one browser serially, file after file, so
a group's timing window ends when the next group of the same browser
starts. The last group of a browser is only closed by the browser's end
event (see ``Flusher``).
"""
from __future__ import annotations
import logging
import time
from typing import Callable
from .errors import BrowserFlushedError
from .events import BrowserIdentity, TestInfo
from .registry import ReporterRegistry
from .reporters.accumulator import ReportAccumulator, TestOutcome, normalize_state

log = logging.getLogger(__name__)


def classname(browser: BrowserIdentity, test: TestInfo) -> str:
    return f"{browser.browser_name}.{test.suite}"


class EventTranslator:
    def __init__(self, registry: ReporterRegistry, clock: Callable[[], float] = time.time):
        self.registry = registry
        self.clock = clock

    def test_start(self, browser: BrowserIdentity, test: TestInfo) -> ReportAccumulator:
        file = test.file
        self._require_open(browser)
        now = self.clock()
        acc = self.registry.get_or_create(browser, file, now)
        groups = self.registry.groups(browser)
        if groups.current is not None and groups.current_file != file:
            if groups.current.close(now):
                log.debug("%s: %s ended, %s started", browser, groups.current_file, file)
        groups.current_file = file
        groups.current = acc
        return acc

    def test_end(self, browser: BrowserIdentity, test: TestInfo) -> TestOutcome:
        self._require_open(browser)
        outcome = TestOutcome(
            classname=classname(browser, test),
            title=test.title,
            state=normalize_state(test.state),
            pending=test.state == "pending",
            duration=test.duration,
            err=test.err,
        )
        # a start event normally created the group already
        acc = self.registry.get_or_create(browser, test.file, self.clock())
        acc.record(outcome)
        return outcome

    def _require_open(self, browser: BrowserIdentity) -> None:
        # groups are final once written
        if self.registry.groups(browser).flushed:
            raise BrowserFlushedError(f"{browser} already finished; its reports are written")
