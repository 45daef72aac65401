from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List
from .config import DEFAULT_TEMPLATE
from .errors import DoubleFinalizationError, PersistFailure
from .events import BrowserIdentity
from .registry import ReporterRegistry
from .utils.artifacts import report_name

log = logging.getLogger(__name__)

Persist = Callable[[str, str], None]


@dataclass
class SuiteSummary:
    document: str
    suite: str
    tests: int
    failures: int
    skipped: int


@dataclass
class FlushResult:
    browser: BrowserIdentity
    written: List[SuiteSummary] = field(default_factory=list)
    failures: List[PersistFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class Flusher:
    """Closes and writes out every group of a browser once it has finished."""

    def __init__(self, registry: ReporterRegistry, persist: Persist,
                 filename_template: str = DEFAULT_TEMPLATE,
                 clock: Callable[[], float] = time.time, strict: bool = False):
        self.registry = registry
        self.persist = persist
        self.filename_template = filename_template
        self.clock = clock
        self.strict = strict

    def browser_end(self, browser: BrowserIdentity) -> FlushResult:
        result = FlushResult(browser)
        groups = self.registry.groups(browser)
        if groups.flushed:
            if self.strict:
                raise DoubleFinalizationError(f"{browser} was already flushed")
            log.error("%s was already flushed; ignoring repeated browser end", browser)
            return result
        groups.flushed = True
        groups.current = None
        groups.current_file = None

        now = self.clock()
        suites = self.registry.all_for(browser)
        for _, acc in suites:
            # only the last active group is still open here
            acc.close(now)

        for file, acc in suites:
            suite = f"{browser.browser_name}.{file}"
            document = acc.serialize(suite, now, strict=self.strict)
            if document is None:
                continue
            name = suite
            try:
                name = report_name(self.filename_template, browser, file)
                self.persist(name, document)
            except Exception as e:  # reported per document, the rest are still written
                failure = PersistFailure(name, e)
                log.error("%s", failure)
                result.failures.append(failure)
                continue
            stats = acc.stats
            result.written.append(SuiteSummary(name, suite, stats.tests, stats.failures, max(stats.skipped, 0)))
            log.info("Wrote %s", name)
        return result
