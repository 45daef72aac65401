"""Per (browser, file) report group and its XUnit serialization."""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from email.utils import formatdate
from typing import List, Optional
from ..errors import DoubleFinalizationError
from ..events import ErrorDetail
from ..utils.xmltags import cdata, tag

log = logging.getLogger(__name__)

PASSED = "passed"
FAILED = "failed"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def normalize_state(state: Optional[str]) -> Optional[str]:
    if state == "passing":
        return PASSED
    if state == "failing":
        return FAILED
    return None


def format_seconds(seconds: Optional[float]) -> str:
    if seconds is None or not math.isfinite(seconds):
        return "0.000"
    return f"{seconds:.3f}"


@dataclass(frozen=True)
class TestOutcome:
    __test__ = False

    classname: str
    title: str
    state: Optional[str]
    pending: bool = False  # informational; pending cases render as plain testcases
    duration: Optional[float] = None  # milliseconds
    err: Optional[ErrorDetail] = None


@dataclass
class SuiteStats:
    start: float
    tests: int = 0
    passes: int = 0
    failures: int = 0
    end: Optional[float] = None
    duration: Optional[float] = None  # seconds

    @property
    def skipped(self) -> int:
        return self.tests - self.passes - self.failures


@dataclass
class ReportAccumulator:
    stats: SuiteStats
    outcomes: List[TestOutcome] = field(default_factory=list)
    serialized: bool = False

    @classmethod
    def create(cls, now: float) -> "ReportAccumulator":
        return cls(stats=SuiteStats(start=now))

    @property
    def closed(self) -> bool:
        return self.stats.end is not None

    def record(self, outcome: TestOutcome) -> None:
        self.outcomes.append(outcome)
        self.stats.tests += 1
        if outcome.state == PASSED:
            self.stats.passes += 1
        elif outcome.state == FAILED:
            self.stats.failures += 1

    def close(self, now: float) -> bool:
        """Fix the end of the timing window. Returns False if it was already closed."""
        if self.closed:
            return False
        self.stats.end = now
        self.stats.duration = now - self.stats.start
        return True

    def serialize(self, name: str, now: float, strict: bool = False) -> Optional[str]:
        """Render the group as one ``<testsuite>`` document.

        ``name`` must differ between groups: CI servers detect new results by
        suite name and timestamp, and timestamps of fast groups collide.
        Returns None when the group was already serialized (raises instead
        when ``strict``).
        """
        if self.serialized:
            if strict:
                raise DoubleFinalizationError(f"Suite {name!r} was already serialized")
            log.error("Suite %s was already serialized; skipping duplicate", name)
            return None
        if not self.closed:
            log.warning("Suite %s was never closed by a cutover or browser end; closing now", name)
            self.close(now)

        stats = self.stats
        skipped = stats.skipped
        if skipped < 0:
            log.warning("Suite %s counts %d tests but %d passes and %d failures; reporting 0 skipped",
                        name, stats.tests, stats.passes, stats.failures)
            skipped = 0

        body = "".join(_render_case(o) for o in self.outcomes)
        suite = tag("testsuite", {
            "name": name,
            "tests": stats.tests,
            "failures": stats.failures,
            # the runner does not tell assertion failures from errors
            "errors": stats.failures,
            "skipped": skipped,
            "timestamp": formatdate(now, usegmt=True),
            "time": format_seconds(stats.duration),
        }, False, body)
        self.serialized = True
        return XML_DECLARATION + suite + "\n"


def _render_case(outcome: TestOutcome) -> str:
    attrs = {
        "classname": outcome.classname,
        "name": outcome.title,
        "time": format_seconds(outcome.duration / 1000 if outcome.duration is not None else None),
    }
    if outcome.state == FAILED:
        return tag("testcase", attrs, False, tag("failure", {}, False, cdata(_failure_text(outcome.err))))
    return tag("testcase", attrs, True)


def _failure_text(err: Optional[ErrorDetail]) -> str:
    if err is None:
        return ""
    if err.stack:
        return f"{err.message}\n{err.stack}"
    return err.message
