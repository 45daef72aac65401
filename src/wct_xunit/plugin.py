"""Exports browser test runner results to XUnit XML, one document per browser and file.

The runner forwards its test events from each browser as ``test-start``,
``test-end`` and ``browser-end``. ``XUnitPlugin`` groups them by (browser,
file) and writes every group of a browser when that browser ends.
"""
from __future__ import annotations
import logging
import time
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union
from pydantic import ValidationError
from .config import PluginConfig
from .errors import DoubleFinalizationError, MalformedEventError, XUnitError
from .events import BROWSER_END, EVENT_ALIASES, TEST_END, TEST_START, BrowserIdentity, Event, TestInfo
from .flush import Flusher, FlushResult, Persist
from .registry import ReporterRegistry
from .translator import EventTranslator
from .utils.artifacts import FileSink

log = logging.getLogger(__name__)

BrowserLike = Union[BrowserIdentity, Mapping[str, Any]]
TestLike = Union[TestInfo, Mapping[str, Any]]


class XUnitPlugin:
    def __init__(self, config: Optional[PluginConfig] = None, persist: Optional[Persist] = None,
                 clock: Callable[[], float] = time.time):
        self.config = config or PluginConfig()
        self.registry = ReporterRegistry()
        self.translator = EventTranslator(self.registry, clock)
        self.flusher = Flusher(self.registry, persist or FileSink(self.config.output_dir),
                               self.config.filename_template, clock, self.config.strict)
        self.results: List[FlushResult] = []
        self.errors: List[XUnitError] = []
        log.info("XUnit reports go to %s", self.config.output_dir)

    def handle(self, event: str, browser: BrowserLike, test: Optional[TestLike] = None) -> Optional[FlushResult]:
        """Process one runner event. Errors are logged and kept in ``errors``; in strict mode a double finalization is raised."""
        kind = EVENT_ALIASES.get(event)
        if kind is None:
            log.debug("Ignoring event %s", event)
            return None
        try:
            browser, test = _coerce(event, browser, test)
            if kind == BROWSER_END:
                result = self.flusher.browser_end(browser)
                self.results.append(result)
                return result
            if kind == TEST_START:
                self.translator.test_start(browser, test)
            elif kind == TEST_END:
                self.translator.test_end(browser, test)
        except XUnitError as e:
            if self.config.strict and isinstance(e, DoubleFinalizationError):
                raise
            log.error("%s: %s", event, e)
            self.errors.append(e)
        return None

    def handle_event(self, event: Event) -> Optional[FlushResult]:
        return self.handle(event.event, event.browser, event.test)

    def attach(self, emitter: Any) -> None:
        """Subscribe to an emitter exposing ``on(name, callback)``."""
        emitter.on(TEST_START, lambda browser, test, *_: self.handle(TEST_START, browser, test))
        emitter.on(TEST_END, lambda browser, test, *_: self.handle(TEST_END, browser, test))
        emitter.on(BROWSER_END, lambda browser, *_: self.handle(BROWSER_END, browser))

    def open_groups(self) -> List[Tuple[BrowserIdentity, str]]:
        return self.registry.open_groups()


def _coerce(event: str, browser: BrowserLike, test: Optional[TestLike]) -> Tuple[BrowserIdentity, Optional[TestInfo]]:
    try:
        browser = BrowserIdentity.model_validate(browser)
        if EVENT_ALIASES[event] != BROWSER_END:
            if test is None:
                raise MalformedEventError(f"{event} from {browser} carries no test")
            test = TestInfo.model_validate(test)
    except ValidationError as e:
        raise MalformedEventError(f"Unreadable {event} event: {e}") from e
    return browser, test
