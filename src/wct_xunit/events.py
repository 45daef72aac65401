"""Models for the events the browser test runner emits.

The runner reports three lifecycle events per browser: a test started, a
test ended, and the browser finished all of its files. A test is identified
by its qualified path ``[file, suite, ..., case]``.
"""
from __future__ import annotations
import json
from typing import List, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from .errors import MalformedEventError

TEST_START = "test-start"
TEST_END = "test-end"
BROWSER_END = "browser-end"

# the runner says "test-end"/"browser-end"; "finish" spellings are accepted too
EVENT_ALIASES = {
    "test-start": TEST_START,
    "test-end": TEST_END,
    "test-finish": TEST_END,
    "browser-end": BROWSER_END,
    "browser-finish": BROWSER_END,
}


class BrowserIdentity(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Union[int, str]
    browser_name: str = Field(validation_alias=AliasChoices("browserName", "browser_name", "name"))
    version: str = ""

    def __str__(self) -> str:
        return f"{self.browser_name} {self.version}".strip()


class ErrorDetail(BaseModel):
    message: str = ""
    stack: Optional[str] = None


class TestInfo(BaseModel):
    __test__ = False  # keep pytest from collecting this as a test class
    model_config = ConfigDict(populate_by_name=True)

    path: List[str] = Field(validation_alias=AliasChoices("test", "path"))
    state: Optional[str] = None
    duration: Optional[float] = None  # milliseconds
    err: Optional[ErrorDetail] = Field(None, validation_alias=AliasChoices("err", "error"))

    def _require_classifiable(self) -> None:
        if len(self.path) < 2:
            raise MalformedEventError(
                f"Test path {self.path!r} needs at least a file and a suite segment")

    @property
    def file(self) -> str:
        self._require_classifiable()
        return self.path[0]

    @property
    def suite(self) -> str:
        self._require_classifiable()
        return self.path[1]

    @property
    def title(self) -> str:
        self._require_classifiable()
        return self.path[-1]


class Event(BaseModel):
    event: str
    browser: BrowserIdentity
    test: Optional[TestInfo] = None

    @property
    def kind(self) -> Optional[str]:
        return EVENT_ALIASES.get(self.event)


def parse_event(line: str) -> Event:
    """Parse one JSON line of a recorded event stream."""
    try:
        return Event.model_validate(json.loads(line))
    except (json.JSONDecodeError, ValidationError) as e:
        raise MalformedEventError(f"Unreadable event: {e}") from e
