"""Shared fixtures for the XUnit reporter tests."""

import pytest

from wct_xunit.config import PluginConfig
from wct_xunit.events import BrowserIdentity, TestInfo
from wct_xunit.plugin import XUnitPlugin


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class MemorySink(dict):
    def __call__(self, name, content):
        self[name] = content


def make_test(*path, state=None, duration=None, err=None):
    return TestInfo(path=list(path), state=state, duration=duration, err=err)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def chrome():
    return BrowserIdentity(id=1, browser_name="chrome", version="100")


@pytest.fixture
def firefox():
    return BrowserIdentity(id=2, browser_name="firefox", version="91")


@pytest.fixture
def plugin(clock, sink):
    return XUnitPlugin(PluginConfig(), persist=sink, clock=clock)
